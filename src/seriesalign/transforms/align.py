from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from seriesalign.domain.record import Record
from seriesalign.domain.series import (
    Column,
    Metadata,
    Series,
    TimeRange,
    TransformedData,
    ValueRange,
)
from seriesalign.transforms.time import millis_to_datetime, normalize_time
from seriesalign.transforms.utils import get_field, is_finite, parse_float

logger = logging.getLogger(__name__)


def ensure_record_batch(records: Any) -> Sequence[Record]:
    """Reject anything that is not a sequence of mapping rows."""
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
        raise TypeError(
            f"records must be a sequence of mappings, got {type(records).__name__}"
        )
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise TypeError(
                f"record {idx} must be a mapping, got {type(record).__name__}"
            )
    return records


@dataclass
class SeriesGroups:
    """Per-series accumulators plus the union of every accepted timestamp."""

    series: dict[str, Series] = field(default_factory=dict)
    times: set = field(default_factory=set)
    skipped: int = 0

    def add(self, name: str, x: float, y: float) -> None:
        acc = self.series.get(name)
        if acc is None:
            acc = self.series[name] = Series(name=name)
        acc.append(x, y)
        self.times.add(x)


def series_name_for(record: Record, y_field: str, series_field: Optional[str]) -> str:
    if series_field:
        key = get_field(record, series_field)
        if key:
            return str(key)
    return y_field


def group_records(
    records: Sequence[Record],
    x_field: str,
    y_field: str,
    series_field: Optional[str] = None,
    *,
    time_axis: bool = True,
) -> SeriesGroups:
    """Split rows into named series of ``(time, value)`` observations.

    Rows whose time or value cannot be read are dropped, never nulled.
    """
    groups = SeriesGroups()
    for record in records:
        x = normalize_time(get_field(record, x_field), time_axis)
        if x is None or not is_finite(x):
            groups.skipped += 1
            continue
        y = parse_float(get_field(record, y_field))
        if y is None or not is_finite(y):
            groups.skipped += 1
            continue
        groups.add(series_name_for(record, y_field, series_field), x, y)
    if groups.skipped:
        logger.debug(
            "skipped %d of %d records with unreadable %r/%r",
            groups.skipped,
            len(records),
            x_field,
            y_field,
        )
    return groups


def build_timeline(times: set) -> Column:
    return sorted(times)


def align_series(series: Series, timeline: Sequence[float]) -> Column:
    """Project one series onto ``timeline``.

    Single forward sweep: ``i`` always indexes the first observation whose
    time is not before the current timeline point.
    """
    points = series.sorted_points()
    n = len(points)
    out: Column = []
    i = 0
    for t in timeline:
        while i < n and points[i][0] < t:
            i += 1
        if i < n and points[i][0] == t:
            out.append(points[i][1])
            continue
        if 0 < i < n:
            x_lo, y_lo = points[i - 1]
            x_hi, y_hi = points[i]
            if y_lo is not None and y_hi is not None:
                out.append(y_lo + (y_hi - y_lo) * (t - x_lo) / (x_hi - x_lo))
                continue
        out.append(None)
    return out


def compute_metadata(total_records: int, data: list[Column]) -> Metadata:
    metadata = Metadata(total_records=total_records)

    timeline = data[0] if data else []
    if timeline:
        try:
            metadata.time_range = TimeRange(
                min=millis_to_datetime(timeline[0]),
                max=millis_to_datetime(timeline[-1]),
            )
        except OverflowError:
            logger.debug(
                "timeline %s..%s is outside the datetime range; no time_range",
                timeline[0],
                timeline[-1],
            )

    values = [v for column in data[1:] for v in column if v is not None]
    if values:
        metadata.value_range = ValueRange(min=min(values), max=max(values))
    return metadata


class SeriesAligner:
    """Group rows into series and align them onto one shared timeline.

    Parameters
    - x_field: column holding the time (or numeric x) value
    - y_field: column holding the measured value
    - series_field: optional column whose value names the series of a row
    - time_axis: when false, x values are read as plain numbers
    """

    def __init__(
        self,
        *,
        x_field: str,
        y_field: str,
        series_field: Optional[str] = None,
        time_axis: bool = True,
    ) -> None:
        if not x_field:
            raise ValueError("x_field is required")
        if not y_field:
            raise ValueError("y_field is required")
        self.x_field = x_field
        self.y_field = y_field
        self.series_field = series_field or None
        self.time_axis = time_axis

    def __call__(self, records: Sequence[Record]) -> TransformedData:
        return self.apply(records)

    def apply(self, records: Sequence[Record]) -> TransformedData:
        records = ensure_record_batch(records)
        groups = group_records(
            records,
            self.x_field,
            self.y_field,
            self.series_field,
            time_axis=self.time_axis,
        )
        timeline = build_timeline(groups.times)
        data: list[Column] = [timeline]
        for series in groups.series.values():
            data.append(align_series(series, timeline))

        logger.debug(
            "aligned %d series onto %d timeline points from %d records",
            len(groups.series),
            len(timeline),
            len(records),
        )
        return TransformedData(
            data=data,
            series=list(groups.series),
            metadata=compute_metadata(len(records), data),
        )


def align(
    records: Sequence[Record],
    x_field: str,
    y_field: str,
    series_field: Optional[str] = None,
    *,
    time_axis: bool = True,
) -> TransformedData:
    return SeriesAligner(
        x_field=x_field,
        y_field=y_field,
        series_field=series_field,
        time_axis=time_axis,
    ).apply(records)
