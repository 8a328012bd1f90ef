"""Panel-level entry points: records + panel config -> chart columns.

Renderers index ``data[0]`` as the x axis without checking its length, so
every path here returns at least one timeline point and one value column.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

from seriesalign.config.panel import PanelConfig, coerce_panel_config
from seriesalign.domain.record import Record
from seriesalign.domain.series import (
    Metadata,
    TimeRange,
    TransformedData,
    ValueRange,
)
from seriesalign.transforms.align import SeriesAligner, ensure_record_batch
from seriesalign.transforms.detect import DetectedFields, detect_fields
from seriesalign.transforms.time import datetime_to_millis

logger = logging.getLogger(__name__)

NO_DATA = "No Data"

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def empty_result(clock: Optional[Clock] = None) -> TransformedData:
    """Single point at "now" with value 0, labelled ``No Data``."""
    now = (clock or _utc_now)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    return TransformedData(
        data=[[datetime_to_millis(now)], [0]],
        series=[NO_DATA],
        metadata=Metadata(
            total_records=0,
            time_range=TimeRange(min=now, max=now),
            value_range=ValueRange(min=0, max=0),
        ),
    )


def resolve_fields(
    records: Sequence[Record],
    config: PanelConfig,
) -> tuple[DetectedFields, Optional[str]]:
    """Pick x/y/series columns: explicit mapping first, detection for gaps."""
    mapping = config.field_mapping
    x_field = mapping.x_field if mapping else None
    y_field = mapping.y_field if mapping else None
    series_field = mapping.series_field if mapping else None

    if not (x_field and y_field):
        sample = records[0]
        detected = detect_fields(list(sample.keys()), sample)
        x_field = x_field or detected.x_field
        y_field = y_field or detected.y_field
        logger.debug("detected fields x=%r y=%r", x_field, y_field)

    return DetectedFields(x_field=x_field, y_field=y_field), series_field


def _renderable(result: TransformedData) -> bool:
    return len(result.data) >= 2 and len(result.data[0]) > 0


def transform_records(
    records: Sequence[Record],
    config: PanelConfig | Mapping[str, Any] | None = None,
    *,
    clock: Optional[Clock] = None,
) -> TransformedData:
    """Turn query rows into aligned chart columns for a panel.

    Raises ``TypeError`` when ``records`` is not a sequence of mappings;
    messy rows are skipped and an unusable batch yields ``empty_result``.
    """
    records = ensure_record_batch(records)
    panel = coerce_panel_config(config)

    if not records:
        return empty_result(clock)

    fields, series_field = resolve_fields(records, panel)
    if not fields.complete:
        logger.info(
            "no usable time/value columns in %s; returning placeholder",
            sorted(records[0].keys()),
        )
        return empty_result(clock)

    aligner = SeriesAligner(
        x_field=fields.x_field,
        y_field=fields.y_field,
        series_field=series_field,
    )
    result = aligner.apply(records)
    if not _renderable(result):
        logger.info(
            "none of %d records had a readable %r/%r pair; returning placeholder",
            len(records),
            fields.x_field,
            fields.y_field,
        )
        return empty_result(clock)
    return result


def _fallback_for_axis_charts(result: TransformedData) -> TransformedData:
    if _renderable(result):
        return result
    return TransformedData(
        data=[[0], [0]],
        series=[NO_DATA],
        metadata=Metadata(total_records=0),
    )


def transform_for_bar_chart(
    records: Sequence[Record],
    config: PanelConfig | Mapping[str, Any] | None = None,
    *,
    clock: Optional[Clock] = None,
) -> TransformedData:
    return _fallback_for_axis_charts(transform_records(records, config, clock=clock))


def transform_for_scatter(
    records: Sequence[Record],
    config: PanelConfig | Mapping[str, Any] | None = None,
    *,
    clock: Optional[Clock] = None,
) -> TransformedData:
    return _fallback_for_axis_charts(transform_records(records, config, clock=clock))


def transform_for_panel(
    records: Sequence[Record],
    config: PanelConfig | Mapping[str, Any] | None = None,
    *,
    clock: Optional[Clock] = None,
) -> TransformedData:
    """Dispatch on ``config.type``."""
    panel = coerce_panel_config(config)
    if panel.type == "bar":
        return transform_for_bar_chart(records, panel, clock=clock)
    if panel.type == "scatter":
        return transform_for_scatter(records, panel, clock=clock)
    return transform_records(records, panel, clock=clock)
