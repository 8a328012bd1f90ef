from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

Column = list


@dataclass
class Series:
    """Observations of one named series, in the order they were seen.

    Attributes:
        name: Series label (grouping value, or the value field name).
        x: Canonical epoch-millisecond times of each observation.
        y: Observed values, parallel to ``x``.
    """

    name: str
    x: list[float] = field(default_factory=list)
    y: list[Optional[float]] = field(default_factory=list)

    def append(self, x: float, y: Optional[float]) -> None:
        self.x.append(x)
        self.y.append(y)

    def __len__(self) -> int:
        return len(self.x)

    def sorted_points(self) -> list[tuple[float, Optional[float]]]:
        """Return ``(x, y)`` pairs ordered by time; ties keep arrival order."""
        return sorted(zip(self.x, self.y), key=lambda point: point[0])


@dataclass(frozen=True)
class TimeRange:
    min: datetime
    max: datetime


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float


@dataclass
class Metadata:
    """Summary of one transformation used for axis scaling and display."""

    total_records: int
    time_range: Optional[TimeRange] = None
    value_range: Optional[ValueRange] = None


@dataclass
class TransformedData:
    """Columnar chart payload.

    ``data[0]`` is the shared timeline and ``data[i + 1]`` holds the values
    of ``series[i]`` aligned to it; ``None`` marks a gap.
    """

    data: list[Column]
    series: list[str]
    metadata: Metadata

    def column_for(self, name: str) -> Column:
        try:
            idx = self.series.index(name)
        except ValueError as exc:
            raise KeyError(f"Unknown series: {name!r}") from exc
        return self.data[idx + 1]

    @property
    def is_placeholder(self) -> bool:
        return self.metadata.total_records == 0
