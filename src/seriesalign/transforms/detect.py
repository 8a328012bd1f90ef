from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from seriesalign.domain.record import Record
from seriesalign.transforms.utils import is_number, parse_number

# Exact (case-insensitive) time column names, highest priority first.
TIME_FIELD_PATTERNS: tuple[str, ...] = (
    "__timestamp",
    "timestamp",
    "time",
    "date",
    "created_at",
    "updated_at",
    "event_time",
)

# Substrings that make a column a fallback time candidate.
TIME_FIELD_HINTS: tuple[str, ...] = ("time", "date")

# Numeric columns named like these are identifiers or tallies, not measures.
VALUE_FIELD_EXCLUDES: tuple[str, ...] = ("id", "count")


@dataclass(frozen=True)
class DetectedFields:
    x_field: Optional[str]
    y_field: Optional[str]

    @property
    def complete(self) -> bool:
        return bool(self.x_field and self.y_field)


def is_numeric_like(value: Any) -> bool:
    if is_number(value):
        return True
    return isinstance(value, str) and parse_number(value) is not None


def detect_time_field(fields: Sequence[str]) -> Optional[str]:
    lowered = [f.lower() for f in fields]
    for pattern in TIME_FIELD_PATTERNS:
        for name, low in zip(fields, lowered):
            if low == pattern:
                return name
    for name, low in zip(fields, lowered):
        if any(hint in low for hint in TIME_FIELD_HINTS):
            return name
    return None


def detect_value_field(record: Record, fields: Sequence[str]) -> Optional[str]:
    numeric = [f for f in fields if is_numeric_like(record.get(f))]
    for name in numeric:
        low = name.lower()
        if not any(word in low for word in VALUE_FIELD_EXCLUDES):
            return name
    return numeric[0] if numeric else None


def detect_fields(fields: Sequence[str], sample_record: Record) -> DetectedFields:
    """Guess the time axis and the value column from one sample row."""
    return DetectedFields(
        x_field=detect_time_field(fields),
        y_field=detect_value_field(sample_record, fields),
    )
