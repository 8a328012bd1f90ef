"""Timestamp normalization to epoch milliseconds.

Query backends hand back time columns as epoch numbers in an unknown unit
(seconds through nanoseconds) or as date strings. Everything here maps such
values onto one canonical scale: milliseconds since the Unix epoch, UTC.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

from dateutil import parser as date_parser

from seriesalign.transforms.utils import is_finite, is_number, parse_float, parse_number

EpochMillis = Union[int, float]

# Magnitude thresholds, checked top-down: (lower bound, unit).
UNIT_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (1e18, "ns"),
    (1e15, "us"),
    (1e12, "ms"),
    (1e9, "s"),
)

_MS_DIVISORS = {"ns": 1_000_000, "us": 1_000, "μs": 1_000}

# Fills components a date string leaves out; never "today".
_PARSE_DEFAULT = datetime(1970, 1, 1)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def infer_time_unit(value: float) -> str:
    """Return the unit a raw epoch number most likely uses.

    Values at or below ``1e9`` have no recognizable magnitude and are
    reported as seconds, same as the ``1e9..1e12`` band.
    """
    for bound, unit in UNIT_THRESHOLDS:
        if value > bound:
            return unit
    return "s"


def _to_millis(value: EpochMillis, unit: str) -> EpochMillis:
    if unit in _MS_DIVISORS:
        divisor = _MS_DIVISORS[unit]
        if isinstance(value, int):
            return value // divisor
        return math.floor(value / divisor)
    if unit == "ms":
        return value
    if unit == "s":
        return value * 1000
    raise ValueError(f"Unsupported time unit: {unit!r}")


def parse_timestamp(value: Union[int, float, str], unit: str) -> EpochMillis:
    """Convert an epoch number in an explicit ``unit`` to milliseconds.

    Accepted units: ``ns``, ``us`` (or ``μs``), ``ms``, ``s``.
    """
    number = parse_number(value) if isinstance(value, str) else value
    if not is_number(number) or not is_finite(number):
        raise ValueError(f"Not an epoch number: {value!r}")
    return _to_millis(number, unit)


def datetime_to_millis(value: datetime) -> EpochMillis:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - _EPOCH
    # Integer arithmetic keeps whole milliseconds exact.
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    if micros % 1000 == 0:
        return micros // 1000
    return micros / 1000


def millis_to_datetime(value: EpochMillis) -> datetime:
    """Raises ``OverflowError`` outside the years ``datetime`` can hold."""
    return _EPOCH + timedelta(milliseconds=value)


def parse_date_string(text: str) -> Optional[EpochMillis]:
    """Parse ISO-8601 or another common date format; naive means UTC."""
    candidate = text.strip()
    if not candidate:
        return None
    try:
        parsed = datetime.fromisoformat(candidate.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = date_parser.parse(candidate, default=_PARSE_DEFAULT)
        except (ValueError, OverflowError):
            return None
    return datetime_to_millis(parsed)


def normalize_time(raw: Any, is_declared_time_field: bool = True) -> Optional[EpochMillis]:
    """Map one raw time value to epoch milliseconds, or ``None``.

    When ``is_declared_time_field`` is false the value is only read as a
    plain number, with no unit inference, for numeric (non-time) x axes.
    """
    if not is_declared_time_field:
        number = parse_float(raw)
        if number is None or not is_finite(number):
            return None
        return number

    if isinstance(raw, datetime):
        return datetime_to_millis(raw)
    if isinstance(raw, date):
        return datetime_to_millis(datetime(raw.year, raw.month, raw.day))

    if isinstance(raw, str):
        number = parse_number(raw)
        if number is None:
            return parse_date_string(raw)
    elif is_number(raw):
        number = raw
    else:
        return None

    if not is_finite(number):
        return None
    return _to_millis(number, infer_time_unit(number))
