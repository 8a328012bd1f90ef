import math
import re
from typing import Any, Optional

# Leading decimal literal, mirroring what a lenient float parser accepts
# ("12.5kg" -> 12.5, "1e3" -> 1000.0).
_LEADING_FLOAT = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)


def is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def get_field(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    getter = getattr(record, "get", None)
    if callable(getter):
        return getter(field)
    return getattr(record, field, None)


def is_number(value: Any) -> bool:
    """True for real ints and floats; bools are flags, not numbers."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite(value: Any) -> bool:
    """Like ``math.isfinite`` but false for ints too large for a float."""
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def parse_float(value: Any) -> Optional[float]:
    """Read the leading number of ``value``; ``None`` when there is none."""
    if is_number(value):
        if is_missing(value) or not is_finite(value):
            return None
        return float(value)
    if not isinstance(value, str):
        return None
    match = _LEADING_FLOAT.match(value)
    if match is None:
        return None
    return float(match.group(1))


def parse_number(text: str) -> Optional[float | int]:
    """Parse a string that holds exactly one number, keeping ints exact."""
    stripped = text.strip()
    # int() and float() accept "1_000"; query results never mean that.
    if not stripped or "_" in stripped:
        return None
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        number = float(stripped)
    except ValueError:
        return None
    return None if is_missing(number) else number

