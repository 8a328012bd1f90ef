"""Display helpers for the cosmetic unit/decimals panel settings."""

from __future__ import annotations

from typing import Optional

from seriesalign.config.panel import FieldDefaults
from seriesalign.domain.series import Metadata

DEFAULT_DECIMALS = 1


def format_value(value: float, defaults: Optional[FieldDefaults] = None) -> str:
    """Abbreviate ``value`` for an axis label, e.g. ``1.5K`` or ``2.0Mms``."""
    defaults = defaults or FieldDefaults()
    decimals = DEFAULT_DECIMALS if defaults.decimals is None else defaults.decimals
    magnitude = abs(value)
    if magnitude >= 1_000_000:
        text = f"{value / 1_000_000:.{decimals}f}M"
    elif magnitude >= 1_000:
        text = f"{value / 1_000:.{decimals}f}K"
    else:
        text = f"{value:.{decimals}f}"
    return text + defaults.unit


def describe_metadata(
    metadata: Metadata,
    defaults: Optional[FieldDefaults] = None,
) -> dict[str, str]:
    summary = {"records": str(metadata.total_records)}
    if metadata.time_range is not None:
        summary["from"] = metadata.time_range.min.isoformat()
        summary["to"] = metadata.time_range.max.isoformat()
    if metadata.value_range is not None:
        summary["min"] = format_value(metadata.value_range.min, defaults)
        summary["max"] = format_value(metadata.value_range.max, defaults)
    return summary
