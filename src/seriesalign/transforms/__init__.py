from .align import SeriesAligner, align
from .chart import (
    NO_DATA,
    empty_result,
    transform_for_bar_chart,
    transform_for_panel,
    transform_for_scatter,
    transform_records,
)
from .detect import DetectedFields, detect_fields
from .time import normalize_time, parse_timestamp

__all__ = [
    "NO_DATA",
    "DetectedFields",
    "SeriesAligner",
    "align",
    "detect_fields",
    "empty_result",
    "normalize_time",
    "parse_timestamp",
    "transform_for_bar_chart",
    "transform_for_panel",
    "transform_for_scatter",
    "transform_records",
]
