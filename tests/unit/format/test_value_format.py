from datetime import timedelta

from seriesalign.config.panel import FieldDefaults
from seriesalign.domain.series import Metadata, TimeRange, ValueRange
from seriesalign.format import describe_metadata, format_value
from tests.unit.transforms.helpers import T0


def test_format_value_abbreviates_large_magnitudes():
    assert format_value(1500) == "1.5K"
    assert format_value(-1200) == "-1.2K"
    assert format_value(999) == "999.0"
    assert format_value(2_500_000, FieldDefaults(unit="B", decimals=2)) == "2.50MB"


def test_format_value_uses_configured_decimals():
    assert format_value(12.345, FieldDefaults(decimals=0)) == "12"
    assert format_value(0.5, FieldDefaults(unit="%", decimals=2)) == "0.50%"


def test_describe_metadata_includes_only_present_ranges():
    meta = Metadata(
        total_records=4,
        time_range=TimeRange(min=T0, max=T0 + timedelta(hours=1)),
        value_range=ValueRange(min=0.0, max=2048.0),
    )

    summary = describe_metadata(meta, FieldDefaults(unit="ms"))

    assert summary == {
        "records": "4",
        "from": "2024-01-01T00:00:00+00:00",
        "to": "2024-01-01T01:00:00+00:00",
        "min": "0.0ms",
        "max": "2.0Kms",
    }
    assert describe_metadata(Metadata(total_records=0)) == {"records": "0"}
