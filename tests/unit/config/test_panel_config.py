import pytest
from pydantic import ValidationError

from seriesalign.config.panel import (
    FieldDefaults,
    FieldMapping,
    PanelConfig,
    coerce_panel_config,
    load_panel_config,
)


def test_field_mapping_accepts_camel_case_and_snake_case():
    camel = FieldMapping.model_validate({"xField": "ts", "yField": "v", "seriesField": "host"})
    snake = FieldMapping(x_field="ts", y_field="v", series_field="host")
    assert camel == snake


def test_blank_mapping_entries_count_as_unset():
    mapping = FieldMapping.model_validate({"xField": "  ", "yField": "", "seriesField": None})
    assert mapping.x_field is None
    assert mapping.y_field is None
    assert mapping.series_field is None


def test_field_defaults_validation():
    assert FieldDefaults().unit == ""
    with pytest.raises(ValidationError):
        FieldDefaults(decimals=-1)
    with pytest.raises(ValidationError, match="must not exceed"):
        FieldDefaults(min=10, max=1)


def test_coerce_panel_config():
    assert coerce_panel_config(None) == PanelConfig()
    config = PanelConfig(type="bar")
    assert coerce_panel_config(config) is config
    assert coerce_panel_config({"type": "line"}).type == "line"
    with pytest.raises(TypeError):
        coerce_panel_config(["line"])


def test_load_panel_config_from_yaml(write_yaml):
    path = write_yaml(
        "panel.yaml",
        """
        type: area
        title: CPU by host
        fieldMapping:
          xField: __timestamp
          yField: cpu
          seriesField: host
        fieldConfig:
          defaults:
            unit: "%"
            decimals: 2
        """,
    )

    config = load_panel_config(path)

    assert config.type == "area"
    assert config.field_mapping.series_field == "host"
    assert config.field_config.defaults.unit == "%"
    assert config.field_config.defaults.decimals == 2


def test_load_panel_config_empty_file_uses_defaults(write_yaml):
    path = write_yaml("empty.yaml", "")
    assert load_panel_config(path) == PanelConfig()


def test_load_panel_config_errors(tmp_path, write_yaml):
    with pytest.raises(FileNotFoundError):
        load_panel_config(tmp_path / "missing.yaml")
    with pytest.raises(TypeError, match="must be a mapping"):
        load_panel_config(write_yaml("list.yaml", "- a\n- b\n"))
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_panel_config(write_yaml("broken.yaml", "type: [unclosed\n"))
    with pytest.raises(ValidationError):
        load_panel_config(write_yaml("pie.yaml", "type: pie\n"))
