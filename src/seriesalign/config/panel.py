from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from seriesalign.utils.load import load_yaml

PanelType = Literal["timeseries", "line", "area", "bar", "scatter"]


class FieldMapping(BaseModel):
    """Explicit column choices; unset fields fall back to detection."""

    model_config = ConfigDict(populate_by_name=True)

    x_field: Optional[str] = Field(default=None, alias="xField")
    y_field: Optional[str] = Field(default=None, alias="yField")
    series_field: Optional[str] = Field(default=None, alias="seriesField")

    @field_validator("x_field", "y_field", "series_field", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object):
        if isinstance(value, str):
            text = value.strip()
            return text if text else None
        return value


class FieldDefaults(BaseModel):
    """Cosmetic display settings; never read by the alignment itself."""

    model_config = ConfigDict(populate_by_name=True)

    unit: str = ""
    decimals: Optional[int] = Field(default=None, ge=0)
    min: Optional[float] = None
    max: Optional[float] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")

    @model_validator(mode="after")
    def _check_bounds(self) -> "FieldDefaults":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class FieldConfig(BaseModel):
    defaults: FieldDefaults = Field(default_factory=FieldDefaults)


class PanelConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: PanelType = "timeseries"
    title: str = ""
    field_mapping: Optional[FieldMapping] = Field(default=None, alias="fieldMapping")
    field_config: FieldConfig = Field(default_factory=FieldConfig, alias="fieldConfig")


def coerce_panel_config(config: PanelConfig | Mapping[str, Any] | None) -> PanelConfig:
    if config is None:
        return PanelConfig()
    if isinstance(config, PanelConfig):
        return config
    if isinstance(config, Mapping):
        return PanelConfig.model_validate(dict(config))
    raise TypeError(
        f"config must be a PanelConfig or mapping, got {type(config).__name__}"
    )


def load_panel_config(path: str | Path) -> PanelConfig:
    """Load a panel definition from a YAML file."""
    return PanelConfig.model_validate(load_yaml(Path(path)))
