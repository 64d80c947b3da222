# knobguard/config.py
"""
Registro de configuración del protector (antena + mando de canal + mando de volumen).

Todas las medidas en mm y los ángulos en grados. El registro es inmutable:
cada build recibe un `GuardConfig` explícito, nada se lee de estado global.

Convenciones de ejes:
  - X: línea de los tres centros (antena en el origen, luego canal y volumen).
  - Y: +Y es "delante", -Y es "detrás".
  - Z: altura; la placa apoya en Z=0.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ._helpers import num
from .geom import Feature, Placement


class ConfigError(ValueError):
    """Configuración inválida detectada antes de llegar a la geometría."""


NAME = "radio_guard"

DEFAULTS: Dict[str, Any] = {
    # Elementos (diámetros reales, sin holgura)
    "antenna_diameter": 13.5,
    "channel_knob_diameter": 13.1,
    "volume_knob_diameter": 15.1,
    # Pared y holgura de ajuste
    "wall_thickness": 3.1,
    "tolerance": 0.5,
    # Distancias entre centros
    "antenna_to_channel": 17.7,
    "channel_to_volume": 16.8,
    # Placa base
    "plate_thickness": 2.0,
    "plate_padding": 1.0,
    # Protector del mando de canal
    "channel_guard_height": 9.0,
    "channel_guard_coverage_angle": 270.0,
    "channel_guard_position_angle": 180.0,
    "channel_guard_slope_inset": 1.5,
    # Protector del mando de volumen
    "volume_guard_height": 11.0,
    "volume_guard_coverage_angle": 240.0,
    "volume_guard_position_angle": 0.0,
    "volume_guard_slope_inset": 1.5,
    # Muesca trasera (borde -Y)
    "rear_notch_width": 8.0,
    "rear_notch_height": 1.2,
    "rear_notch_depth": 2.5,
    "rear_notch_x_offset": 17.7,
    # Muesca lateral (borde -X)
    "side_notch_width": 5.0,
    "side_notch_height": 1.2,
    "side_notch_depth": 2.0,
    "side_notch_y_offset": 0.0,
    # Cajeado inferior bajo el mando de canal
    "bottom_bore_padding": 1.0,
    "bottom_bore_height": 0.8,
    # Numérico / resolución
    "epsilon": 0.01,
    "arc_resolution": 96,
    "circle_sections": 96,
}

TYPES: Dict[str, str] = {k: ("int" if isinstance(v, int) else "float") for k, v in DEFAULTS.items()}

_INT_FIELDS = {"arc_resolution", "circle_sections"}


@dataclass(frozen=True)
class GuardSpec:
    """Parámetros de un protector individual (uno por mando)."""
    diameter: float
    wall_thickness: float
    tolerance: float
    coverage_angle: float
    position_angle: float
    height: float
    slope_inset: float


class GuardConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    antenna_diameter: float = Field(DEFAULTS["antenna_diameter"], gt=0)
    channel_knob_diameter: float = Field(DEFAULTS["channel_knob_diameter"], gt=0)
    volume_knob_diameter: float = Field(DEFAULTS["volume_knob_diameter"], gt=0)

    wall_thickness: float = Field(DEFAULTS["wall_thickness"], gt=0)
    tolerance: float = Field(DEFAULTS["tolerance"], ge=0)

    antenna_to_channel: float = Field(DEFAULTS["antenna_to_channel"], gt=0)
    channel_to_volume: float = Field(DEFAULTS["channel_to_volume"], gt=0)

    plate_thickness: float = Field(DEFAULTS["plate_thickness"], gt=0)
    plate_padding: float = Field(DEFAULTS["plate_padding"], ge=0)

    channel_guard_height: float = Field(DEFAULTS["channel_guard_height"], ge=0)
    channel_guard_coverage_angle: float = Field(DEFAULTS["channel_guard_coverage_angle"], gt=0, le=360)
    channel_guard_position_angle: float = Field(DEFAULTS["channel_guard_position_angle"], ge=0, le=360)
    channel_guard_slope_inset: float = Field(DEFAULTS["channel_guard_slope_inset"], ge=0)

    volume_guard_height: float = Field(DEFAULTS["volume_guard_height"], ge=0)
    volume_guard_coverage_angle: float = Field(DEFAULTS["volume_guard_coverage_angle"], gt=0, le=360)
    volume_guard_position_angle: float = Field(DEFAULTS["volume_guard_position_angle"], ge=0, le=360)
    volume_guard_slope_inset: float = Field(DEFAULTS["volume_guard_slope_inset"], ge=0)

    rear_notch_width: float = Field(DEFAULTS["rear_notch_width"], ge=0)
    rear_notch_height: float = Field(DEFAULTS["rear_notch_height"], ge=0)
    rear_notch_depth: float = Field(DEFAULTS["rear_notch_depth"], ge=0)
    rear_notch_x_offset: float = DEFAULTS["rear_notch_x_offset"]

    side_notch_width: float = Field(DEFAULTS["side_notch_width"], ge=0)
    side_notch_height: float = Field(DEFAULTS["side_notch_height"], ge=0)
    side_notch_depth: float = Field(DEFAULTS["side_notch_depth"], ge=0)
    side_notch_y_offset: float = DEFAULTS["side_notch_y_offset"]

    bottom_bore_padding: float = Field(DEFAULTS["bottom_bore_padding"], ge=0)
    bottom_bore_height: float = Field(DEFAULTS["bottom_bore_height"], ge=0)

    epsilon: float = Field(DEFAULTS["epsilon"], gt=0)
    arc_resolution: int = Field(DEFAULTS["arc_resolution"], ge=3)
    circle_sections: int = Field(DEFAULTS["circle_sections"], ge=3)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any, info) -> Any:
        # Acepta "13,5" igual que los builders; lo no numérico lo rechaza pydantic
        if isinstance(v, str):
            parsed = num(v)
            if parsed is None:
                return v
            if info.field_name in _INT_FIELDS and parsed.is_integer():
                return int(parsed)
            return parsed
        return v

    @model_validator(mode="after")
    def _holes_do_not_overlap(self) -> "GuardConfig":
        tol = self.tolerance
        pairs = (
            ("antenna_to_channel", self.antenna_diameter, self.channel_knob_diameter, self.antenna_to_channel),
            ("channel_to_volume", self.channel_knob_diameter, self.volume_knob_diameter, self.channel_to_volume),
        )
        for field, d1, d2, dist in pairs:
            min_dist = (d1 + tol) / 2.0 + (d2 + tol) / 2.0
            if dist <= min_dist:
                raise ValueError(
                    f"{field}={dist:g} mm makes neighbouring holes overlap (needs > {min_dist:g} mm)"
                )
        return self

    # ---------------------- valores derivados ----------------------

    @property
    def placement(self) -> Placement:
        return Placement.from_distances(self.antenna_to_channel, self.channel_to_volume)

    @property
    def features(self) -> Tuple[Feature, Feature, Feature]:
        antenna, channel, volume = self.placement.centers
        return (
            Feature("antenna", antenna, self.antenna_diameter),
            Feature("channel", channel, self.channel_knob_diameter),
            Feature("volume", volume, self.volume_knob_diameter),
        )

    @property
    def channel_guard(self) -> GuardSpec:
        return GuardSpec(
            diameter=self.channel_knob_diameter,
            wall_thickness=self.wall_thickness,
            tolerance=self.tolerance,
            coverage_angle=self.channel_guard_coverage_angle,
            position_angle=self.channel_guard_position_angle,
            height=self.channel_guard_height,
            slope_inset=self.channel_guard_slope_inset,
        )

    @property
    def volume_guard(self) -> GuardSpec:
        return GuardSpec(
            diameter=self.volume_knob_diameter,
            wall_thickness=self.wall_thickness,
            tolerance=self.tolerance,
            coverage_angle=self.volume_guard_coverage_angle,
            position_angle=self.volume_guard_position_angle,
            height=self.volume_guard_height,
            slope_inset=self.volume_guard_slope_inset,
        )

    @property
    def guard_top(self) -> float:
        """Cota Z del punto más alto: placa + protector más alto."""
        return self.plate_thickness + max(self.channel_guard_height, self.volume_guard_height)

    def replace(self, **overrides: Any) -> "GuardConfig":
        """Copia validada con algunos valores cambiados."""
        return load_config(self.model_dump(), **overrides)


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e.get("loc", ())) or "config"
        msg = str(e.get("msg", "invalid value")).removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}")
    return "Invalid guard configuration: " + "; ".join(parts)


def load_config(params: Optional[Mapping[str, Any]] = None, **overrides: Any) -> GuardConfig:
    """
    Mezcla `params` (y `overrides`) sobre DEFAULTS y valida.
    Lanza ConfigError con todos los campos erróneos en el mensaje.
    """
    p = DEFAULTS.copy()
    if params:
        p.update(params)
    p.update(overrides)
    try:
        return GuardConfig(**p)
    except ValidationError as e:
        raise ConfigError(_describe(e)) from e


__all__ = ["NAME", "DEFAULTS", "TYPES", "ConfigError", "GuardSpec", "GuardConfig", "load_config"]
