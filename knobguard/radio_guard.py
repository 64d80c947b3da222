# knobguard/radio_guard.py
"""
Protector para radio: placa base + dos protectores inclinados, menos taladros,
muescas y cajeado inferior.

Orden del ensamblado (una sola pasada):
  1) positivo = placa extruida ∪ protector canal ∪ protector volumen
  2) negativo = 3 taladros ∪ muesca trasera ∪ muesca lateral ∪ cajeado inferior
  3) resultado = positivo − negativo
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import trimesh

from .config import DEFAULTS, NAME, TYPES, GuardConfig, load_config
from .cutters import (
    bottom_bore_cutter,
    hole_cutter,
    left_extent,
    rear_extent,
    rear_notch_cutter,
    side_notch_cutter,
)
from .guard import guard_from_spec, place_guard
from .kernel import GeometryKernel, Solid, TrimeshKernel
from .plate import build_plate_footprint

log = logging.getLogger(__name__)

SLUGS = ["radio-guard", "knob-guard", "protector_mandos"]


def build_parts(config: GuardConfig, kernel: GeometryKernel) -> Dict[str, Solid]:
    """Todas las piezas intermedias con nombre; útil para inspección y tests."""
    eps = config.epsilon
    res = config.arc_resolution
    antenna, channel, volume = config.features

    # --- Positivo
    footprint = build_plate_footprint(config.features, config.wall_thickness, config.plate_padding, res)
    plate = kernel.extrude(footprint, config.plate_thickness)

    guards: Dict[str, Solid] = {}
    for feature, spec in ((channel, config.channel_guard), (volume, config.volume_guard)):
        shell = guard_from_spec(kernel, spec, epsilon=eps, resolution=res)
        guards[feature.name] = place_guard(kernel, shell, spec, feature.center, config.plate_thickness)

    positive = kernel.union([plate, guards["channel"], guards["volume"]])

    # --- Negativo
    total_h = config.guard_top
    holes = {
        f"{f.name}_hole": hole_cutter(kernel, f.center, f.diameter, config.tolerance, total_h, eps)
        for f in config.features
    }
    notches: Dict[str, Solid] = {}
    if config.rear_notch_width > 0 and config.rear_notch_depth > 0 and config.rear_notch_height > 0:
        rear_y = rear_extent(config.features, config.wall_thickness, config.plate_padding)
        notches["rear_notch"] = rear_notch_cutter(
            kernel, config.rear_notch_width, config.rear_notch_height, config.rear_notch_depth,
            config.rear_notch_x_offset, rear_y, eps,
        )
    if config.side_notch_width > 0 and config.side_notch_depth > 0 and config.side_notch_height > 0:
        left_x = left_extent(antenna, config.wall_thickness, config.plate_padding)
        notches["side_notch"] = side_notch_cutter(
            kernel, config.side_notch_width, config.side_notch_height, config.side_notch_depth,
            config.side_notch_y_offset, left_x, eps,
        )
    bore = bottom_bore_cutter(
        kernel, channel.center, channel.diameter, config.bottom_bore_padding, config.bottom_bore_height, eps
    )

    cutters = {**holes, **notches, "bottom_bore": bore}
    negative = kernel.union(list(cutters.values()))

    return {
        "plate": plate,
        "channel_guard": guards["channel"],
        "volume_guard": guards["volume"],
        "positive": positive,
        **cutters,
        "negative": negative,
    }


def build_radio_guard(config: GuardConfig, kernel: Optional[GeometryKernel] = None) -> Solid:
    """Sólido final listo para exportar."""
    kernel = kernel or TrimeshKernel(sections=config.circle_sections)
    parts = build_parts(config, kernel)
    result = kernel.difference(parts["positive"], parts["negative"])
    faces = getattr(result, "faces", None)
    log.info(
        "radio guard built: centers=%s faces=%s",
        [f.center[0] for f in config.features],
        len(faces) if faces is not None else "n/a",
    )
    return result


# ----------------------------- builder -----------------------------
def make_model(params: Optional[Mapping[str, Any]] = None) -> trimesh.Trimesh:
    """
    Builder principal: dict de parámetros (parciales) -> trimesh.Trimesh en mm.
    Lanza ConfigError si algún valor es inválido.
    """
    config = load_config(params)
    mesh = build_radio_guard(config, TrimeshKernel(sections=config.circle_sections))
    mesh.metadata = {"name": NAME, "unit": "mm"}
    log.info("%s: %d faces, watertight=%s", NAME, len(mesh.faces), mesh.is_watertight)
    return mesh


def make(params: Optional[Mapping[str, Any]] = None) -> trimesh.Trimesh:
    return make_model(params)


BUILD = {"make": make}

__all__ = [
    "NAME", "SLUGS", "DEFAULTS", "TYPES", "BUILD",
    "build_parts", "build_radio_guard", "make", "make_model",
]
