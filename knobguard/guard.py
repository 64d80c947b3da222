# knobguard/guard.py
"""
Protector inclinado alrededor de un mando.

Se construyen dos "losas" finas (espesor epsilon) con el mismo sector de
corona: la de la base con los radios completos y la de arriba con el radio
exterior metido `slope_inset`. La envolvente convexa de ambas da la pared con
la cara exterior en pendiente. El radio interior no se mete arriba, así el
taladro del mando queda recto; el taladro se corta luego en el ensamblado.
"""
from __future__ import annotations

import logging
from typing import Tuple

from .arc import build_arc
from .config import GuardSpec
from .geom import Point2D
from .kernel import GeometryKernel, Solid

log = logging.getLogger(__name__)


def clamp_slope_inset(slope_inset: float, wall_thickness: float, epsilon: float) -> float:
    """El inset nunca llega al espesor de pared: arriba el radio exterior queda en d/2 + eps como mínimo."""
    limit = wall_thickness - epsilon
    if slope_inset > limit:
        log.debug("slope_inset %.3f clamped to %.3f", slope_inset, limit)
        return limit
    return slope_inset


def guard_radii(
    knob_diameter: float, wall_thickness: float, tolerance: float, slope_inset: float, epsilon: float
) -> Tuple[float, float, float, float]:
    """(exterior base, interior base, exterior arriba, interior arriba)."""
    outer_base = knob_diameter / 2.0 + wall_thickness
    inner_base = knob_diameter / 2.0 + tolerance / 2.0
    inset = clamp_slope_inset(slope_inset, wall_thickness, epsilon)
    return outer_base, inner_base, outer_base - inset, inner_base


def build_guard(
    kernel: GeometryKernel,
    height: float,
    coverage_angle: float,
    knob_diameter: float,
    slope_inset: float,
    wall_thickness: float,
    tolerance: float,
    *,
    epsilon: float,
    resolution: int = 96,
) -> Solid:
    """Protector centrado en el origen, con el sector empezando en 0º y apoyado en Z=0."""
    outer_b, inner_b, outer_t, inner_t = guard_radii(
        knob_diameter, wall_thickness, tolerance, slope_inset, epsilon
    )

    base = kernel.extrude(build_arc(outer_b, inner_b, coverage_angle, resolution), epsilon)
    slabs = [base]
    if height > epsilon:
        top = kernel.extrude(build_arc(outer_t, inner_t, coverage_angle, resolution), epsilon)
        slabs.append(kernel.translate(top, (0.0, 0.0, height - epsilon)))
    return kernel.hull(slabs)


def guard_from_spec(kernel: GeometryKernel, spec: GuardSpec, *, epsilon: float, resolution: int = 96) -> Solid:
    return build_guard(
        kernel,
        spec.height,
        spec.coverage_angle,
        spec.diameter,
        spec.slope_inset,
        spec.wall_thickness,
        spec.tolerance,
        epsilon=epsilon,
        resolution=resolution,
    )


def guard_rotation(spec: GuardSpec) -> float:
    """Giro que centra el sector en `position_angle` (0/90/180/270 = derecha/delante/izquierda/detrás)."""
    return spec.position_angle - spec.coverage_angle / 2.0


def place_guard(
    kernel: GeometryKernel, guard: Solid, spec: GuardSpec, center: Point2D, plate_thickness: float
) -> Solid:
    """Gira, lleva al centro del mando y sube encima de la placa."""
    rotated = kernel.rotate_z(guard, guard_rotation(spec))
    return kernel.translate(rotated, (center[0], center[1], plate_thickness))
