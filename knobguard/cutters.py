# knobguard/cutters.py
"""
Sólidos que sólo se restan. Todos sobresalen `epsilon` de la superficie que
atraviesan (y son 2*epsilon más largos) para que el booleano no tenga caras
coincidentes.
"""
from __future__ import annotations

from typing import Iterable

from .geom import Feature, Point2D
from .kernel import GeometryKernel, Solid
from .plate import plate_radius


def hole_cutter(
    kernel: GeometryKernel, center: Point2D, diameter: float, tolerance: float, total_height: float, epsilon: float
) -> Solid:
    """Taladro pasante de diámetro d + tolerancia, desde debajo de la placa hasta encima del protector."""
    cyl = kernel.cylinder((diameter + tolerance) / 2.0, total_height + 2.0 * epsilon)
    return kernel.translate(cyl, (center[0], center[1], -epsilon))


def rear_extent(features: Iterable[Feature], wall_thickness: float, padding: float) -> float:
    """Cota Y del borde trasero: el mayor de los tres radios de placa, hacia -Y."""
    return -max(plate_radius(f, wall_thickness, padding) for f in features)


def left_extent(antenna: Feature, wall_thickness: float, padding: float) -> float:
    """Cota X del borde izquierdo; la antena está en el origen y es la que lo limita."""
    return antenna.center[0] - plate_radius(antenna, wall_thickness, padding)


def rear_notch_cutter(
    kernel: GeometryKernel, width: float, height: float, depth: float, x_offset: float, rear_y: float, epsilon: float
) -> Solid:
    """Muesca rectangular desde el borde trasero hacia dentro (+Y), centrada en `x_offset`."""
    b = kernel.box((width, depth + 2.0 * epsilon, height + 2.0 * epsilon))
    return kernel.translate(b, (x_offset - width / 2.0, rear_y - epsilon, -epsilon))


def side_notch_cutter(
    kernel: GeometryKernel, width: float, height: float, depth: float, y_offset: float, left_x: float, epsilon: float
) -> Solid:
    """Muesca rectangular desde el borde izquierdo hacia dentro (+X), centrada en `y_offset`."""
    b = kernel.box((depth + 2.0 * epsilon, width, height + 2.0 * epsilon))
    return kernel.translate(b, (left_x - epsilon, y_offset - width / 2.0, -epsilon))


def bottom_bore_cutter(
    kernel: GeometryKernel, center: Point2D, knob_diameter: float, radius_padding: float, cut_height: float,
    epsilon: float,
) -> Solid:
    """Cajeado cilíndrico por debajo, radio = radio del mando + margen, hasta `cut_height`."""
    cyl = kernel.cylinder(knob_diameter / 2.0 + radius_padding, cut_height + epsilon)
    return kernel.translate(cyl, (center[0], center[1], -epsilon))
