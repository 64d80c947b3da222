# knobguard/arc.py
from __future__ import annotations

import math

import numpy as np

from .geom import Polygon2D

# Paso angular mínimo (grados); evita bucles infinitos con ángulos casi nulos
MIN_ARC_STEP = 0.01


def arc_step(resolution: int) -> float:
    """Paso angular en grados para `resolution` segmentos por vuelta completa."""
    return max(360.0 / max(int(resolution), 1), MIN_ARC_STEP)


def build_arc(outer_r: float, inner_r: float, coverage_angle: float, resolution: int = 96) -> Polygon2D:
    """
    Sector de corona circular como un único polígono cerrado.

    Recorre el arco exterior de 0º a `coverage_angle` y vuelve por el interior
    de `coverage_angle` a 0º. Con 360º sale la corona completa (el contorno se
    cierra sobre sí mismo en 0º).
    """
    step = arc_step(resolution)
    n = max(1, int(math.ceil(coverage_angle / step)))
    angles = np.radians(np.linspace(0.0, float(coverage_angle), n + 1))

    cos, sin = np.cos(angles), np.sin(angles)
    outer = [(outer_r * c, outer_r * s) for c, s in zip(cos, sin)]
    inner = [(inner_r * c, inner_r * s) for c, s in zip(cos[::-1], sin[::-1])]
    return tuple((float(x), float(y)) for x, y in outer + inner)
