# knobguard/plate.py
from __future__ import annotations

from typing import Iterable, List

import shapely.geometry as sg
from shapely.ops import unary_union

from .geom import Feature, Polygon2D


def plate_radius(feature: Feature, wall_thickness: float, padding: float) -> float:
    """Radio del círculo de placa que rodea a un elemento."""
    return feature.radius + float(wall_thickness) + float(padding)


def plate_circles(
    features: Iterable[Feature], wall_thickness: float, padding: float, resolution: int = 96
) -> List[sg.Polygon]:
    quad = max(1, int(resolution) // 4)
    return [
        sg.Point(f.center).buffer(plate_radius(f, wall_thickness, padding), quad_segs=quad)
        for f in features
    ]


def build_plate_footprint(
    features: Iterable[Feature], wall_thickness: float, padding: float, resolution: int = 96
) -> Polygon2D:
    """
    Silueta de la placa base: envolvente convexa de un círculo por elemento
    (radio = d/2 + pared + margen). Con los centros colineales sale un
    "estadio": dos casquetes unidos por tangentes rectas.
    """
    circles = plate_circles(features, wall_thickness, padding, resolution)
    hull = unary_union(circles).convex_hull
    # sin el punto de cierre repetido
    coords = list(hull.exterior.coords)[:-1]
    return tuple((float(x), float(y)) for x, y in coords)
