# knobguard/geom.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import trimesh

Point2D = Tuple[float, float]
Point3D = Tuple[float, float, float]
Polygon2D = Tuple[Point2D, ...]


@dataclass(frozen=True)
class Feature:
    """Elemento que atraviesa la placa (antena o mando): centro XY + diámetro real."""
    name: str
    center: Point2D
    diameter: float

    @property
    def radius(self) -> float:
        return self.diameter / 2.0


@dataclass(frozen=True)
class Placement:
    """
    Centros sobre el eje X: antena en el origen, canal y volumen a continuación.
    Siempre colineales y ordenados (antena < canal < volumen).
    """
    antenna_x: float
    channel_x: float
    volume_x: float

    @classmethod
    def from_distances(cls, antenna_to_channel: float, channel_to_volume: float) -> "Placement":
        channel_x = float(antenna_to_channel)
        return cls(0.0, channel_x, channel_x + float(channel_to_volume))

    @property
    def centers(self) -> Tuple[Point2D, Point2D, Point2D]:
        return ((self.antenna_x, 0.0), (self.channel_x, 0.0), (self.volume_x, 0.0))


def rotz(deg_: float) -> np.ndarray:
    a = math.radians(deg_)
    return trimesh.transformations.rotation_matrix(a, (0, 0, 1))


def translate(v: Sequence[float]) -> np.ndarray:
    x, y, z = (list(v) + [0.0, 0.0, 0.0])[:3]
    return trimesh.transformations.translation_matrix((float(x), float(y), float(z)))
