"""
Shared test fixtures for the radio guard builders.

`RecordingKernel` implements the geometry kernel protocol without any CSG
engine: every call returns an immutable `Node` describing the operation, so
tests can assert which shapes the builders ask for, with which parameters and
in which order. `node_points` gives the vertex cloud a node stands for, which
is enough to check extents and angular coverage.
"""
import itertools
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pytest

from knobguard.config import load_config


@dataclass(frozen=True)
class Node:
    op: str
    args: Tuple = ()
    children: Tuple["Node", ...] = ()


class RecordingKernel:
    """Geometry kernel that records an operation tree instead of building meshes."""

    def extrude(self, polygon, height):
        return Node("extrude", (tuple(tuple(p) for p in polygon), float(height)))

    def cylinder(self, radius, height):
        return Node("cylinder", (float(radius), float(height)))

    def box(self, size):
        return Node("box", (tuple(float(v) for v in size),))

    def hull(self, solids):
        return Node("hull", (), tuple(solids))

    def union(self, solids):
        return Node("union", (), tuple(solids))

    def difference(self, solid, cutter):
        return Node("difference", (), (solid, cutter))

    def translate(self, solid, offset):
        return Node("translate", (tuple(float(v) for v in offset),), (solid,))

    def rotate_z(self, solid, degrees):
        return Node("rotate_z", (float(degrees),), (solid,))


def node_points(node: Node) -> np.ndarray:
    """Vertex cloud (n, 3) of a recorded node; a difference keeps its first operand."""
    op = node.op
    if op == "extrude":
        poly, h = node.args
        xy = np.asarray(poly, dtype=float)
        return np.vstack([np.c_[xy, np.zeros(len(xy))], np.c_[xy, np.full(len(xy), h)]])
    if op == "cylinder":
        r, h = node.args
        a = np.linspace(0.0, 2.0 * math.pi, 64, endpoint=False)
        ring = np.c_[r * np.cos(a), r * np.sin(a)]
        return np.vstack([np.c_[ring, np.zeros(len(ring))], np.c_[ring, np.full(len(ring), h)]])
    if op == "box":
        sx, sy, sz = node.args[0]
        return np.array(list(itertools.product((0.0, sx), (0.0, sy), (0.0, sz))))
    if op in ("hull", "union"):
        return np.vstack([node_points(c) for c in node.children])
    if op == "difference":
        return node_points(node.children[0])
    if op == "translate":
        return node_points(node.children[0]) + np.asarray(node.args[0])
    if op == "rotate_z":
        a = math.radians(node.args[0])
        rot = np.array([[math.cos(a), -math.sin(a), 0.0], [math.sin(a), math.cos(a), 0.0], [0.0, 0.0, 1.0]])
        return node_points(node.children[0]) @ rot.T
    raise ValueError(f"unknown op {op}")


def find(node: Node, op: str):
    """All nodes with the given op, depth first."""
    found = [node] if node.op == op else []
    for c in node.children:
        found.extend(find(c, op))
    return found


@pytest.fixture
def kernel():
    return RecordingKernel()


@pytest.fixture
def config():
    """Default guard configuration."""
    return load_config()


@pytest.fixture
def scenario_a():
    """The reference layout: 13.5 / 13.1 / 15.1 mm, 3.1 mm wall, 0.5 mm fit."""
    return load_config({
        "antenna_diameter": 13.5,
        "channel_knob_diameter": 13.1,
        "volume_knob_diameter": 15.1,
        "wall_thickness": 3.1,
        "tolerance": 0.5,
        "antenna_to_channel": 17.7,
        "channel_to_volume": 16.8,
    })
