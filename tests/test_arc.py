"""Tests for the partial ring cross-section."""
import math

import numpy as np
import pytest
from shapely.geometry import Polygon

from knobguard.arc import MIN_ARC_STEP, arc_step, build_arc


class TestArcStep:

    def test_step_from_resolution(self):
        assert arc_step(96) == pytest.approx(3.75)
        assert arc_step(360) == pytest.approx(1.0)

    def test_step_is_floored(self):
        assert arc_step(10**9) == MIN_ARC_STEP


class TestBuildArc:

    @pytest.mark.parametrize("coverage", [1.0, 45.0, 90.0, 180.0, 270.0, 359.0, 360.0])
    def test_vertex_count(self, coverage):
        step = arc_step(96)
        poly = build_arc(10.0, 7.0, coverage, resolution=96)
        n = max(1, math.ceil(coverage / step))
        assert len(poly) == 2 * (n + 1)

    def test_starts_and_ends_at_angle_zero(self):
        poly = build_arc(10.0, 7.0, 270.0)
        assert poly[0] == pytest.approx((10.0, 0.0))
        assert poly[-1] == pytest.approx((7.0, 0.0))

    def test_outer_then_inner_order(self):
        poly = np.asarray(build_arc(10.0, 7.0, 180.0, resolution=36))
        half = len(poly) // 2
        outer, inner = poly[:half], poly[half:]
        assert np.allclose(np.hypot(outer[:, 0], outer[:, 1]), 10.0)
        assert np.allclose(np.hypot(inner[:, 0], inner[:, 1]), 7.0)
        outer_angles = np.degrees(np.arctan2(outer[:, 1], outer[:, 0])) % 360.0
        outer_angles[-1] = 180.0
        assert np.all(np.diff(outer_angles) > 0)
        assert inner[0] == pytest.approx((-7.0, 0.0), abs=1e-9)

    def test_outer_arc_reaches_coverage(self):
        poly = build_arc(10.0, 7.0, 100.0, resolution=96)
        end = poly[len(poly) // 2 - 1]
        assert end == pytest.approx((10.0 * math.cos(math.radians(100)), 10.0 * math.sin(math.radians(100))))

    def test_full_annulus_radii(self):
        poly = np.asarray(build_arc(12.0, 8.0, 360.0))
        r = np.hypot(poly[:, 0], poly[:, 1])
        assert np.all(r >= 8.0 - 1e-9)
        assert np.all(r <= 12.0 + 1e-9)

    def test_partial_ring_is_simple_polygon(self):
        poly = Polygon(build_arc(10.0, 7.0, 270.0))
        assert poly.is_valid
        expected = 0.75 * math.pi * (10.0**2 - 7.0**2)
        assert poly.area == pytest.approx(expected, rel=1e-2)

    def test_degenerate_angle_terminates(self):
        poly = build_arc(10.0, 7.0, 1e-9)
        assert len(poly) == 4

    def test_zero_inner_radius(self):
        poly = build_arc(5.0, 0.0, 90.0)
        assert poly[-1] == (0.0, 0.0)
