"""
Unit tests for BoundaryRegion containment.
"""

import math

import numpy as np
import pytest

from diffgrowth.core.bounds import BoundaryRegion, violates_any
from diffgrowth.core.types import Point2D
from growth_policies import ConfigurationError


class TestBoundaryRegionConstruction:
    """Tests for building regions."""

    def test_rectangle(self):
        region = BoundaryRegion.rectangle(0, 0, 10, 5)
        assert region.vertices.shape == (4, 2)
        assert region.get_bounds() == (0.0, 10.0, 0.0, 5.0)
        assert not region.reverse

    def test_circle(self):
        region = BoundaryRegion.circle((5.0, 5.0), 2.0, segments=32)
        assert region.vertices.shape == (32, 2)
        dists = np.linalg.norm(region.vertices - [5.0, 5.0], axis=1)
        np.testing.assert_allclose(dists, 2.0)

    def test_vertices_are_read_only(self):
        region = BoundaryRegion.rectangle(0, 0, 10, 10)
        with pytest.raises(ValueError):
            region.vertices[0, 0] = 1.0

    def test_too_few_vertices(self):
        with pytest.raises(ConfigurationError):
            BoundaryRegion([(0, 0), (1, 1)])

    def test_bad_shape(self):
        with pytest.raises(ConfigurationError):
            BoundaryRegion([(0, 0, 0), (1, 1, 1), (2, 0, 0)])

    def test_non_finite_vertices(self):
        with pytest.raises(ConfigurationError):
            BoundaryRegion([(0, 0), (1, math.nan), (2, 0)])

    def test_bad_circle(self):
        with pytest.raises(ConfigurationError):
            BoundaryRegion.circle((0, 0), 0.0)
        with pytest.raises(ConfigurationError):
            BoundaryRegion.circle((0, 0), 1.0, segments=2)


class TestContainment:
    """Tests for contains / violates."""

    def test_rectangle_interior_and_exterior(self):
        region = BoundaryRegion.rectangle(0, 0, 10, 10)
        assert region.contains(Point2D(5, 5))
        assert not region.contains(Point2D(15, 5))
        assert not region.contains((5, -1))
        assert region.violates((15, 5))
        assert not region.violates((5, 5))

    def test_half_open_edges(self):
        """Left and bottom edges count as inside, right and top as outside."""
        region = BoundaryRegion.rectangle(0, 0, 10, 10)
        assert region.contains((0, 5))
        assert region.contains((5, 0))
        assert not region.contains((10, 5))
        assert not region.contains((5, 10))

    def test_reverse_inverts(self):
        obstacle = BoundaryRegion.rectangle(0, 0, 10, 10, reverse=True)
        assert not obstacle.contains((5, 5))
        assert obstacle.violates((5, 5))
        assert obstacle.contains((20, 20))

    def test_concave_polygon(self):
        """Points in the notch of a U shape are outside."""
        u_shape = BoundaryRegion([
            (0, 0), (30, 0), (30, 30), (20, 30), (20, 10), (10, 10), (10, 30), (0, 30),
        ])
        assert u_shape.contains((5, 20))
        assert u_shape.contains((25, 20))
        assert u_shape.contains((15, 5))
        assert not u_shape.contains((15, 20))

    def test_circle_contains_center(self):
        region = BoundaryRegion.circle((0, 0), 10.0)
        assert region.contains((0.5, 0.5))
        assert not region.contains((20, 0))

    def test_contains_points_matches_contains(self):
        """Vectorized check agrees with the scalar one."""
        region = BoundaryRegion.circle((50, 50), 30, segments=12)
        rng = np.random.default_rng(0)
        points = rng.uniform(0, 100, size=(200, 2))
        expected = [region.contains(p) for p in points]
        np.testing.assert_array_equal(region.contains_points(points), expected)

        reversed_region = BoundaryRegion(region.vertices, reverse=True)
        np.testing.assert_array_equal(
            reversed_region.contains_points(points), np.logical_not(expected)
        )

    def test_violates_any(self):
        inner = BoundaryRegion.rectangle(0, 0, 10, 10)
        outer = BoundaryRegion.rectangle(-10, -10, 20, 20)
        assert not violates_any(Point2D(5, 5), [])
        assert not violates_any(Point2D(5, 5), [inner, outer])
        assert violates_any(Point2D(15, 15), [inner, outer])


class TestBoundaryRegionSerialization:
    """Tests for to_dict/from_dict."""

    def test_round_trip(self):
        region = BoundaryRegion.rectangle(1, 2, 3, 4, reverse=True)
        restored = BoundaryRegion.from_dict(region.to_dict())
        np.testing.assert_array_equal(restored.vertices, region.vertices)
        assert restored.reverse
