"""Unit tests for the region quadtree."""

import math

import pytest
from factories import make_point
from hypothesis import given, settings
from hypothesis import strategies as st

from ideasea.navigation.quadtree import Bounds, PointQuadtree, QuadtreePoint, build_quadtree

WORLD = Bounds.from_rect(-6000.0, -6000.0, 12000.0, 12000.0)

coords = st.floats(min_value=-5999.0, max_value=5999.0, allow_nan=False)
point_lists = st.lists(st.tuples(coords, coords), max_size=120)
extents = st.floats(min_value=0.0, max_value=12000.0, allow_nan=False)


def tree_of(points: list[tuple[float, float]], capacity: int = 4) -> PointQuadtree[int]:
    tree: PointQuadtree[int] = PointQuadtree(WORLD, capacity=capacity)
    for i, (x, y) in enumerate(points):
        assert tree.insert(QuadtreePoint(x, y, i))
    return tree


class TestBounds:
    """Tests for Bounds."""

    def test_half_open(self) -> None:
        """Test the left/top edges are inside and right/bottom are not."""
        b = Bounds.from_rect(0.0, 0.0, 10.0, 10.0)
        assert b.contains(0.0, 0.0)
        assert not b.contains(10.0, 5.0)
        assert not b.contains(5.0, 10.0)

    def test_distance(self) -> None:
        """Test distance to the rectangle."""
        b = Bounds.from_rect(0.0, 0.0, 10.0, 10.0)
        assert b.distance_sq_to(5.0, 5.0) == 0.0
        assert b.distance_sq_to(13.0, 14.0) == 25.0


class TestPointQuadtree:
    """Tests for PointQuadtree."""

    def test_invalid_capacity(self) -> None:
        """Test capacity must be positive."""
        with pytest.raises(ValueError):
            PointQuadtree(WORLD, capacity=0)

    def test_out_of_bounds_rejected(self) -> None:
        """Test points outside the root are refused."""
        tree: PointQuadtree[str] = PointQuadtree(WORLD)
        assert not tree.insert(QuadtreePoint(6000.0, 0.0, "edge"))
        assert not tree.insert(QuadtreePoint(0.0, -7000.0, "far"))
        assert len(tree) == 0

    def test_subdivides_past_capacity(self) -> None:
        """Test a full leaf splits into four children and hands its points down."""
        tree = tree_of([(-10.0, -10.0), (10.0, -10.0), (-10.0, 10.0)], capacity=2)
        assert not tree.is_leaf
        assert len(tree.children) == 4
        assert tree.points == []
        assert len(tree) == 3

    def test_radius_boundary_inclusive(self) -> None:
        """Test a point exactly on the radius is returned."""
        tree = tree_of([(3.0, 4.0), (3.0, 4.1)])
        assert [p.data for p in tree.query_radius(0.0, 0.0, 5.0)] == [0]
        assert tree.query_radius(0.0, 0.0, -1.0) == []

    def test_rect_query(self) -> None:
        """Test rectangle queries are half-open."""
        tree = tree_of([(0.0, 0.0), (10.0, 0.0), (5.0, 5.0)])
        found = sorted(p.data for p in tree.query_rect(0.0, 0.0, 10.0, 10.0))
        assert found == [0, 2]
        assert tree.query_rect(0.0, 0.0, 0.0, 10.0) == []

    def test_coincident_points_stop_at_max_depth(self) -> None:
        """Test many identical points do not recurse forever."""
        tree: PointQuadtree[int] = PointQuadtree(WORLD, capacity=1, max_depth=5)
        for i in range(50):
            assert tree.insert(QuadtreePoint(1.0, 1.0, i))

        assert len(tree) == 50
        assert max(node.depth for node in tree.iter_nodes()) == 5
        assert len(tree.query_radius(1.0, 1.0, 0.0)) == 50

    @settings(max_examples=60, deadline=None)
    @given(point_lists, coords, coords, st.floats(min_value=0.0, max_value=4000.0))
    def test_radius_matches_brute_force(self, points, cx, cy, radius) -> None:
        """Test radius queries return exactly the points a linear scan finds."""
        tree = tree_of(points)
        expected = sorted(
            i for i, (x, y) in enumerate(points)
            if (x - cx) * (x - cx) + (y - cy) * (y - cy) <= radius * radius
        )
        assert sorted(p.data for p in tree.query_radius(cx, cy, radius)) == expected

    @settings(max_examples=60, deadline=None)
    @given(point_lists, coords, coords, extents, extents)
    def test_rect_matches_brute_force(self, points, x, y, width, height) -> None:
        """Test rectangle queries return exactly the points a half-open scan finds."""
        tree = tree_of(points)
        right, bottom = x + width, y + height
        expected = sorted(
            i for i, (px, py) in enumerate(points)
            if x <= px < right and y <= py < bottom
        )
        assert sorted(p.data for p in tree.query_rect(x, y, width, height)) == expected

    @settings(max_examples=60, deadline=None)
    @given(point_lists)
    def test_structure_invariants(self, points) -> None:
        """Test leaves hold their points and internal nodes hold none."""
        tree = tree_of(points)

        assert len(tree) == len(points)
        assert sorted(p.data for p in tree.iter_points()) == list(range(len(points)))
        for node in tree.iter_nodes():
            if node.is_leaf:
                assert len(node.points) <= node.capacity or node.depth >= node.max_depth
                assert all(node.contains_point(p) for p in node.points)
            else:
                assert len(node.children) == 4
                assert node.points == []
                assert len(node) == sum(len(c) for c in node.children)


class TestBuildQuadtree:
    """Tests for build_quadtree."""

    def test_skips_outside_points(self, sample_points) -> None:
        """Test items outside the bounds are skipped."""
        items = sample_points + [make_point("outside", 9000.0, 0.0)]
        tree = build_quadtree(items, WORLD, capacity=2)

        assert len(tree) == len(sample_points)
        nearest = tree.query_radius(0.0, 0.0, 60.0)
        assert sorted(p.data.id for p in nearest) == ["a", "b"]
        assert all(math.isfinite(p.x) for p in tree.iter_points())
