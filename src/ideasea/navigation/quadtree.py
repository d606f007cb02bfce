"""Region quadtree over final idea positions.

Built once per dataset load and read-only afterwards. There is no
deletion or rebalancing; reloading a dataset rebuilds the tree.

Bounds use a top-left origin with half-open containment
``left <= x < right``, ``top <= y < bottom``. Child quadrants share the
parent's midpoint as an exact edge, so every point contained by a parent
is contained by exactly one child.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle stored by its edges."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> "Bounds":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def intersects(self, left: float, top: float, right: float, bottom: float) -> bool:
        return not (
            left > self.right
            or right < self.left
            or top > self.bottom
            or bottom < self.top
        )

    def distance_sq_to(self, x: float, y: float) -> float:
        """Squared distance from (x, y) to the closest point of the rectangle."""
        closest_x = max(self.left, min(x, self.right))
        closest_y = max(self.top, min(y, self.bottom))
        dx = x - closest_x
        dy = y - closest_y
        return dx * dx + dy * dy


@dataclass(frozen=True)
class QuadtreePoint(Generic[T]):
    """A point stored in the tree with its payload."""

    x: float
    y: float
    data: T | None = None


class PointQuadtree(Generic[T]):
    """
    Point quadtree with radius and rectangle queries.

    A node is either a leaf holding up to ``capacity`` points, or an
    internal node with exactly four children and no points of its own.
    Leaves at ``max_depth`` keep any overflow instead of subdividing, so
    many coincident points cannot recurse forever.
    """

    def __init__(
        self,
        bounds: Bounds,
        capacity: int = 10,
        max_depth: int = 32,
        depth: int = 0,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.bounds = bounds
        self.capacity = capacity
        self.max_depth = max_depth
        self.depth = depth
        self.points: list[QuadtreePoint[T]] = []
        self.children: tuple[PointQuadtree[T], ...] = ()
        self._size = 0

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __len__(self) -> int:
        return self._size

    def contains_point(self, point: QuadtreePoint[T]) -> bool:
        return self.bounds.contains(point.x, point.y)

    def insert(self, point: QuadtreePoint[T]) -> bool:
        """Insert a point.

        Returns:
            False if the point lies outside this node's bounds, True otherwise
        """
        if not self.contains_point(point):
            return False

        if self.is_leaf:
            if len(self.points) < self.capacity or self.depth >= self.max_depth:
                self.points.append(point)
                self._size += 1
                return True
            self._subdivide()

        self._child_for(point).insert(point)
        self._size += 1
        return True

    def query_radius(self, cx: float, cy: float, radius: float) -> list[QuadtreePoint[T]]:
        """All points within ``radius`` of (cx, cy), boundary inclusive."""
        found: list[QuadtreePoint[T]] = []
        if radius < 0:
            return found
        self._query_radius(cx, cy, radius * radius, found)
        return found

    def query_rect(
        self, x: float, y: float, width: float, height: float
    ) -> list[QuadtreePoint[T]]:
        """All points with ``x <= px < x + width`` and ``y <= py < y + height``."""
        found: list[QuadtreePoint[T]] = []
        if width <= 0 or height <= 0:
            return found
        self._query_rect(x, y, x + width, y + height, found)
        return found

    def iter_nodes(self) -> Iterator[PointQuadtree[T]]:
        """Depth-first walk over every node, root first."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def iter_points(self) -> Iterator[QuadtreePoint[T]]:
        for node in self.iter_nodes():
            yield from node.points

    # ---- internal helpers ----

    def _subdivide(self) -> None:
        b = self.bounds
        mid_x = (b.left + b.right) / 2
        mid_y = (b.top + b.bottom) / 2
        depth = self.depth + 1

        def child(left: float, top: float, right: float, bottom: float) -> PointQuadtree[T]:
            return PointQuadtree(
                Bounds(left, top, right, bottom), self.capacity, self.max_depth, depth
            )

        # Order: nw, ne, sw, se
        self.children = (
            child(b.left, b.top, mid_x, mid_y),
            child(mid_x, b.top, b.right, mid_y),
            child(b.left, mid_y, mid_x, b.bottom),
            child(mid_x, mid_y, b.right, b.bottom),
        )

        points, self.points = self.points, []
        for p in points:
            self._child_for(p).insert(p)

    def _child_for(self, point: QuadtreePoint[T]) -> PointQuadtree[T]:
        nw, ne, sw, se = self.children
        east = point.x >= ne.bounds.left
        south = point.y >= sw.bounds.top
        if south:
            return se if east else sw
        return ne if east else nw

    def _query_radius(
        self,
        cx: float,
        cy: float,
        radius_sq: float,
        found: list[QuadtreePoint[T]],
    ) -> None:
        if self.bounds.distance_sq_to(cx, cy) > radius_sq:
            return

        for p in self.points:
            dx = p.x - cx
            dy = p.y - cy
            if dx * dx + dy * dy <= radius_sq:
                found.append(p)

        for child in self.children:
            child._query_radius(cx, cy, radius_sq, found)

    def _query_rect(
        self,
        left: float,
        top: float,
        right: float,
        bottom: float,
        found: list[QuadtreePoint[T]],
    ) -> None:
        if not self.bounds.intersects(left, top, right, bottom):
            return

        for p in self.points:
            if left <= p.x < right and top <= p.y < bottom:
                found.append(p)

        for child in self.children:
            child._query_rect(left, top, right, bottom, found)


def build_quadtree(
    items: Iterable[Any],
    bounds: Bounds,
    capacity: int = 10,
    max_depth: int = 32,
) -> PointQuadtree[Any]:
    """Build a tree from objects with ``x``/``y`` attributes.

    Items outside ``bounds`` are skipped with a warning; callers should
    size the bounds generously around the layout extent.
    """
    tree: PointQuadtree[Any] = PointQuadtree(bounds, capacity, max_depth)
    rejected = 0
    for item in items:
        if not tree.insert(QuadtreePoint(item.x, item.y, item)):
            rejected += 1

    if rejected:
        logger.warning(f"Quadtree rejected {rejected} points outside {bounds}")
    logger.debug(f"Built quadtree with {len(tree)} points")
    return tree
