"""Proximity/LOD manager: throttled nearby-idea queries against the quadtree."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ideasea.models import PositionedIdea
from ideasea.navigation.config import ProximityConfig
from ideasea.navigation.quadtree import PointQuadtree


@dataclass(frozen=True)
class ProximityCandidate:
    """An idea near the viewpoint. Recomputed every query, never persisted."""

    idea: PositionedIdea
    distance: float


def sorted_candidates(
    index: PointQuadtree[PositionedIdea],
    x: float,
    y: float,
    radius: float,
    known_ids: set[str] | None = None,
) -> list[ProximityCandidate]:
    """Query ``index`` around (x, y) and sort hits by exact distance.

    Hits whose idea id is not in ``known_ids`` (when given) are ignored.
    Equal distances keep the tree's traversal order.
    """
    candidates = []
    for point in index.query_radius(x, y, radius):
        idea = point.data
        if idea is None or (known_ids is not None and idea.id not in known_ids):
            continue
        distance = math.hypot(idea.x - x, idea.y - y)
        candidates.append(ProximityCandidate(idea=idea, distance=distance))

    candidates.sort(key=lambda c: c.distance)
    return candidates


class ProximityManager:
    """Throttled nearest-neighbor queries around the moving viewpoint.

    ``update`` runs a query only on every Nth tick and returns None on
    skipped ticks, so callers keep their previous candidate list and query
    cost stays bounded regardless of frame rate.
    """

    def __init__(
        self,
        ideas: Sequence[PositionedIdea],
        index: PointQuadtree[PositionedIdea],
        config: ProximityConfig | None = None,
    ) -> None:
        self.config = config or ProximityConfig()
        if self.config.throttle < 1:
            raise ValueError(f"throttle must be >= 1, got {self.config.throttle}")
        self.index = index
        self.idea_ids = {idea.id for idea in ideas}

    def should_query(self, tick: int) -> bool:
        return tick % self.config.throttle == 0

    def update(self, x: float, y: float, tick: int) -> list[ProximityCandidate] | None:
        """Sorted nearby ideas, or None when this tick is skipped."""
        if not self.should_query(tick):
            return None
        return self.query(x, y)

    def query(self, x: float, y: float) -> list[ProximityCandidate]:
        """Unthrottled query."""
        return sorted_candidates(self.index, x, y, self.config.radius, self.idea_ids)
