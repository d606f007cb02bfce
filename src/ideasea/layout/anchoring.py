"""Topic-anchored layout: contraction toward centroids and centroid separation.

Works in the normalized ``[0, 1]`` space produced by the normalizer:

1. Compute each topic's centroid from its members.
2. Contract every point toward its topic centroid, turning diffuse
   scatter into islands while keeping each point's relative offset.
3. Push centroids apart pairwise until a minimum gap holds or the pass
   budget runs out (best effort, never raises).
4. Map to world coordinates.

With ``rebase_on_separated`` enabled, step 4 places each point at its
separated centroid plus its contracted offset, then refits the result
into the unit square if separation pushed it out. Disabled, the contracted
coordinates are scaled directly and separation only affects the reported
centroids.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from ideasea.layout.config import AnchorConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopicCentroid:
    """Mean normalized position of a topic's members."""

    name: str
    x: float
    y: float
    count: int


@dataclass
class AnchorResult:
    """Output of the anchor solver."""

    positions: list[tuple[float, float]]  # World coordinates, input order
    centroids: dict[str, TopicCentroid] = field(default_factory=dict)
    separated_centroids: dict[str, TopicCentroid] = field(default_factory=dict)
    passes_used: int = 0
    converged: bool = True


class TopicAnchorSolver:
    """Contracts topics into islands and spreads the islands apart."""

    def __init__(self, config: AnchorConfig | None = None) -> None:
        self.config = config or AnchorConfig()
        if not 0.0 <= self.config.contraction <= 1.0:
            raise ValueError(f"contraction must be in [0, 1], got {self.config.contraction}")

    @staticmethod
    def compute_centroids(
        topics: Sequence[str],
        positions: Sequence[tuple[float, float]],
    ) -> dict[str, TopicCentroid]:
        """Mean position per topic, in first-seen topic order."""
        sums: dict[str, list[float]] = {}
        counts: dict[str, int] = {}
        for topic, (x, y) in zip(topics, positions):
            acc = sums.setdefault(topic, [0.0, 0.0])
            acc[0] += x
            acc[1] += y
            counts[topic] = counts.get(topic, 0) + 1

        return {
            name: TopicCentroid(name, acc[0] / counts[name], acc[1] / counts[name], counts[name])
            for name, acc in sums.items()
        }

    def contract(
        self,
        topics: Sequence[str],
        positions: Sequence[tuple[float, float]],
        centroids: dict[str, TopicCentroid],
    ) -> list[tuple[float, float]]:
        """Move each point toward its topic centroid by the contraction fraction."""
        keep = 1.0 - self.config.contraction
        contracted = []
        for topic, (x, y) in zip(topics, positions):
            c = centroids[topic]
            contracted.append((c.x + (x - c.x) * keep, c.y + (y - c.y) * keep))
        return contracted

    def separate_centroids(
        self,
        centroids: dict[str, TopicCentroid],
    ) -> tuple[dict[str, TopicCentroid], int, bool]:
        """Push centroid pairs closer than the minimum gap apart.

        Operates on a working copy; the input mapping is not modified.

        Returns:
            (separated centroids, passes used, whether a pass moved nothing)
        """
        gap = self.config.min_centroid_gap
        names = list(centroids)
        work = {name: [centroids[name].x, centroids[name].y] for name in names}

        passes = 0
        converged = False
        for _ in range(self.config.max_passes):
            passes += 1
            moved = False
            for a in range(len(names)):
                for b in range(a + 1, len(names)):
                    ca = work[names[a]]
                    cb = work[names[b]]
                    dx = cb[0] - ca[0]
                    dy = cb[1] - ca[1]
                    dist = math.hypot(dx, dy)
                    # Coincident centroids have no direction to push along
                    if 0.0 < dist < gap:
                        push = (gap - dist) / 2
                        nx, ny = dx / dist, dy / dist
                        ca[0] -= nx * push
                        ca[1] -= ny * push
                        cb[0] += nx * push
                        cb[1] += ny * push
                        moved = True
            if not moved:
                converged = True
                break

        if not converged and names:
            logger.info(
                f"Centroid separation stopped after {passes} passes without full separation"
            )

        separated = {
            name: TopicCentroid(name, work[name][0], work[name][1], centroids[name].count)
            for name in names
        }
        return separated, passes, converged or not names

    @staticmethod
    def fit_unit_square(
        positions: Sequence[tuple[float, float]],
    ) -> list[tuple[float, float]]:
        """Pull positions that left ``[0, 1]^2`` back inside it.

        Uses one uniform scale (never enlarging) and recenters the extent,
        so aspect ratio and relative offsets are kept. Positions already
        inside the square are returned unchanged.
        """
        if not positions:
            return []
        xs = [p[0] for p in positions]
        ys = [p[1] for p in positions]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)
        if min_x >= 0.0 and min_y >= 0.0 and max_x <= 1.0 and max_y <= 1.0:
            return list(positions)

        span = max(max_x - min_x, max_y - min_y)
        scale = min(1.0, 1.0 / span) if span > 0 else 1.0
        off_x = (1.0 - (max_x - min_x) * scale) / 2
        off_y = (1.0 - (max_y - min_y) * scale) / 2
        logger.info(f"Separated layout exceeded the unit square, refit with scale={scale:.3f}")

        def fit(value: float, lo: float, off: float) -> float:
            # Clamp guards float rounding at the edges
            return min(1.0, max(0.0, (value - lo) * scale + off))

        return [(fit(x, min_x, off_x), fit(y, min_y, off_y)) for x, y in positions]

    def to_world(self, x: float, y: float) -> tuple[float, float]:
        """Map a normalized coordinate to world units."""
        lo, hi = self.config.world_min, self.config.world_max
        span = hi - lo
        return lo + x * span, lo + y * span

    def solve(
        self,
        topics: Sequence[str],
        positions: Sequence[tuple[float, float]],
    ) -> AnchorResult:
        """Run contraction, separation and world mapping.

        Args:
            topics: Topic label per point
            positions: Normalized positions, same order as ``topics``

        Returns:
            AnchorResult with world-space positions in input order
        """
        if len(topics) != len(positions):
            raise ValueError(
                f"Got {len(topics)} topics for {len(positions)} positions"
            )
        if not positions:
            return AnchorResult(positions=[])

        centroids = self.compute_centroids(topics, positions)
        contracted = self.contract(topics, positions, centroids)
        separated, passes, converged = self.separate_centroids(centroids)

        if self.config.rebase_on_separated:
            placed = []
            for topic, (x, y) in zip(topics, contracted):
                old = centroids[topic]
                new = separated[topic]
                placed.append((new.x + (x - old.x), new.y + (y - old.y)))
            placed = self.fit_unit_square(placed)
        else:
            placed = contracted

        world = [self.to_world(x, y) for x, y in placed]
        logger.info(
            f"Layout: {len(centroids)} topic islands, contraction={self.config.contraction}, "
            f"separation passes={passes}"
        )
        return AnchorResult(
            positions=world,
            centroids=centroids,
            separated_centroids=separated,
            passes_used=passes,
            converged=converged,
        )
