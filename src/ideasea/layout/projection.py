"""Adapters for the external 2D projector.

The projector maps embedding vectors to one raw ``(x, y)`` pair per vector,
with no guaranteed scale or origin. The layout pipeline only depends on
the :class:`Projector` protocol.

For UMAP install the optional extra:
    pip install ideasea[projection]
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)


class Projector(Protocol):
    """Maps embedding vectors to raw 2D coordinates, order preserving."""

    def project(self, vectors: Sequence[Sequence[float]]) -> list[tuple[float, float]]:
        ...


class StaticProjector:
    """Replays precomputed coordinates (e.g. a cached projection run)."""

    def __init__(self, positions: Sequence[Sequence[float]]) -> None:
        self.positions = [(float(p[0]), float(p[1])) for p in positions]

    def project(self, vectors: Sequence[Sequence[float]]) -> list[tuple[float, float]]:
        if len(vectors) != len(self.positions):
            raise ValueError(
                f"Static projection has {len(self.positions)} rows, got {len(vectors)} vectors"
            )
        return list(self.positions)


class UmapProjector:
    """UMAP projection to two components (umap-learn, imported lazily)."""

    def __init__(
        self,
        n_neighbors: int = 30,
        min_dist: float = 0.01,
        spread: float = 0.5,
        random_state: int | None = None,
    ) -> None:
        self.n_neighbors = n_neighbors
        self.min_dist = min_dist
        self.spread = spread
        self.random_state = random_state

    def project(self, vectors: Sequence[Sequence[float]]) -> list[tuple[float, float]]:
        n = len(vectors)
        if n == 0:
            return []
        if n == 1:
            return [(0.0, 0.0)]

        import umap as umap_lib

        # UMAP needs fewer neighbors than samples
        n_neighbors = max(2, min(self.n_neighbors, n - 1))
        logger.info(f"Running UMAP projection on {n} vectors (n_neighbors={n_neighbors})...")
        start = time.time()

        reducer = umap_lib.UMAP(
            n_neighbors=n_neighbors,
            min_dist=self.min_dist,
            spread=self.spread,
            n_components=2,
            random_state=self.random_state,
        )
        coords = reducer.fit_transform(np.asarray(vectors, dtype=np.float32))

        logger.info(f"UMAP completed in {time.time() - start:.1f}s")
        return [(float(x), float(y)) for x, y in coords]
