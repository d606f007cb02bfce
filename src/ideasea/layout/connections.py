"""Connection finding: nearest neighbor and "surprising" far echo per idea."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from ideasea.layout.config import ConnectionConfig
from ideasea.layout.similarity import cosine_similarity_matrix
from ideasea.models import Connections, Idea

logger = logging.getLogger(__name__)


class ConnectionFinder:
    """Derives ``nearby`` and ``far`` links in a single O(n^2) scan.

    - nearby: spatially nearest idea from another source, falling back to
      the nearest idea of any source when every other idea shares it
    - far: among ideas from another source farther than ``far_distance``,
      the one with the highest embedding cosine similarity
    """

    def __init__(self, config: ConnectionConfig | None = None) -> None:
        self.config = config or ConnectionConfig()

    def find(
        self,
        ideas: Sequence[Idea],
        positions: Sequence[tuple[float, float]],
        vectors: Sequence[Sequence[float]] | np.ndarray,
    ) -> list[Connections]:
        """Compute connections for every idea.

        Args:
            ideas: The final (deduplicated) idea set
            positions: World position per idea
            vectors: Embedding per idea

        Returns:
            Connections per idea, input order; every id refers to a
            member of ``ideas``
        """
        n = len(ideas)
        if len(positions) != n or len(vectors) != n:
            raise ValueError(
                f"Mismatched inputs: {n} ideas, {len(positions)} positions, {len(vectors)} vectors"
            )
        if n == 0:
            return []

        similarity = cosine_similarity_matrix(vectors, eps=self.config.eps)
        far_distance = self.config.far_distance

        result: list[Connections] = []
        for i in range(n):
            xi, yi = positions[i]
            source_i = ideas[i].source_id

            nearest_other: int | None = None
            nearest_other_dist = math.inf
            nearest_any: int | None = None
            nearest_any_dist = math.inf
            far: int | None = None
            far_score = -math.inf

            for j in range(n):
                if j == i:
                    continue
                xj, yj = positions[j]
                dist = math.hypot(xj - xi, yj - yi)
                other_source = ideas[j].source_id != source_i

                if dist < nearest_any_dist:
                    nearest_any, nearest_any_dist = j, dist
                if other_source and dist < nearest_other_dist:
                    nearest_other, nearest_other_dist = j, dist

                if other_source and dist > far_distance:
                    score = float(similarity[i, j])
                    if score > far_score:
                        far, far_score = j, score

            nearby = nearest_other if nearest_other is not None else nearest_any
            result.append(
                Connections(
                    nearby=ideas[nearby].id if nearby is not None else None,
                    far=ideas[far].id if far is not None else None,
                )
            )

        linked = sum(1 for c in result if c.far is not None)
        logger.info(f"Connections: {n} ideas, {linked} with a far link")
        return result
