"""Offline layout pipeline.

Turns extracted ideas and their embeddings into a positioned, connected
point set plus topic centroids:

1. Deduplicate near-duplicate ideas per topic
2. Align embeddings (zero vector for missing ones)
3. Project to raw 2D via the external projector
4. Normalize into the unit square
5. Contract topics into islands and separate their centroids
6. Declutter overlapping same-source ideas
7. Find nearby/far connections
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ideasea.layout.anchoring import TopicAnchorSolver
from ideasea.layout.config import LayoutConfig
from ideasea.layout.connections import ConnectionFinder
from ideasea.layout.deduplication import Deduplicator
from ideasea.layout.embeddings import align_embeddings
from ideasea.layout.jitter import declutter
from ideasea.layout.normalizer import normalize_positions
from ideasea.layout.projection import Projector
from ideasea.models import Idea, PositionedIdea, Topic, compute_topics

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Persistable output of the layout pipeline."""

    ideas: list[PositionedIdea] = field(default_factory=list)
    topics: list[Topic] = field(default_factory=list)
    dropped_ids: list[str] = field(default_factory=list)
    separation_passes: int = 0

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_ids)


class LayoutPipeline:
    """Runs all offline layout stages in order."""

    def __init__(
        self,
        projector: Projector,
        config: LayoutConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.projector = projector
        self.config = config or LayoutConfig()
        self.rng = rng or random.Random(self.config.random_seed)

        self.deduplicator = Deduplicator(self.config.deduplication)
        self.anchor_solver = TopicAnchorSolver(self.config.anchor)
        self.connection_finder = ConnectionFinder(self.config.connections)

    def run(
        self,
        ideas: Sequence[Idea],
        embeddings: Mapping[str, Sequence[float]] | None = None,
    ) -> LayoutResult:
        """Lay out ``ideas``.

        Args:
            ideas: Extracted ideas
            embeddings: Mapping of idea id -> embedding vector

        Returns:
            LayoutResult with positioned ideas (input order) and topics
        """
        start = time.time()
        report = self.deduplicator.deduplicate(ideas, embeddings)
        kept = report.kept
        if not kept:
            logger.info("Layout: no ideas to place")
            return LayoutResult(dropped_ids=report.dropped_ids)

        vectors = align_embeddings(kept, embeddings, self.config.embedding_dimensions)

        raw = self.projector.project(vectors)
        if len(raw) != len(kept):
            raise ValueError(f"Projector returned {len(raw)} rows for {len(kept)} vectors")
        for row in raw:
            if len(row) != 2:
                raise ValueError(f"Projector rows must be 2D, got {len(row)} components")

        normalized = normalize_positions(raw)
        anchored = self.anchor_solver.solve([i.topic for i in kept], normalized)
        positions = declutter(
            [i.source_id for i in kept],
            anchored.positions,
            self.config.jitter,
            self.rng,
        )
        connections = self.connection_finder.find(kept, positions, vectors)

        placed = [
            PositionedIdea.from_idea(idea, x, y, links)
            for idea, (x, y), links in zip(kept, positions, connections)
        ]
        topics = compute_topics(placed)

        logger.info(
            f"Layout complete: {len(placed)} ideas, {len(topics)} topics "
            f"in {time.time() - start:.1f}s"
        )
        return LayoutResult(
            ideas=placed,
            topics=topics,
            dropped_ids=report.dropped_ids,
            separation_passes=anchored.passes_used,
        )
