"""Near-duplicate idea collapsing.

Ideas are compared pairwise within their topic only; cross-topic
duplicates are kept as distinct ideas. When two ideas are more similar
than the threshold, the one with the shorter quote is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ideasea.layout.config import DeduplicationConfig
from ideasea.layout.similarity import cosine_similarity
from ideasea.models import Idea

logger = logging.getLogger(__name__)


@dataclass
class DeduplicationReport:
    """Result of a deduplication run."""

    kept: list[Idea]
    dropped_ids: list[str] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_ids)


def group_by_topic(ideas: Sequence[Idea]) -> dict[str, list[Idea]]:
    """Group ideas by topic, preserving first-seen order."""
    groups: dict[str, list[Idea]] = {}
    for idea in ideas:
        groups.setdefault(idea.topic, []).append(idea)
    return groups


class Deduplicator:
    """Drops near-duplicate ideas within each topic."""

    def __init__(self, config: DeduplicationConfig | None = None) -> None:
        self.config = config or DeduplicationConfig()

    def _embedding(
        self,
        idea: Idea,
        embeddings: Mapping[str, Sequence[float]] | None,
    ) -> Sequence[float] | None:
        if embeddings is not None and idea.id in embeddings:
            return embeddings[idea.id]
        return idea.embedding

    def deduplicate(
        self,
        ideas: Sequence[Idea],
        embeddings: Mapping[str, Sequence[float]] | None = None,
    ) -> DeduplicationReport:
        """Filter near-duplicates out of ``ideas``.

        Args:
            ideas: Ideas in input order
            embeddings: Mapping of idea id -> vector; falls back to
                ``Idea.embedding`` for ids not in the mapping

        Returns:
            Report with the surviving ideas (input order) and dropped ids
        """
        dropped: set[str] = set()
        dropped_order: list[str] = []

        for topic, group in group_by_topic(ideas).items():
            for a in range(len(group)):
                idea_a = group[a]
                if idea_a.id in dropped:
                    continue
                emb_a = self._embedding(idea_a, embeddings)
                if emb_a is None:
                    continue

                for b in range(a + 1, len(group)):
                    idea_b = group[b]
                    if idea_b.id in dropped:
                        continue
                    emb_b = self._embedding(idea_b, embeddings)
                    if emb_b is None:
                        continue

                    sim = cosine_similarity(emb_a, emb_b, eps=self.config.eps)
                    if sim <= self.config.threshold:
                        continue

                    # Keep the longer quote; ties drop the later idea
                    loser = idea_b if len(idea_a.quote) >= len(idea_b.quote) else idea_a
                    dropped.add(loser.id)
                    dropped_order.append(loser.id)
                    logger.debug(
                        f"Duplicate in topic {topic!r}: {idea_a.id} ~ {idea_b.id} "
                        f"(sim={sim:.3f}), dropping {loser.id}"
                    )
                    if loser is idea_a:
                        break

        kept = [idea for idea in ideas if idea.id not in dropped]
        logger.info(f"Dedup: {len(ideas)} -> {len(kept)} (dropped {len(dropped)})")
        return DeduplicationReport(kept=kept, dropped_ids=dropped_order)
