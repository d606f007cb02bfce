"""Embedding lookup and alignment to the idea order."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ideasea.models import Idea

logger = logging.getLogger(__name__)


def align_embeddings(
    ideas: Sequence[Idea],
    embeddings: Mapping[str, Sequence[float]] | None = None,
    dimensions: int = 1536,
) -> list[list[float]]:
    """Return one embedding per idea, in idea order.

    Looks up ``embeddings[idea.id]`` first, then ``idea.embedding``. A missing
    embedding becomes a zero vector (with a warning) sized to the dataset's
    dimensionality, inferred from the first present vector.

    Raises:
        ValueError: If present embeddings disagree on dimensionality
    """
    embeddings = embeddings or {}
    found: list[Sequence[float] | None] = []
    for idea in ideas:
        vec = embeddings.get(idea.id)
        if vec is None:
            vec = idea.embedding
        found.append(vec)

    present = [len(v) for v in found if v is not None]
    if present:
        dimensions = present[0]
        if any(d != dimensions for d in present):
            raise ValueError(
                f"Embeddings have inconsistent dimensions: {sorted(set(present))}"
            )

    vectors: list[list[float]] = []
    for idea, vec in zip(ideas, found):
        if vec is None:
            logger.warning(f"No embedding found for idea {idea.id}, using zero vector")
            vectors.append([0.0] * dimensions)
        else:
            vectors.append([float(v) for v in vec])
    return vectors
