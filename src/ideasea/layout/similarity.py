"""Cosine similarity helpers shared by deduplication and connection finding."""

from collections.abc import Sequence

import numpy as np

EPS = 1e-10


def cosine_similarity(
    vec1: Sequence[float] | np.ndarray,
    vec2: Sequence[float] | np.ndarray,
    eps: float = EPS,
) -> float:
    """Compute cosine similarity between two vectors.

    The epsilon in the denominator keeps zero vectors at 0.0 instead of
    dividing by zero.
    """
    a = np.asarray(vec1, dtype=np.float64)
    b = np.asarray(vec2, dtype=np.float64)
    return float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b) + eps))


def cosine_similarity_matrix(
    vectors: Sequence[Sequence[float]] | np.ndarray,
    eps: float = EPS,
) -> np.ndarray:
    """Compute the full pairwise cosine similarity matrix.

    Uses the same ``dot / (|a||b| + eps)`` form as :func:`cosine_similarity`
    so entries agree with the pairwise function.
    """
    matrix = np.asarray(vectors, dtype=np.float64)
    if matrix.size == 0:
        return np.zeros((len(matrix), len(matrix)))
    norms = np.linalg.norm(matrix, axis=1)
    return (matrix @ matrix.T) / (np.outer(norms, norms) + eps)
