"""Offline layout engine.

Provides:
- Near-duplicate collapsing per topic
- Normalization of raw projector output
- Topic-anchored contraction and centroid separation
- Same-source declutter
- Nearby/far connection finding
"""

from ideasea.layout.anchoring import AnchorResult, TopicAnchorSolver, TopicCentroid
from ideasea.layout.config import (
    AnchorConfig,
    ConnectionConfig,
    DeduplicationConfig,
    JitterConfig,
    LayoutConfig,
)
from ideasea.layout.connections import ConnectionFinder
from ideasea.layout.deduplication import DeduplicationReport, Deduplicator
from ideasea.layout.embeddings import align_embeddings
from ideasea.layout.jitter import declutter
from ideasea.layout.normalizer import normalize_positions
from ideasea.layout.pipeline import LayoutPipeline, LayoutResult
from ideasea.layout.projection import Projector, StaticProjector, UmapProjector
from ideasea.layout.similarity import cosine_similarity, cosine_similarity_matrix

__all__ = [
    # Config
    "DeduplicationConfig",
    "AnchorConfig",
    "JitterConfig",
    "ConnectionConfig",
    "LayoutConfig",
    # Stages
    "Deduplicator",
    "DeduplicationReport",
    "align_embeddings",
    "normalize_positions",
    "TopicAnchorSolver",
    "TopicCentroid",
    "AnchorResult",
    "declutter",
    "ConnectionFinder",
    # Projection
    "Projector",
    "StaticProjector",
    "UmapProjector",
    # Pipeline
    "LayoutPipeline",
    "LayoutResult",
    # Similarity
    "cosine_similarity",
    "cosine_similarity_matrix",
]
