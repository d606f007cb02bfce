"""Configuration for the offline layout pipeline."""

from dataclasses import dataclass, field

from ideasea.config import Settings


@dataclass
class DeduplicationConfig:
    """Configuration for near-duplicate collapsing."""

    threshold: float = 0.92  # Strictly greater cosine similarity is a duplicate
    eps: float = 1e-10


@dataclass
class AnchorConfig:
    """Configuration for topic-anchored contraction and separation."""

    contraction: float = 0.82  # 0 = raw projection, 1 = all at centroid
    min_centroid_gap: float = 0.20  # Normalized units
    max_passes: int = 20
    rebase_on_separated: bool = True  # Points follow their separated centroid
    world_min: float = -5000.0
    world_max: float = 5000.0


@dataclass
class JitterConfig:
    """Configuration for same-source declutter."""

    radius: float = 30.0
    proximity: float = 20.0


@dataclass
class ConnectionConfig:
    """Configuration for nearby/far link discovery."""

    far_distance: float = 1500.0
    eps: float = 1e-10


@dataclass
class LayoutConfig:
    """Combined configuration for the layout pipeline."""

    deduplication: DeduplicationConfig = field(default_factory=DeduplicationConfig)
    anchor: AnchorConfig = field(default_factory=AnchorConfig)
    jitter: JitterConfig = field(default_factory=JitterConfig)
    connections: ConnectionConfig = field(default_factory=ConnectionConfig)

    embedding_dimensions: int = 1536  # Zero-vector size when nothing else is known
    random_seed: int | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "LayoutConfig":
        """Build layout configuration from application settings."""
        return cls(
            deduplication=DeduplicationConfig(threshold=settings.dedup_threshold),
            anchor=AnchorConfig(
                contraction=settings.contraction,
                min_centroid_gap=settings.min_centroid_gap,
                max_passes=settings.separation_max_passes,
                rebase_on_separated=settings.rebase_on_separated,
                world_min=settings.world_min,
                world_max=settings.world_max,
            ),
            jitter=JitterConfig(
                radius=settings.jitter_radius,
                proximity=settings.jitter_proximity,
            ),
            connections=ConnectionConfig(far_distance=settings.far_connection_distance),
            embedding_dimensions=settings.embedding_dimensions,
            random_seed=settings.random_seed,
        )
