"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Data locations
    data_dir: str = "public/data"
    raw_ideas_file: str = "ideas-raw.json"
    embeddings_file: str = "embeddings.json"

    # Embeddings
    embedding_dimensions: int = Field(
        default=1536,
        description="Fallback dimensionality for zero vectors when no embedding is present"
    )

    # Deduplication
    dedup_threshold: float = Field(
        default=0.92,
        description="Cosine similarity above which two same-topic ideas are duplicates"
    )

    # Projection (UMAP)
    umap_n_neighbors: int = 30
    umap_min_dist: float = 0.01
    umap_spread: float = 0.5

    # Topic anchoring
    contraction: float = Field(
        default=0.82,
        description="0 = raw projection, 1 = every point collapsed onto its topic centroid"
    )
    min_centroid_gap: float = 0.20  # In normalized [0, 1] units
    separation_max_passes: int = 20
    rebase_on_separated: bool = Field(
        default=True,
        description="Place points at separated centroid + offset instead of the pre-separation spot"
    )
    world_min: float = -5000.0
    world_max: float = 5000.0

    # Declutter
    jitter_radius: float = 30.0
    jitter_proximity: float = 20.0

    # Connections
    far_connection_distance: float = 1500.0

    # Determinism
    random_seed: int | None = Field(
        default=None,
        description="Seed for jitter; None uses system entropy"
    )

    # Spatial index
    index_margin: float = Field(
        default=1000.0,
        description="Padding around the world extent for the quadtree root bounds"
    )
    quadtree_capacity: int = 10

    # Proximity / LOD
    proximity_radius: float = 1200.0
    proximity_throttle: int = 3

    # Dive
    dive_threshold: float = 150.0
    dive_switch_distance: float = 80.0
    magnet_strength: float = 0.02
    autodive: bool = False

    # Vessel
    vessel_drag: float = 0.96
    vessel_max_speed: float = 8.0
    vessel_thrust: float = 0.35
    world_bound: float = 6500.0

    # Camera
    camera_lerp: float = 0.08
    camera_zoom_lerp: float = 0.015
    camera_initial_zoom: float = 0.3
    camera_min_zoom: float = 0.03
    camera_max_zoom: float = 10.0
    zoom_out_min: float = Field(default=0.20, description="Zoom when far from everything")
    zoom_in_max: float = Field(default=2.0, description="Zoom when right next to an idea")
    far_threshold: float = 600.0
    close_threshold: float = 40.0
    dive_zoom: float = 2.0
    move_threshold: float = 2.0  # Screen-space speed below which the vessel counts as stopped
    move_cap: float = 5.0  # Screen-space speed above which the vessel is fully cruising
    cruising_factor: float = 1.5
    visited_far: float = Field(
        default=120.0,
        description="Visited ideas farther than this no longer pull the camera in"
    )


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        random_seed=42,
        autodive=False,
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        data_dir="tests/fixtures/data",
        embedding_dimensions=8,
        random_seed=7,
    )


# Global settings instance
settings = Settings()
