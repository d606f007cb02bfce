"""Configuration for the spatial navigation runtime."""

from dataclasses import dataclass, field

from ideasea.config import Settings


@dataclass
class IndexConfig:
    """Quadtree root bounds and node capacity."""

    x: float = -6000.0  # Top-left corner
    y: float = -6000.0
    width: float = 12000.0
    height: float = 12000.0
    capacity: int = 10
    max_depth: int = 32


@dataclass
class ProximityConfig:
    """Throttled nearest-neighbor query settings."""

    radius: float = 1200.0
    throttle: int = 3  # Query on every Nth tick


@dataclass
class DiveConfig:
    """Dive targeting settings."""

    threshold: float = 150.0  # Max distance to start a dive
    switch_distance: float = 80.0  # Must stay below threshold
    magnet_strength: float = 0.02
    autodive: bool = False


@dataclass
class VesselConfig:
    """Kinematics of the user-controlled viewpoint."""

    drag: float = 0.96
    max_speed: float = 8.0
    thrust: float = 0.35
    world_bound: float = 6500.0


@dataclass
class CameraConfig:
    """Smoothing and auto-zoom settings."""

    lerp: float = 0.08
    zoom_lerp: float = 0.015
    initial_zoom: float = 0.3
    min_zoom: float = 0.03
    max_zoom: float = 10.0

    zoom_out_min: float = 0.20  # Far from everything
    zoom_in_max: float = 2.0  # Right next to an idea
    far_threshold: float = 600.0
    close_threshold: float = 40.0
    dive_zoom: float = 2.0

    move_threshold: float = 2.0  # Screen-space speed: "stopped" below
    move_cap: float = 5.0  # Screen-space speed: fully "cruising" above
    cruising_factor: float = 1.5  # Cruising zoom = zoom_out_min * factor
    visited_far: float = 120.0


@dataclass
class NavigationConfig:
    """Combined configuration for the runtime."""

    index: IndexConfig = field(default_factory=IndexConfig)
    proximity: ProximityConfig = field(default_factory=ProximityConfig)
    dive: DiveConfig = field(default_factory=DiveConfig)
    vessel: VesselConfig = field(default_factory=VesselConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)

    @classmethod
    def from_settings(cls, settings: Settings) -> "NavigationConfig":
        """Build runtime configuration from application settings."""
        extent = settings.world_max - settings.world_min + 2 * settings.index_margin
        return cls(
            index=IndexConfig(
                x=settings.world_min - settings.index_margin,
                y=settings.world_min - settings.index_margin,
                width=extent,
                height=extent,
                capacity=settings.quadtree_capacity,
            ),
            proximity=ProximityConfig(
                radius=settings.proximity_radius,
                throttle=settings.proximity_throttle,
            ),
            dive=DiveConfig(
                threshold=settings.dive_threshold,
                switch_distance=settings.dive_switch_distance,
                magnet_strength=settings.magnet_strength,
                autodive=settings.autodive,
            ),
            vessel=VesselConfig(
                drag=settings.vessel_drag,
                max_speed=settings.vessel_max_speed,
                thrust=settings.vessel_thrust,
                world_bound=settings.world_bound,
            ),
            camera=CameraConfig(
                lerp=settings.camera_lerp,
                zoom_lerp=settings.camera_zoom_lerp,
                initial_zoom=settings.camera_initial_zoom,
                min_zoom=settings.camera_min_zoom,
                max_zoom=settings.camera_max_zoom,
                zoom_out_min=settings.zoom_out_min,
                zoom_in_max=settings.zoom_in_max,
                far_threshold=settings.far_threshold,
                close_threshold=settings.close_threshold,
                dive_zoom=settings.dive_zoom,
                move_threshold=settings.move_threshold,
                move_cap=settings.move_cap,
                cruising_factor=settings.cruising_factor,
                visited_far=settings.visited_far,
            ),
        )
