"""Spatial navigation runtime.

Provides:
- Region quadtree over idea positions
- Throttled proximity queries (LOD)
- Dive state machine with magnetic targeting
- Vessel kinematics and smooth auto-zoom camera
- Session facade advancing all of the above per tick
"""

from ideasea.navigation.camera import (
    Camera,
    Viewport,
    compute_target_zoom,
    nearest_undimmed_distance,
)
from ideasea.navigation.config import (
    CameraConfig,
    DiveConfig,
    IndexConfig,
    NavigationConfig,
    ProximityConfig,
    VesselConfig,
)
from ideasea.navigation.dive import DiveMode, nearest_diveable
from ideasea.navigation.proximity import ProximityCandidate, ProximityManager
from ideasea.navigation.quadtree import Bounds, PointQuadtree, QuadtreePoint, build_quadtree
from ideasea.navigation.session import (
    CameraFrame,
    NavigationSession,
    TickResult,
    build_index,
    camera_update,
    dive_check_switch,
    dive_enter,
    dive_exit,
    query_nearby,
)
from ideasea.navigation.vessel import Vessel
from ideasea.navigation.visits import Visit, VisitLog

__all__ = [
    # Config
    "IndexConfig",
    "ProximityConfig",
    "DiveConfig",
    "VesselConfig",
    "CameraConfig",
    "NavigationConfig",
    # Index
    "Bounds",
    "QuadtreePoint",
    "PointQuadtree",
    "build_quadtree",
    # Consumers
    "ProximityCandidate",
    "ProximityManager",
    "DiveMode",
    "nearest_diveable",
    "Vessel",
    "Visit",
    "VisitLog",
    "Camera",
    "Viewport",
    "compute_target_zoom",
    "nearest_undimmed_distance",
    # Session
    "CameraFrame",
    "TickResult",
    "NavigationSession",
    "build_index",
    "query_nearby",
    "dive_enter",
    "dive_exit",
    "dive_check_switch",
    "camera_update",
]
