"""Runtime facade consumed by the presentation layer.

Two levels of API:

- plain functions (``build_index``, ``query_nearby``, ``dive_enter``,
  ``dive_exit``, ``dive_check_switch``, ``camera_update``) for callers that
  own their own loop
- :class:`NavigationSession`, which owns one vessel, camera, dive state and
  index and advances them one tick at a time

Everything runs synchronously inside a tick; the session holds no
rendering state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ideasea.models import PositionedIdea
from ideasea.navigation.camera import (
    Camera,
    Followable,
    Viewport,
    compute_target_zoom,
    nearest_undimmed_distance,
)
from ideasea.navigation.config import IndexConfig, NavigationConfig
from ideasea.navigation.dive import DiveMode, nearest_diveable
from ideasea.navigation.proximity import (
    ProximityCandidate,
    ProximityManager,
    sorted_candidates,
)
from ideasea.navigation.quadtree import Bounds, PointQuadtree, build_quadtree
from ideasea.navigation.vessel import Vessel
from ideasea.navigation.visits import VisitLog
from ideasea.storage import Dataset

logger = logging.getLogger(__name__)

MIN_SPEED_ZOOM = 0.05


@dataclass(frozen=True)
class CameraFrame:
    """Camera output for one frame."""

    x: float
    y: float
    zoom: float
    viewport: Viewport


@dataclass(frozen=True)
class TickResult:
    """What changed during one session tick."""

    tick: int
    frame: CameraFrame
    nearby: list[ProximityCandidate]
    nearby_updated: bool = False
    switched_to: PositionedIdea | None = None
    dived_into: PositionedIdea | None = None


def build_index(
    points: Iterable[PositionedIdea],
    config: IndexConfig | None = None,
) -> PointQuadtree[PositionedIdea]:
    """Build the spatial index over final idea positions."""
    config = config or IndexConfig()
    bounds = Bounds.from_rect(config.x, config.y, config.width, config.height)
    return build_quadtree(points, bounds, config.capacity, config.max_depth)


def query_nearby(
    index: PointQuadtree[PositionedIdea],
    x: float,
    y: float,
    radius: float = 1200.0,
) -> list[ProximityCandidate]:
    """Ideas within ``radius`` of (x, y), nearest first."""
    return sorted_candidates(index, x, y, radius)


def dive_enter(dive: DiveMode, idea: PositionedIdea) -> None:
    dive.enter(idea)


def dive_exit(dive: DiveMode) -> None:
    dive.exit()


def dive_check_switch(dive: DiveMode, candidates: Sequence[ProximityCandidate]) -> bool:
    return dive.check_proximity_switch(candidates)


def camera_update(
    camera: Camera,
    dt: float,
    followed: Followable,
    dive_active: bool,
    nearest_distance: float,
    speed: float = 0.0,
) -> CameraFrame:
    """Recompute the target zoom, advance the camera one frame and report it."""
    camera.follow(followed)
    camera.set_target_zoom(
        compute_target_zoom(nearest_distance, speed, camera.zoom, dive_active, camera.config)
    )
    camera.update(dt)
    return CameraFrame(x=camera.x, y=camera.y, zoom=camera.zoom, viewport=camera.viewport())


class NavigationSession:
    """One exploration session over a loaded dataset."""

    def __init__(
        self,
        dataset: Dataset,
        screen_width: float = 1280.0,
        screen_height: float = 800.0,
        config: NavigationConfig | None = None,
        visits: VisitLog | None = None,
    ) -> None:
        self.config = config or NavigationConfig()
        self.visits = visits if visits is not None else VisitLog()

        self.vessel = Vessel(config=self.config.vessel)
        self.camera = Camera(screen_width, screen_height, self.config.camera)
        self.camera.follow(self.vessel)
        self.dive = DiveMode(self.config.dive)
        self.dive.on_switch(self._record_visit)

        self.tick_count = 0
        self.nearby: list[ProximityCandidate] = []
        self.load(dataset)

    def load(self, dataset: Dataset) -> None:
        """Build the index for ``dataset``; any previous results are discarded."""
        self.dataset = dataset
        self.index = build_index(dataset.ideas, self.config.index)
        self.proximity = ProximityManager(dataset.ideas, self.index, self.config.proximity)
        self.nearby = []
        logger.info(f"Session loaded {len(self.index)} ideas into the spatial index")

    def reload(self, dataset: Dataset) -> None:
        """Swap datasets; an active dive ends immediately."""
        self.dive.exit()
        self.load(dataset)

    def _record_visit(self, idea: PositionedIdea) -> None:
        self.visits.visit(idea.id)

    def _enter(self, idea: PositionedIdea) -> None:
        self.dive.enter(idea)
        self._record_visit(idea)

    def request_dive(self) -> PositionedIdea | None:
        """Toggle dive: exit when diving, else dive into the nearest idea in reach.

        Returns:
            The idea dived into, or None
        """
        if self.dive.active:
            self.dive.exit()
            return None
        candidate = nearest_diveable(self.nearby, self.config.dive.threshold)
        if candidate is None:
            return None
        self._enter(candidate.idea)
        return candidate.idea

    def navigate_to(self, idea: PositionedIdea) -> None:
        """Move the vessel onto ``idea``; an active dive retargets to it."""
        self.vessel.teleport(idea.x, idea.y)
        if self.dive.active:
            self.dive.retarget(idea)
            self._record_visit(idea)

    def tick(self, dt: float = 1.0, thrust: tuple[float, float] = (0.0, 0.0)) -> TickResult:
        """Advance the session by one frame.

        Args:
            dt: Frame delta in 60 Hz frames; scales vessel motion and camera smoothing
            thrust: Steering direction, components in [-1, 1]
        """
        self.tick_count += 1
        dived_into = None

        if self.config.dive.autodive and not self.dive.active:
            candidate = nearest_diveable(self.nearby, self.config.dive.threshold)
            if candidate is not None:
                self._enter(candidate.idea)
                dived_into = candidate.idea

        # Constant apparent on-screen speed across zoom levels
        speed_scale = 1.0 / max(self.camera.zoom, MIN_SPEED_ZOOM)
        self.vessel.max_speed = self.config.vessel.max_speed * speed_scale
        self.vessel.accelerate(thrust[0], thrust[1], speed_scale * max(dt, 0.0))
        self.dive.apply_magnet(self.vessel, dt)
        self.vessel.update(dt)
        self.vessel.clamp_to()

        nearest = nearest_undimmed_distance(
            self.nearby, self.visits, self.config.camera.visited_far
        )
        frame = camera_update(
            self.camera,
            dt,
            self.vessel,
            self.dive.active,
            nearest,
            speed=self.vessel.speed,
        )

        updated = self.proximity.update(self.vessel.x, self.vessel.y, self.tick_count)
        if updated is not None:
            self.nearby = updated

        switched_to = None
        if self.dive.active and self.proximity.should_query(self.tick_count):
            if self.dive.check_proximity_switch(self.nearby):
                switched_to = self.dive.target

        return TickResult(
            tick=self.tick_count,
            frame=frame,
            nearby=self.nearby,
            nearby_updated=updated is not None,
            switched_to=switched_to,
            dived_into=dived_into,
        )
