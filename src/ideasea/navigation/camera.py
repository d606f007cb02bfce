"""Smooth-follow camera with proximity- and movement-driven auto-zoom.

Position and zoom are observed quantities: each update lerps them toward
the followed entity and the target zoom. The target zoom is recomputed
every frame by :func:`compute_target_zoom`:

- diving: fixed dive zoom
- otherwise: proximity zoom (squared ease-in between the far and close
  thresholds), blended toward a cruising zoom as screen-space speed rises
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from ideasea.navigation.config import CameraConfig
from ideasea.navigation.proximity import ProximityCandidate
from ideasea.navigation.visits import VisitLog


class Followable(Protocol):
    x: float
    y: float


@dataclass(frozen=True)
class Viewport:
    """Visible world-space rectangle."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def proximity_zoom(nearest_distance: float, config: CameraConfig) -> float:
    """Zoom implied by the distance to the nearest idea."""
    close, far = config.close_threshold, config.far_threshold
    clamped = _clamp(nearest_distance, close, far)
    raw_t = 1.0 - (clamped - close) / (far - close) if far > close else 1.0
    t = raw_t * raw_t
    return config.zoom_out_min + t * (config.zoom_in_max - config.zoom_out_min)


def movement_factor(screen_speed: float, config: CameraConfig) -> float:
    """0 when stopped, 1 when fully cruising."""
    span = config.move_cap - config.move_threshold
    if span <= 0:
        return 1.0 if screen_speed >= config.move_cap else 0.0
    return _clamp((screen_speed - config.move_threshold) / span, 0.0, 1.0)


def compute_target_zoom(
    nearest_distance: float,
    speed: float,
    zoom: float,
    dive_active: bool,
    config: CameraConfig | None = None,
) -> float:
    """Target zoom for this frame (not yet clamped to the camera's range).

    Args:
        nearest_distance: Distance to the nearest undimmed idea (inf if none)
        speed: World-space speed of the followed entity
        zoom: Current observed zoom, used to get screen-space speed
        dive_active: Whether a dive is in progress
    """
    config = config or CameraConfig()
    if dive_active:
        return config.dive_zoom

    prox = proximity_zoom(nearest_distance, config)
    factor = movement_factor(speed * zoom, config)
    cruising = config.zoom_out_min * config.cruising_factor
    return prox + factor * (cruising - prox)


def nearest_undimmed_distance(
    candidates: Sequence[ProximityCandidate],
    visits: VisitLog | None,
    visited_far: float,
) -> float:
    """Distance to the nearest candidate that still pulls the camera in.

    Visited ideas farther than ``visited_far`` are dimmed and skipped.
    Returns ``math.inf`` when nothing qualifies.
    """
    for candidate in candidates:
        dimmed = (
            visits is not None
            and visits.is_visited(candidate.idea.id)
            and candidate.distance > visited_far
        )
        if not dimmed:
            return candidate.distance
    return math.inf


def _frame_lerp(factor: float, dt: float) -> float:
    """Per-frame lerp factor scaled for ``dt`` frames (dt=1 gives ``factor``)."""
    if dt <= 0:
        return 0.0
    return 1.0 - (1.0 - factor) ** dt


class Camera:
    """Smooth-follow camera with auto-zoom via a target zoom."""

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        config: CameraConfig | None = None,
    ) -> None:
        self.config = config or CameraConfig()
        self.x = 0.0
        self.y = 0.0
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.occluded_right = 0.0  # Screen pixels covered by a side panel

        self.min_zoom = self.config.min_zoom
        self.max_zoom = self.config.max_zoom
        self.zoom = _clamp(self.config.initial_zoom, self.min_zoom, self.max_zoom)
        self.target_zoom = self.zoom
        self._target: Followable | None = None

    def follow(self, target: Followable | None) -> None:
        self._target = target

    def snap_to(self, x: float, y: float) -> None:
        """Jump to a position without smoothing (initialization only)."""
        self.x = x
        self.y = y

    def set_target_zoom(self, target: float) -> None:
        """Set the zoom to approach, clamped to ``[min_zoom, max_zoom]``."""
        self.target_zoom = _clamp(target, self.min_zoom, self.max_zoom)

    def update(self, dt: float = 1.0) -> None:
        if self._target is None:
            return

        pos_lerp = _frame_lerp(self.config.lerp, dt)
        self.x += (self._target.x - self.x) * pos_lerp
        self.y += (self._target.y - self.y) * pos_lerp

        zoom_lerp = _frame_lerp(self.config.zoom_lerp, dt)
        self.zoom += (self.target_zoom - self.zoom) * zoom_lerp
        self.zoom = _clamp(self.zoom, self.min_zoom, self.max_zoom)

    def resize(self, screen_width: float, screen_height: float) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height

    @property
    def center_x(self) -> float:
        """Screen x of the view center, shifted left by any occluded area."""
        return (self.screen_width - self.occluded_right) / 2

    def world_to_screen(self, wx: float, wy: float) -> tuple[float, float]:
        return (
            (wx - self.x) * self.zoom + self.center_x,
            (wy - self.y) * self.zoom + self.screen_height * 0.5,
        )

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return (
            (sx - self.center_x) / self.zoom + self.x,
            (sy - self.screen_height * 0.5) / self.zoom + self.y,
        )

    def viewport(self) -> Viewport:
        """Visible world-space rectangle, accounting for zoom and occlusion."""
        zoom = self.zoom
        center_x = self.center_x
        return Viewport(
            left=self.x - center_x / zoom,
            top=self.y - self.screen_height / (2 * zoom),
            right=self.x + (self.screen_width - center_x) / zoom,
            bottom=self.y + self.screen_height / (2 * zoom),
        )
