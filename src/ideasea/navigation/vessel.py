"""User-controlled viewpoint with momentum and drag."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ideasea.navigation.config import VesselConfig


@dataclass
class Vessel:
    """
    The followed entity the camera tracks.

    Thrust adds velocity per axis; each update applies uniform drag, caps
    speed at ``max_speed`` and integrates position over ``dt`` frames.
    """

    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    config: VesselConfig = field(default_factory=VesselConfig)
    max_speed: float = field(init=False, default=0.0)
    speed: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.max_speed = self.config.max_speed

    def accelerate(self, dx: float, dy: float, scale: float = 1.0) -> None:
        """Apply thrust along a direction; components are typically -1, 0 or 1."""
        accel = self.config.thrust * scale
        self.vx += dx * accel
        self.vy += dy * accel

    def update(self, dt: float = 1.0) -> None:
        """Advance ``dt`` frames: drag, speed cap, then integrate position."""
        drag = self.config.drag ** dt if dt > 0 else 1.0
        self.vx *= drag
        self.vy *= drag

        self.speed = math.hypot(self.vx, self.vy)
        if self.speed > self.max_speed:
            scale = self.max_speed / self.speed
            self.vx *= scale
            self.vy *= scale
            self.speed = self.max_speed

        step = max(dt, 0.0)
        self.x += self.vx * step
        self.y += self.vy * step

    def stop(self) -> None:
        self.vx = 0.0
        self.vy = 0.0
        self.speed = 0.0

    def teleport(self, x: float, y: float) -> None:
        self.x = x
        self.y = y
        self.stop()

    def clamp_to(self, bound: float | None = None) -> None:
        """Keep the vessel inside ``[-bound, bound]^2``, zeroing velocity at the wall."""
        bound = self.config.world_bound if bound is None else bound
        if self.x < -bound:
            self.x, self.vx = -bound, 0.0
        elif self.x > bound:
            self.x, self.vx = bound, 0.0
        if self.y < -bound:
            self.y, self.vy = -bound, 0.0
        elif self.y > bound:
            self.y, self.vy = bound, 0.0
