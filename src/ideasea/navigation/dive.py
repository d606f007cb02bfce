"""Dive state machine: magnetic targeting of a single idea.

States:
- Idle: ``active`` is False and there is no target
- Diving: ``active`` is True and ``target`` is the focused idea

Transitions only happen through :meth:`DiveMode.enter`,
:meth:`DiveMode.exit`, :meth:`DiveMode.retarget` and
:meth:`DiveMode.check_proximity_switch`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from ideasea.models import PositionedIdea
from ideasea.navigation.config import DiveConfig
from ideasea.navigation.proximity import ProximityCandidate

logger = logging.getLogger(__name__)

SwitchCallback = Callable[[PositionedIdea], None]


class Movable(Protocol):
    x: float
    y: float
    vx: float
    vy: float


def nearest_diveable(
    candidates: Sequence[ProximityCandidate],
    threshold: float,
) -> ProximityCandidate | None:
    """The nearest candidate if it lies strictly within the dive threshold."""
    if candidates and candidates[0].distance < threshold:
        return candidates[0]
    return None


class DiveMode:
    """Owns the process-wide dive state."""

    def __init__(self, config: DiveConfig | None = None) -> None:
        self.config = config or DiveConfig()
        if self.config.switch_distance >= self.config.threshold:
            raise ValueError(
                f"switch_distance ({self.config.switch_distance}) must be smaller "
                f"than the dive threshold ({self.config.threshold})"
            )
        self.active = False
        self.target: PositionedIdea | None = None
        self._on_switch: SwitchCallback | None = None

    def enter(self, idea: PositionedIdea) -> None:
        """Start diving toward ``idea``; while diving, replaces the target."""
        self.active = True
        self.target = idea
        logger.debug(f"Dive enter: {idea.id}")

    def exit(self) -> None:
        """Stop diving. No-op when idle."""
        if not self.active:
            return
        logger.debug(f"Dive exit: {self.target.id if self.target else None}")
        self.active = False
        self.target = None

    def retarget(self, idea: PositionedIdea) -> None:
        """Point an active dive at another idea without notifying listeners."""
        if self.active:
            self.target = idea

    def on_switch(self, callback: SwitchCallback | None) -> None:
        """Register the callback fired when proximity switches the target."""
        self._on_switch = callback

    def apply_magnet(self, vessel: Movable, dt: float = 1.0) -> None:
        """Pull the vessel's velocity toward the target, proportional to offset and ``dt``."""
        if not self.active or self.target is None:
            return
        strength = self.config.magnet_strength * max(dt, 0.0)
        vessel.vx += (self.target.x - vessel.x) * strength
        vessel.vy += (self.target.y - vessel.y) * strength

    def check_proximity_switch(self, candidates: Sequence[ProximityCandidate]) -> bool:
        """Retarget to the nearest candidate if it is another idea within reach.

        Args:
            candidates: Nearby ideas sorted by ascending distance

        Returns:
            True if the target switched
        """
        if not self.active or self.target is None or not candidates:
            return False

        nearest = candidates[0]
        if nearest.idea.id == self.target.id:
            return False
        if nearest.distance >= self.config.switch_distance:
            return False

        logger.debug(f"Dive switch: {self.target.id} -> {nearest.idea.id}")
        self.target = nearest.idea
        if self._on_switch is not None:
            self._on_switch(nearest.idea)
        return True
