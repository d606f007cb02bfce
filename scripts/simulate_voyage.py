#!/usr/bin/env python3
"""Headless voyage through a computed idea map.

Loads ideas/topics/posts, builds the spatial index and steers the vessel
toward a sequence of topic islands, diving into whatever it reaches.
Useful for checking a freshly computed layout without the front end.

Usage:
    uv run python scripts/simulate_voyage.py
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

sys.path.insert(0, str(project_root / "src"))

from ideasea.config import Settings
from ideasea.navigation import NavigationConfig, NavigationSession
from ideasea.storage import DatasetError, load_dataset

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def steer(dx: float, dy: float) -> tuple[float, float]:
    """Unit-ish thrust toward an offset, zero when already there."""
    dist = math.hypot(dx, dy)
    if dist < 1.0:
        return 0.0, 0.0
    return dx / dist, dy / dist


def main() -> int:
    """Main entry point."""
    settings = Settings()

    parser = argparse.ArgumentParser(description="Simulate a voyage over the idea map")
    parser.add_argument("--data-dir", default=settings.data_dir)
    parser.add_argument("--ticks", type=int, default=2000, help="Frames to simulate")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger("ideasea").setLevel(logging.DEBUG)

    try:
        dataset = load_dataset(args.data_dir)
    except DatasetError as e:
        logger.error(f"{e} (run scripts/compute_layout.py first)")
        return 1

    config = NavigationConfig.from_settings(settings)
    config.dive.autodive = False  # Dives are triggered on waypoint arrival
    session = NavigationSession(dataset, config=config)

    waypoints = [(t.x, t.y) for t in dataset.topics] or [(0.0, 0.0)]
    waypoint = 0
    dives = 0
    dive_started = 0
    linger = 240

    for _ in range(args.ticks):
        target_x, target_y = waypoints[waypoint]
        thrust = steer(target_x - session.vessel.x, target_y - session.vessel.y)
        if session.dive.active:
            thrust = (0.0, 0.0)

        result = session.tick(thrust=thrust)

        dived_into = result.dived_into
        arrived = math.hypot(target_x - session.vessel.x, target_y - session.vessel.y) < 50
        if dived_into is None and arrived and not session.dive.active:
            dived_into = session.request_dive()
            if dived_into is None:
                waypoint = (waypoint + 1) % len(waypoints)

        if dived_into is not None:
            dives += 1
            dive_started = result.tick
            logger.info(f"Tick {result.tick}: dived into {dived_into.id} ({dived_into.topic})")
        if result.switched_to is not None:
            logger.info(f"Tick {result.tick}: glided to {result.switched_to.id}")

        # Surface after lingering, then head for the next island
        if session.dive.active and result.tick - dive_started >= linger:
            session.dive.exit()
            waypoint = (waypoint + 1) % len(waypoints)

    logger.info(
        f"Voyage done: {args.ticks} ticks, {dives} dives, {len(session.visits)} ideas visited, "
        f"final zoom {session.camera.zoom:.2f}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
