"""Local declutter: nudge same-source ideas that overlap after anchoring."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence

from ideasea.layout.config import JitterConfig

logger = logging.getLogger(__name__)


def declutter(
    source_ids: Sequence[str],
    positions: Sequence[tuple[float, float]],
    config: JitterConfig | None = None,
    rng: random.Random | None = None,
) -> list[tuple[float, float]]:
    """Jitter pairs of same-source points closer than the proximity threshold.

    Single pass: pairs still close after their jitter are left as they are.
    Both members of a close pair get an independent offset in
    ``[-radius, radius]^2``.

    Args:
        source_ids: Source document id per point
        positions: World positions, same order
        config: Jitter parameters
        rng: Random source; inject a seeded ``random.Random`` for
            reproducible output

    Returns:
        New list of positions in input order
    """
    config = config or JitterConfig()
    rng = rng or random.Random()
    moved = [list(p) for p in positions]

    by_source: dict[str, list[int]] = {}
    for i, source_id in enumerate(source_ids):
        by_source.setdefault(source_id, []).append(i)

    def offset() -> float:
        return rng.uniform(-config.radius, config.radius)

    jittered = 0
    for indices in by_source.values():
        if len(indices) < 2:
            continue
        for a in range(len(indices)):
            for b in range(a + 1, len(indices)):
                pa = moved[indices[a]]
                pb = moved[indices[b]]
                if math.hypot(pa[0] - pb[0], pa[1] - pb[1]) < config.proximity:
                    pa[0] += offset()
                    pa[1] += offset()
                    pb[0] += offset()
                    pb[1] += offset()
                    jittered += 1

    if jittered:
        logger.info(f"Declutter: jittered {jittered} same-source pairs")
    return [(p[0], p[1]) for p in moved]
