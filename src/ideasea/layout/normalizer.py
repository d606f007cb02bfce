"""Rescale raw projector output into the unit square."""

from collections.abc import Sequence


def normalize_positions(
    raw: Sequence[Sequence[float]],
) -> list[tuple[float, float]]:
    """Affinely rescale 2D points into ``[0, 1] x [0, 1]``.

    A zero-range axis uses a unit range, so every point lands on the
    axis minimum (0.0) instead of dividing by zero.
    """
    if not raw:
        return []

    xs = [float(p[0]) for p in raw]
    ys = [float(p[1]) for p in raw]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    range_x = (max_x - min_x) or 1.0
    range_y = (max_y - min_y) or 1.0

    return [((x - min_x) / range_x, (y - min_y) / range_y) for x, y in zip(xs, ys)]
