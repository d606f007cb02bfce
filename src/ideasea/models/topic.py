"""Topic model - named clusters of ideas with a world-space centroid."""

from collections.abc import Iterable
from dataclasses import dataclass

from ideasea.models.idea import PositionedIdea


@dataclass(frozen=True)
class Topic:
    """Aggregate of all ideas sharing a topic label."""

    name: str
    x: float  # Centroid in world units
    y: float
    count: int

    def to_dict(self) -> dict:
        """Convert to dictionary for topics.json."""
        return {
            "name": self.name,
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Topic":
        return cls(
            name=data["name"],
            x=float(data["x"]),
            y=float(data["y"]),
            count=int(data["count"]),
        )


def compute_topics(points: Iterable[PositionedIdea]) -> list[Topic]:
    """Recompute topic centroids from final positions.

    Sorted by descending member count, then name.
    """
    sums: dict[str, list[float]] = {}
    counts: dict[str, int] = {}
    for point in points:
        acc = sums.setdefault(point.topic, [0.0, 0.0])
        acc[0] += point.x
        acc[1] += point.y
        counts[point.topic] = counts.get(point.topic, 0) + 1

    topics = [
        Topic(
            name=name,
            x=round(acc[0] / counts[name], 2),
            y=round(acc[1] / counts[name], 2),
            count=counts[name],
        )
        for name, acc in sums.items()
    ]
    topics.sort(key=lambda t: (-t.count, t.name))
    return topics
