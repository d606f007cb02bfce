"""In-memory log of visited ideas.

An explicit store passed to the consumers that need it (camera dimming,
session bookkeeping). Persisting it is left to the caller via
``to_dict`` / ``from_dict``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass
class Visit:
    """Visit statistics for one idea."""

    first_visited: float
    last_visited: float
    count: int = 1

    def to_dict(self) -> dict:
        return {
            "firstVisited": self.first_visited,
            "lastVisited": self.last_visited,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Visit":
        return cls(
            first_visited=float(data["firstVisited"]),
            last_visited=float(data["lastVisited"]),
            count=int(data.get("count", 1)),
        )


class VisitLog:
    """Tracks which ideas have been visited, how often and when."""

    def __init__(self) -> None:
        self._visited: dict[str, Visit] = {}

    def __len__(self) -> int:
        return len(self._visited)

    def __contains__(self, idea_id: object) -> bool:
        return idea_id in self._visited

    def visit(self, idea_id: str, when: float | None = None) -> Visit:
        """Record a visit (timestamps in epoch milliseconds)."""
        now = when if when is not None else time.time() * 1000
        entry = self._visited.get(idea_id)
        if entry is None:
            entry = Visit(first_visited=now, last_visited=now)
            self._visited[idea_id] = entry
        else:
            entry.last_visited = now
            entry.count += 1
        return entry

    def get_visited(self, idea_id: str) -> Visit | None:
        return self._visited.get(idea_id)

    def is_visited(self, idea_id: str) -> bool:
        return idea_id in self._visited

    def recent(self) -> list[tuple[str, Visit]]:
        """Visited ideas, most recently visited first."""
        return sorted(self._visited.items(), key=lambda kv: kv[1].last_visited, reverse=True)

    def clear(self) -> None:
        self._visited.clear()

    def to_dict(self) -> dict:
        return {"visited": {k: v.to_dict() for k, v in self._visited.items()}}

    @classmethod
    def from_dict(cls, data: dict) -> "VisitLog":
        log = cls()
        for idea_id, entry in (data.get("visited") or {}).items():
            log._visited[idea_id] = Visit.from_dict(entry)
        return log
