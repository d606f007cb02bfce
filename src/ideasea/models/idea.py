"""Idea models - extracted semantic fragments and their positioned form."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class IdeaKind(str, Enum):
    """Rhetorical shape of an extracted idea."""

    QUESTION = "question"
    TENSION = "tension"
    IMAGE = "image"
    TURN = "turn"


def make_idea_id(source_id: str, ordinal: int) -> str:
    """Derive the stable idea id from its source document and local ordinal."""
    return f"{source_id}_{ordinal}"


def _parse_kind(value: Any) -> IdeaKind | None:
    if value is None or value == "":
        return None
    if isinstance(value, IdeaKind):
        return value
    try:
        return IdeaKind(str(value).lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class Idea:
    """
    An extracted idea as produced by the extraction stage.

    Immutable once constructed; every layout stage reads it without
    modification.
    """

    id: str
    source_id: str  # Source document (post) id
    topic: str
    label: str  # Short summary/claim
    quote: str  # Verbatim quote from the source
    kind: IdeaKind | None = None
    synthesis: str | None = None
    embedding: list[float] | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict:
        """Convert to dictionary (raw idea record)."""
        return {
            "id": self.id,
            "post_id": self.source_id,
            "topic": self.topic,
            "kind": self.kind.value if self.kind else None,
            "label": self.label,
            "synthesis": self.synthesis,
            "quote": self.quote,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Idea":
        """Create from a raw idea record.

        Accepts both ``source_id`` and the legacy ``post_id`` key, and
        ``summary`` as an alias for ``label``.
        """
        source_id = data.get("source_id", data.get("post_id"))
        if source_id is None:
            raise ValueError(f"Idea record {data.get('id')!r} has no source id")
        return cls(
            id=data["id"],
            source_id=source_id,
            topic=data["topic"],
            label=data.get("label") or data.get("summary") or "",
            quote=data.get("quote") or "",
            kind=_parse_kind(data.get("kind")),
            synthesis=data.get("synthesis"),
            embedding=data.get("embedding"),
        )


@dataclass(frozen=True)
class Connections:
    """Links from one positioned idea to two others in the same set."""

    nearby: str | None = None  # Nearest idea from another source
    far: str | None = None  # Most similar idea in a distant region

    def to_dict(self) -> dict:
        return {"nearby": self.nearby, "far": self.far}

    @classmethod
    def from_dict(cls, data: dict | None) -> "Connections":
        data = data or {}
        return cls(nearby=data.get("nearby"), far=data.get("far"))


@dataclass(frozen=True)
class PositionedIdea:
    """
    An idea placed in world coordinates, with its connection links.

    Created once by the layout pipeline and never mutated afterwards.
    """

    id: str
    source_id: str
    topic: str
    label: str
    quote: str
    x: float
    y: float
    kind: IdeaKind | None = None
    synthesis: str | None = None
    connections: Connections = field(default_factory=Connections)

    @classmethod
    def from_idea(
        cls,
        idea: Idea,
        x: float,
        y: float,
        connections: Connections | None = None,
    ) -> "PositionedIdea":
        """Place an idea at (x, y), rounded to 2 decimals as persisted."""
        return cls(
            id=idea.id,
            source_id=idea.source_id,
            topic=idea.topic,
            label=idea.label,
            quote=idea.quote,
            x=round(x, 2),
            y=round(y, 2),
            kind=idea.kind,
            synthesis=idea.synthesis,
            connections=connections or Connections(),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for ideas.json."""
        return {
            "id": self.id,
            "post_id": self.source_id,
            "topic": self.topic,
            "kind": self.kind.value if self.kind else None,
            "label": self.label,
            "synthesis": self.synthesis,
            "quote": self.quote,
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "connections": self.connections.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PositionedIdea":
        """Create from an ideas.json record."""
        source_id = data.get("source_id", data.get("post_id"))
        if source_id is None:
            raise ValueError(f"Idea record {data.get('id')!r} has no source id")
        return cls(
            id=data["id"],
            source_id=source_id,
            topic=data["topic"],
            label=data.get("label") or data.get("summary") or "",
            quote=data.get("quote") or "",
            x=float(data["x"]),
            y=float(data["y"]),
            kind=_parse_kind(data.get("kind")),
            synthesis=data.get("synthesis"),
            connections=Connections.from_dict(data.get("connections")),
        )
