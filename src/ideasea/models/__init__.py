"""ideasea data models."""

from ideasea.models.idea import (
    Connections,
    Idea,
    IdeaKind,
    PositionedIdea,
    make_idea_id,
)
from ideasea.models.post import Post
from ideasea.models.topic import Topic, compute_topics

__all__ = [
    "Idea",
    "IdeaKind",
    "PositionedIdea",
    "Connections",
    "make_idea_id",
    "Topic",
    "compute_topics",
    "Post",
]
