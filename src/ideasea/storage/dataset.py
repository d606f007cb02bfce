"""JSON dataset boundary between the layout pipeline and the runtime.

Layout output: ``ideas.json`` (positioned ideas with connections) and
``topics.json`` (topic centroids). The runtime additionally reads
``posts.json`` (source documents keyed by post id).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ideasea.models import Idea, Post, PositionedIdea, Topic

logger = logging.getLogger(__name__)

IDEAS_FILE = "ideas.json"
TOPICS_FILE = "topics.json"
POSTS_FILE = "posts.json"


class DatasetError(RuntimeError):
    """A dataset file is missing or malformed."""


@dataclass
class Dataset:
    """Everything the runtime needs for one session."""

    ideas: list[PositionedIdea] = field(default_factory=list)
    topics: list[Topic] = field(default_factory=list)
    posts: dict[str, Post] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._by_id = {idea.id: idea for idea in self.ideas}

    def idea_by_id(self, idea_id: str) -> PositionedIdea | None:
        return self._by_id.get(idea_id)

    def post_for(self, idea: PositionedIdea) -> Post | None:
        return self.posts.get(idea.source_id)

    def siblings(self, idea: PositionedIdea) -> list[PositionedIdea]:
        """All ideas from the same source document, dataset order."""
        return [i for i in self.ideas if i.source_id == idea.source_id]

    def dangling_connections(self) -> list[tuple[str, str]]:
        """(idea id, missing target id) for every link that does not resolve."""
        missing = []
        for idea in self.ideas:
            for target in (idea.connections.nearby, idea.connections.far):
                if target is not None and target not in self._by_id:
                    missing.append((idea.id, target))
        return missing


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise DatasetError(f"Failed to load {path.name}: file not found at {path}")
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DatasetError(f"Failed to load {path.name}: {e}") from e


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_dataset(data_dir: str | Path) -> Dataset:
    """Load ideas, topics and posts from ``data_dir``.

    Raises:
        DatasetError: If any of the three files is missing or invalid
    """
    data_dir = Path(data_dir)
    ideas_raw = _read_json(data_dir / IDEAS_FILE)
    topics_raw = _read_json(data_dir / TOPICS_FILE)
    posts_raw = _read_json(data_dir / POSTS_FILE)

    try:
        ideas = [PositionedIdea.from_dict(d) for d in ideas_raw]
        topics = [Topic.from_dict(d) for d in topics_raw]
        posts = {pid: Post.from_dict(pid, d) for pid, d in posts_raw.items()}
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DatasetError(f"Malformed dataset in {data_dir}: {e}") from e

    dataset = Dataset(ideas=ideas, topics=topics, posts=posts)
    dangling = dataset.dangling_connections()
    if dangling:
        logger.warning(f"{len(dangling)} connections point to ideas missing from the dataset")

    logger.info(f"Loaded {len(ideas)} ideas, {len(topics)} topics, {len(posts)} posts")
    return dataset


def save_layout(
    data_dir: str | Path,
    ideas: list[PositionedIdea],
    topics: list[Topic],
) -> None:
    """Write ``ideas.json`` and ``topics.json`` to ``data_dir``."""
    data_dir = Path(data_dir)
    _write_json(data_dir / IDEAS_FILE, [i.to_dict() for i in ideas])
    logger.info(f"Wrote {data_dir / IDEAS_FILE} ({len(ideas)} ideas with 2D positions + connections)")
    _write_json(data_dir / TOPICS_FILE, [t.to_dict() for t in topics])
    logger.info(f"Wrote {data_dir / TOPICS_FILE} ({len(topics)} topics with centroids)")


def load_raw_ideas(path: str | Path) -> list[Idea]:
    """Load extracted ideas (``ideas-raw.json``)."""
    records = _read_json(Path(path))
    try:
        return [Idea.from_dict(d) for d in records]
    except (KeyError, TypeError, ValueError) as e:
        raise DatasetError(f"Malformed idea record in {path}: {e}") from e


def load_embeddings(path: str | Path) -> dict[str, list[float]]:
    """Load ``embeddings.json`` (a list of ``{id, embedding}``) as id -> vector."""
    records = _read_json(Path(path))
    try:
        return {r["id"]: r["embedding"] for r in records}
    except (KeyError, TypeError) as e:
        raise DatasetError(f"Malformed embedding record in {path}: {e}") from e


def load_projection(path: str | Path) -> list[tuple[float, float]]:
    """Load cached raw projector output (a list of ``[x, y]`` pairs)."""
    rows = _read_json(Path(path))
    try:
        return [(float(r[0]), float(r[1])) for r in rows]
    except (IndexError, TypeError, ValueError) as e:
        raise DatasetError(f"Malformed projection row in {path}: {e}") from e
