"""Unit tests for JSON dataset persistence."""

import json
from pathlib import Path

import pytest
from factories import make_point

from ideasea.models import Connections, PositionedIdea, compute_topics
from ideasea.storage import (
    Dataset,
    DatasetError,
    load_dataset,
    load_embeddings,
    load_projection,
    load_raw_ideas,
    save_layout,
)


def write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestDataset:
    """Tests for the in-memory Dataset."""

    def test_lookups(self, sample_dataset: Dataset) -> None:
        """Test id, post and sibling lookups."""
        idea = sample_dataset.idea_by_id("a")
        assert idea is not None
        assert sample_dataset.post_for(idea).title == "On Repetition"
        assert [i.id for i in sample_dataset.siblings(idea)] == ["a", "b"]
        assert sample_dataset.idea_by_id("missing") is None

    def test_dangling_connections(self) -> None:
        """Test links to unknown ids are reported."""
        point = PositionedIdea(
            id="a",
            source_id="p",
            topic="T",
            label="",
            quote="",
            x=0.0,
            y=0.0,
            connections=Connections(nearby="a", far="ghost"),
        )
        assert Dataset(ideas=[point]).dangling_connections() == [("a", "ghost")]


class TestLayoutFiles:
    """Tests for saving and loading layout output."""

    def test_round_trip(self, tmp_path: Path, sample_points) -> None:
        """Test saved layout loads back with posts attached."""
        topics = compute_topics(sample_points)
        save_layout(tmp_path, sample_points, topics)
        write_json(tmp_path / "posts.json", {"p1": {"title": "One"}, "p2": {"title": "Two"}})

        dataset = load_dataset(tmp_path)

        assert dataset.ideas == sample_points
        assert dataset.topics == topics
        assert dataset.posts["p2"].title == "Two"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises DatasetError naming it."""
        save_layout(tmp_path, [make_point("a", 0.0, 0.0)], [])
        with pytest.raises(DatasetError, match="posts.json"):
            load_dataset(tmp_path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test unparseable JSON raises DatasetError."""
        save_layout(tmp_path, [], [])
        (tmp_path / "posts.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetError):
            load_dataset(tmp_path)

    def test_malformed_record(self, tmp_path: Path) -> None:
        """Test records missing coordinates raise DatasetError."""
        write_json(tmp_path / "ideas.json", [{"id": "a", "post_id": "p", "topic": "T"}])
        write_json(tmp_path / "topics.json", [])
        write_json(tmp_path / "posts.json", {})
        with pytest.raises(DatasetError):
            load_dataset(tmp_path)


class TestPipelineInputs:
    """Tests for loading layout pipeline inputs."""

    def test_load_raw_ideas(self, tmp_path: Path) -> None:
        """Test extracted ideas are parsed."""
        path = tmp_path / "ideas-raw.json"
        write_json(path, [{"id": "p_0", "post_id": "p", "topic": "T", "label": "L", "quote": "Q"}])
        [idea] = load_raw_ideas(path)
        assert idea.source_id == "p"

    def test_load_raw_ideas_without_source(self, tmp_path: Path) -> None:
        """Test a record without a source id raises DatasetError."""
        path = tmp_path / "ideas-raw.json"
        write_json(path, [{"id": "p_0", "topic": "T"}])
        with pytest.raises(DatasetError):
            load_raw_ideas(path)

    def test_load_embeddings(self, tmp_path: Path) -> None:
        """Test embeddings are keyed by id."""
        path = tmp_path / "embeddings.json"
        write_json(path, [{"id": "a", "embedding": [0.1, 0.2]}])
        assert load_embeddings(path) == {"a": [0.1, 0.2]}

    def test_load_projection(self, tmp_path: Path) -> None:
        """Test cached projections load as float pairs."""
        path = tmp_path / "projection.json"
        write_json(path, [[1, 2], [3.5, -4]])
        assert load_projection(path) == [(1.0, 2.0), (3.5, -4.0)]

    def test_load_projection_malformed(self, tmp_path: Path) -> None:
        """Test short rows raise DatasetError."""
        path = tmp_path / "projection.json"
        write_json(path, [[1]])
        with pytest.raises(DatasetError):
            load_projection(path)
