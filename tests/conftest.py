"""Pytest configuration and fixtures."""

import random

import pytest
from factories import make_idea, make_point

from ideasea.config import Settings
from ideasea.models import Idea, Post, PositionedIdea, compute_topics
from ideasea.storage import Dataset


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return Settings(
        data_dir="tests/fixtures/data",
        embedding_dimensions=4,
        random_seed=7,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def sample_ideas() -> list[Idea]:
    """Six ideas over two topics and three posts."""
    return [
        make_idea("p1_0", "Philosophy", "p1", "Meaning is built through repetition", [1.0, 0.0, 0.0, 0.0]),
        make_idea("p1_1", "Philosophy", "p1", "Every morning the same question", [0.9, 0.1, 0.0, 0.0]),
        make_idea("p2_0", "Philosophy", "p2", "Rituals outlive their reasons", [0.7, 0.7, 0.0, 0.0]),
        make_idea("p2_1", "Technology", "p2", "Tools shape the hand that holds them", [0.0, 0.0, 1.0, 0.0]),
        make_idea("p3_0", "Technology", "p3", "Feeds optimize for the wrong clock", [0.0, 0.1, 0.9, 0.1]),
        make_idea("p3_1", "Technology", "p3", "Attention is a landscape", [0.6, 0.0, 0.0, 0.8]),
    ]


@pytest.fixture
def sample_embeddings(sample_ideas: list[Idea]) -> dict[str, list[float]]:
    """Embeddings keyed by idea id."""
    return {idea.id: list(idea.embedding) for idea in sample_ideas}


@pytest.fixture
def sample_points() -> list[PositionedIdea]:
    """A small positioned set spread over the world."""
    return [
        make_point("a", 0.0, 0.0, "Philosophy", "p1"),
        make_point("b", 50.0, 0.0, "Philosophy", "p1"),
        make_point("c", 100.0, 100.0, "Philosophy", "p2"),
        make_point("d", 2000.0, 2000.0, "Technology", "p3"),
        make_point("e", -3000.0, 1000.0, "Technology", "p3"),
    ]


@pytest.fixture
def sample_dataset(sample_points: list[PositionedIdea]) -> Dataset:
    """Dataset wrapping the sample points."""
    posts = {
        "p1": Post(id="p1", title="On Repetition"),
        "p2": Post(id="p2", title="Rituals"),
        "p3": Post(id="p3", title="Attention"),
    }
    return Dataset(ideas=sample_points, topics=compute_topics(sample_points), posts=posts)
