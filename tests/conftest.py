"""Shared test fixtures."""

import re
from pathlib import Path

import pytest

from src.db import Database
from src.memory.store import MemoryStore


class FakeEmbedder:
    """Deterministic topic-keyword embedder.

    Each known keyword bumps one dimension, so texts about the same topic
    point the same way. Dimension 0 carries a small constant so no vector is
    ever all zeros.
    """

    TOPICS = {
        "pizza": 1, "food": 1, "pasta": 1, "eat": 1,
        "like": 2, "likes": 2, "preference": 2, "favorite": 2,
        "dog": 3, "pet": 3, "cat": 3,
        "work": 4, "job": 4,
        "berlin": 5, "city": 5, "live": 5,
    }

    def __init__(self, dimensions: int = 8) -> None:
        self.dimensions = dimensions
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        vector = [0.0] * self.dimensions
        vector[0] = 0.1
        for word in re.findall(r"[a-z]+", text.lower()):
            idx = self.TOPICS.get(word)
            if idx is not None:
                vector[idx] += 1.0
        return vector


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
async def db(tmp_path: Path):
    """An open local libSQL database in a temporary directory."""
    database = Database(local_path=tmp_path / "test.db")
    await database.open()
    yield database
    await database.close()


@pytest.fixture
def exact_store(db: Database, embedder: FakeEmbedder) -> MemoryStore:
    """MemoryStore on a real database using exact (full-scan) search."""
    return MemoryStore(db, embedder, use_vector_index=False)


@pytest.fixture
def indexed_store(db: Database, embedder: FakeEmbedder) -> MemoryStore:
    """MemoryStore on a real database using the DiskANN vector index."""
    return MemoryStore(db, embedder)
