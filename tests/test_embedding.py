"""Tests for the OpenAI embedding client."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.memory.embedding import EmbeddingClient, EmbeddingError


def _response(vector: list[float]) -> SimpleNamespace:
    return SimpleNamespace(data=[SimpleNamespace(embedding=vector)])


def _client(*vectors: list[float]) -> MagicMock:
    client = MagicMock()
    client.embeddings.create = AsyncMock(side_effect=[_response(v) for v in vectors])
    return client


async def test_embed_returns_vector_of_configured_size() -> None:
    client = _client([0.5] * 768)
    embedder = EmbeddingClient(client, dimensions=768)

    vector = await embedder.embed("I like pizza")

    assert len(vector) == 768
    assert embedder.dimensions == 768


async def test_embed_passes_model_and_dimensions() -> None:
    client = _client([0.1] * 256)
    embedder = EmbeddingClient(client, model="text-embedding-3-large", dimensions=256)

    await embedder.embed("hello")

    _, kwargs = client.embeddings.create.call_args
    assert kwargs["model"] == "text-embedding-3-large"
    assert kwargs["input"] == "hello"
    assert kwargs["dimensions"] == 256


async def test_dimensionality_constant_across_calls() -> None:
    client = _client([0.1] * 768, [0.2] * 768, [0.3] * 768)
    embedder = EmbeddingClient(client, dimensions=768)

    sizes = {len(await embedder.embed(text)) for text in ("a", "bb", "a much longer text")}

    assert sizes == {768}


async def test_dimension_mismatch_raises() -> None:
    client = _client([0.1] * 1536)
    embedder = EmbeddingClient(client, dimensions=768)

    with pytest.raises(EmbeddingError, match="1536"):
        await embedder.embed("hello")


async def test_provider_error_propagates() -> None:
    client = MagicMock()
    client.embeddings.create = AsyncMock(side_effect=RuntimeError("connection reset"))
    embedder = EmbeddingClient(client)

    with pytest.raises(RuntimeError, match="connection reset"):
        await embedder.embed("hello")

    assert client.embeddings.create.call_count == 1


async def test_slow_provider_times_out() -> None:
    async def _slow(**kwargs):
        await asyncio.sleep(5)

    client = MagicMock()
    client.embeddings.create = _slow
    embedder = EmbeddingClient(client, timeout=0.01)

    with pytest.raises(TimeoutError):
        await embedder.embed("hello")


def test_from_api_key_builds_client() -> None:
    embedder = EmbeddingClient.from_api_key("sk-test", dimensions=512)
    assert embedder.dimensions == 512
