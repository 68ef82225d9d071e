"""Embedding client — turns text into fixed-length vectors via OpenAI."""

from __future__ import annotations

import asyncio
import logging

import openai

logger = logging.getLogger(__name__)


class EmbeddingError(Exception):
    """The embedding provider returned an unusable vector."""


class EmbeddingClient:
    """Wraps the OpenAI embeddings endpoint.

    Every vector returned by :meth:`embed` has exactly ``dimensions``
    elements; anything else raises :class:`EmbeddingError` because the
    storage column is typed to that size. Provider errors and timeouts are
    not retried — they propagate to the caller.
    """

    def __init__(
        self,
        client: openai.AsyncOpenAI,
        model: str = "text-embedding-3-small",
        dimensions: int = 768,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._model = model
        self._dimensions = dimensions
        self._timeout = timeout

    @classmethod
    def from_api_key(
        cls,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimensions: int = 768,
        timeout: float = 30.0,
    ) -> EmbeddingClient:
        return cls(
            openai.AsyncOpenAI(api_key=api_key, max_retries=0),
            model=model,
            dimensions=dimensions,
            timeout=timeout,
        )

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed(self, text: str) -> list[float]:
        """Embed a single text string."""
        async with asyncio.timeout(self._timeout):
            response = await self._client.embeddings.create(
                model=self._model,
                input=text,
                dimensions=self._dimensions,
            )

        vector = list(response.data[0].embedding)
        if len(vector) != self._dimensions:
            msg = (
                f"Embedding model {self._model} returned {len(vector)} dimensions, "
                f"expected {self._dimensions}"
            )
            raise EmbeddingError(msg)

        logger.debug("Embedded %d chars → %d dims", len(text), len(vector))
        return vector
