"""Long-term memory store backed by libSQL vector search.

Each memory is a row holding the original text, its embedding (an
``F32_BLOB`` column sized to the embedding model) and a UTC timestamp.
Retrieval ranks rows by cosine distance to the query embedding, either:

- **Approximate** (default): a DiskANN index queried through
  ``vector_top_k`` for a candidate pool, re-ranked by exact distance.
- **Exact**: a full scan ordered by ``vector_distance_cos``.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from src.memory.models import MemoryRecord

if TYPE_CHECKING:
    from src.db import Database
    from src.memory.embedding import EmbeddingClient

logger = logging.getLogger(__name__)

_INDEX_NAME = "memories_embedding_idx"

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS memories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    content TEXT NOT NULL,
    embedding F32_BLOB({dimensions}) NOT NULL,
    created_at TEXT NOT NULL
)
"""

_CREATE_INDEX = f"""
CREATE INDEX IF NOT EXISTS {_INDEX_NAME}
ON memories (libsql_vector_idx(embedding, 'metric=cosine'))
"""

_INSERT = "INSERT INTO memories (content, embedding, created_at) VALUES (?, vector32(?), ?)"

_SEARCH_APPROXIMATE = f"""
SELECT m.content
FROM vector_top_k('{_INDEX_NAME}', vector32(?), ?) AS v
JOIN memories AS m ON m.rowid = v.id
ORDER BY vector_distance_cos(m.embedding, vector32(?)) ASC, m.id ASC
LIMIT ?
"""

_SEARCH_EXACT = """
SELECT content
FROM memories
ORDER BY vector_distance_cos(embedding, vector32(?)) ASC, id ASC
LIMIT ?
"""


class MemoryStore:
    """Persists memories and finds the ones closest to a query.

    The schema is created lazily on first use; call :meth:`ensure_schema`
    at start-up to surface database problems early.
    """

    def __init__(
        self,
        db: Database,
        embedder: EmbeddingClient,
        *,
        use_vector_index: bool = True,
        candidates: int = 10,
    ) -> None:
        self._db = db
        self._embedder = embedder
        self._use_vector_index = use_vector_index
        self._candidates = candidates
        self._initialised = False

    async def ensure_schema(self) -> None:
        """Create the memories table (and vector index) if missing."""
        if self._initialised:
            return
        await self._db.execute(_CREATE_TABLE.format(dimensions=self._embedder.dimensions))
        if self._use_vector_index:
            await self._db.execute(_CREATE_INDEX)
        await self._db.commit()
        self._initialised = True

    # -- Write ---------------------------------------------------------------

    async def persist(self, text: str) -> MemoryRecord:
        """Embed and store *text*. Errors propagate to the caller."""
        await self.ensure_schema()
        record = MemoryRecord(
            content=text,
            embedding=await self._embedder.embed(text),
            created_at=datetime.now(UTC).isoformat(),
        )
        await self._db.execute(
            _INSERT,
            (record.content, _vector_literal(record.embedding), record.created_at),
        )
        await self._db.commit()
        logger.info("Stored memory: %s", text[:80])
        return record

    # -- Read ----------------------------------------------------------------

    async def retrieve(self, query: str, k: int = 3) -> list[str]:
        """Return up to *k* stored contents, most similar first.

        Best-effort: any failure is logged and yields an empty list.
        """
        try:
            await self.ensure_schema()
            vector = _vector_literal(await self._embedder.embed(query))
            if self._use_vector_index:
                pool = max(self._candidates, k)
                cursor = await self._db.execute(_SEARCH_APPROXIMATE, (vector, pool, vector, k))
            else:
                cursor = await self._db.execute(_SEARCH_EXACT, (vector, k))
            rows = await cursor.fetchall()
        except Exception:
            logger.exception("Memory search failed")
            return []

        results = [row[0] for row in rows]
        logger.debug("Memory search %r → %d result(s)", query[:80], len(results))
        return results

    async def count(self) -> int:
        """Number of stored memories."""
        await self.ensure_schema()
        cursor = await self._db.execute("SELECT COUNT(*) FROM memories")
        row = await cursor.fetchone()
        return row[0] if row else 0


def _vector_literal(vector: list[float]) -> str:
    """Format a vector the way ``vector32()`` expects it."""
    return json.dumps(vector)
