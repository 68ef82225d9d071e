"""Async database connection abstraction over libsql.

Provides a thin async wrapper around the synchronous ``libsql`` driver using
``asyncio.to_thread()``.  Connection target is determined by settings:

- **Production**: ``TURSO_DATABASE_URL`` + ``TURSO_AUTH_TOKEN`` → remote Turso
- **Dev/test**: no Turso env vars → local SQLite file via ``database_path``

The application opens a single :class:`Database` at start-up and closes it on
shutdown::

    async with Database.from_settings(settings) as db:
        store = MemoryStore(db, embedder)
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import libsql

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from src.config import Settings

logger = logging.getLogger(__name__)


class _AsyncCursor:
    """Thin async wrapper around a synchronous libsql cursor."""

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor

    async def fetchone(self) -> tuple | None:
        return await asyncio.to_thread(self._cursor.fetchone)

    async def fetchall(self) -> list[tuple]:
        return await asyncio.to_thread(self._cursor.fetchall)

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount


class _AsyncConnection:
    """Thin async wrapper around a synchronous libsql connection."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    async def execute(self, sql: str, params: tuple = ()) -> _AsyncCursor:
        cursor = await asyncio.to_thread(self._conn.execute, sql, params)
        return _AsyncCursor(cursor)

    async def commit(self) -> None:
        await asyncio.to_thread(self._conn.commit)

    async def close(self) -> None:
        await asyncio.to_thread(self._conn.close)


def _open_local(path: str) -> Any:
    """Open a local libsql connection with WAL mode and busy timeout."""
    conn = libsql.connect(path)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA busy_timeout=5000")
    return conn


async def get_connection(
    *,
    local_path: Path,
    remote_url: str = "",
    auth_token: str = "",
) -> _AsyncConnection:
    """Return an async-wrapped libsql connection.

    A non-empty *remote_url* triggers a remote Turso connection; otherwise
    *local_path* is opened (parent directories are created as needed).
    """
    if remote_url:
        conn = await asyncio.to_thread(
            libsql.connect,
            database=remote_url,
            auth_token=auth_token,
        )
        return _AsyncConnection(conn)

    local_path.parent.mkdir(parents=True, exist_ok=True)
    conn = await asyncio.to_thread(_open_local, str(local_path))
    return _AsyncConnection(conn)


class Database:
    """An explicitly owned database connection.

    Open it once (``await db.open()`` or ``async with``) and pass it to the
    components that need storage. Statements go through :meth:`execute` and
    :meth:`commit`; both fail with ``RuntimeError`` before the database is
    opened.
    """

    def __init__(self, local_path: Path, remote_url: str = "", auth_token: str = "") -> None:
        self._local_path = local_path
        self._remote_url = remote_url
        self._auth_token = auth_token
        self._conn: _AsyncConnection | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        return cls(
            local_path=settings.database_path,
            remote_url=settings.turso_database_url,
            auth_token=settings.turso_auth_token,
        )

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def target(self) -> str:
        """Human-readable description of where data lives (no secrets)."""
        return self._remote_url or str(self._local_path)

    async def open(self) -> None:
        if self._conn is not None:
            return
        self._conn = await get_connection(
            local_path=self._local_path,
            remote_url=self._remote_url,
            auth_token=self._auth_token,
        )
        logger.info("Database opened: %s", self.target)

    async def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.info("Database closed")

    async def execute(self, sql: str, params: tuple = ()) -> _AsyncCursor:
        return await self._require().execute(sql, params)

    async def commit(self) -> None:
        await self._require().commit()

    def _require(self) -> _AsyncConnection:
        if self._conn is None:
            msg = "Database is not open"
            raise RuntimeError(msg)
        return self._conn

    async def __aenter__(self) -> Database:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
