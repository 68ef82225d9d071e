"""Tests for async database connection abstraction."""

from pathlib import Path
from unittest.mock import patch

import pytest

from src.config import Settings
from src.db import Database, _AsyncConnection, get_connection


class TestGetConnection:
    async def test_returns_async_connection(self, tmp_path: Path):
        conn = await get_connection(local_path=tmp_path / "test.db")
        assert isinstance(conn, _AsyncConnection)
        await conn.close()

    async def test_creates_parent_dirs(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "test.db"
        conn = await get_connection(local_path=db_path)
        assert db_path.parent.exists()
        await conn.close()

    async def test_remote_url_uses_turso(self, tmp_path: Path):
        with patch("src.db.libsql.connect") as mock_connect:
            await get_connection(
                local_path=tmp_path / "unused.db",
                remote_url="libsql://mnemo.turso.io",
                auth_token="tok",
            )

        mock_connect.assert_called_once_with(
            database="libsql://mnemo.turso.io", auth_token="tok"
        )
        assert not (tmp_path / "unused.db").exists()


class TestAsyncConnection:
    async def test_execute_and_fetchall(self, tmp_path: Path):
        conn = await get_connection(local_path=tmp_path / "test.db")
        await conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)")
        await conn.execute("INSERT INTO t (name) VALUES (?)", ("alice",))
        await conn.commit()

        cursor = await conn.execute("SELECT name FROM t")
        rows = await cursor.fetchall()
        assert rows == [("alice",)]
        await conn.close()

    async def test_fetchone_returns_none_when_empty(self, tmp_path: Path):
        conn = await get_connection(local_path=tmp_path / "test.db")
        await conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY)")

        cursor = await conn.execute("SELECT * FROM t WHERE id = 999")
        row = await cursor.fetchone()
        assert row is None
        await conn.close()


class TestDatabase:
    async def test_context_manager_opens_and_closes(self, tmp_path: Path):
        database = Database(local_path=tmp_path / "test.db")
        assert not database.is_open

        async with database as db:
            assert db.is_open
            await db.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
            await db.execute("INSERT INTO t (val) VALUES (?)", ("hello",))
            await db.commit()
            cursor = await db.execute("SELECT val FROM t")
            assert await cursor.fetchone() == ("hello",)

        assert not database.is_open

    async def test_execute_before_open_raises(self, tmp_path: Path):
        database = Database(local_path=tmp_path / "test.db")
        with pytest.raises(RuntimeError, match="not open"):
            await database.execute("SELECT 1")

    async def test_close_is_idempotent(self, tmp_path: Path):
        database = Database(local_path=tmp_path / "test.db")
        await database.open()
        await database.close()
        await database.close()
        assert not database.is_open

    def test_from_settings(self, tmp_path: Path):
        s = Settings(database_path=tmp_path / "x.db")
        database = Database.from_settings(s)
        assert database.target == str(tmp_path / "x.db")

    def test_target_prefers_remote_url(self, tmp_path: Path):
        s = Settings(
            database_path=tmp_path / "x.db",
            turso_database_url="libsql://mnemo.turso.io",
            turso_auth_token="secret",
        )
        database = Database.from_settings(s)
        assert database.target == "libsql://mnemo.turso.io"
        assert "secret" not in database.target
