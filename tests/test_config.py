"""Tests for Settings configuration model."""

from pathlib import Path

import pytest

from src.config import Settings


class TestMissingRequired:
    def test_all_missing(self):
        s = Settings()
        assert s.missing_required() == ["ANTHROPIC_API_KEY", "OPENAI_API_KEY"]

    def test_nothing_missing(self):
        s = Settings(anthropic_api_key="sk-ant", openai_api_key="sk-oa")
        assert s.missing_required() == []

    def test_whitespace_counts_as_missing(self):
        s = Settings(anthropic_api_key="  ", openai_api_key="sk-oa")
        assert s.missing_required() == ["ANTHROPIC_API_KEY"]

    def test_turso_url_requires_token(self):
        s = Settings(
            anthropic_api_key="sk-ant",
            openai_api_key="sk-oa",
            turso_database_url="libsql://mnemo.turso.io",
        )
        assert s.missing_required() == ["TURSO_AUTH_TOKEN"]

    def test_search_keys_are_optional(self):
        s = Settings(anthropic_api_key="sk-ant", openai_api_key="sk-oa")
        assert s.missing_required() == []
        assert s.google_search_configured() is False


class TestGoogleSearchConfigured:
    def test_both_keys(self):
        s = Settings(google_search_api_key="k", google_search_engine_id="cx")
        assert s.google_search_configured() is True

    def test_engine_id_missing(self):
        s = Settings(google_search_api_key="k")
        assert s.google_search_configured() is False


class TestDefaults:
    def test_default_chat_model(self):
        assert Settings().default_chat_model == "sonnet"

    def test_default_database_path(self):
        assert Settings().database_path == Path("data/mnemo.db")

    def test_default_embedding_dimensions(self):
        assert Settings().embedding_dimensions == 768

    def test_candidate_pool_exceeds_limit(self):
        s = Settings()
        assert s.memory_search_limit == 3
        assert s.memory_search_candidates > s.memory_search_limit

    def test_tool_loop_is_bounded(self):
        assert Settings().max_tool_rounds == 5

    def test_env_vars_ignored_under_pytest(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")
        assert Settings().anthropic_api_key == ""


class TestExtraForbidden:
    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="extra_forbidden"):
            Settings(**{"nonexistent_field": "value"})
