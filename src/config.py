"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """Mnemo configuration. All values come from environment variables."""

    # Anthropic (chat model)
    anthropic_api_key: str = Field(default="")
    default_chat_model: str = Field(default="sonnet")
    max_tokens: int = Field(default=1024)

    # OpenAI (embeddings)
    openai_api_key: str = Field(default="")
    embedding_model: str = Field(default="text-embedding-3-small")
    embedding_dimensions: int = Field(default=768)

    # Database
    database_path: Path = Field(default=Path("data/mnemo.db"))

    # Turso (hosted libSQL) — when set, overrides local database_path
    turso_database_url: str = Field(default="")
    turso_auth_token: str = Field(default="")

    # Memory search
    memory_vector_index: bool = Field(default=True)
    memory_search_limit: int = Field(default=3)
    memory_search_candidates: int = Field(default=10)

    # Google Programmable Search (web search)
    google_search_api_key: str = Field(default="")
    google_search_engine_id: str = Field(default="")

    # Agent loop
    max_tool_rounds: int = Field(default=5)
    request_timeout_seconds: float = Field(default=30.0)
    tool_timeout_seconds: float = Field(default=60.0)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def missing_required(self) -> list[str]:
        """Return env var names of required secrets that are not set."""
        missing = []
        if not self.anthropic_api_key.strip():
            missing.append("ANTHROPIC_API_KEY")
        if not self.openai_api_key.strip():
            missing.append("OPENAI_API_KEY")
        if self.turso_database_url and not self.turso_auth_token.strip():
            missing.append("TURSO_AUTH_TOKEN")
        return missing

    def google_search_configured(self) -> bool:
        """True when both Google search credentials are present."""
        return bool(self.google_search_api_key.strip() and self.google_search_engine_id.strip())


settings = Settings()
