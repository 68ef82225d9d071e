"""Mnemo console entry point."""

import asyncio
import logging
import sys

import anthropic

from src.bot.console import run_console
from src.config import Settings, settings
from src.db import Database
from src.llm.agent import Agent
from src.llm.models import ModelManager
from src.memory.embedding import EmbeddingClient
from src.memory.store import MemoryStore
from src.tools import build_registry

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


async def run(config: Settings) -> None:
    """Open resources, run the console, and release everything on exit."""
    async with Database.from_settings(config) as db:
        embedder = EmbeddingClient.from_api_key(
            config.openai_api_key,
            model=config.embedding_model,
            dimensions=config.embedding_dimensions,
            timeout=config.request_timeout_seconds,
        )
        store = MemoryStore(
            db,
            embedder,
            use_vector_index=config.memory_vector_index,
            candidates=config.memory_search_candidates,
        )
        try:
            await store.ensure_schema()
            logger.info("Memory store ready: %d memories", await store.count())
        except Exception:
            logger.exception("Memory store unavailable — memory tools will report errors")

        if not config.google_search_configured():
            logger.warning(
                "google_search disabled — set GOOGLE_SEARCH_API_KEY and "
                "GOOGLE_SEARCH_ENGINE_ID to enable it"
            )

        client = anthropic.AsyncAnthropic(
            api_key=config.anthropic_api_key,
            timeout=config.request_timeout_seconds,
        )
        agent = Agent(
            client,
            build_registry(store, config),
            models=ModelManager(config.default_chat_model),
            max_tool_rounds=config.max_tool_rounds,
            max_tokens=config.max_tokens,
            timeout=config.request_timeout_seconds,
        )
        try:
            await run_console(agent)
        finally:
            await client.close()


def main() -> None:
    """Validate configuration and start the console."""
    missing = settings.missing_required()
    if missing:
        logger.error(
            "Missing required configuration: %s. Set it in the environment or .env.",
            ", ".join(missing),
        )
        sys.exit(1)

    logger.info("Starting Mnemo (database: %s)", settings.turso_database_url or settings.database_path)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
