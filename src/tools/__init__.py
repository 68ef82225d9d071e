"""Tool framework — builds the registry of built-in tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.tools.memory_tools import SaveMemoryTool, SearchKnowledgeBaseTool
from src.tools.registry import ToolRegistry
from src.tools.web_tools import GoogleSearchTool

if TYPE_CHECKING:
    from src.config import Settings
    from src.memory.store import MemoryStore


def build_registry(store: MemoryStore, settings: Settings) -> ToolRegistry:
    """Register the three built-in tools against *store*.

    ``google_search`` is always registered; without credentials it answers
    with a "keys missing" message instead of calling the network.
    """
    registry = ToolRegistry(timeout=settings.tool_timeout_seconds)
    registry.register(SearchKnowledgeBaseTool(store, limit=settings.memory_search_limit))
    registry.register(SaveMemoryTool(store))
    registry.register(
        GoogleSearchTool(
            api_key=settings.google_search_api_key,
            engine_id=settings.google_search_engine_id,
            timeout=settings.request_timeout_seconds,
        )
    )
    return registry


__all__ = ["ToolRegistry", "build_registry"]
