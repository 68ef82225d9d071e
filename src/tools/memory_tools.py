"""Long-term memory tools.

Class-based tools holding a reference to the shared MemoryStore. The
model calls ``save_memory`` when the user shares something worth keeping
and ``search_knowledge_base`` when it needs that context back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from src.tools.base import BaseTool, ToolName, ToolParams, ToolResult

if TYPE_CHECKING:
    from src.memory.store import MemoryStore

NO_MATCH = "No relevant information found in memory."
SAVED = "Saved to memory!"

# -- search_knowledge_base ---------------------------------------------------


class SearchKnowledgeBaseParams(ToolParams):
    query: str = Field(description="What to look up in long-term memory")


class SearchKnowledgeBaseTool(BaseTool):
    name = ToolName.SEARCH_KNOWLEDGE_BASE
    description = (
        "Search long-term memory for facts the user shared earlier. Use when "
        "the user asks 'what do you remember about X', 'what do I like', or "
        "whenever personal context could help the answer."
    )
    params_model = SearchKnowledgeBaseParams

    def __init__(self, store: MemoryStore, limit: int = 3) -> None:
        self._store = store
        self._limit = limit

    async def execute(self, query: str) -> ToolResult:
        matches = await self._store.retrieve(query, k=self._limit)
        if not matches:
            return ToolResult.text(NO_MATCH)
        return ToolResult.text("\n".join(matches))


# -- save_memory -------------------------------------------------------------


class SaveMemoryParams(ToolParams):
    info: str = Field(description="The information to remember, as a short standalone fact")


class SaveMemoryTool(BaseTool):
    name = ToolName.SAVE_MEMORY
    description = (
        "Store a fact in long-term memory. Use when the user says 'remember "
        "X', 'don't forget', or shares a lasting preference or detail."
    )
    params_model = SaveMemoryParams

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def execute(self, info: str) -> ToolResult:
        await self._store.persist(info)
        return ToolResult.text(SAVED)
