"""Base types for the tool-calling framework."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class ToolName(StrEnum):
    """The closed set of tools the model may call."""

    SEARCH_KNOWLEDGE_BASE = "search_knowledge_base"
    SAVE_MEMORY = "save_memory"
    GOOGLE_SEARCH = "google_search"

    @classmethod
    def parse(cls, name: str) -> "ToolName | None":
        """Return the matching member, or None for an undeclared name."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class ToolResult:
    """Result of a tool execution.

    Every tool returns one of these. The agent loop serializes it
    into a tool_result content block for the model.
    """

    data: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def text(cls, value: str) -> "ToolResult":
        """A successful result carrying plain text for the model."""
        return cls(data={"result": value})

    @property
    def success(self) -> bool:
        return self.error is None

    def to_content(self) -> str:
        """Serialize for the tool_result content field."""
        if self.error:
            return json.dumps({"error": self.error})
        return json.dumps(self.data or {})


class ToolParams(BaseModel):
    """Base class for tool parameter models.

    Subclass with Field() definitions. The JSON schema is auto-generated
    via model_json_schema() for the model's tool definitions.
    """


class BaseTool(ABC):
    """Abstract base for class-based tool implementations.

    Use this when a tool needs initialization state (API clients, the
    memory store, etc.). For simple stateless tools, prefer the
    @registry.tool() decorator instead.

    Example::

        class SaveMemoryTool(BaseTool):
            name = ToolName.SAVE_MEMORY
            description = "Save a fact"
            params_model = SaveMemoryParams

            async def execute(self, **kwargs) -> ToolResult:
                return ToolResult.text("Saved to memory!")
    """

    name: ToolName
    description: str = ""
    params_model: type[ToolParams] | None = None

    @abstractmethod
    async def execute(self, **kwargs: Any) -> ToolResult:
        """Execute the tool with validated parameters."""
        ...
