"""Tool registry — central catalog for all tools."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from src.tools.base import BaseTool, ToolName, ToolParams, ToolResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

TOOL_NOT_FOUND = "Tool not found"


@dataclass
class ToolDef:
    """Internal representation of a registered tool."""

    name: ToolName
    description: str
    handler: Callable[..., Awaitable[ToolResult]]
    params_model: type[ToolParams] | None = None


class ToolRegistry:
    """Registry of the tools exposed to the model.

    Only members of :class:`ToolName` can be registered, and names coming
    back from the model are checked against that enum before anything runs.

    Supports two registration styles:

    1. Decorator (for simple stateless tools)::

        @registry.tool(
            name=ToolName.GOOGLE_SEARCH,
            description="Search the web",
        )
        async def google_search(query: str) -> ToolResult:
            ...

    2. Class-based (for tools that need state)::

        registry.register(SaveMemoryTool(store))
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._tools: dict[ToolName, ToolDef] = {}
        self._timeout = timeout

    def tool(
        self,
        *,
        name: ToolName | str,
        description: str,
        params_model: type[ToolParams] | None = None,
    ) -> Callable:
        """Decorator to register an async function as a tool."""
        tool_name = _declared(name)

        def decorator(fn: Callable[..., Awaitable[ToolResult]]) -> Callable:
            if not inspect.iscoroutinefunction(fn):
                msg = f"Tool handler '{tool_name}' must be an async function"
                raise TypeError(msg)

            self._tools[tool_name] = ToolDef(
                name=tool_name,
                description=description,
                handler=fn,
                params_model=params_model,
            )
            return fn

        return decorator

    def register(self, tool_instance: BaseTool) -> None:
        """Register a class-based tool instance."""
        tool_name = _declared(tool_instance.name)
        self._tools[tool_name] = ToolDef(
            name=tool_name,
            description=tool_instance.description,
            handler=tool_instance.execute,
            params_model=tool_instance.params_model,
        )

    def get(self, name: str) -> ToolDef | None:
        """Look up a tool by name."""
        tool_name = ToolName.parse(name)
        if tool_name is None:
            return None
        return self._tools.get(tool_name)

    @property
    def tool_names(self) -> list[str]:
        """All registered tool names."""
        return [str(n) for n in self._tools]

    def get_schemas(self) -> list[dict[str, Any]]:
        """Generate Anthropic-compatible tool schemas for all registered tools."""
        return [self._tool_schema(t) for t in self._tools.values()]

    async def execute(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Execute a tool by name with the given arguments.

        Never raises: unknown names, invalid arguments, handler exceptions
        and timeouts all come back as an error-shaped ``ToolResult`` so the
        model can adapt.
        """
        tool_def = self.get(name)
        if tool_def is None:
            logger.warning("Model requested unknown tool '%s'", name)
            return ToolResult(error=TOOL_NOT_FOUND)

        logger.info("Tool '%s' called with %s", name, arguments)
        t0 = time.monotonic()

        try:
            if tool_def.params_model is not None:
                params = tool_def.params_model(**(arguments or {}))
                kwargs = params.model_dump()
            else:
                kwargs = dict(arguments or {})
        except (ValidationError, TypeError) as exc:
            logger.warning("Tool '%s' rejected arguments %s: %s", name, arguments, exc)
            return ToolResult(error=f"Invalid arguments for tool '{name}': {exc}")

        try:
            async with asyncio.timeout(self._timeout):
                result = await tool_def.handler(**kwargs)
        except TimeoutError:
            elapsed = time.monotonic() - t0
            logger.warning("Tool '%s' timed out after %.2fs", name, elapsed)
            return ToolResult(error=f"Tool '{name}' timed out after {elapsed:.0f}s.")
        except Exception as exc:
            elapsed = time.monotonic() - t0
            logger.exception("Tool '%s' failed in %.2fs", name, elapsed)
            return ToolResult(error=f"Tool '{name}' failed: {type(exc).__name__}: {exc}")

        elapsed = time.monotonic() - t0
        if result.success:
            logger.info("Tool '%s' succeeded in %.2fs", name, elapsed)
        else:
            logger.warning("Tool '%s' returned error in %.2fs: %s", name, elapsed, result.error)
        return result

    @staticmethod
    def _tool_schema(tool_def: ToolDef) -> dict[str, Any]:
        """Build a single tool schema dict."""
        if tool_def.params_model is not None:
            input_schema = tool_def.params_model.model_json_schema()
        else:
            input_schema = {"type": "object", "properties": {}}

        return {
            "name": str(tool_def.name),
            "description": tool_def.description,
            "input_schema": input_schema,
        }


def _declared(name: ToolName | str) -> ToolName:
    """Coerce *name* to a ToolName, rejecting anything undeclared."""
    tool_name = ToolName.parse(name)
    if tool_name is None:
        msg = f"'{name}' is not a declared tool name"
        raise ValueError(msg)
    return tool_name
