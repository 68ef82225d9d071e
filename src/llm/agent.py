"""Agent turn loop — Claude Messages API with tool calling."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from src.bot.session import Session
from src.llm.models import ModelManager
from src.llm.prompt import build_system_prompt

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import anthropic

    from src.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

# Stands in for an empty final reply; assistant turns must not be empty.
EMPTY_REPLY = "(no response)"


class ModelTimeoutError(Exception):
    """The model did not answer within the configured timeout."""


class ToolLoopExceededError(Exception):
    """The model kept requesting tools past the round limit."""


def _serialize_content(content: list[Any]) -> list[dict[str, Any]]:
    """Convert SDK content blocks to plain dicts for message history."""
    result: list[dict[str, Any]] = []
    for block in content:
        if block.type == "text":
            result.append({"type": "text", "text": block.text})
        elif block.type == "tool_use":
            result.append({
                "type": "tool_use",
                "id": block.id,
                "name": block.name,
                "input": block.input,
            })
    return result


def _text_of(content: list[Any]) -> str:
    return "".join(block.text for block in content if block.type == "text")


class Agent:
    """Drives one user input to a final answer.

    Each call to :meth:`process_input` sends the transcript to the model.
    If the model answers with text only, that text is the answer. If it
    requests tools, every requested tool runs (concurrently), the whole
    batch of results goes back in a single message, and the model is asked
    again, up to ``max_tool_rounds`` times.

    The session is never rolled back: if a turn fails, whatever was
    appended before the failure stays in the transcript. A tool batch is
    appended only once all its results are in, so a ``tool_use`` turn
    never lacks its ``tool_result`` turn.
    """

    def __init__(
        self,
        client: anthropic.AsyncAnthropic,
        registry: ToolRegistry,
        *,
        session: Session | None = None,
        models: ModelManager | None = None,
        max_tool_rounds: int = 5,
        max_tokens: int = 1024,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._registry = registry
        self._session = session if session is not None else Session()
        self._models = models or ModelManager()
        self._max_tool_rounds = max_tool_rounds
        self._max_tokens = max_tokens
        self._timeout = timeout

    @property
    def session(self) -> Session:
        return self._session

    @property
    def models(self) -> ModelManager:
        return self._models

    async def process_input(
        self,
        user_text: str,
        on_tool_call: Callable[[str, dict[str, Any]], Awaitable[None]] | None = None,
    ) -> str:
        """Run a full turn for *user_text* and return the final answer.

        Args:
            user_text: The user's message.
            on_tool_call: Async callback invoked with the tool name and
                arguments just before each tool executes.

        Raises:
            ModelTimeoutError: A model call exceeded the timeout.
            ToolLoopExceededError: The model was still requesting tools
                after ``max_tool_rounds`` rounds.
            anthropic.APIError: The model API failed.
        """
        self._session.add_user_text(user_text)

        tool_schemas = self._registry.get_schemas()
        system_prompt = build_system_prompt(self._registry.tool_names)

        rounds = 0
        while True:
            response = await self._call_model(system_prompt, tool_schemas)
            tool_use_blocks = [b for b in response.content if b.type == "tool_use"]

            if not tool_use_blocks:
                text = _text_of(response.content) or EMPTY_REPLY
                self._session.add_assistant_text(text)
                return text

            if rounds >= self._max_tool_rounds:
                logger.warning("Hit max tool rounds (%d)", self._max_tool_rounds)
                msg = f"Tool loop exceeded: still calling tools after {rounds} round(s)"
                raise ToolLoopExceededError(msg)
            rounds += 1

            logger.info(
                "Round %d: %d tool call(s): %s",
                rounds,
                len(tool_use_blocks),
                ", ".join(b.name for b in tool_use_blocks),
            )

            tool_results = await asyncio.gather(
                *(self._run_tool(block, on_tool_call) for block in tool_use_blocks)
            )
            # tool_use and its tool_result batch go in together
            self._session.add_assistant_content(_serialize_content(response.content))
            self._session.add_tool_results(list(tool_results))

    async def _call_model(
        self,
        system_prompt: list[dict[str, Any]],
        tool_schemas: list[dict[str, Any]],
    ) -> Any:
        kwargs: dict[str, Any] = {
            "model": self._models.get_chat_model(),
            "max_tokens": self._max_tokens,
            "system": system_prompt,
            "messages": self._session.to_api_messages(),
        }
        if tool_schemas:
            kwargs["tools"] = tool_schemas

        try:
            async with asyncio.timeout(self._timeout):
                return await self._client.messages.create(**kwargs)
        except TimeoutError as exc:
            msg = f"Model did not respond within {self._timeout:g}s"
            raise ModelTimeoutError(msg) from exc

    async def _run_tool(
        self,
        block: Any,
        on_tool_call: Callable[[str, dict[str, Any]], Awaitable[None]] | None,
    ) -> dict[str, Any]:
        arguments = block.input or {}
        if on_tool_call:
            await on_tool_call(block.name, arguments)

        result = await self._registry.execute(block.name, arguments)
        return {
            "type": "tool_result",
            "tool_use_id": block.id,
            "content": result.to_content(),
            "is_error": not result.success,
        }
