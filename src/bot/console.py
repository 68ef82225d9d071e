"""Line-oriented console front end for the agent."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from src.llm.models import MODEL_MAP, friendly

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from src.llm.agent import Agent

logger = logging.getLogger(__name__)

PROMPT = "You: "
EXIT_COMMANDS = frozenset({"exit", "quit"})

HELP_TEXT = """\
Commands:
  /help           show this help
  /clear          forget the current conversation (long-term memory is kept)
  /model [name]   show or switch the chat model
  exit | quit     leave"""


async def _read_line() -> str:
    return await asyncio.to_thread(input, PROMPT)


def handle_clear(agent: Agent, args: list[str], write: Callable[[str], None]) -> None:
    """Handle /clear — reset conversation history."""
    count = agent.session.clear()
    write(f"Cleared {count} messages. Starting fresh.")


def handle_model(agent: Agent, args: list[str], write: Callable[[str], None]) -> None:
    """Handle /model — view or switch the chat model."""
    mm = agent.models
    if not args:
        write(f"Chat model: {friendly(mm.get_chat_model())} (options: {', '.join(MODEL_MAP)})")
        return

    name = args[0].lower()
    if not mm.set_chat_model(name):
        write(f"Unknown model '{name}'. Valid options: {', '.join(MODEL_MAP)}")
        return
    write(f"Chat model → {friendly(mm.get_chat_model())}")


def handle_help(agent: Agent, args: list[str], write: Callable[[str], None]) -> None:
    write(HELP_TEXT)


COMMANDS: dict[str, Callable[[Agent, list[str], Callable[[str], None]], None]] = {
    "/clear": handle_clear,
    "/model": handle_model,
    "/help": handle_help,
}


async def run_console(
    agent: Agent,
    *,
    read_line: Callable[[], Awaitable[str]] = _read_line,
    write: Callable[[str], None] = print,
) -> None:
    """Read lines until the user exits, answering each one with the agent.

    One input is processed to completion before the next line is read. A
    failed turn prints an ``Error:`` line and the loop carries on.
    """
    write("Mnemo is ready. Type /help for commands, 'exit' to quit.")

    async def on_tool_call(name: str, arguments: dict[str, Any]) -> None:
        write(f"🔧 Executing tool: {name}")

    while True:
        try:
            line = await read_line()
        except (EOFError, KeyboardInterrupt):
            write("")
            break

        text = line.strip()
        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break

        if text.startswith("/"):
            command, *args = text.split()
            handler = COMMANDS.get(command.lower())
            if handler is None:
                write(f"Unknown command: {command}. Type /help for a list of commands.")
            else:
                handler(agent, args, write)
            continue

        try:
            answer = await agent.process_input(text, on_tool_call=on_tool_call)
        except Exception as exc:
            logger.exception("Turn failed")
            write(f"Error: {exc}")
            continue

        write(f"Bot: {answer}")

    write("Goodbye!")
