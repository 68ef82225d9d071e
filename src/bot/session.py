"""In-memory conversation transcript for a single process run."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Append-only conversation history in Anthropic API message format.

    Holds user text, assistant content (including ``tool_use`` blocks) and
    ``tool_result`` batches, in order. Nothing is trimmed or persisted; the
    transcript lives as long as the process unless explicitly cleared.
    """

    messages: list[dict[str, Any]] = field(default_factory=list)

    def add_user_text(self, text: str) -> None:
        self.messages.append({"role": "user", "content": text})

    def add_assistant_text(self, text: str) -> None:
        self.messages.append({"role": "assistant", "content": text})

    def add_assistant_content(self, blocks: list[dict[str, Any]]) -> None:
        """Append an assistant turn made of content blocks (text + tool_use)."""
        self.messages.append({"role": "assistant", "content": blocks})

    def add_tool_results(self, results: list[dict[str, Any]]) -> None:
        """Append one batch of ``tool_result`` blocks as a user turn."""
        self.messages.append({"role": "user", "content": results})

    def clear(self) -> int:
        """Clear all messages. Returns the count of cleared messages."""
        count = len(self.messages)
        self.messages.clear()
        return count

    def to_api_messages(self) -> list[dict[str, Any]]:
        """Shallow copy of the transcript for an API request."""
        return list(self.messages)

    def __len__(self) -> int:
        return len(self.messages)
