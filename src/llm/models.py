"""Chat model selection with friendly aliases."""

import logging

logger = logging.getLogger(__name__)

MODEL_MAP: dict[str, str] = {
    "haiku": "claude-haiku-4-5-20251001",
    "sonnet": "claude-sonnet-4-5-20250929",
    "opus": "claude-opus-4-1-20250805",
}

# Reverse lookup: full model string → friendly name
FRIENDLY_NAMES: dict[str, str] = {v: k for k, v in MODEL_MAP.items()}


def resolve(name_or_id: str) -> str | None:
    """Resolve a friendly name or full model ID. Returns full ID or None.

    Unknown strings that look like Claude model IDs pass through so newly
    released models work without a code change.
    """
    if name_or_id in MODEL_MAP:
        return MODEL_MAP[name_or_id]
    if name_or_id in FRIENDLY_NAMES or name_or_id.startswith("claude-"):
        return name_or_id
    return None


def friendly(model_id: str) -> str:
    """Return the friendly name for a model ID, or the ID itself."""
    return FRIENDLY_NAMES.get(model_id, model_id)


class ModelManager:
    """Tracks which model the agent chats with; switchable at runtime."""

    def __init__(self, default: str = "sonnet") -> None:
        self._chat_model = resolve(default) or MODEL_MAP["sonnet"]
        logger.info("Chat model: %s", friendly(self._chat_model))

    def get_chat_model(self) -> str:
        return self._chat_model

    def set_chat_model(self, name: str) -> str | None:
        """Set chat model by friendly name. Returns full ID or None if invalid."""
        model_id = resolve(name)
        if model_id:
            self._chat_model = model_id
            logger.info("Chat model → %s", friendly(model_id))
        return model_id
