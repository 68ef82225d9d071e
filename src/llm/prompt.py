"""System prompt assembly."""

from datetime import UTC, datetime

PERSONA = """\
You are Mnemo, a helpful assistant with a long-term memory.

Be concise and friendly. Answer from your own knowledge when you can, and
reach for a tool when it genuinely helps."""

TOOL_GUIDANCE = {
    "save_memory": (
        "When the user shares a lasting fact, preference or detail about "
        "themselves, or asks you to remember something, call `save_memory` "
        "with a short standalone statement (e.g. \"I like pizza\")."
    ),
    "search_knowledge_base": (
        "When a question depends on something the user told you before, call "
        "`search_knowledge_base` first. Phrase the query by topic "
        "(e.g. \"food preference\") rather than repeating the question."
    ),
    "google_search": (
        "Use `google_search` for current events or facts you are unsure of, "
        "and cite the links you relied on."
    ),
}


def build_system_prompt(tool_names: list[str] | None = None) -> list[dict]:
    """Assemble the system prompt as content blocks.

    The static persona and tool guidance get ``cache_control`` so they are
    cached across tool-calling rounds. The current time is a separate,
    uncached block.
    """
    sections = [PERSONA]

    guidance = [TOOL_GUIDANCE[name] for name in tool_names or [] if name in TOOL_GUIDANCE]
    if guidance:
        sections.append("# Tool Usage\n\n" + "\n\n".join(f"- {g}" for g in guidance))

    now = datetime.now(UTC)
    time_text = f"Current time: {now.strftime('%A, %B %d, %Y %H:%M')} UTC"

    return [
        {
            "type": "text",
            "text": "\n\n---\n\n".join(sections),
            "cache_control": {"type": "ephemeral"},
        },
        {
            "type": "text",
            "text": time_text,
        },
    ]
