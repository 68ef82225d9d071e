"""Web search tool — Google Programmable Search (Custom Search JSON API)."""

from __future__ import annotations

import logging

import httpx
from pydantic import Field

from src.tools.base import BaseTool, ToolName, ToolParams, ToolResult

logger = logging.getLogger(__name__)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
MAX_RESULTS = 3

KEYS_MISSING = "Google Search API keys missing."
NO_RESULTS = "No results found."


class GoogleSearchParams(ToolParams):
    query: str = Field(description="Search query string")


def _format_results(items: list[dict]) -> str:
    """Render search hits as Title/Snippet/Link blocks."""
    blocks = [
        f"Title: {item.get('title', '')}\n"
        f"Snippet: {item.get('snippet', '')}\n"
        f"Link: {item.get('link', '')}"
        for item in items[:MAX_RESULTS]
    ]
    return "\n\n".join(blocks)


class GoogleSearchTool(BaseTool):
    name = ToolName.GOOGLE_SEARCH
    description = (
        "Search the web with Google for current events, facts or anything "
        "not in long-term memory. Returns up to three results with title, "
        "snippet and link."
    )
    params_model = GoogleSearchParams

    def __init__(self, api_key: str, engine_id: str, timeout: float = 20.0) -> None:
        self._api_key = api_key
        self._engine_id = engine_id
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._engine_id)

    async def execute(self, query: str) -> ToolResult:
        if not self.configured:
            logger.warning("google_search called without GOOGLE_SEARCH_API_KEY/ENGINE_ID")
            return ToolResult.text(KEYS_MISSING)

        params = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": query,
            "num": MAX_RESULTS,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(GOOGLE_SEARCH_URL, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Google Search request failed: %s", exc)
            return ToolResult.text(NO_RESULTS)

        if resp.status_code != 200:
            logger.warning(
                "Google Search API returned %d: %s", resp.status_code, resp.text[:200]
            )
            return ToolResult.text(NO_RESULTS)

        try:
            items = resp.json().get("items", [])
        except ValueError:
            logger.warning("Google Search API returned a non-JSON body: %s", resp.text[:200])
            return ToolResult.text(NO_RESULTS)
        if not items:
            return ToolResult.text(NO_RESULTS)

        return ToolResult.text(_format_results(items))
