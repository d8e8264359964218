"""Port for the Easynews web search."""

from __future__ import annotations

from typing import Protocol

from easystream.domain.entities.stremio import SearchQuery


class SearchClientPort(Protocol):
    """Async interface returning the raw HTML of one search result page."""

    async def search(self, query: SearchQuery) -> str: ...
