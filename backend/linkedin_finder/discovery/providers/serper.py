"""Serper (Google Search) API client.

Serper documentation: https://serper.dev
"""

from typing import Any

import httpx

from linkedin_finder.discovery.providers.base import WebSearchProvider
from linkedin_finder.discovery.schemas import RawSearchHit


class SerperSearchProvider(WebSearchProvider):
    """Client for Google results through the Serper API."""

    name = "serper"
    BASE_URL = "https://google.serper.dev/search"
    NUM_RESULTS = 5

    async def _send(self, client: httpx.AsyncClient, query: str) -> httpx.Response:
        return await client.post(
            self.BASE_URL,
            json={"q": query, "num": self.NUM_RESULTS},
            headers={"X-API-KEY": self._api_key},
        )

    def _parse_hits(self, data: Any) -> list[RawSearchHit]:
        organic = data.get("organic") or []
        return [self._hit(item, "title", "link", "snippet") for item in organic]
