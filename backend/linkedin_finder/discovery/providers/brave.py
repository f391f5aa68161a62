"""Brave Search API client.

Brave Web Search API documentation:
https://api-dashboard.search.brave.com/app/documentation/web-search
"""

from typing import Any

import httpx

from linkedin_finder.discovery.providers.base import WebSearchProvider
from linkedin_finder.discovery.schemas import RawSearchHit


class BraveSearchProvider(WebSearchProvider):
    """Client for the Brave Web Search API."""

    name = "brave"
    BASE_URL = "https://api.search.brave.com/res/v1/web/search"

    async def _send(self, client: httpx.AsyncClient, query: str) -> httpx.Response:
        return await client.get(
            self.BASE_URL,
            params={"q": query},
            headers={"X-Subscription-Token": self._api_key},
        )

    def _parse_hits(self, data: Any) -> list[RawSearchHit]:
        results = (data.get("web") or {}).get("results") or []
        return [self._hit(item, "title", "url", "description") for item in results]
