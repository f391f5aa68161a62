"""Bing Web Search API client.

Bing Web Search API documentation:
https://learn.microsoft.com/en-us/bing/search-apis/bing-web-search/overview
"""

from typing import Any

import httpx

from linkedin_finder.discovery.providers.base import WebSearchProvider
from linkedin_finder.discovery.schemas import RawSearchHit


class BingSearchProvider(WebSearchProvider):
    """Client for the Bing Web Search API."""

    name = "bing"
    BASE_URL = "https://api.bing.microsoft.com/v7.0/search"

    async def _send(self, client: httpx.AsyncClient, query: str) -> httpx.Response:
        return await client.get(
            self.BASE_URL,
            params={"q": query, "count": 10},
            headers={"Ocp-Apim-Subscription-Key": self._api_key},
        )

    def _parse_hits(self, data: Any) -> list[RawSearchHit]:
        values = (data.get("webPages") or {}).get("value") or []
        return [self._hit(item, "name", "url", "snippet") for item in values]
