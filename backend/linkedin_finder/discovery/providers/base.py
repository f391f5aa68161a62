"""Common plumbing for web-search API clients."""

import logging
from abc import abstractmethod
from typing import Any

import httpx

from linkedin_finder.core.interfaces import ISearchProvider
from linkedin_finder.discovery.exceptions import (
    ProviderAuthError,
    ProviderNotConfiguredError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTimeoutError,
)
from linkedin_finder.discovery.query import build_search_query
from linkedin_finder.discovery.schemas import CandidateResult, RawSearchHit
from linkedin_finder.discovery.scoring import score_hits

logger = logging.getLogger(__name__)


class WebSearchProvider(ISearchProvider):
    """Base client for a search API that can be scoped to linkedin.com/company.

    Subclasses only know how to send the query and where the hits live in the
    response; error mapping, hit truncation and scoring are shared.
    """

    name = "web"

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        max_hits: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: Provider API key (empty = not configured)
            timeout: Per-request timeout in seconds
            max_hits: How many top hits to consider
            transport: Optional httpx transport (tests)
        """
        self._api_key = api_key
        self._timeout = timeout
        self._max_hits = max_hits
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={
                    "Accept": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def search(self, company_name: str) -> list[CandidateResult]:
        """Search LinkedIn company pages for a company name.

        Raises:
            SearchProviderError: on missing key, auth/rate-limit rejections,
                timeouts and malformed responses
        """
        if not self.is_configured():
            raise ProviderNotConfiguredError(self.name)

        query = build_search_query(company_name)
        client = await self._get_client()

        try:
            response = await self._send(client, query)
        except httpx.TimeoutException:
            raise ProviderTimeoutError(self.name, self._timeout)
        except httpx.HTTPError as e:
            raise ProviderResponseError(self.name, f"request failed: {e}")

        self._raise_for_status(response)

        try:
            data = response.json()
            hits = self._parse_hits(data)
        except (ValueError, TypeError, AttributeError) as e:
            raise ProviderResponseError(self.name, f"malformed response: {e}")

        logger.info(f"{self.name} returned {len(hits)} hits for '{company_name}'")

        return score_hits(hits[: self._max_hits], company_name)

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code in (401, 403):
            raise ProviderAuthError(self.name, response.status_code)
        if response.status_code == 429:
            raise ProviderRateLimitError(self.name)
        if not response.is_success:
            raise ProviderResponseError(
                self.name, f"HTTP {response.status_code} {response.reason_phrase}"
            )

    @staticmethod
    def _hit(item: dict[str, Any], title_key: str, url_key: str, description_key: str) -> RawSearchHit:
        return RawSearchHit(
            title=item.get(title_key) or "",
            url=item.get(url_key) or "",
            description=item.get(description_key) or "",
        )

    @abstractmethod
    async def _send(self, client: httpx.AsyncClient, query: str) -> httpx.Response:
        """Issue the search request."""
        pass

    @abstractmethod
    def _parse_hits(self, data: Any) -> list[RawSearchHit]:
        """Pull ranked hits out of the decoded JSON body."""
        pass
