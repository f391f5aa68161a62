from abc import ABC, abstractmethod
from typing import Any

from linkedin_finder.discovery.schemas import CandidateResult, UserAction


class ISearchProvider(ABC):
    """Interface for a source of LinkedIn company candidates (Interface Segregation)."""

    name: str

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the provider has what it needs (e.g. an API key)."""
        pass

    @abstractmethod
    async def search(self, company_name: str) -> list[CandidateResult]:
        """Return scored candidates, best first. Raises SearchProviderError on failure."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        pass


class ISearchCache(ABC):
    """Interface for the discovery result cache."""

    @abstractmethod
    async def get(self, search_term: str) -> list[CandidateResult] | None:
        """Get unexpired results for a term (counts a hit). None on miss."""
        pass

    @abstractmethod
    async def put(self, search_term: str, results: list[CandidateResult]) -> None:
        """Store results for a term, replacing any previous entry."""
        pass


class IRateLimiter(ABC):
    """Interface for per-caller request limiting."""

    @property
    @abstractmethod
    def max_requests(self) -> int:
        """Requests allowed per window."""
        pass

    @abstractmethod
    async def check(self, caller_id: str) -> tuple[bool, int | None]:
        """Count a request. Returns (allowed, retry_after_seconds_if_blocked)."""
        pass


class ISearchMetrics(ABC):
    """Interface for the append-only usage metrics sink."""

    @abstractmethod
    async def record_search(
        self,
        search_term: str,
        results_count: int,
        caller_id: str | None = None,
        provider: str | None = None,
    ) -> None:
        """Record one non-cached search."""
        pass

    @abstractmethod
    async def record_selection(
        self,
        search_term: str,
        user_action: UserAction,
        selected_url: str | None = None,
        confidence: float | None = None,
        caller_id: str | None = None,
    ) -> None:
        """Record what the user did with a set of results."""
        pass

    @abstractmethod
    async def get_daily_analytics(self, days: int = 7) -> list[dict[str, Any]]:
        """Per-day usage summary, newest first."""
        pass
