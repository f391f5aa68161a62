"""Company discovery service - orchestrates rate limiting, caching and search."""

import logging

from linkedin_finder.core.interfaces import IRateLimiter, ISearchCache, ISearchMetrics
from linkedin_finder.discovery.cache import SearchCacheRepository
from linkedin_finder.discovery.exceptions import (
    InvalidCompanyNameError,
    ProviderNotConfiguredError,
    RateLimitExceededError,
)
from linkedin_finder.discovery.metrics import SearchMetricsRepository
from linkedin_finder.discovery.providers.chain import ProviderChain
from linkedin_finder.discovery.query import is_valid_company_name
from linkedin_finder.discovery.schemas import (
    AnalyticsResponse,
    CandidateResult,
    DailyAnalytics,
    DiscoverResponse,
    SelectionRequest,
)

logger = logging.getLogger(__name__)


class DiscoveryService:
    """LinkedIn company discovery (Dependency Inversion).

    One call to `discover` runs:
    validate -> rate limit -> cache -> providers -> cache write -> metric -> respond.
    Cache and metric writes are best effort and never fail the request.
    """

    def __init__(
        self,
        chain: ProviderChain,
        cache: ISearchCache,
        rate_limiter: IRateLimiter,
        metrics: ISearchMetrics,
        require_search_provider: bool = False,
    ) -> None:
        """Initialize the discovery service.

        Args:
            chain: Search providers in priority order, with the guess fallback
            cache: Result cache
            rate_limiter: Per-caller request limiter
            metrics: Usage metrics sink
            require_search_provider: Refuse to answer with guesses only when
                no provider has an API key
        """
        self._chain = chain
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._metrics = metrics
        self._require_search_provider = require_search_provider

    async def discover(
        self,
        company_name: object,
        caller_id: str | None = None,
        health_check: bool = False,
    ) -> DiscoverResponse:
        """Find LinkedIn company pages for a company name.

        Args:
            company_name: Company name as typed by the user
            caller_id: Rate-limit identity (client IP)
            health_check: Health probes skip rate limiting

        Returns:
            DiscoverResponse with results sorted by confidence

        Raises:
            InvalidCompanyNameError: missing or shorter than 2 characters
            RateLimitExceededError: caller over its hourly budget
            ProviderNotConfiguredError: no provider key and providers are required
        """
        if not is_valid_company_name(company_name):
            raise InvalidCompanyNameError()

        search_term = company_name.strip()

        if not health_check:
            allowed, retry_after = await self._rate_limiter.check(caller_id or "unknown")
            if not allowed:
                raise RateLimitExceededError(
                    limit=self._rate_limiter.max_requests,
                    retry_after=retry_after or 3600,
                )

        cached_results = await self._get_cached(search_term)
        if cached_results is not None:
            logger.info(f"Cache hit for '{search_term}' ({len(cached_results)} results)")
            return DiscoverResponse(results=cached_results, cached=True, search_term=search_term)

        if self._require_search_provider and not self._chain.has_configured_provider():
            raise ProviderNotConfiguredError("search")

        logger.info(f"Discovering LinkedIn company pages for '{search_term}'")
        results, provider = await self._chain.search(search_term)

        await self._cache_results(search_term, results)
        await self._record_metric(search_term, results, caller_id, provider)

        return DiscoverResponse(results=results, cached=False, search_term=search_term)

    async def _get_cached(self, search_term: str) -> list[CandidateResult] | None:
        try:
            return await self._cache.get(search_term)
        except Exception as e:
            logger.warning(f"Cache lookup failed for '{search_term}', searching instead: {e}")
            return None

    async def _cache_results(self, search_term: str, results: list[CandidateResult]) -> None:
        try:
            await self._cache.put(search_term, results)
        except Exception as e:
            logger.error(f"Failed to cache results for '{search_term}': {e}")

    async def _record_metric(
        self,
        search_term: str,
        results: list[CandidateResult],
        caller_id: str | None,
        provider: str,
    ) -> None:
        try:
            await self._metrics.record_search(
                search_term=search_term,
                results_count=len(results),
                caller_id=caller_id,
                provider=provider,
            )
        except Exception as e:
            logger.error(f"Failed to track search metric for '{search_term}': {e}")

    async def record_selection(self, request: SelectionRequest, caller_id: str | None = None) -> None:
        await self._metrics.record_selection(
            search_term=request.search_term.strip(),
            user_action=request.user_action,
            selected_url=request.selected_url,
            confidence=request.confidence,
            caller_id=caller_id,
        )


class DiscoveryAnalyticsService:
    """Read side of discovery usage: analytics and cache maintenance."""

    def __init__(
        self,
        cache: SearchCacheRepository,
        metrics: SearchMetricsRepository,
        cleanup_grace_days: int = 1,
    ) -> None:
        self._cache = cache
        self._metrics = metrics
        self._cleanup_grace_days = cleanup_grace_days

    async def get_analytics(self, days: int = 7) -> AnalyticsResponse:
        """Daily usage and cache hit rate over the last `days` days.

        The hit rate is the share of searches whose cache entry was reused at
        least once, as a percentage.
        """
        daily = await self._metrics.get_daily_analytics(days)
        total_searches = await self._metrics.count_searches(days)
        stats = await self._cache.get_stats(days)

        hit_rate = 0.0
        if total_searches:
            hit_rate = round(stats["repeat_hits"] / total_searches * 100, 2)

        return AnalyticsResponse(
            days=days,
            cache_hit_rate=hit_rate,
            cache_entries=stats["total_entries"],
            active_cache_entries=stats["active_entries"],
            daily=[DailyAnalytics(**day) for day in daily],
        )

    async def cleanup_cache(self) -> int:
        return await self._cache.cleanup_expired(grace_days=self._cleanup_grace_days)
