"""Discovery module dependencies (Dependency Injection)."""

from typing import Annotated

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from linkedin_finder.config import Settings, get_settings
from linkedin_finder.database import get_database
from linkedin_finder.discovery.cache import SearchCacheRepository
from linkedin_finder.discovery.health import DiscoveryHealthChecker
from linkedin_finder.discovery.metrics import SearchMetricsRepository
from linkedin_finder.discovery.providers import (
    BingSearchProvider,
    BraveSearchProvider,
    GuessGenerator,
    ProviderChain,
    SerperSearchProvider,
)
from linkedin_finder.discovery.rate_limiter import DiscoveryRateLimiter
from linkedin_finder.discovery.service import DiscoveryAnalyticsService, DiscoveryService


def build_provider_chain(settings: Settings) -> ProviderChain:
    """Providers in priority order: Brave, Serper, Bing, then guesses."""
    options = {
        "timeout": settings.search_timeout_seconds,
        "max_hits": settings.search_max_hits,
    }
    return ProviderChain(
        providers=[
            BraveSearchProvider(api_key=settings.brave_search_api_key, **options),
            SerperSearchProvider(api_key=settings.serper_api_key, **options),
            BingSearchProvider(api_key=settings.bing_search_api_key, **options),
        ],
        fallback=GuessGenerator(),
    )


# Singleton instance holder (keeps provider HTTP clients alive between requests)
_provider_chain: ProviderChain | None = None


def get_provider_chain() -> ProviderChain:
    """Get singleton provider chain."""
    global _provider_chain
    if _provider_chain is None:
        _provider_chain = build_provider_chain(get_settings())
    return _provider_chain


async def shutdown_provider_chain() -> None:
    """Close provider HTTP clients (for cleanup)."""
    global _provider_chain
    if _provider_chain is not None:
        await _provider_chain.close()
        _provider_chain = None


def get_caller_id(request: Request) -> str:
    """Identify the caller for rate limiting (client IP behind proxies)."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def get_search_cache(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
) -> SearchCacheRepository:
    """Get search cache repository."""
    return SearchCacheRepository(db, ttl_days=get_settings().cache_ttl_days)


def get_metrics_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
) -> SearchMetricsRepository:
    """Get metrics repository."""
    return SearchMetricsRepository(db)


def get_discovery_rate_limiter(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
) -> DiscoveryRateLimiter:
    """Get rate limiter."""
    settings = get_settings()
    return DiscoveryRateLimiter(
        db,
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


def get_discovery_service(
    cache: Annotated[SearchCacheRepository, Depends(get_search_cache)],
    metrics: Annotated[SearchMetricsRepository, Depends(get_metrics_repository)],
    rate_limiter: Annotated[DiscoveryRateLimiter, Depends(get_discovery_rate_limiter)],
    chain: Annotated[ProviderChain, Depends(get_provider_chain)],
) -> DiscoveryService:
    """Get discovery service."""
    return DiscoveryService(
        chain=chain,
        cache=cache,
        rate_limiter=rate_limiter,
        metrics=metrics,
        require_search_provider=get_settings().require_search_provider,
    )


def get_analytics_service(
    cache: Annotated[SearchCacheRepository, Depends(get_search_cache)],
    metrics: Annotated[SearchMetricsRepository, Depends(get_metrics_repository)],
) -> DiscoveryAnalyticsService:
    """Get analytics service."""
    return DiscoveryAnalyticsService(
        cache=cache,
        metrics=metrics,
        cleanup_grace_days=get_settings().cache_cleanup_grace_days,
    )


def get_health_checker(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
    chain: Annotated[ProviderChain, Depends(get_provider_chain)],
) -> DiscoveryHealthChecker:
    """Get health checker."""
    return DiscoveryHealthChecker(db, chain)
