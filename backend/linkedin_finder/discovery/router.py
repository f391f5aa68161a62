"""LinkedIn company discovery API router (Single Responsibility)."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from linkedin_finder.config import Settings, get_settings
from linkedin_finder.discovery.dependencies import (
    get_analytics_service,
    get_caller_id,
    get_discovery_rate_limiter,
    get_discovery_service,
    get_health_checker,
)
from linkedin_finder.discovery.exceptions import (
    InvalidCompanyNameError,
    RateLimitExceededError,
)
from linkedin_finder.discovery.health import DiscoveryHealthChecker
from linkedin_finder.discovery.rate_limiter import DiscoveryRateLimiter
from linkedin_finder.discovery.schemas import (
    AnalyticsResponse,
    CacheCleanupResponse,
    ClientSettingsResponse,
    DiscoverErrorResponse,
    DiscoverRequest,
    DiscoverResponse,
    HealthCheckResponse,
    HealthStatus,
    RateLimitStatusResponse,
    SelectionRequest,
    SelectionResponse,
)
from linkedin_finder.discovery.service import DiscoveryAnalyticsService, DiscoveryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/linkedin/discover", tags=["linkedin-discovery"])


def _error_response(
    status_code: int,
    message: str,
    search_term: str,
    retry_after: int | None = None,
) -> JSONResponse:
    body = DiscoverErrorResponse(error=message, search_term=search_term, retry_after=retry_after)
    headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=headers,
    )


def _parse_discover_request(body: Any) -> DiscoverRequest:
    """Read a discover body leniently; anything unusable becomes a missing name."""
    if not isinstance(body, dict):
        return DiscoverRequest()
    try:
        return DiscoverRequest.model_validate(body)
    except ValidationError:
        return DiscoverRequest(company_name=body.get("companyName"))


@router.post(
    "",
    response_model=DiscoverResponse,
    responses={
        400: {"model": DiscoverErrorResponse},
        429: {"model": DiscoverErrorResponse},
        500: {"model": DiscoverErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": DiscoverRequest.model_json_schema()}},
        }
    },
)
async def discover(
    caller_id: Annotated[str, Depends(get_caller_id)],
    service: Annotated[DiscoveryService, Depends(get_discovery_service)],
    body: Annotated[Any, Body()] = None,
) -> DiscoverResponse | JSONResponse:
    """
    Find LinkedIn company pages for a company name.

    **Body:**
    - `companyName`: Company name, at least 2 characters
    - `healthCheck`: Optional, skips rate limiting for monitoring probes

    **Returns:**
    - `results`: Candidates sorted by confidence (0.15-0.95)
    - `cached`: Whether the results came from the 7-day cache
    - `searchTerm`: The trimmed company name
    """
    request = _parse_discover_request(body)
    search_term = request.company_name.strip() if isinstance(request.company_name, str) else ""

    try:
        return await service.discover(
            request.company_name,
            caller_id=caller_id,
            health_check=request.health_check,
        )
    except InvalidCompanyNameError as e:
        return _error_response(status.HTTP_400_BAD_REQUEST, e.message, search_term)
    except RateLimitExceededError as e:
        return _error_response(
            status.HTTP_429_TOO_MANY_REQUESTS, e.message, search_term, retry_after=e.retry_after
        )
    except Exception as e:
        logger.error(f"LinkedIn discovery error for '{search_term}': {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "Internal server error", search_term
        )


@router.get("/health", response_model=HealthCheckResponse)
async def health(
    checker: Annotated[DiscoveryHealthChecker, Depends(get_health_checker)],
) -> JSONResponse:
    """Discovery health: 200 when healthy or degraded, 503 when unhealthy."""
    report = await checker.check()
    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE
        if report.status == HealthStatus.UNHEALTHY
        else status.HTTP_200_OK
    )
    return JSONResponse(
        status_code=status_code,
        content=report.model_dump(mode="json", exclude_none=True),
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )


@router.post("/selection", response_model=SelectionResponse, status_code=status.HTTP_201_CREATED)
async def record_selection(
    request: SelectionRequest,
    caller_id: Annotated[str, Depends(get_caller_id)],
    service: Annotated[DiscoveryService, Depends(get_discovery_service)],
) -> SelectionResponse:
    """Record whether the user picked a result, typed a URL or skipped."""
    await service.record_selection(request, caller_id=caller_id)
    return SelectionResponse(recorded=True)


@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(
    service: Annotated[DiscoveryAnalyticsService, Depends(get_analytics_service)],
    days: int = Query(7, ge=1, le=365),
) -> AnalyticsResponse:
    """Daily discovery usage and cache hit rate."""
    return await service.get_analytics(days)


@router.post("/cache/cleanup", response_model=CacheCleanupResponse)
async def cleanup_cache(
    service: Annotated[DiscoveryAnalyticsService, Depends(get_analytics_service)],
) -> CacheCleanupResponse:
    """Delete cache entries that expired more than a day ago."""
    deleted = await service.cleanup_cache()
    return CacheCleanupResponse(deleted=deleted)


@router.get("/rate-limit", response_model=RateLimitStatusResponse)
async def rate_limit_status(
    caller_id: Annotated[str, Depends(get_caller_id)],
    rate_limiter: Annotated[DiscoveryRateLimiter, Depends(get_discovery_rate_limiter)],
) -> RateLimitStatusResponse:
    """How many discovery requests the caller has left this hour."""
    return RateLimitStatusResponse(**await rate_limiter.get_status(caller_id))


@router.get("/settings", response_model=ClientSettingsResponse)
def client_settings(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ClientSettingsResponse:
    """Confidence thresholds for displaying and auto-selecting results."""
    return ClientSettingsResponse(
        confidence_threshold=settings.confidence_threshold,
        auto_select_threshold=settings.auto_select_threshold,
        cache_ttl_days=settings.cache_ttl_days,
        rate_limit_max_requests=settings.rate_limit_max_requests,
    )
