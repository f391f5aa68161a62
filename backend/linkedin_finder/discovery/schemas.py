"""LinkedIn company discovery Pydantic schemas (request/response models)."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================

class CandidateSource(str, Enum):
    """Where a candidate URL came from."""
    SEARCH = "search"  # Verified web-search hit
    GUESS = "guess"  # Synthesized from the company name, never verified


class UserAction(str, Enum):
    """What the user did with a set of discovery results."""
    SELECTED = "selected"
    MANUAL_ENTRY = "manual_entry"
    SKIPPED = "skipped"


class HealthStatus(str, Enum):
    """Overall health of the discovery service."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


# =============================================================================
# Search models
# =============================================================================

class RawSearchHit(BaseModel):
    """A search hit normalized from any provider's response shape."""
    title: str = ""
    url: str = ""
    description: str = ""


class ExtractedHit(BaseModel):
    """Fields parsed out of a raw search hit."""
    company_name: str
    vanity_name: str
    description: str


class CandidateResult(BaseModel):
    """One discovered LinkedIn company page."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    company_name: str = Field(alias="companyName")
    vanity_name: str = Field(alias="vanityName")
    description: str = ""
    confidence: float = Field(ge=0.0, le=0.95)
    source: CandidateSource = CandidateSource.SEARCH


# =============================================================================
# API models
# =============================================================================

class DiscoverRequest(BaseModel):
    """Request to discover LinkedIn pages for a company name.

    `companyName` is left untyped so that a missing or non-string value is
    answered with a 400 by the service instead of a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    company_name: Any = Field(default=None, alias="companyName")
    health_check: bool = Field(default=False, alias="healthCheck")


class DiscoverResponse(BaseModel):
    """Successful discovery response."""

    model_config = ConfigDict(populate_by_name=True)

    results: list[CandidateResult]
    cached: bool
    search_term: str = Field(alias="searchTerm")


class DiscoverErrorResponse(BaseModel):
    """Error body returned for rejected or failed discoveries."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    search_term: str = Field(default="", alias="searchTerm")
    retry_after: int | None = Field(default=None, alias="retryAfter")


class SelectionRequest(BaseModel):
    """What the user picked after a discovery."""

    model_config = ConfigDict(populate_by_name=True)

    search_term: str = Field(alias="searchTerm", min_length=1)
    user_action: UserAction = Field(alias="userAction")
    selected_url: str | None = Field(default=None, alias="selectedUrl")
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class SelectionResponse(BaseModel):
    recorded: bool


class DailyAnalytics(BaseModel):
    """Discovery usage for one day."""
    date: str
    total_searches: int = 0
    successful_searches: int = 0
    avg_results_per_search: float = 0.0
    auto_selections: int = 0
    manual_entries: int = 0
    skipped_searches: int = 0


class AnalyticsResponse(BaseModel):
    days: int
    cache_hit_rate: float
    cache_entries: int
    active_cache_entries: int
    daily: list[DailyAnalytics]


class CacheCleanupResponse(BaseModel):
    deleted: int


class RateLimitStatusResponse(BaseModel):
    caller_id: str
    requests_this_window: int
    requests_remaining: int
    window_resets_in_seconds: int
    limit: int


class HealthCheckResponse(BaseModel):
    """Health report of the discovery service."""
    status: HealthStatus
    timestamp: str
    checks: dict[str, bool]
    providers: dict[str, bool]
    response_time_ms: int
    errors: list[str] | None = None


class ClientSettingsResponse(BaseModel):
    """Thresholds the UI uses to gate display and auto-selection."""
    confidence_threshold: float
    auto_select_threshold: float
    cache_ttl_days: int
    rate_limit_max_requests: int
