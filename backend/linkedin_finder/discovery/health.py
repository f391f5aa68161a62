"""Health check for the discovery service."""

import logging
import time

from motor.motor_asyncio import AsyncIOMotorDatabase

from linkedin_finder.core.datetime_utils import utc_now
from linkedin_finder.discovery.providers.chain import ProviderChain
from linkedin_finder.discovery.schemas import HealthCheckResponse, HealthStatus

logger = logging.getLogger(__name__)


class DiscoveryHealthChecker:
    """Report whether discovery can answer with real search results.

    Checks:
    - database: MongoDB answers a ping
    - search_provider: at least one web-search provider has an API key

    All checks passing is healthy, at least half is degraded, else unhealthy.
    """

    def __init__(self, db: AsyncIOMotorDatabase, chain: ProviderChain) -> None:
        self._db = db
        self._chain = chain

    async def check(self) -> HealthCheckResponse:
        started = time.perf_counter()
        errors: list[str] = []

        database_ok = False
        try:
            await self._db.command("ping")
            database_ok = True
        except Exception as e:
            errors.append(f"Database check failed: {e}")

        providers = {provider.name: provider.is_configured() for provider in self._chain.providers}
        provider_ok = any(providers.values())
        if not provider_ok:
            errors.append("No search provider API key configured")

        checks = {"database": database_ok, "search_provider": provider_ok}

        passed = sum(checks.values())
        if passed == len(checks):
            status = HealthStatus.HEALTHY
        elif passed >= len(checks) * 0.5:
            status = HealthStatus.DEGRADED
        else:
            status = HealthStatus.UNHEALTHY

        if errors:
            logger.warning(f"Discovery health {status.value}: {'; '.join(errors)}")

        return HealthCheckResponse(
            status=status,
            timestamp=utc_now().isoformat(),
            checks=checks,
            providers=providers,
            response_time_ms=int((time.perf_counter() - started) * 1000),
            errors=errors or None,
        )
