"""Per-caller rate limiter for discovery requests.

Each caller (usually a client IP) gets a fixed budget of requests per hourly
window. The window opens with the caller's first request and closes an hour
later; the next request after that opens a fresh window. Opening and
counting are each a single atomic MongoDB update.

The limiter fails open: if MongoDB is unreachable the request goes through
and a warning is logged.
"""

import logging
from datetime import datetime, timedelta
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from linkedin_finder.core.datetime_utils import ensure_utc_aware, utc_now
from linkedin_finder.core.interfaces import IRateLimiter

logger = logging.getLogger(__name__)


class DiscoveryRateLimiter(IRateLimiter):
    """Rate limiter for company discovery, one window document per caller."""

    MAX_REQUESTS_PER_WINDOW = 20
    WINDOW_SECONDS = 3600

    COLLECTION = "linkedin_rate_limits"

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        max_requests: int = MAX_REQUESTS_PER_WINDOW,
        window_seconds: int = WINDOW_SECONDS,
    ) -> None:
        self._collection = db[self.COLLECTION]
        self._max_requests = max_requests
        self._window = timedelta(seconds=window_seconds)

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def retry_after_seconds(self) -> int:
        return int(self._window.total_seconds())

    async def check(self, caller_id: str) -> tuple[bool, int | None]:
        """Count a request for a caller.

        Returns:
            Tuple of (allowed, retry_after_seconds_if_blocked)
        """
        try:
            return await self._check(caller_id)
        except Exception as e:
            logger.warning(f"Rate limiting check failed for {caller_id}, allowing request: {e}")
            return True, None

    async def _check(self, caller_id: str) -> tuple[bool, int | None]:
        now = utc_now()
        window_floor = now - self._window

        # Open a fresh window if the previous one has elapsed
        await self._collection.update_one(
            {"_id": caller_id, "window_started": {"$lte": window_floor}},
            {"$set": {"count": 0, "window_started": now}},
        )

        data = await self._count_request(caller_id, now)
        count = data.get("count", 0) if data else 0

        if count > self._max_requests:
            logger.info(f"Rate limit reached for {caller_id}: {count}/{self._max_requests} this hour")
            return False, self.retry_after_seconds

        return True, None

    async def _count_request(self, caller_id: str, now: datetime) -> dict[str, Any] | None:
        """Atomically count a request, creating the caller's window if needed."""
        update = {
            "$inc": {"count": 1},
            "$set": {"last_request": now},
            "$setOnInsert": {"window_started": now},
        }
        try:
            return await self._collection.find_one_and_update(
                {"_id": caller_id}, update, upsert=True, return_document=True
            )
        except DuplicateKeyError:
            # A concurrent request created the window first
            return await self._collection.find_one_and_update(
                {"_id": caller_id}, update, return_document=True
            )

    async def get_status(self, caller_id: str) -> dict[str, Any]:
        """Get current rate limit status for a caller."""
        data = await self._collection.find_one({"_id": caller_id})
        now = utc_now()

        count = 0
        resets_in = 0
        window_started = ensure_utc_aware(data.get("window_started")) if data else None
        if window_started and now - window_started < self._window:
            count = min(data.get("count", 0), self._max_requests)
            resets_in = int((window_started + self._window - now).total_seconds())

        return {
            "caller_id": caller_id,
            "requests_this_window": count,
            "requests_remaining": max(0, self._max_requests - count),
            "window_resets_in_seconds": resets_in,
            "limit": self._max_requests,
        }
