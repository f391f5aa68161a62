"""Discovery results cache repository."""

import logging
from datetime import timedelta
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from linkedin_finder.core.datetime_utils import ensure_utc_aware, utc_now
from linkedin_finder.core.interfaces import ISearchCache
from linkedin_finder.discovery.query import normalize_search_term
from linkedin_finder.discovery.schemas import CandidateResult

logger = logging.getLogger(__name__)


class SearchCacheRepository(ISearchCache):
    """MongoDB cache of discovery results, one document per search term.

    Entries expire `ttl_days` after they were written. Expired entries are
    ignored on read and overwritten by the next search; `cleanup_expired`
    removes them for good once the grace period has passed.
    """

    COLLECTION = "linkedin_search_cache"

    def __init__(self, db: AsyncIOMotorDatabase, ttl_days: int = 7) -> None:
        self._collection = db[self.COLLECTION]
        self._ttl = timedelta(days=ttl_days)

    async def get(self, search_term: str) -> list[CandidateResult] | None:
        key = normalize_search_term(search_term)
        doc = await self._collection.find_one({"_id": key})

        if not doc:
            return None

        expires_at = ensure_utc_aware(doc.get("expires_at"))
        if expires_at is None or utc_now() > expires_at:
            logger.debug(f"Cache expired for '{key}'")
            return None

        await self._collection.update_one({"_id": key}, {"$inc": {"hit_count": 1}})

        return [CandidateResult.model_validate(r) for r in doc.get("results", [])]

    async def put(self, search_term: str, results: list[CandidateResult]) -> None:
        key = normalize_search_term(search_term)
        now = utc_now()

        document = {
            "_id": key,
            "search_term": key,
            "results": [r.model_dump(mode="json") for r in results],
            "created_at": now,
            "expires_at": now + self._ttl,
            "hit_count": 1,
        }

        await self._collection.replace_one({"_id": key}, document, upsert=True)
        logger.debug(f"Cached {len(results)} results for '{key}'")

    async def get_entry(self, search_term: str) -> dict[str, Any] | None:
        """Raw cache document, expired or not."""
        return await self._collection.find_one({"_id": normalize_search_term(search_term)})

    async def cleanup_expired(self, grace_days: int = 1) -> int:
        """Remove entries expired for longer than the grace period.

        Returns:
            Count of deleted documents
        """
        cutoff = utc_now() - timedelta(days=grace_days)

        result = await self._collection.delete_many({"expires_at": {"$lt": cutoff}})

        if result.deleted_count > 0:
            logger.info(f"Cleaned up {result.deleted_count} expired cache entries")

        return result.deleted_count

    async def get_stats(self, days: int = 7) -> dict[str, int]:
        """Cache size and reuse over the last `days` days."""
        now = utc_now()
        since = now - timedelta(days=days)

        total = 0
        active = 0
        repeat_hits = 0

        async for doc in self._collection.find({}, {"results": 0}):
            total += 1
            expires_at = ensure_utc_aware(doc.get("expires_at"))
            created_at = ensure_utc_aware(doc.get("created_at"))
            if expires_at and expires_at >= now:
                active += 1
            if created_at and created_at >= since and doc.get("hit_count", 0) > 1:
                repeat_hits += 1

        return {
            "total_entries": total,
            "active_entries": active,
            "repeat_hits": repeat_hits,
        }
