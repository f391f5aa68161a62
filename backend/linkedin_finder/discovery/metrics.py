"""Discovery usage metrics repository."""

import logging
from collections import defaultdict
from datetime import timedelta
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from linkedin_finder.core.datetime_utils import ensure_utc_aware, utc_now
from linkedin_finder.core.interfaces import ISearchMetrics
from linkedin_finder.discovery.schemas import UserAction

logger = logging.getLogger(__name__)


class SearchMetricsRepository(ISearchMetrics):
    """Append-only MongoDB log of searches and user selections.

    The discovery pipeline only writes here; the analytics readers are for
    the admin endpoints.
    """

    COLLECTION = "linkedin_search_metrics"

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._collection = db[self.COLLECTION]

    async def record_search(
        self,
        search_term: str,
        results_count: int,
        caller_id: str | None = None,
        provider: str | None = None,
    ) -> None:
        await self._collection.insert_one({
            "search_term": search_term,
            "results_count": results_count,
            "caller_id": caller_id,
            "provider": provider,
            "created_at": utc_now(),
        })

    async def record_selection(
        self,
        search_term: str,
        user_action: UserAction,
        selected_url: str | None = None,
        confidence: float | None = None,
        caller_id: str | None = None,
    ) -> None:
        await self._collection.insert_one({
            "search_term": search_term,
            "user_action": user_action.value,
            "selected_url": selected_url,
            "selection_confidence": confidence,
            "caller_id": caller_id,
            "created_at": utc_now(),
        })
        logger.info(f"Recorded '{user_action.value}' for '{search_term}'")

    async def count_searches(self, days: int = 7) -> int:
        """Number of non-cached searches over the last `days` days."""
        since = utc_now() - timedelta(days=days)
        return await self._collection.count_documents({
            "results_count": {"$exists": True},
            "created_at": {"$gte": since},
        })

    async def get_daily_analytics(self, days: int = 7) -> list[dict[str, Any]]:
        """Per-day usage summary, newest first."""
        since = utc_now() - timedelta(days=days)

        days_data: dict[str, dict[str, Any]] = defaultdict(lambda: {
            "total_searches": 0,
            "successful_searches": 0,
            "results_total": 0,
            "auto_selections": 0,
            "manual_entries": 0,
            "skipped_searches": 0,
        })

        async for doc in self._collection.find({"created_at": {"$gte": since}}):
            created_at = ensure_utc_aware(doc.get("created_at"))
            if created_at is None:
                continue
            day = days_data[created_at.date().isoformat()]

            if "results_count" in doc:
                day["total_searches"] += 1
                day["results_total"] += doc.get("results_count") or 0
                if (doc.get("results_count") or 0) > 0:
                    day["successful_searches"] += 1

            action = doc.get("user_action")
            if action == UserAction.SELECTED.value:
                day["auto_selections"] += 1
            elif action == UserAction.MANUAL_ENTRY.value:
                day["manual_entries"] += 1
            elif action == UserAction.SKIPPED.value:
                day["skipped_searches"] += 1

        summaries = []
        for date in sorted(days_data, reverse=True):
            day = days_data[date]
            total = day["total_searches"]
            summaries.append({
                "date": date,
                "total_searches": total,
                "successful_searches": day["successful_searches"],
                "avg_results_per_search": round(day["results_total"] / total, 2) if total else 0.0,
                "auto_selections": day["auto_selections"],
                "manual_entries": day["manual_entries"],
                "skipped_searches": day["skipped_searches"],
            })

        return summaries
