"""Tests for discovery usage metrics."""

from datetime import timedelta

import pytest_asyncio

from linkedin_finder.core.datetime_utils import utc_now
from linkedin_finder.discovery.metrics import SearchMetricsRepository
from linkedin_finder.discovery.schemas import UserAction


@pytest_asyncio.fixture
async def metrics(mock_db):
    """Provide a metrics repository instance."""
    return SearchMetricsRepository(mock_db)


class TestSearchMetricsRepository:
    """Test search and selection metrics."""

    async def test_record_search(self, metrics, mock_db):
        await metrics.record_search("Microsoft", 2, caller_id="203.0.113.7", provider="brave")

        doc = await mock_db[SearchMetricsRepository.COLLECTION].find_one({})
        assert doc["search_term"] == "Microsoft"
        assert doc["results_count"] == 2
        assert doc["caller_id"] == "203.0.113.7"
        assert doc["provider"] == "brave"
        assert "created_at" in doc

    async def test_record_selection(self, metrics, mock_db):
        await metrics.record_selection(
            "Microsoft",
            UserAction.SELECTED,
            selected_url="https://www.linkedin.com/company/microsoft/",
            confidence=0.95,
        )

        doc = await mock_db[SearchMetricsRepository.COLLECTION].find_one({})
        assert doc["user_action"] == "selected"
        assert doc["selected_url"] == "https://www.linkedin.com/company/microsoft/"
        assert doc["selection_confidence"] == 0.95
        assert "results_count" not in doc

    async def test_count_searches_ignores_selections_and_old_entries(self, metrics, mock_db):
        await metrics.record_search("Microsoft", 2)
        await metrics.record_search("Stripe", 0)
        await metrics.record_selection("Microsoft", UserAction.SKIPPED)
        await mock_db[SearchMetricsRepository.COLLECTION].insert_one({
            "search_term": "Ancient",
            "results_count": 1,
            "created_at": utc_now() - timedelta(days=30),
        })

        assert await metrics.count_searches(days=7) == 2

    async def test_daily_analytics(self, metrics):
        await metrics.record_search("Microsoft", 3)
        await metrics.record_search("Stripe", 2)
        await metrics.record_search("Nothing Co", 0)
        await metrics.record_selection("Microsoft", UserAction.SELECTED)
        await metrics.record_selection("Stripe", UserAction.MANUAL_ENTRY)
        await metrics.record_selection("Nothing Co", UserAction.SKIPPED)

        daily = await metrics.get_daily_analytics(days=7)

        assert len(daily) == 1
        today = daily[0]
        assert today["date"] == utc_now().date().isoformat()
        assert today["total_searches"] == 3
        assert today["successful_searches"] == 2
        assert today["avg_results_per_search"] == 1.67
        assert today["auto_selections"] == 1
        assert today["manual_entries"] == 1
        assert today["skipped_searches"] == 1

    async def test_daily_analytics_newest_first(self, metrics, mock_db):
        await metrics.record_search("Today", 1)
        await mock_db[SearchMetricsRepository.COLLECTION].insert_one({
            "search_term": "Yesterday",
            "results_count": 1,
            "created_at": utc_now() - timedelta(days=1),
        })

        daily = await metrics.get_daily_analytics(days=7)

        assert [d["date"] for d in daily] == sorted((d["date"] for d in daily), reverse=True)
        assert len(daily) == 2

    async def test_daily_analytics_empty(self, metrics):
        assert await metrics.get_daily_analytics() == []
