"""Tests for the discovery results cache."""

from datetime import timedelta

import pytest
import pytest_asyncio

from linkedin_finder.core.datetime_utils import utc_now
from linkedin_finder.discovery.cache import SearchCacheRepository
from linkedin_finder.discovery.schemas import CandidateResult, CandidateSource


@pytest_asyncio.fixture
async def cache(mock_db):
    """Provide a cache repository instance."""
    return SearchCacheRepository(mock_db, ttl_days=7)


def _results() -> list[CandidateResult]:
    return [
        CandidateResult(
            url="https://www.linkedin.com/company/microsoft/",
            company_name="Microsoft",
            vanity_name="microsoft",
            description="Technology company",
            confidence=0.95,
        ),
        CandidateResult(
            url="https://www.linkedin.com/company/microsoft-dev",
            company_name="Microsoft Dev",
            vanity_name="microsoft-dev",
            description="Suggested LinkedIn page for Microsoft",
            confidence=0.3,
            source=CandidateSource.GUESS,
        ),
    ]


class TestSearchCacheRepository:
    """Test the 7-day result cache."""

    async def test_miss_when_empty(self, cache):
        assert await cache.get("Microsoft") is None

    async def test_put_then_get_returns_same_results(self, cache):
        await cache.put("Microsoft", _results())

        cached = await cache.get("Microsoft")

        assert cached == _results()

    async def test_key_is_case_and_whitespace_insensitive(self, cache):
        await cache.put("  Microsoft ", _results())

        assert await cache.get("MICROSOFT") == _results()

    async def test_entry_stores_expiry_and_hit_count(self, cache):
        await cache.put("Microsoft", _results())

        entry = await cache.get_entry("microsoft")

        assert entry["search_term"] == "microsoft"
        assert entry["hit_count"] == 1
        assert entry["expires_at"] - entry["created_at"] == timedelta(days=7)
        assert entry["results"][0]["company_name"] == "Microsoft"

    async def test_hit_increments_hit_count(self, cache):
        await cache.put("Microsoft", _results())

        await cache.get("Microsoft")
        await cache.get("Microsoft")

        entry = await cache.get_entry("Microsoft")
        assert entry["hit_count"] == 3

    async def test_expired_entry_is_a_miss(self, cache, mock_db):
        await cache.put("Microsoft", _results())
        await mock_db[SearchCacheRepository.COLLECTION].update_one(
            {"_id": "microsoft"},
            {"$set": {"expires_at": utc_now() - timedelta(minutes=1)}},
        )

        assert await cache.get("Microsoft") is None

    async def test_put_overwrites_expired_entry(self, cache, mock_db):
        await cache.put("Microsoft", _results())
        await mock_db[SearchCacheRepository.COLLECTION].update_one(
            {"_id": "microsoft"},
            {"$set": {"expires_at": utc_now() - timedelta(days=1), "hit_count": 5}},
        )

        await cache.put("Microsoft", _results()[:1])

        assert await cache.get("Microsoft") == _results()[:1]
        assert await mock_db[SearchCacheRepository.COLLECTION].count_documents({}) == 1

    async def test_cleanup_removes_entries_past_grace_period(self, cache, mock_db):
        collection = mock_db[SearchCacheRepository.COLLECTION]
        await cache.put("Old Co", _results())
        await cache.put("Recently Expired", _results())
        await cache.put("Fresh", _results())
        await collection.update_one(
            {"_id": "old co"}, {"$set": {"expires_at": utc_now() - timedelta(days=3)}}
        )
        await collection.update_one(
            {"_id": "recently expired"},
            {"$set": {"expires_at": utc_now() - timedelta(hours=2)}},
        )

        deleted = await cache.cleanup_expired(grace_days=1)

        assert deleted == 1
        assert await cache.get_entry("Old Co") is None
        assert await cache.get_entry("Recently Expired") is not None
        assert await cache.get_entry("Fresh") is not None

    async def test_cleanup_with_nothing_expired(self, cache):
        await cache.put("Fresh", _results())

        assert await cache.cleanup_expired() == 0

    async def test_stats(self, cache, mock_db):
        await cache.put("Microsoft", _results())
        await cache.put("Stripe", _results())
        await cache.put("Gone", _results())
        await cache.get("Microsoft")
        await mock_db[SearchCacheRepository.COLLECTION].update_one(
            {"_id": "gone"}, {"$set": {"expires_at": utc_now() - timedelta(hours=1)}}
        )

        stats = await cache.get_stats(days=7)

        assert stats == {"total_entries": 3, "active_entries": 2, "repeat_hits": 1}


@pytest.mark.parametrize("ttl_days", [1, 30])
async def test_custom_ttl(mock_db, ttl_days):
    cache = SearchCacheRepository(mock_db, ttl_days=ttl_days)
    await cache.put("Acme", [])

    entry = await cache.get_entry("Acme")

    assert entry["expires_at"] - entry["created_at"] == timedelta(days=ttl_days)
