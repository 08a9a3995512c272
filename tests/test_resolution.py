"""Tests for short code resolution and click accounting."""

import pytest
from dataclasses import replace
from datetime import timedelta

from shortener.database.memory import InMemoryURLStore
from shortener.database.models import Resolved, Expired, NotFound, UrlRecord
from shortener.service import URLShortenerService


@pytest.mark.asyncio
class TestResolution:
    """Test resolving short codes through the service."""

    async def test_round_trip(self, service, sample_urls):
        code = await service.create_short_url(sample_urls[0])

        result = await service.resolve(code)

        assert isinstance(result, Resolved)
        assert result.original_url == sample_urls[0]

    async def test_resolve_counts_clicks(self, service, sample_urls):
        code = await service.create_short_url(sample_urls[0])

        for _ in range(3):
            await service.resolve(code)

        stats = await service.get_stats(code)
        assert stats.click_count == 3

    async def test_resolved_snapshot_is_pre_increment(self, service, sample_urls):
        code = await service.create_short_url(sample_urls[0])

        result = await service.resolve(code)

        assert result.record.click_count == 0

    async def test_unknown_code(self, service):
        result = await service.resolve("nothere")

        assert result == NotFound("nothere")

    async def test_valid_just_before_expiry(self, service, clock):
        expires_at = clock.now + timedelta(hours=1)
        code = await service.create_short_url("https://example.com/sale", expires_at)

        clock.advance(hours=1, microseconds=-1)
        result = await service.resolve(code)

        assert isinstance(result, Resolved)

    async def test_expired_at_boundary(self, service, clock):
        expires_at = clock.now + timedelta(hours=1)
        code = await service.create_short_url("https://example.com/sale", expires_at)

        clock.advance(hours=1)
        result = await service.resolve(code)

        assert result == Expired(code, expires_at)

    async def test_expired_does_not_count(self, service, clock):
        code = await service.create_short_url("https://example.com/old", clock.now - timedelta(days=1))

        for _ in range(5):
            assert isinstance(await service.resolve(code), Expired)

        stats = await service.get_stats(code)
        assert stats.click_count == 0

    async def test_stats_for_expired_record(self, service, clock):
        expires_at = clock.now - timedelta(minutes=5)
        code = await service.create_short_url("https://example.com/gone", expires_at)

        stats = await service.get_stats(code)

        assert isinstance(stats, UrlRecord)
        assert stats.expires_at == expires_at
        assert stats.original_url == "https://example.com/gone"

    async def test_stats_unknown(self, service):
        assert isinstance(await service.get_stats("nothere"), NotFound)

    async def test_url_exists(self, service, clock):
        code = await service.create_short_url("https://example.com/x", clock.now - timedelta(days=1))

        assert await service.url_exists(code)
        assert not await service.url_exists("nothere")

    async def test_naive_expiry_is_utc(self, service, clock):
        naive = (clock.now + timedelta(hours=2)).replace(tzinfo=None)
        code = await service.create_short_url("https://example.com/naive", naive)

        stats = await service.get_stats(code)

        assert stats.expires_at == clock.now + timedelta(hours=2)
        assert stats.expires_at.tzinfo is not None

    async def test_statistics(self, service, sample_urls):
        codes = [await service.create_short_url(url) for url in sample_urls]
        await service.resolve(codes[0])
        await service.resolve(codes[0])
        await service.resolve(codes[1])

        stats = await service.get_statistics()

        assert stats == {"total_urls": 3, "total_clicks": 3, "database": "memory"}

    async def test_list_urls(self, service, sample_urls):
        for url in sample_urls:
            await service.create_short_url(url)

        urls = await service.list_urls(limit=2)

        assert len(urls) == 2
        assert set(urls[0]) == {"short_code", "original_url"}

    async def test_health(self, service):
        assert await service.health_check() == {"database": True, "overall": True}


@pytest.mark.asyncio
class TestScenarios:
    """End-to-end flows through the service."""

    async def test_create_resolve_and_reuse(self, service):
        code = await service.create_short_url("https://example.com")

        assert (await service.resolve(code)).original_url == "https://example.com"
        assert await service.create_short_url("  https://example.com  ") == code

        stats = await service.get_stats(code)
        assert stats.click_count == 1

    async def test_one_second_in_the_past(self, service, clock):
        expires_at = clock.now - timedelta(seconds=1)
        code = await service.create_short_url("https://example.com/flash", expires_at)

        result = await service.resolve(code)

        assert isinstance(result, Expired)
        assert result.expires_at == expires_at
        assert (await service.get_stats(code)).click_count == 0


class StaleReadStore(InMemoryURLStore):
    """Store whose first read misses the record's expiration, like a lagging replica."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.stale_reads = 1

    async def get_by_short_code(self, short_code):
        record = await super().get_by_short_code(short_code)
        if record and self.stale_reads:
            self.stale_reads -= 1
            return replace(record, expires_at=None)
        return record


@pytest.mark.asyncio
class TestConditionalIncrement:
    """The click is counted only if the record is live when the store updates it."""

    async def test_store_refuses_expired_increment(self, test_db, clock):
        record = UrlRecord(
            "abc1234", "https://example.com/x",
            created_at=clock.now, expires_at=clock.now + timedelta(seconds=1),
        )
        await test_db.insert(record)

        assert await test_db.increment_click_count("abc1234", clock.now)
        assert not await test_db.increment_click_count("abc1234", record.expires_at)
        assert not await test_db.increment_click_count("nothere", clock.now)
        assert (await test_db.get_by_short_code("abc1234")).click_count == 1

    async def test_expired_between_check_and_update(self, logger, clock):
        store = StaleReadStore(logger=logger)
        service = URLShortenerService(db=store, logger=logger, clock=clock)
        expires_at = clock.now - timedelta(seconds=1)
        code = await service.create_short_url("https://example.com/late", expires_at)

        result = await service.resolve(code)

        assert result == Expired(code, expires_at)
        assert (await service.get_stats(code)).click_count == 0
