"""Tests that the server handles many simultaneous requests correctly.

Redirects and creations interleave on one event loop; click counts and
deduplication must hold regardless of ordering.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Concurrent access through the HTTP surface."""

    async def test_concurrent_health_requests(self, client):
        """Many concurrent GET /api/health requests all succeed."""
        concurrency = 50
        tasks = [client.get("/api/health") for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks)

        assert all(r.status_code == 200 for r in responses)

    async def test_concurrent_redirects_count_every_click(self, client, sample_urls):
        short_code = (await client.post("/api/shorten", json={"url": sample_urls[0]})).json()["short_code"]

        concurrency = 100
        tasks = [client.get(f"/{short_code}", follow_redirects=False) for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks)

        assert all(r.status_code == 302 for r in responses)
        stats = await client.get(f"/api/stats/{short_code}")
        assert stats.json()["click_count"] == concurrency

    async def test_concurrent_shorten_same_url(self, client):
        concurrency = 30
        tasks = [
            client.post("/api/shorten", json={"url": "https://example.com/popular"})
            for _ in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks)

        assert all(r.status_code == 200 for r in responses)
        codes = {r.json()["short_code"] for r in responses}
        assert len(codes) == 1

        stats = await client.get("/api/stats")
        assert stats.json()["total_urls"] == 1

    async def test_concurrent_shorten_distinct_urls(self, client):
        concurrency = 30
        urls = [f"https://example.com/page/{i}" for i in range(concurrency)]
        responses = await asyncio.gather(*[
            client.post("/api/shorten", json={"url": url}) for url in urls
        ])

        codes = [r.json()["short_code"] for r in responses]
        assert len(set(codes)) == concurrency

        for url, code in zip(urls, codes):
            stats = await client.get(f"/api/stats/{code}")
            assert stats.json()["original_url"] == url
