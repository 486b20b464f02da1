"""Tests that concurrent creates and visits never lose or duplicate work.

The app is async (FastAPI + asyncpg pool / redis.asyncio). These tests fire
many requests at once and check exactly-once visit recording and ID
uniqueness.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from shortlink.errors import NotFound
from shortlink.service import RedirectService
from shortlink.store.base import InsertResult
from shortlink.store.memory import MemoryIdentifierStore
from shortlink.store.models import ShortLinkRecord


@pytest.mark.asyncio
class TestConcurrentService:
    """Concurrency guarantees at the service layer."""

    @pytest.mark.parametrize("k", [0, 1, 10, 100])
    async def test_concurrent_resolves_counted_exactly(self, service, k):
        """k concurrent visits to one ID append exactly k events."""
        short_id = await service.create("https://example.com/hot")

        results = await asyncio.gather(*(service.resolve(short_id) for _ in range(k)))

        assert results == ["https://example.com/hot"] * k
        analytics = await service.get_analytics(short_id)
        assert analytics.total_clicks == k
        assert len(analytics.analytics) == k
        timestamps = [event.timestamp for event in analytics.analytics]
        assert timestamps == sorted(timestamps)

    async def test_concurrent_creates_unique(self, service, store):
        """Concurrent creates all succeed with distinct IDs."""
        urls = [f"https://example.com/page_{i}" for i in range(200)]

        ids = await asyncio.gather(*(service.create(url) for url in urls))

        assert len(set(ids)) == len(urls)
        for short_id, url in zip(ids, urls):
            assert (await store.find_by_id(short_id)).redirect_url == url

    async def test_concurrent_visits_to_different_ids(self, service):
        ids = [await service.create(f"https://example.com/{i}") for i in range(5)]

        await asyncio.gather(*(service.resolve(short_id) for short_id in ids for _ in range(20)))

        for short_id in ids:
            assert (await service.get_analytics(short_id)).total_clicks == 20


@pytest.mark.asyncio
class TestConcurrentRedisService:
    """The same guarantees with the Redis store and its Lua scripts."""

    @pytest.fixture
    def redis_service(self, fake_redis_store, id_generator, logger):
        return RedirectService(store=fake_redis_store, id_generator=id_generator, logger=logger)

    @pytest.mark.parametrize("k", [1, 10, 100])
    async def test_concurrent_resolves_counted_exactly(self, redis_service, k):
        short_id = await redis_service.create("https://example.com/hot")

        results = await asyncio.gather(*(redis_service.resolve(short_id) for _ in range(k)))

        assert results == ["https://example.com/hot"] * k
        analytics = await redis_service.get_analytics(short_id)
        assert analytics.total_clicks == k
        assert len(analytics.analytics) == k

    async def test_concurrent_duplicate_inserts_one_winner(self, fake_redis_store):
        records = [
            ShortLinkRecord("abcdefgh", f"https://example.com/{i}", datetime.now(timezone.utc))
            for i in range(20)
        ]

        results = await asyncio.gather(*(fake_redis_store.insert(record) for record in records))

        assert results.count(InsertResult.CREATED) == 1
        assert results.count(InsertResult.DUPLICATE_KEY) == 19
        winner = records[results.index(InsertResult.CREATED)]
        assert (await fake_redis_store.find_by_id("abcdefgh")).redirect_url == winner.redirect_url

    async def test_concurrent_resolves_of_unknown_id_create_nothing(self, redis_service, fake_redis_store):
        outcomes = await asyncio.gather(
            *(redis_service.resolve("zzzzzzzz") for _ in range(10)), return_exceptions=True
        )

        assert all(isinstance(outcome, NotFound) for outcome in outcomes)
        assert await fake_redis_store.find_by_id("zzzzzzzz") is None
        assert await fake_redis_store.client.exists("shortlink:link:zzzzzzzz:visits") == 0


@pytest.mark.asyncio
class TestConcurrentStore:
    """Store-level atomicity under interleaved appends."""

    async def test_interleaved_appends_not_lost(self, logger):
        store = MemoryIdentifierStore(logger=logger)
        await store.insert(ShortLinkRecord("abcdefgh", "https://example.com", datetime.now(timezone.utc)))

        async def visit():
            await asyncio.sleep(0)
            return await store.append_visit("abcdefgh", datetime.now(timezone.utc))

        updated = await asyncio.gather(*(visit() for _ in range(100)))

        assert sorted(r.total_clicks for r in updated) == list(range(1, 101))
        assert (await store.find_by_id("abcdefgh")).total_clicks == 100


@pytest.mark.asyncio
class TestConcurrentHTTP:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_shorten_requests(self, client):
        """Many concurrent POST /url; all succeed and IDs are unique."""
        concurrency = 30
        tasks = [
            client.post("/url", json={"url": f"https://example.com/page_{i}"})
            for i in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        ids = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 201, f"Request {i}: status {r.status_code} body={r.text}"
            ids.append(r.json()["id"])

        assert len(ids) == len(set(ids)), "All IDs must be unique under concurrency"

    async def test_concurrent_redirect_requests(self, client):
        """Concurrent GET /{id} all redirect and are all counted."""
        create_resp = await client.post("/url", json={"url": "https://example.com/redirect-target"})
        assert create_resp.status_code == 201
        short_id = create_resp.json()["id"]

        tasks = [client.get(f"/{short_id}", follow_redirects=False) for _ in range(50)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"

        analytics = await client.get(f"/url/analytics/{short_id}")
        assert analytics.json()["totalClicks"] == 50
