"""Pytest configuration and fixtures."""

import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortlink.common.logging_config import setup_logging
from shortlink.idgen import ShortIdGenerator
from shortlink.service import RedirectService
from shortlink.store.memory import MemoryIdentifierStore
from shortlink.store.redis_store import RedisIdentifierStore
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger):
    """Create in-memory store."""
    return MemoryIdentifierStore(logger=logger)


@pytest.fixture
async def fake_redis_store(logger):
    """Redis store backed by an in-process fake server that runs the Lua scripts."""
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    store = RedisIdentifierStore("redis://localhost:6379/0", client=client, logger=logger)
    yield store
    await store.close()


@pytest.fixture
def id_generator():
    """Create short ID generator."""
    return ShortIdGenerator(default_length=8)


@pytest.fixture
def service(store, id_generator, logger) -> RedirectService:
    """Create service instance with the default (permissive) URL policy."""
    return RedirectService(
        store=store,
        id_generator=id_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Configuration as deployed over HTTP."""
    return Config(storage_url="memory://", require_http_scheme=True)


@pytest.fixture
def app(store, id_generator, logger, config):
    """Create test FastAPI app."""
    http_service = RedirectService(
        store=store,
        id_generator=id_generator,
        logger=logger,
        max_generation_attempts=config.max_generation_attempts,
        require_http_scheme=config.require_http_scheme,
    )
    return create_app(
        store_instance=store,
        service_instance=http_service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a/very/long/path",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
