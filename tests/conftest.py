"""
Root conftest.py for content-cache tests.

This file provides:
1. Common pytest markers for test categorization
2. Environment isolation (no real Redis URL or render mode leaks into tests)
3. Shared cache fixtures backed by fakeredis

Fixtures are organized by category:
- Environment fixtures
- Cache fixtures (fakeredis, mock Redis)
"""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import fakeredis
from fakeredis import aioredis as fake_aioredis
import pytest
import pytest_asyncio

from content_cache.app.core.env import get_render_mode
from content_cache.cache.accessor import CacheAccessor
from content_cache.cache.client import CacheClient, reset_cache_client
from content_cache.cache.settings import CacheSettings, get_cache_settings


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Tag tests by folder so `-m cache` / `-m queries` select them."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")
        if "/tests/unit/cache/" in norm:
            item.add_marker(pytest.mark.cache)
        if "/tests/queries/" in norm:
            item.add_marker(pytest.mark.queries)


# =============================================================================
# ENVIRONMENT
# =============================================================================


CACHE_ENV_VARS = ("REDIS_URL", "REDIS_PRIVATE_URL", "CACHE_URL", "RENDER_MODE")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Start every test with no cache endpoint, server render mode and fresh singletons."""
    for name in CACHE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_render_mode.cache_clear()
    get_cache_settings.cache_clear()
    reset_cache_client()
    yield
    get_render_mode.cache_clear()
    get_cache_settings.cache_clear()
    reset_cache_client()


# =============================================================================
# CACHE FIXTURES
# =============================================================================


FAKE_URL = "redis://fake:6379/0"


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    """One in-process Redis server shared by every client a test creates."""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_factory(redis_server):
    """Drop-in for redis.asyncio.from_url that connects to the fake server."""
    calls: list[str] = []

    def factory(url: str, **kwargs):
        calls.append(url)
        return fake_aioredis.FakeRedis(server=redis_server, decode_responses=True)

    factory.calls = calls  # type: ignore[attr-defined]
    return factory


@pytest_asyncio.fixture
async def cache_client(redis_factory):
    client = CacheClient(CacheSettings(url=FAKE_URL), long_lived=True, factory=redis_factory)
    yield client
    await client.close()


@pytest.fixture
def accessor(cache_client) -> CacheAccessor:
    return CacheAccessor(cache_client)


@pytest_asyncio.fixture
async def redis_conn(cache_client):
    """The raw fake Redis connection behind ``cache_client``, for assertions."""
    return await cache_client.acquire()


@pytest.fixture
def disabled_client() -> CacheClient:
    return CacheClient(CacheSettings(url=None), long_lived=True)


@pytest.fixture
def mock_redis_client():
    """Create a mock Redis client for testing.

    Returns a Mock object with common Redis operations as AsyncMock methods.
    """
    client = Mock()
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=0)
    client.keys = AsyncMock(return_value=[])
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client
