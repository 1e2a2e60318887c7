"""Fixtures for CLI tests.

Disables Rich console styling and points the CLI at an in-process fake Redis.
"""

from __future__ import annotations

import fakeredis
import pytest

from content_cache import cli
from content_cache.cache.accessor import CacheAccessor
from content_cache.cache.client import CacheClient
from content_cache.cache.settings import CacheSettings


@pytest.fixture(autouse=True)
def disable_rich_colors(monkeypatch):
    """Disable Rich colors/styling for consistent CLI output in CI."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("TERM", "dumb")


@pytest.fixture
def cli_cache(monkeypatch, redis_server, redis_factory):
    """Route the CLI to the fake server; returns a sync client for seeding and checks."""

    def accessor() -> CacheAccessor:
        client = CacheClient(CacheSettings(url="redis://fake:6379/0"), long_lived=True, factory=redis_factory)
        return CacheAccessor(client)

    monkeypatch.setattr(cli, "get_cache_accessor", accessor)
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)
