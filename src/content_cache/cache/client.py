from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any, Callable, Optional

from redis import asyncio as redis
from redis.exceptions import RedisError

from content_cache.app.core.env import is_long_lived_process

from .settings import CacheSettings, get_cache_settings

logger = logging.getLogger(__name__)

RedisFactory = Callable[..., "redis.Redis"]


class CacheClient:
    """Owns the single Redis connection used by this process.

    The connection is created lazily on the first ``acquire()`` and shared
    by every caller afterwards. ``acquire()`` returns ``None`` when caching
    is disabled:

    - the process is a static build (no long-lived server to pool for),
    - no Redis URL is configured; this is latched for the lifetime of the
      client and warned about once.

    Concurrent first callers are serialised on a lock so only one
    connection is ever created.
    """

    def __init__(
        self,
        settings: Optional[CacheSettings] = None,
        *,
        long_lived: Optional[bool] = None,
        factory: Optional[RedisFactory] = None,
    ):
        self._settings = settings
        self._long_lived = long_lived
        self._factory: RedisFactory = factory or redis.from_url
        self._redis: Optional[redis.Redis] = None
        self._disabled = False
        self._lock = asyncio.Lock()

    @property
    def settings(self) -> CacheSettings:
        if self._settings is None:
            self._settings = get_cache_settings()
        return self._settings

    @property
    def disabled(self) -> bool:
        return self._disabled or not self._is_long_lived()

    @property
    def disabled_reason(self) -> Optional[str]:
        """Why ``acquire()`` returns None, or None while caching is possible."""
        if not self._is_long_lived():
            return "static render mode, no long-lived process"
        if self._disabled:
            return "no REDIS_URL configured"
        return None

    @property
    def connected(self) -> bool:
        return self._redis is not None

    def _is_long_lived(self) -> bool:
        if self._long_lived is not None:
            return self._long_lived
        return is_long_lived_process()

    async def acquire(self) -> Optional[redis.Redis]:
        if not self._is_long_lived():
            return None
        if self._redis is not None:
            return self._redis
        if self._disabled:
            return None

        async with self._lock:
            # another task may have finished initialising while we waited
            if self._redis is not None:
                return self._redis
            if self._disabled:
                return None
            return await self._connect()

    async def _connect(self) -> Optional[redis.Redis]:
        settings = self.settings
        if not settings.url:
            logger.warning("Redis URL not found. Caching will be disabled.")
            self._disabled = True
            return None

        try:
            client = self._factory(
                settings.url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=settings.socket_timeout,
                socket_connect_timeout=settings.socket_connect_timeout,
                retry_on_timeout=True,
                health_check_interval=settings.health_check_interval,
            )
        except (RedisError, ValueError, OSError):
            logger.exception("Failed to create Redis client")
            return None

        try:
            await client.ping()
        except (RedisError, OSError) as exc:
            # redis-py reconnects on the next command; keep the client.
            logger.error("Redis connection error: %s", exc)
        else:
            logger.info("Redis connected successfully")

        self._redis = client
        return client

    async def close(self) -> None:
        async with self._lock:
            client, self._redis = self._redis, None
        if client is not None:
            try:
                await client.aclose()
            except (RedisError, OSError) as exc:
                logger.error("Error closing Redis connection: %s", exc)


@lru_cache
def get_cache_client() -> CacheClient:
    """Process-scoped default client, built from the environment."""
    return CacheClient()


def reset_cache_client() -> None:
    get_cache_client.cache_clear()


def describe(client: CacheClient) -> dict[str, Any]:
    return {
        "enabled": not client.disabled and client.settings.enabled,
        "connected": client.connected,
    }
