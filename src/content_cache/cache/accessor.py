from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from redis.exceptions import RedisError

from . import codec
from .client import CacheClient, get_cache_client
from .errors import CacheUnavailableError, CodecError
from .result import MISS, Hit, LookupResult, Unavailable
from .ttl import validate_ttl

logger = logging.getLogger(__name__)

T = TypeVar("T")

# TimeoutError and ConnectionResetError are OSError subclasses.
TRANSPORT_ERRORS = (RedisError, OSError)


class CacheAccessor:
    """Cache-aside primitives over a CacheClient.

    Nothing here raises to the caller. The cache is a disposable copy of
    the database: a failed read is a miss and a failed write, delete or
    invalidation is logged and dropped. With a disabled client every read
    misses and every mutation is a no-op.

    There is no locking or request coalescing. Concurrent misses on one
    key each run their loader and each write the key; the last write wins.
    """

    def __init__(self, client: CacheClient):
        self.client = client

    async def lookup(self, key: str) -> LookupResult:
        r = await self.client.acquire()
        if r is None:
            return Unavailable("disabled")
        try:
            raw = await r.get(key)
        except UnicodeDecodeError as exc:
            # decode_responses=True: bytes that are not UTF-8 fail inside GET
            logger.error("Failed to decode cached value: %s", exc, extra={"cache_key": key})
            error = CodecError(f"cached payload under {key} is not UTF-8")
            error.__cause__ = exc
            return Unavailable("decode", error)
        except TRANSPORT_ERRORS as exc:
            logger.error("Failed to get cache: %s", exc, extra={"cache_key": key})
            error = CacheUnavailableError(f"GET {key} failed: {exc}")
            error.__cause__ = exc
            return Unavailable("transport", error)
        if raw is None:
            return MISS
        try:
            return Hit(codec.decode(raw))
        except CodecError as exc:
            logger.error("Failed to decode cached value: %s", exc, extra={"cache_key": key})
            return Unavailable("decode", exc)

    async def read(self, key: str) -> Optional[Any]:
        result = await self.lookup(key)
        if isinstance(result, Hit):
            return result.value
        return None

    async def write(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        r = await self.client.acquire()
        if r is None:
            return False
        try:
            seconds = validate_ttl(ttl)
        except ValueError as exc:
            logger.error("Invalid cache TTL: %s", exc, extra={"cache_key": key, "ttl": ttl})
            return False
        try:
            payload = codec.encode(value)
            await r.setex(key, seconds, payload)
        except CodecError as exc:
            logger.error("Failed to encode value for cache: %s", exc, extra={"cache_key": key})
            return False
        except TRANSPORT_ERRORS as exc:
            logger.error("Failed to set cache: %s", exc, extra={"cache_key": key, "ttl": seconds})
            return False
        logger.debug("Cached %s", key, extra={"cache_key": key, "ttl": seconds})
        return True

    async def remove(self, key: str) -> bool:
        r = await self.client.acquire()
        if r is None:
            return False
        try:
            await r.delete(key)
        except TRANSPORT_ERRORS as exc:
            logger.error("Failed to delete cache: %s", exc, extra={"cache_key": key})
            return False
        return True

    async def invalidate_by_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern; returns how many were removed.

        Uses KEYS, which scans the whole keyspace. Fine for a single site
        cache, not for a shared Redis with millions of keys.
        """
        r = await self.client.acquire()
        if r is None:
            return 0
        try:
            keys = await r.keys(pattern)
            if not keys:
                return 0
            deleted = int(await r.delete(*keys))
        except TRANSPORT_ERRORS as exc:
            logger.error(
                "Failed to invalidate cache pattern: %s", exc, extra={"cache_pattern": pattern}
            )
            return 0
        logger.info(
            "Invalidated %d cache keys",
            deleted,
            extra={"cache_pattern": pattern, "deleted": deleted},
        )
        return deleted

    async def read_through(
        self,
        key: str,
        ttl: Optional[int],
        loader: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for ``key`` or load, cache and return it.

        ``ttl=None`` bypasses the cache entirely. A loader result of None
        (nothing found) is returned without being cached. Falsy cached
        values (0, [], {}) are treated as misses and reloaded.
        """
        if ttl is None:
            return await loader()
        cached = await self.read(key)
        if cached:
            return cached
        value = await loader()
        if value is None:
            return value
        await self.write(key, value, ttl)
        return value


def get_cache_accessor() -> CacheAccessor:
    """Accessor over the process-scoped default client."""
    return CacheAccessor(get_cache_client())
