"""
Read-through cache in front of the content database.

- CacheClient: lazily opened, process-wide Redis connection (or disabled)
- codec: JSON wire format that keeps datetimes intact
- CacheAccessor: non-raising get/set/delete/invalidate and read_through
- keys / ttl: key taxonomy and per-query TTL policy
"""

from .accessor import CacheAccessor, get_cache_accessor
from .client import CacheClient, get_cache_client, reset_cache_client
from .codec import decode, encode
from .errors import CacheError, CacheUnavailableError, CodecError
from .result import MISS, Hit, LookupResult, Miss, Unavailable
from .settings import CacheSettings, get_cache_settings
from .ttl import QUERY_POLICY, ttl_for, validate_ttl

__all__ = [
    "CacheAccessor",
    "get_cache_accessor",
    "CacheClient",
    "get_cache_client",
    "reset_cache_client",
    "encode",
    "decode",
    "CacheError",
    "CacheUnavailableError",
    "CodecError",
    "MISS",
    "Hit",
    "Miss",
    "Unavailable",
    "LookupResult",
    "CacheSettings",
    "get_cache_settings",
    "QUERY_POLICY",
    "ttl_for",
    "validate_ttl",
]
