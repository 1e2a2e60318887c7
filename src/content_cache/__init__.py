"""
content_cache: database-backed content queries (articles, movies, users)
with a Redis read-through cache in front of them.
"""

from .cache import CacheAccessor, CacheClient, CacheSettings, get_cache_accessor, get_cache_client
from .db import DBEngine, DBSettings, get_db_settings
from .queries import ContentStore, articles, movies, users

__version__ = "0.1.0"

__all__ = [
    "CacheAccessor",
    "CacheClient",
    "CacheSettings",
    "get_cache_accessor",
    "get_cache_client",
    "DBEngine",
    "DBSettings",
    "get_db_settings",
    "ContentStore",
    "articles",
    "movies",
    "users",
    "__version__",
]
