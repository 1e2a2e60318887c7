"""
Query functions for each content type.

Every function takes a ContentStore first and returns plain dicts, lists
or ints. Whether a query goes through the cache, and for how long, is
decided by content_cache.cache.ttl.QUERY_POLICY.
"""

from .store import ContentStore, filter_by_relation, with_relations
from . import articles, movies, users

__all__ = [
    "ContentStore",
    "filter_by_relation",
    "with_relations",
    "articles",
    "movies",
    "users",
]
