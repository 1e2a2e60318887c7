from __future__ import annotations

from typing import Optional

# seconds
TTL_SEARCH = 900
TTL_LIST = 1800
TTL_COUNT = 1800
TTL_DETAIL = 3600
TTL_SITEMAP = 3600

TTL_DEFAULT = 3600


def validate_ttl(ttl: Optional[int]) -> int:
    """Coerce a TTL to a positive int of seconds; None means TTL_DEFAULT."""
    if ttl is None:
        return TTL_DEFAULT
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise ValueError(f"TTL must be an int number of seconds, got {ttl!r}")
    if ttl <= 0:
        raise ValueError(f"TTL must be positive, got {ttl}")
    return ttl


# Which query functions go through the cache, and for how long.
# None = always read from the database. Article search/list-by-relation and
# all user lookups are deliberately uncached; every movie query is cached.
QUERY_POLICY: dict[str, Optional[int]] = {
    # articles
    "article_by_slug": TTL_DETAIL,
    "articles_by_language": TTL_LIST,
    "related_articles": None,
    "articles_by_topic": None,
    "articles_by_user": None,
    "articles_sitemap": None,
    "articles_count": None,
    "articles_count_by_language": None,
    "articles_count_by_topic": None,
    "articles_count_by_user": None,
    "articles_search": None,
    # movies
    "movie_by_slug": TTL_DETAIL,
    "movies_latest": TTL_LIST,
    "related_movies": TTL_LIST,
    "movies_by_genre": TTL_LIST,
    "movies_by_production_company": TTL_LIST,
    "movies_sitemap": TTL_SITEMAP,
    "movies_count": TTL_COUNT,
    "movies_count_by_genre": TTL_COUNT,
    "movies_count_by_production_company": TTL_COUNT,
    "movies_search": TTL_SEARCH,
    # users
    "user_by_username": None,
    "users_search": None,
}


def ttl_for(query: str) -> Optional[int]:
    try:
        return QUERY_POLICY[query]
    except KeyError:
        raise KeyError(f"no cache policy registered for query '{query}'") from None
