"""Cache key builders. Keys are part of the wire contract; do not reformat."""

from __future__ import annotations


def article_by_slug(slug: str) -> str:
    return f"article:slug:{slug}"


def articles_by_language(language: str, page: int, per_page: int) -> str:
    return f"articles:lang:{language}:page:{page}:per:{per_page}"


def movie_by_slug(slug: str) -> str:
    return f"movie:slug:{slug}"


def movies_latest(page: int, per_page: int) -> str:
    return f"movies:latest:page:{page}:per:{per_page}"


def related_movies(current_movie_id: str, genre_id: str, limit: int) -> str:
    return f"movies:related:{current_movie_id}:genre:{genre_id}:limit:{limit}"


def movies_by_genre(genre_id: str, page: int, per_page: int) -> str:
    return f"movies:genre:{genre_id}:page:{page}:per:{per_page}"


def movies_by_production_company(company_id: str, page: int, per_page: int) -> str:
    return f"movies:production-company:{company_id}:page:{page}:per:{per_page}"


def movies_sitemap(page: int, per_page: int) -> str:
    return f"movies:sitemap:page:{page}:per:{per_page}"


def movies_count() -> str:
    return "movies:count"


def movies_count_by_genre(genre_id: str) -> str:
    return f"movies:count:genre:{genre_id}"


def movies_count_by_production_company(company_id: str) -> str:
    return f"movies:count:production-company:{company_id}"


def movies_search(search_query: str, limit: int) -> str:
    return f"movies:search:{search_query}:limit:{limit}"


# Keys for queries that are uncached by default. They only reach Redis if
# QUERY_POLICY gives the query a TTL.

def related_articles(current_article_id: str, topic_id: str, language: str, limit: int) -> str:
    return f"articles:related:{current_article_id}:topic:{topic_id}:lang:{language}:limit:{limit}"


def articles_by_topic(topic_id: str, language: str, page: int, per_page: int) -> str:
    return f"articles:topic:{topic_id}:lang:{language}:page:{page}:per:{per_page}"


def articles_by_user(user_id: str, language: str, page: int, per_page: int) -> str:
    return f"articles:user:{user_id}:lang:{language}:page:{page}:per:{per_page}"


def articles_sitemap(language: str, page: int, per_page: int) -> str:
    return f"articles:sitemap:lang:{language}:page:{page}:per:{per_page}"


def articles_count() -> str:
    return "articles:count"


def articles_count_by_language(language: str) -> str:
    return f"articles:count:lang:{language}"


def articles_count_by_topic(topic_id: str) -> str:
    return f"articles:count:topic:{topic_id}"


def articles_count_by_user(user_id: str) -> str:
    return f"articles:count:user:{user_id}"


def articles_search(language: str, search_query: str, limit: int) -> str:
    return f"articles:search:{language}:{search_query}:limit:{limit}"


def user_by_username(username: str) -> str:
    return f"user:username:{username}"


def users_search(search_query: str, limit: int) -> str:
    return f"users:search:{search_query}:limit:{limit}"
