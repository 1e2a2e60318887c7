from __future__ import annotations

import asyncio
from typing import Any, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from content_cache.cache import keys
from content_cache.db.models import (
    Article,
    ArticleAuthor,
    ArticleEditor,
    ArticleTopic,
    Status,
    Topic,
    User,
)
from content_cache.db.repository import Repository, page_window, to_dict

from .store import ContentStore, filter_by_relation, with_relations

PUBLISHED = {"status": Status.PUBLISHED}


async def get_article_by_slug(store: ContentStore, slug: str) -> Optional[dict[str, Any]]:
    """Article with its topics, authors and editors, or None."""

    async def load() -> Optional[dict[str, Any]]:
        async with store.db.session() as session:
            article = await Repository(session, Article).first({"slug": slug})
        if article is None:
            return None

        topics, authors, editors = await asyncio.gather(
            store.rows(
                select(Topic.id, Topic.title, Topic.slug)
                .select_from(ArticleTopic)
                .outerjoin(Topic, ArticleTopic.topic_id == Topic.id)
                .where(ArticleTopic.article_id == article.id)
            ),
            store.rows(
                select(User.id, User.name, User.username)
                .select_from(ArticleAuthor)
                .outerjoin(User, ArticleAuthor.user_id == User.id)
                .where(ArticleAuthor.article_id == article.id)
            ),
            store.rows(
                select(User.id, User.name)
                .select_from(ArticleEditor)
                .outerjoin(User, ArticleEditor.user_id == User.id)
                .where(ArticleEditor.article_id == article.id)
            ),
        )
        return {**to_dict(article), "topics": topics, "authors": authors, "editors": editors}

    return await store.cached("article_by_slug", keys.article_by_slug(slug), load)


async def get_articles_by_language(
    store: ContentStore, language: str, page: int, per_page: int
) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        async with store.db.session() as session:
            rows = await Repository(session, Article).page(
                {"language": language, **PUBLISHED},
                order_by=Article.updated_at.desc(),
                limit=limit,
                offset=offset,
            )
        return [to_dict(row) for row in rows]

    return await store.cached(
        "articles_by_language", keys.articles_by_language(language, page, per_page), load
    )


async def get_related_articles(
    store: ContentStore, current_article_id: str, topic_id: str, language: str, limit: int
) -> list[dict[str, Any]]:
    """Other published articles sharing ``topic_id``, newest first."""

    async def load() -> list[dict[str, Any]]:
        in_topic = select(ArticleTopic.article_id).where(ArticleTopic.topic_id == topic_id)
        async with store.db.session() as session:
            rows = await Repository(session, Article).page(
                {"language": language, **PUBLISHED},
                Article.id != current_article_id,
                Article.id.in_(in_topic),
                order_by=Article.updated_at.desc(),
                limit=limit,
                options=[selectinload(Article.topics)],
            )
        items = [with_relations(row, ["topics"]) for row in rows]
        return filter_by_relation(items, "topics", "topic_id", topic_id)

    return await store.cached(
        "related_articles",
        keys.related_articles(current_article_id, topic_id, language, limit),
        load,
    )


async def get_articles_by_topic_id(
    store: ContentStore, topic_id: str, language: str, page: int, per_page: int
) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        in_topic = select(ArticleTopic.article_id).where(ArticleTopic.topic_id == topic_id)
        async with store.db.session() as session:
            rows = await Repository(session, Article).page(
                {"language": language, **PUBLISHED},
                Article.id.in_(in_topic),
                order_by=Article.updated_at.desc(),
                limit=limit,
                offset=offset,
                options=[selectinload(Article.topics)],
            )
        items = [with_relations(row, ["topics"]) for row in rows]
        return filter_by_relation(items, "topics", "topic_id", topic_id)

    return await store.cached(
        "articles_by_topic", keys.articles_by_topic(topic_id, language, page, per_page), load
    )


async def get_articles_by_user_id(
    store: ContentStore, user_id: str, language: str, page: int, per_page: int
) -> list[dict[str, Any]]:
    """Published articles authored by ``user_id``."""

    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        by_author = select(ArticleAuthor.article_id).where(ArticleAuthor.user_id == user_id)
        async with store.db.session() as session:
            rows = await Repository(session, Article).page(
                {"language": language, **PUBLISHED},
                Article.id.in_(by_author),
                order_by=Article.updated_at.desc(),
                limit=limit,
                offset=offset,
                options=[selectinload(Article.authors)],
            )
        items = [with_relations(row, ["authors"]) for row in rows]
        return filter_by_relation(items, "authors", "user_id", user_id)

    return await store.cached(
        "articles_by_user", keys.articles_by_user(user_id, language, page, per_page), load
    )


async def get_articles_sitemap(
    store: ContentStore, language: str, page: int, per_page: int
) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        async with store.db.session() as session:
            return await Repository(session, Article).columns(
                ["slug", "updated_at"],
                {"language": language, **PUBLISHED},
                order_by=Article.updated_at.desc(),
                limit=limit,
                offset=offset,
            )

    return await store.cached(
        "articles_sitemap", keys.articles_sitemap(language, page, per_page), load
    )


async def get_articles_count(store: ContentStore) -> int:
    async def load() -> int:
        async with store.db.session() as session:
            return await Repository(session, Article).count(PUBLISHED)

    return await store.cached("articles_count", keys.articles_count(), load)


async def get_articles_count_by_language(store: ContentStore, language: str) -> int:
    async def load() -> int:
        async with store.db.session() as session:
            return await Repository(session, Article).count({"language": language, **PUBLISHED})

    return await store.cached(
        "articles_count_by_language", keys.articles_count_by_language(language), load
    )


async def get_articles_count_by_topic_id(store: ContentStore, topic_id: str) -> int:
    async def load() -> int:
        async with store.db.session() as session:
            return await Repository(session, Article).count(
                PUBLISHED, ArticleTopic.topic_id == topic_id, join=ArticleTopic
            )

    return await store.cached(
        "articles_count_by_topic", keys.articles_count_by_topic(topic_id), load
    )


async def get_articles_count_by_user_id(store: ContentStore, user_id: str) -> int:
    async def load() -> int:
        async with store.db.session() as session:
            return await Repository(session, Article).count(
                PUBLISHED, ArticleAuthor.user_id == user_id, join=ArticleAuthor
            )

    return await store.cached("articles_count_by_user", keys.articles_count_by_user(user_id), load)


async def search_articles(
    store: ContentStore, language: str, search_query: str, limit: int
) -> list[dict[str, Any]]:
    """Case-insensitive substring match on title or slug."""

    async def load() -> list[dict[str, Any]]:
        pattern = f"%{search_query}%"
        async with store.db.session() as session:
            rows = await Repository(session, Article).page(
                {"language": language, **PUBLISHED},
                or_(Article.title.ilike(pattern), Article.slug.ilike(pattern)),
                order_by=Article.updated_at.desc(),
                limit=limit,
            )
        return [to_dict(row) for row in rows]

    return await store.cached(
        "articles_search", keys.articles_search(language, search_query, limit), load
    )
