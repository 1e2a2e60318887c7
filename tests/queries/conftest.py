"""
Query test fixtures: a seeded SQLite database plus a fakeredis-backed store.

Seed data
---------
users:      u1 alice (author), u2 bob (editor)
topics:     t1 python, t2 film
articles:   a1 en published  t1       author u1, editor u2   updated 2024-01-03
            a2 en published  t1 t2    author u1              updated 2024-01-02
            a3 en draft      t1       author u1
            a4 id published  t1       author u1              updated 2024-01-04
genres:     g1 drama, g2 comedy
companies:  c1 studio-one
overviews:  o1 "A quiet story."
movies:     m1 published  g1     c1  o1   updated 2024-02-03
            m2 published  g2 g1           updated 2024-02-02
            m3 draft      g1
            m4 published                  updated 2024-02-01
"""

from __future__ import annotations

from datetime import datetime

import pytest_asyncio

from content_cache.cache.accessor import CacheAccessor
from content_cache.db import (
    Article,
    ArticleAuthor,
    ArticleEditor,
    ArticleTopic,
    DBEngine,
    DBSettings,
    Genre,
    Movie,
    MovieGenre,
    MovieOverview,
    MovieProductionCompany,
    Overview,
    ProductionCompany,
    Topic,
    User,
)
from content_cache.queries import ContentStore

CREATED = datetime(2023, 12, 1, 9, 0)


def _day(month: int, day: int) -> datetime:
    return datetime(2024, month, day, 12, 0)


def seed_rows() -> list:
    stamps = {"created_at": CREATED}
    return [
        User(id="u1", name="Alice Writer", username="alice", email="alice@example.com", updated_at=_day(1, 1), **stamps),
        User(id="u2", name="Bob Editor", username="bob", email="bob@example.com", updated_at=_day(1, 2), **stamps),
        Topic(id="t1", title="Python", slug="python", updated_at=CREATED, **stamps),
        Topic(id="t2", title="Film", slug="film", updated_at=CREATED, **stamps),
        Article(
            id="a1", language="en", status="published", title="Async Python Tips",
            slug="async-python-tips", content="...", updated_at=_day(1, 3), **stamps,
        ),
        Article(
            id="a2", language="en", status="published", title="Caching Patterns",
            slug="caching-patterns", content="...", updated_at=_day(1, 2), **stamps,
        ),
        Article(
            id="a3", language="en", status="draft", title="Draft Python Post",
            slug="draft-python-post", content="...", updated_at=_day(1, 5), **stamps,
        ),
        Article(
            id="a4", language="id", status="published", title="Tips Python",
            slug="tips-python", content="...", updated_at=_day(1, 4), **stamps,
        ),
        ArticleTopic(article_id="a1", topic_id="t1"),
        ArticleTopic(article_id="a2", topic_id="t1"),
        ArticleTopic(article_id="a2", topic_id="t2"),
        ArticleTopic(article_id="a3", topic_id="t1"),
        ArticleTopic(article_id="a4", topic_id="t1"),
        ArticleAuthor(article_id="a1", user_id="u1"),
        ArticleAuthor(article_id="a2", user_id="u1"),
        ArticleAuthor(article_id="a3", user_id="u1"),
        ArticleAuthor(article_id="a4", user_id="u1"),
        ArticleEditor(article_id="a1", user_id="u2"),
        Genre(id="g1", title="Drama", slug="drama", updated_at=CREATED, **stamps),
        Genre(id="g2", title="Comedy", slug="comedy", updated_at=CREATED, **stamps),
        ProductionCompany(
            id="c1", name="Studio One", slug="studio-one", logo="/logos/studio-one.png",
            updated_at=CREATED, **stamps,
        ),
        Overview(id="o1", language="en", content="A quiet story.", updated_at=CREATED, **stamps),
        Movie(
            id="m1", title="The Quiet Hour", slug="the-quiet-hour", status="published",
            release_date=datetime(2023, 10, 20), runtime=101, updated_at=_day(2, 3), **stamps,
        ),
        Movie(id="m2", title="Laugh Track", slug="laugh-track", status="published", updated_at=_day(2, 2), **stamps),
        Movie(id="m3", title="Unreleased Drama", slug="unreleased-drama", status="draft", updated_at=_day(2, 5), **stamps),
        Movie(id="m4", title="No Overview", slug="no-overview", status="published", updated_at=_day(2, 1), **stamps),
        MovieGenre(movie_id="m1", genre_id="g1"),
        MovieGenre(movie_id="m2", genre_id="g2"),
        MovieGenre(movie_id="m2", genre_id="g1"),
        MovieGenre(movie_id="m3", genre_id="g1"),
        MovieProductionCompany(movie_id="m1", production_company_id="c1"),
        MovieOverview(movie_id="m1", overview_id="o1"),
    ]


@pytest_asyncio.fixture
async def db(tmp_path):
    engine = DBEngine(DBSettings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'content.db'}"))
    await engine.create_all()
    async with engine.transaction() as session:
        session.add_all(seed_rows())
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def store(db, accessor) -> ContentStore:
    return ContentStore(db=db, cache=accessor)


@pytest_asyncio.fixture
async def uncached_store(db, disabled_client) -> ContentStore:
    return ContentStore(db=db, cache=CacheAccessor(disabled_client))
