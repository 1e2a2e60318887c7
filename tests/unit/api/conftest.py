"""
API test fixtures: a FastAPI app with the content store attached.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
from fastapi import FastAPI, HTTPException

from content_cache.cache.client import CacheClient
from content_cache.cache.settings import CacheSettings
from content_cache.db import DBSettings, Genre, Movie, MovieGenre
from content_cache.integration import ContentDep, attach_content
from content_cache.queries import movies


@pytest.fixture
def api_cache_client(redis_factory) -> CacheClient:
    return CacheClient(CacheSettings(url="redis://fake:6379/0"), long_lived=True, factory=redis_factory)


@pytest.fixture
def api_app(tmp_path, api_cache_client) -> FastAPI:
    """App whose own lifespan seeds one movie; attach_content wraps it."""

    @asynccontextmanager
    async def seed(app: FastAPI):
        db = app.state.content.db
        await db.create_all()
        async with db.transaction() as session:
            session.add_all(
                [
                    Genre(id="g1", title="Drama", slug="drama"),
                    Movie(id="m1", title="The Quiet Hour", slug="the-quiet-hour", status="published"),
                    MovieGenre(movie_id="m1", genre_id="g1"),
                ]
            )
        app.state.seeded = True
        yield

    app = FastAPI(title="Content Test App", lifespan=seed)
    attach_content(
        app,
        db_settings=DBSettings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"),
        cache_client=api_cache_client,
    )

    @app.get("/movies/{slug}")
    async def movie_detail(slug: str, content: ContentDep):
        found = await movies.get_movie_by_slug(content, slug)
        if found is None:
            raise HTTPException(status_code=404, detail="Movie not found")
        return found

    @app.get("/movies")
    async def movie_list(content: ContentDep, page: int = 1, per_page: int = 10):
        return await movies.get_latest_movies(content, page, per_page)

    return app
