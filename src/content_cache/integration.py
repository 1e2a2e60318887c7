from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, Request

from content_cache.cache.accessor import CacheAccessor
from content_cache.cache.client import CacheClient, describe, get_cache_client
from content_cache.db.engine import DBEngine
from content_cache.db.settings import DBSettings, get_db_settings
from content_cache.queries.store import ContentStore

logger = logging.getLogger(__name__)


def attach_content(
    app: FastAPI,
    *,
    db_settings: Optional[DBSettings] = None,
    cache_client: Optional[CacheClient] = None,
) -> ContentStore:
    """
    Attach a ContentStore (database + cache) to the FastAPI app lifecycle,
    composing with any existing lifespan.

    The cache connection itself is opened lazily by the first query.
    """
    settings = db_settings or get_db_settings()
    client = cache_client or get_cache_client()
    store = ContentStore(db=DBEngine(settings), cache=CacheAccessor(client))

    existing = getattr(app.router, "lifespan_context", None)  # type: ignore[attr-defined]

    @asynccontextmanager
    async def composed_lifespan(_app: FastAPI):
        _app.state.content = store  # type: ignore[attr-defined]
        try:
            url = store.db.engine.url
            logger.info(
                "Content store attached: db=%s driver=%s pool_size=%s cache=%s",
                url.render_as_string(hide_password=True),
                url.get_backend_name(),
                settings.pool_size,
                describe(client),
            )
            if existing:
                async with existing(_app):  # type: ignore[misc]
                    yield
            else:
                yield
        finally:
            await client.close()
            await store.db.dispose()

    app.router.lifespan_context = composed_lifespan  # type: ignore[attr-defined]
    return store


def get_content_store(request: Request) -> ContentStore:
    return request.app.state.content  # type: ignore[attr-defined]


ContentDep = Annotated[ContentStore, Depends(get_content_store)]
