from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .settings import DBSettings


class DBEngine:
    """Holds the async SQLAlchemy engine and session factory.

    Query functions open one short-lived session per origin lookup, so
    independent lookups can run concurrently on separate pooled connections.
    """

    def __init__(self, settings: DBSettings):
        url = settings.resolved_database_url
        engine_kwargs: dict[str, Any] = {
            "echo": settings.echo,
            "pool_pre_ping": True,
            "pool_recycle": settings.pool_recycle,
        }
        if settings.is_memory_sqlite:
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_size"] = settings.pool_size
            engine_kwargs["max_overflow"] = settings.max_overflow
            engine_kwargs["pool_timeout"] = settings.pool_timeout

        if url.startswith("postgresql+asyncpg://"):
            connect_args = engine_kwargs.setdefault("connect_args", {})
            connect_args["statement_cache_size"] = settings.statement_cache_size

        self._engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self._engine, expire_on_commit=False
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        sess = self._session_factory()
        try:
            yield sess
        finally:
            await sess.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        async with self.session() as sess:
            async with sess.begin():
                yield sess

    async def create_all(self) -> None:
        """Create every table on the bound database (tests and local dev)."""
        from .models import Base

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()
