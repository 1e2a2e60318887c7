from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Hosted Postgres hands out driverless URLs; queries here run on asyncpg.
_ASYNC_DRIVER_PREFIXES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
}


class DBSettings(BaseSettings):
    """
    Connection settings for the content database (the origin behind the cache).

    Env support:
      - DB_DATABASE_URL, then DATABASE_URL
      - DB_ECHO, DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT, DB_POOL_RECYCLE
      - DB_STATEMENT_CACHE_SIZE (asyncpg only)

    Query functions check out one connection per origin lookup and the
    detail queries gather three lookups at once, so the pool is sized for
    a few concurrent requests rather than one.
    """

    database_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DB_DATABASE_URL", "DATABASE_URL"),
    )
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30  # seconds
    pool_recycle: int = 1800  # seconds
    statement_cache_size: int = 1000

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("database_url")
    @classmethod
    def _use_async_driver(cls, url: Optional[str]) -> Optional[str]:
        if not url:
            return None
        for prefix, replacement in _ASYNC_DRIVER_PREFIXES.items():
            if url.startswith(prefix):
                return replacement + url[len(prefix):]
        return url

    @property
    def resolved_database_url(self) -> str:
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL or DB_DATABASE_URL must be set for database connectivity"
            )
        return self.database_url

    @property
    def is_memory_sqlite(self) -> bool:
        url = self.database_url or ""
        return url.startswith("sqlite") and ":memory:" in url


@lru_cache
def get_db_settings() -> DBSettings:
    return DBSettings()
