from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """
    Cache connection settings.

    Env support:
      - REDIS_URL, then REDIS_PRIVATE_URL (private network endpoint on
        hosted platforms), then CACHE_URL.
      - CACHE_SOCKET_TIMEOUT, CACHE_SOCKET_CONNECT_TIMEOUT,
        CACHE_HEALTH_CHECK_INTERVAL.

    A missing URL is not an error: caching is disabled and every query
    goes straight to the database.
    """

    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_URL", "REDIS_PRIVATE_URL", "CACHE_URL"),
    )
    socket_timeout: float = Field(default=5.0)
    socket_connect_timeout: float = Field(default=5.0)
    health_check_interval: int = Field(default=30)

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def enabled(self) -> bool:
        return bool(self.url)


@lru_cache
def get_cache_settings(**kwargs) -> CacheSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return CacheSettings(**filtered)
