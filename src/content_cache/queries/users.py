from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import or_

from content_cache.cache import keys
from content_cache.db.models import User
from content_cache.db.repository import Repository, to_dict

from .store import ContentStore


async def get_user_by_username(store: ContentStore, username: str) -> Optional[dict[str, Any]]:
    async def load() -> Optional[dict[str, Any]]:
        async with store.db.session() as session:
            user = await Repository(session, User).first({"username": username})
        return to_dict(user) if user is not None else None

    return await store.cached("user_by_username", keys.user_by_username(username), load)


async def search_users(store: ContentStore, search_query: str, limit: int) -> list[dict[str, Any]]:
    """Case-insensitive substring match on name or username."""

    async def load() -> list[dict[str, Any]]:
        pattern = f"%{search_query}%"
        async with store.db.session() as session:
            rows = await Repository(session, User).page(
                None,
                or_(User.name.ilike(pattern), User.username.ilike(pattern)),
                order_by=User.updated_at.desc(),
                limit=limit,
            )
        return [to_dict(row) for row in rows]

    return await store.cached("users_search", keys.users_search(search_query, limit), load)
