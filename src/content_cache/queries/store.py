from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Sequence, TypeVar

from content_cache.cache.accessor import CacheAccessor
from content_cache.cache.ttl import ttl_for
from content_cache.db.engine import DBEngine
from content_cache.db.repository import fetch_rows, to_dict

T = TypeVar("T")


@dataclass
class ContentStore:
    """What every query function needs: the database and the cache."""

    db: DBEngine
    cache: CacheAccessor

    async def cached(self, query: str, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        """Run ``loader`` through the cache according to QUERY_POLICY[query]."""
        return await self.cache.read_through(key, ttl_for(query), loader)

    async def rows(self, stmt) -> list[dict[str, Any]]:
        """Execute a select on its own session and return plain dicts.

        Each call checks out its own connection, so several of these can
        be gathered concurrently.
        """
        async with self.db.session() as session:
            return await fetch_rows(session, stmt)


def with_relations(obj: Any, relations: Sequence[str]) -> dict[str, Any]:
    """Row as a dict plus each named relationship as a list of join-row dicts."""
    data = to_dict(obj)
    for name in relations:
        data[name] = [to_dict(link) for link in getattr(obj, name)]
    return data


def filter_by_relation(
    items: Iterable[dict[str, Any]],
    relation: str,
    field: str,
    wanted: str,
) -> list[dict[str, Any]]:
    """Keep items whose ``relation`` list has a link with ``field == wanted``.

    The id subquery behind relation-filtered lists is not trusted to be
    exact, so results are checked against their loaded links before they
    are cached or returned.
    """
    return [
        item
        for item in items
        if any(link.get(field) == wanted for link in item.get(relation) or ())
    ]
