from __future__ import annotations

from typing import Any, Generic, Iterable, Optional, Sequence, Type, TypeVar, cast

from sqlalchemy import and_, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

T = TypeVar("T")


def apply_filters(stmt, model, where: dict[str, Any] | None):
    """Add ``model.<field> == value`` for each entry of ``where``."""
    if not where:
        return stmt
    return stmt.where(and_(*[(cast(Any, getattr(model, k)) == v) for k, v in where.items()]))


def page_window(page: int, per_page: int) -> tuple[int, int]:
    """1-based page number -> (limit, offset)."""
    return per_page, max(page - 1, 0) * per_page


async def fetch_rows(session: AsyncSession, stmt) -> list[dict[str, Any]]:
    """Execute an arbitrary select (typically a join lookup) as plain dicts."""
    return [dict(row) for row in (await session.execute(stmt)).mappings().all()]


def to_dict(obj: Any, columns: Optional[Iterable[str]] = None) -> dict[str, Any]:
    """Flatten a mapped row into a plain dict of its column values."""
    keys = columns or [attr.key for attr in inspect(obj).mapper.column_attrs]
    return {key: getattr(obj, key) for key in keys}


class Repository(Generic[T]):
    """Read-side query helpers over one mapped model.

    - first: one row by predicate
    - page: rows by predicate with ordering, limit/offset and loader options
    - columns: selected columns only, as dicts
    - count: scalar count by predicate, optionally through a join
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    async def first(
        self,
        where: Optional[dict[str, Any]] = None,
        *conditions: ColumnElement[bool],
    ) -> Optional[T]:
        stmt = apply_filters(select(self.model), self.model, where)
        if conditions:
            stmt = stmt.where(*conditions)
        return (await self.session.execute(stmt.limit(1))).scalars().first()

    async def page(
        self,
        where: Optional[dict[str, Any]] = None,
        *conditions: ColumnElement[bool],
        order_by: Any | None = None,
        limit: int | None = None,
        offset: int | None = None,
        options: Sequence[Any] = (),
    ) -> Sequence[T]:
        stmt = apply_filters(select(self.model), self.model, where)
        if conditions:
            stmt = stmt.where(*conditions)
        if options:
            stmt = stmt.options(*options)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if limit:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return (await self.session.execute(stmt)).scalars().all()

    async def columns(
        self,
        names: Sequence[str],
        where: Optional[dict[str, Any]] = None,
        *,
        order_by: Any | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        """Like ``page`` but selects only the named columns, as dicts."""
        stmt = apply_filters(
            select(*[getattr(self.model, name) for name in names]), self.model, where
        )
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if limit:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return [dict(row) for row in (await self.session.execute(stmt)).mappings().all()]

    async def count(
        self,
        where: Optional[dict[str, Any]] = None,
        *conditions: ColumnElement[bool],
        join: Any | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(self.model)
        if join is not None:
            stmt = stmt.join(join)
        stmt = apply_filters(stmt, self.model, where)
        if conditions:
            stmt = stmt.where(*conditions)
        return int((await self.session.execute(stmt)).scalar_one())
