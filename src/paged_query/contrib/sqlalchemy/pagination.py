"""Run paged queries against an ``AsyncSession``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import func, select

from ...meta import PageMeta
from ...page import Page
from .compiler import apply_repository_options, build_where

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from ...options import PageOptions

logger = logging.getLogger("paged_query.sqlalchemy")

T = TypeVar("T")


async def count(
    session: AsyncSession,
    model: type[Any],
    options: PageOptions,
    *,
    stmt: Select[Any] | None = None,
) -> int:
    """Number of rows matching the filter of *options*, ignoring paging."""
    base = stmt if stmt is not None else select(model)
    where = build_where(model, options.filter)
    if where is not None:
        base = base.where(where)
    count_stmt = select(func.count()).select_from(base.order_by(None).subquery())
    result = await session.execute(count_stmt)
    return int(result.scalar_one())


async def paginate(
    session: AsyncSession,
    model: type[T],
    options: PageOptions,
    *,
    stmt: Select[Any] | None = None,
) -> Page[T]:
    """
    Fetch one page of *model* rows.

    *stmt* narrows the base query (defaults to ``select(model)``). The total
    is counted first; :class:`PageOutOfRangeError` is raised before any rows
    are fetched when the requested page lies beyond it.
    """
    item_count = await count(session, model, options, stmt=stmt)
    meta = PageMeta.from_options(options, item_count)

    base = stmt if stmt is not None else select(model)
    rows_stmt = apply_repository_options(base, model, options.to_repository_options())
    result = await session.scalars(rows_stmt)
    items: list[T] = list(result.all())
    logger.debug(
        "Fetched %d %s row(s) for page %d", len(items), model.__name__, options.page
    )
    return Page(result=items, meta=meta)
