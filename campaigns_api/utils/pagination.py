"""
Pagination Utilities

Cursor-based pagination shared by every list operation.

A page is requested with a limit, an optional cursor (the cursor-field value
of the last row of the previous page, exclusive), the cursor field and a sort
order. One extra row is fetched to tell a full last page apart from a page
that has successors. The caller supplies its own filters (tenant scoping
included); the engine never decides why a row is excluded.
"""

import enum
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Generic, TypeVar

from fastapi import Query
from sqlalchemy import asc, desc, inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from campaigns_api.utils.datetime_utils import parse_iso_datetime, to_naive_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_LIMIT = 50
MAX_LIMIT = 100
DEFAULT_CURSOR_FIELD = "created_at"


class SortOrder(str, enum.Enum):
    asc = "asc"
    desc = "desc"


def normalize_limit(limit: int | None) -> int:
    """
    Resolve the requested page size.

    Missing, zero and negative limits fall back to the default; anything
    above the ceiling is clamped to it.
    """
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


@dataclass(frozen=True)
class PaginationOptions:
    limit: int | None = None
    cursor: datetime | None = None
    cursor_field: str = DEFAULT_CURSOR_FIELD
    order: SortOrder = SortOrder.desc

    @property
    def effective_limit(self) -> int:
        return normalize_limit(self.limit)

    def next(self, page: "Page") -> "PaginationOptions":
        """Options for the page following ``page``."""
        return replace(self, cursor=page.next_cursor)


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    next_cursor: datetime | None = None
    has_more: bool = False


def build_page(rows: Sequence[T], limit: int, cursor_of: Callable[[T], Any]) -> Page[T]:
    """
    Turn up to ``limit + 1`` ordered rows into a page.

    The lookahead row only signals that more rows exist; it is never returned.
    """
    has_more = len(rows) > limit
    items = list(rows[:limit])
    next_cursor = cursor_of(items[-1]) if has_more and items else None
    return Page(items=items, next_cursor=next_cursor, has_more=has_more)


def cursor_column(model, cursor_field: str):
    """Return the mapped column used as cursor, rejecting unknown field names."""
    mapper = inspect(model)
    if cursor_field not in mapper.columns:
        raise ValueError(f"{model.__name__} has no cursor field '{cursor_field}'")
    return getattr(model, cursor_field)


async def paginate(
    db: AsyncSession,
    model,
    options: PaginationOptions | None = None,
    *,
    filters: Iterable | None = None,
    query=None,
    load_options: Iterable | None = None,
) -> Page:
    """
    Return one page of ``model`` rows.

    Args:
        db: Database session
        model: Mapped class whose rows are listed and whose column is the cursor
        options: Limit, cursor, cursor field and order
        filters: Filter conditions applied before the cursor boundary
        query: Optional base select (e.g. with joins); defaults to select(model)
        load_options: Optional query options (eager loading, etc.)

    Returns:
        Page with items, next_cursor and has_more
    """
    options = options or PaginationOptions()
    column = cursor_column(model, options.cursor_field)
    limit = options.effective_limit

    stmt = query if query is not None else select(model)

    for opt in load_options or ():
        stmt = stmt.options(opt)

    for condition in filters or ():
        stmt = stmt.where(condition)

    cursor = to_naive_utc(options.cursor)
    if cursor is not None:
        if options.order == SortOrder.desc:
            stmt = stmt.where(column < cursor)
        else:
            stmt = stmt.where(column > cursor)

    # Primary key breaks ties so a page is reproducible; the boundary itself
    # stays a plain timestamp comparison.
    order_func = desc if options.order == SortOrder.desc else asc
    stmt = stmt.order_by(order_func(column), order_func(model.id)).limit(limit + 1)

    result = await db.execute(stmt)
    rows = list(result.scalars().unique().all())

    page = build_page(rows, limit, lambda row: getattr(row, options.cursor_field))
    logger.debug(
        "Paginated %s: %d items, has_more=%s",
        model.__name__,
        len(page.items),
        page.has_more,
    )
    return page


def paginate_items(items: Iterable[T], options: PaginationOptions | None = None) -> Page[T]:
    """
    Paginate an in-memory collection with the same rules as ``paginate``.

    Items expose the cursor field (and optionally ``id``) as attributes.
    """
    options = options or PaginationOptions()
    limit = options.effective_limit
    cursor = options.cursor
    reverse = options.order == SortOrder.desc

    def value_of(item: T):
        return getattr(item, options.cursor_field)

    candidates = list(items)
    if cursor is not None:
        if reverse:
            candidates = [item for item in candidates if value_of(item) < cursor]
        else:
            candidates = [item for item in candidates if value_of(item) > cursor]

    candidates.sort(key=lambda item: (value_of(item), str(getattr(item, "id", ""))), reverse=reverse)
    return build_page(candidates[: limit + 1], limit, value_of)


def _parse_limit(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class PaginationParams:
    """
    FastAPI dependency for pagination parameters.

    Unparseable ``limit`` or ``cursor`` values are treated as absent, and an
    unknown ``order`` falls back to descending.

    Usage:
        @router.get("/items")
        async def list_items(pagination: PaginationParams = Depends()):
            ...
    """

    def __init__(
        self,
        limit: str | None = Query(default=None, description="Number of items to return (max 100)"),
        cursor: str | None = Query(default=None, description="ISO-8601 cursor from the previous page"),
        order: str | None = Query(default=None, description="Sort order, asc or desc"),
    ):
        self.limit = _parse_limit(limit)
        self.cursor = parse_iso_datetime(cursor)
        self.order = SortOrder.asc if order == SortOrder.asc.value else SortOrder.desc

    def to_options(self, cursor_field: str = DEFAULT_CURSOR_FIELD) -> PaginationOptions:
        return PaginationOptions(
            limit=self.limit,
            cursor=self.cursor,
            cursor_field=cursor_field,
            order=self.order,
        )
