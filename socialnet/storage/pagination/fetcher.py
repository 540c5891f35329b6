"""
Keyset page fetchers (stable, high-performance).

Rows are ordered by ``(created_at, id)``, a total order. A cursor names
the row that opens the requested page, so the page starts strictly after
the last row of the previous page. Unlike offsets, the boundary does not
shift when rows are inserted while a client is scrolling.
"""

from typing import Type

from sqlalchemy import Select, and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.exceptions import InfrastructureError
from socialnet.logging import logger
from socialnet.models.base import BaseModel
from socialnet.storage.pagination.cursor import decode_cursor
from socialnet.storage.pagination.trimmer import (
    Page,
    trim_backward,
    trim_forward,
)


class _KeysetStrategy:
    def __init__(
        self,
        session: AsyncSession,
        cursor: str | None = None,
    ):
        """
        Args:
            session: SQLModel async session for database queries.
            cursor: Cursor from the previous page. If None, starts from the
                newest row.

        Raises:
            ValidationError: If the cursor is malformed.
        """
        self.session = session
        self.cursor = cursor
        self.cursor_id = decode_cursor(cursor)

    async def _fetch(
        self,
        query: Select,
        model: Type[BaseModel],
        limit: int,
    ) -> list[BaseModel] | None:
        """
        Fetch up to ``limit`` rows newest-first, starting at the cursor row.

        Returns:
            Rows newest-first, or None when the cursor names no row.

        Raises:
            InfrastructureError: If a database query fails.
        """
        try:
            if self.cursor_id is not None:
                anchor = await self.session.get(model, self.cursor_id)
                if anchor is None:
                    logger.warning(
                        f"Cursor {self.cursor_id} names no {model.__name__} row"
                    )
                    return None

                query = query.where(
                    or_(
                        model.created_at < anchor.created_at,
                        and_(
                            model.created_at == anchor.created_at,
                            model.id <= anchor.id,
                        ),
                    )
                )

            query = query.order_by(
                model.created_at.desc(), model.id.desc()
            ).limit(limit)
            results = await self.session.exec(query)
            return list(results.all())
        except SQLAlchemyError as ex:
            logger.error(f"Error fetching {model.__name__} page: {ex}")
            raise InfrastructureError("Database error occurred") from ex


class CursorPaginationStrategy(_KeysetStrategy):
    """
    Newest-first feed pagination (posts, bookmarks, notifications, search).

    The cursor is the id of a row, so it stops working once that row is
    deleted: the next request returns an empty page with no cursor and a
    scrolling client treats the feed as finished. Clients that delete the
    row a cursor names should refetch the feed from the first page.

    Example:
        ```python
        strategy = CursorPaginationStrategy(session, cursor=None)
        query = select(Post).where(Post.user_id == user_id)
        page = await strategy.paginate(query, Post, 10)

        if page.cursor:
            strategy = CursorPaginationStrategy(session, cursor=page.cursor)
            next_page = await strategy.paginate(query, Post, 10)
        ```
    """

    async def paginate(
        self,
        query: Select,
        model: Type[BaseModel],
        page_size: int,
    ) -> Page:
        """
        Execute cursor pagination on the query.

        Args:
            query: Select with filters and eager loading already applied.
                Must not carry its own ORDER BY or LIMIT.
            model: The table whose ``(created_at, id)`` defines the order.
            page_size: Number of items per page.

        Returns:
            Page with at most ``page_size`` rows newest-first and the id of
            the probe row as ``cursor``.
        """
        rows = await self._fetch(query, model, page_size + 1)
        if rows is None:
            return Page()
        return trim_forward(rows, page_size)


class ReverseCursorPaginationStrategy(_KeysetStrategy):
    """
    Older-on-demand pagination used by comments.

    The first request returns the newest ``page_size`` rows, displayed
    oldest-first. The returned cursor opens the page of older rows that
    precedes them.
    """

    async def paginate(
        self,
        query: Select,
        model: Type[BaseModel],
        page_size: int,
    ) -> Page:
        rows = await self._fetch(query, model, page_size + 1)
        if rows is None:
            return Page()
        rows.reverse()
        return trim_backward(rows, page_size)
