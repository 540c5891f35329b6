from typing import Generic, TypeVar

from socialnet.schemas.base import CamelModel

T = TypeVar("T")


class CursorPage(CamelModel, Generic[T]):
    """
    One page of a newest-first feed.

    ``next_cursor`` is the id of the first row beyond this page, or None
    when no further rows matched at query time.
    """

    items: list[T]
    next_cursor: str | None = None


class BackwardCursorPage(CamelModel, Generic[T]):
    """
    One page of the comment feed, items oldest-first.

    ``previous_cursor`` opens the page of older rows that precedes this
    one, or is None when this page reaches the oldest row.
    """

    items: list[T]
    previous_cursor: str | None = None


class TrendingHashtag(CamelModel):
    hashtag: str
    count: int

