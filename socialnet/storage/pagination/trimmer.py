"""
Probe-row trimming.

Every page is fetched with one extra row (the probe). Its presence proves
another page exists, and its id becomes the cursor of that page. These
functions are pure so they can be reused by any fetcher and tested
without a database.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, Sequence, TypeVar

from socialnet.constants import MAX_PAGE_SIZE
from socialnet.exceptions import ValidationError
from socialnet.storage.pagination.cursor import encode_cursor


class HasId(Protocol):
    id: Any


T = TypeVar("T", bound=HasId)


@dataclass
class Page(Generic[T]):
    """
    Trimmed page of rows.

    Attributes:
        items: At most ``page_size`` rows, in display order.
        cursor: Id of the probe row (the row that opens the adjacent page),
            or None when no more rows matched.
    """

    items: list[T] = field(default_factory=list)
    cursor: str | None = None

    @property
    def has_more(self) -> bool:
        return self.cursor is not None


def resolve_page_size(page_size: int | None, default: int) -> int:
    """
    Apply the feed default and the global cap to a requested page size.

    Raises:
        ValidationError: If the requested size is below 1.
    """
    if page_size is None:
        page_size = default
    if page_size < 1:
        raise ValidationError("page_size must be at least 1")
    return min(page_size, MAX_PAGE_SIZE)


def trim_forward(rows: Sequence[T], page_size: int) -> Page[T]:
    """
    Trim a newest-first fetch of up to ``page_size + 1`` rows.

    The probe is the last row (index ``page_size``).

    Example:
        >>> page = trim_forward(rows_0_to_10, 10)
        >>> len(page.items), page.cursor == rows_0_to_10[10].id
        (10, True)
    """
    if page_size < 1:
        raise ValidationError("page_size must be at least 1")

    rows = list(rows)
    if len(rows) > page_size:
        return Page(
            items=rows[:page_size], cursor=encode_cursor(rows[page_size].id)
        )
    return Page(items=rows, cursor=None)


def trim_backward(rows: Sequence[T], page_size: int) -> Page[T]:
    """
    Trim an oldest-first fetch of up to ``page_size + 1`` rows.

    Used by feeds that load older rows on demand (comments). The probe is
    the first, oldest row; it opens the preceding page.
    """
    if page_size < 1:
        raise ValidationError("page_size must be at least 1")

    rows = list(rows)
    if len(rows) > page_size:
        probe = rows[len(rows) - page_size - 1]
        return Page(
            items=rows[len(rows) - page_size :],
            cursor=encode_cursor(probe.id),
        )
    return Page(items=rows, cursor=None)
