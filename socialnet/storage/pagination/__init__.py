"""
Keyset pagination for the feeds.

Example:
    ```python
    from socialnet.storage.pagination import CursorPaginationStrategy
    from sqlmodel import select

    strategy = CursorPaginationStrategy(session, cursor=request_cursor)
    page = await strategy.paginate(select(Post), Post, 10)
    # page.items, page.cursor
    ```
"""

from socialnet.storage.pagination.cursor import decode_cursor, encode_cursor
from socialnet.storage.pagination.fetcher import (
    CursorPaginationStrategy,
    ReverseCursorPaginationStrategy,
)
from socialnet.storage.pagination.trimmer import (
    Page,
    resolve_page_size,
    trim_backward,
    trim_forward,
)

__all__ = [
    "CursorPaginationStrategy",
    "ReverseCursorPaginationStrategy",
    "Page",
    "decode_cursor",
    "encode_cursor",
    "resolve_page_size",
    "trim_backward",
    "trim_forward",
]
