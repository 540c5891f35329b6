"""
Infinite-scroll feed assembly.

``FeedAssembler`` requests pages one cursor at a time and keeps them in
fetch order. Forward feeds display pages in that order; backward feeds
(comments) display them reversed, because every later page holds older
rows.

After a mutation the loaded pages are patched in place (a new post or
comment joins the first page, a deleted one disappears) instead of
refetching the feed. Cursors are left untouched.
"""

from typing import Awaitable, Callable, Generic, TypeVar

from socialnet.logging import logger
from socialnet.schemas.response import BackwardCursorPage, CursorPage

T = TypeVar("T")

PageFetcher = Callable[
    [str | None], Awaitable[CursorPage[T] | BackwardCursorPage[T]]
]


def page_cursor(page: CursorPage | BackwardCursorPage) -> str | None:
    if isinstance(page, BackwardCursorPage):
        return page.previous_cursor
    return page.next_cursor


class FeedAssembler(Generic[T]):
    """
    Accumulates the pages of one feed.

    Example:
        ```python
        feed = FeedAssembler(lambda cursor: client.get_for_you(cursor))
        await feed.fetch_next_page()
        while feed.has_next_page:
            await feed.fetch_next_page()
        posts = feed.items
        ```

    Attributes:
        pages: Pages in fetch order.
        page_params: Cursor each page was requested with (None for the first).
        backward: Display pages newest-fetched-first (comment feeds).
    """

    def __init__(self, fetch_page: PageFetcher, backward: bool = False):
        self.fetch_page = fetch_page
        self.backward = backward
        self.pages: list[CursorPage[T] | BackwardCursorPage[T]] = []
        self.page_params: list[str | None] = []
        self.is_fetching = False
        self._generation = 0

    @property
    def has_next_page(self) -> bool:
        if not self.pages:
            return True
        return page_cursor(self.pages[-1]) is not None

    @property
    def next_page_param(self) -> str | None:
        return page_cursor(self.pages[-1]) if self.pages else None

    @property
    def items(self) -> list[T]:
        pages = reversed(self.pages) if self.backward else self.pages
        return [item for page in pages for item in page.items]

    async def fetch_next_page(self) -> bool:
        """
        Fetch the page after the last one, at most once at a time.

        Returns:
            True if a page was appended; False when a fetch is already
            outstanding, the feed is exhausted, or the feed was reset
            while the page was loading.
        """
        if self.is_fetching or not self.has_next_page:
            return False

        cursor = self.next_page_param
        generation = self._generation
        self.is_fetching = True
        try:
            page = await self.fetch_page(cursor)
        finally:
            self.is_fetching = False

        if generation != self._generation:
            logger.debug("Feed was reset during fetch, dropping page")
            return False

        self.pages.append(page)
        self.page_params.append(cursor)
        return True

    def reset(self) -> None:
        """Drop every page; the next fetch starts from the first page."""
        self.pages = []
        self.page_params = []
        self._generation += 1

    def _cancel_fetch(self) -> None:
        # A page requested before the edit may contradict it
        if self.is_fetching:
            self._generation += 1

    def prepend(self, item: T) -> None:
        """
        Show a newly created item without refetching.

        The item joins the first page at its newest end: the front for
        forward feeds, the back for backward ones. Nothing happens while
        no page is loaded; the first fetch will include the item.
        """
        if not self.pages:
            return
        self._cancel_fetch()
        first = self.pages[0]
        if self.backward:
            items = [*first.items, item]
        else:
            items = [item, *first.items]
        self.pages[0] = first.model_copy(update={"items": items})

    def remove(self, predicate: Callable[[T], bool]) -> int:
        """
        Drop every loaded item matching ``predicate``.

        Returns:
            Number of items removed.
        """
        self._cancel_fetch()
        removed = 0
        for index, page in enumerate(self.pages):
            kept = [item for item in page.items if not predicate(item)]
            if len(kept) != len(page.items):
                removed += len(page.items) - len(kept)
                self.pages[index] = page.model_copy(update={"items": kept})
        return removed
