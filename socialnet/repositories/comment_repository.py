from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.models import Comment
from socialnet.repositories.base import BaseRepository
from socialnet.schemas.comment import CommentData
from socialnet.storage.pagination.fetcher import ReverseCursorPaginationStrategy
from socialnet.storage.pagination.trimmer import Page


class CommentRepository(BaseRepository[Comment]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Comment)

    async def comments_page(
        self, post_id: str, cursor: str | None, page_size: int
    ) -> Page[CommentData]:
        """
        Comments of one post, oldest-first within the page.

        The first page holds the newest comments; ``Page.cursor`` opens
        the page of older ones.
        """
        strategy = ReverseCursorPaginationStrategy(self.session, cursor=cursor)
        page = await strategy.paginate(
            select(Comment).where(Comment.post_id == post_id),
            Comment,
            page_size,
        )
        return Page(
            items=[CommentData.model_validate(c) for c in page.items],
            cursor=page.cursor,
        )
