from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.models import Bookmark
from socialnet.repositories.base import BaseRepository
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.post import PostData
from socialnet.storage.pagination.fetcher import CursorPaginationStrategy
from socialnet.storage.pagination.trimmer import Page


class BookmarkRepository(BaseRepository[Bookmark]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Bookmark)

    async def bookmarked_page(
        self, viewer_id: str, cursor: str | None, page_size: int
    ) -> Page[PostData]:
        """
        Viewer's bookmarks, newest bookmark first.

        The cursor is a bookmark id; items are the bookmarked posts.
        """
        strategy = CursorPaginationStrategy(self.session, cursor=cursor)
        page = await strategy.paginate(
            select(Bookmark).where(Bookmark.user_id == viewer_id),
            Bookmark,
            page_size,
        )
        posts = [bookmark.post for bookmark in page.items]
        return Page(
            items=await PostRepository(self.session).to_post_data(
                posts, viewer_id
            ),
            cursor=page.cursor,
        )
