"""
Commands serving the cursor-paginated feeds.

Every feed follows the same steps: resolve the page size against the
feed default and the global cap, fetch one page through the repository
(which fetches ``page_size + 1`` rows and trims the probe), count the
served page, and wrap it in the wire envelope.
"""

from pydantic import BaseModel, Field

from socialnet.commands.base import BaseCommand
from socialnet.repositories.bookmark_repository import BookmarkRepository
from socialnet.repositories.comment_repository import CommentRepository
from socialnet.repositories.notification_repository import (
    NotificationRepository,
)
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.comment import CommentData
from socialnet.schemas.notification import NotificationData
from socialnet.schemas.post import PostData
from socialnet.schemas.response import BackwardCursorPage, CursorPage
from socialnet.schemas.user import UserContext
from socialnet.settings import app_settings
from socialnet.storage.pagination.trimmer import resolve_page_size
from socialnet.utils.metrics import record_page

# ============================================================================
# Input Models
# ============================================================================


class PageInput(BaseModel):  # type: ignore[misc]
    """Page Request: optional cursor and requested page size."""

    cursor: str | None = Field(default=None, description="Opaque cursor")
    page_size: int | None = Field(
        default=None, description="Items per page (feed default if omitted)"
    )


class UserPostsInput(PageInput):
    user_id: str


class SearchInput(PageInput):
    q: str = Field(default="", description="Whitespace-separated terms")

    @property
    def terms(self) -> list[str]:
        return self.q.split()


class CommentsInput(PageInput):
    post_id: str


# ============================================================================
# Post Feeds
# ============================================================================


class GetForYouFeedCommand(BaseCommand[PageInput, CursorPage[PostData]]):
    """All posts, newest first."""

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: PageInput
    ) -> CursorPage[PostData]:
        page_size = resolve_page_size(
            input_data.page_size, app_settings.POSTS_PAGE_SIZE
        )
        page = await self.repository.for_you_page(
            user.id, input_data.cursor, page_size
        )
        record_page("for-you", page.has_more)
        return CursorPage[PostData](items=page.items, next_cursor=page.cursor)


class GetFollowingFeedCommand(BaseCommand[PageInput, CursorPage[PostData]]):
    """Posts by users the caller follows, newest first."""

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: PageInput
    ) -> CursorPage[PostData]:
        page_size = resolve_page_size(
            input_data.page_size, app_settings.POSTS_PAGE_SIZE
        )
        page = await self.repository.following_page(
            user.id, input_data.cursor, page_size
        )
        record_page("following", page.has_more)
        return CursorPage[PostData](items=page.items, next_cursor=page.cursor)


class GetUserPostsCommand(BaseCommand[UserPostsInput, CursorPage[PostData]]):
    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: UserPostsInput
    ) -> CursorPage[PostData]:
        page_size = resolve_page_size(
            input_data.page_size, app_settings.POSTS_PAGE_SIZE
        )
        page = await self.repository.user_posts_page(
            input_data.user_id, user.id, input_data.cursor, page_size
        )
        record_page("user-posts", page.has_more)
        return CursorPage[PostData](items=page.items, next_cursor=page.cursor)


class SearchPostsCommand(BaseCommand[SearchInput, CursorPage[PostData]]):
    """
    Full-text-ish search over posts.

    A post matches when every term occurs in its content, its author's
    display name or its author's username. An empty query matches every
    post.
    """

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: SearchInput
    ) -> CursorPage[PostData]:
        page_size = resolve_page_size(
            input_data.page_size, app_settings.SEARCH_PAGE_SIZE
        )
        page = await self.repository.search_page(
            input_data.terms, user.id, input_data.cursor, page_size
        )
        record_page("search", page.has_more)
        return CursorPage[PostData](items=page.items, next_cursor=page.cursor)


class GetBookmarksCommand(BaseCommand[PageInput, CursorPage[PostData]]):
    """Caller's bookmarked posts; cursors are bookmark ids."""

    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: PageInput
    ) -> CursorPage[PostData]:
        page_size = resolve_page_size(
            input_data.page_size, app_settings.BOOKMARKS_PAGE_SIZE
        )
        page = await self.repository.bookmarked_page(
            user.id, input_data.cursor, page_size
        )
        record_page("bookmarks", page.has_more)
        return CursorPage[PostData](items=page.items, next_cursor=page.cursor)


# ============================================================================
# Comments & Notifications
# ============================================================================


class GetCommentsCommand(
    BaseCommand[CommentsInput, BackwardCursorPage[CommentData]]
):
    """
    One page of a post's comments.

    Items are oldest-first; ``previous_cursor`` loads older comments.
    """

    def __init__(self, repository: CommentRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: CommentsInput
    ) -> BackwardCursorPage[CommentData]:
        page_size = resolve_page_size(
            input_data.page_size, app_settings.COMMENTS_PAGE_SIZE
        )
        page = await self.repository.comments_page(
            input_data.post_id, input_data.cursor, page_size
        )
        record_page("comments", page.has_more)
        return BackwardCursorPage[CommentData](
            items=page.items, previous_cursor=page.cursor
        )


class GetNotificationsCommand(
    BaseCommand[PageInput, CursorPage[NotificationData]]
):
    def __init__(self, repository: NotificationRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: PageInput
    ) -> CursorPage[NotificationData]:
        page_size = resolve_page_size(
            input_data.page_size, app_settings.NOTIFICATIONS_PAGE_SIZE
        )
        page = await self.repository.notifications_page(
            user.id, input_data.cursor, page_size
        )
        record_page("notifications", page.has_more)
        return CursorPage[NotificationData](
            items=page.items, next_cursor=page.cursor
        )
