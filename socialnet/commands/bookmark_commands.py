from socialnet.commands.base import BaseCommand
from socialnet.commands.post_commands import PostIdInput
from socialnet.exceptions import NotFoundError
from socialnet.models import Bookmark
from socialnet.repositories.bookmark_repository import BookmarkRepository
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.post import BookmarkInfo
from socialnet.schemas.user import UserContext


class _BookmarkCommand(BaseCommand[PostIdInput, BookmarkInfo]):
    def __init__(self, posts: PostRepository, bookmarks: BookmarkRepository):
        self.posts = posts
        self.bookmarks = bookmarks

    async def _ensure_post(self, post_id: str) -> None:
        if await self.posts.get_by_id(post_id) is None:
            raise NotFoundError("Post not found")


class GetBookmarkInfoCommand(_BookmarkCommand):
    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> BookmarkInfo:
        await self._ensure_post(input_data.post_id)
        return BookmarkInfo(
            is_bookmarked_by_user=await self.bookmarks.exists(
                user_id=user.id, post_id=input_data.post_id
            )
        )


class BookmarkPostCommand(_BookmarkCommand):
    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> BookmarkInfo:
        await self._ensure_post(input_data.post_id)
        await self.bookmarks.create_if_absent(
            Bookmark(user_id=user.id, post_id=input_data.post_id)
        )
        return BookmarkInfo(is_bookmarked_by_user=True)


class RemoveBookmarkCommand(_BookmarkCommand):
    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> BookmarkInfo:
        await self._ensure_post(input_data.post_id)
        bookmark = await self.bookmarks.get_one(
            user_id=user.id, post_id=input_data.post_id
        )
        if bookmark is not None:
            await self.bookmarks.delete(bookmark)
        return BookmarkInfo(is_bookmarked_by_user=False)
