from fastapi import APIRouter

from socialnet.commands.bookmark_commands import (
    BookmarkPostCommand,
    GetBookmarkInfoCommand,
    RemoveBookmarkCommand,
)
from socialnet.commands.post_commands import PostIdInput
from socialnet.dependencies import BookmarkRepoDep, CurrentUserDep, PostRepoDep
from socialnet.schemas.post import BookmarkInfo
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api/posts", tags=["bookmarks"])


@router.get("/{post_id}/bookmark", response_model=BookmarkInfo)
@handle_http_errors
async def get_bookmark_info(
    post_id: str,
    user: CurrentUserDep,
    posts: PostRepoDep,
    bookmarks: BookmarkRepoDep,
) -> BookmarkInfo:
    command = GetBookmarkInfoCommand(posts, bookmarks)
    return await command.execute(user, PostIdInput(post_id=post_id))


@router.post("/{post_id}/bookmark", response_model=BookmarkInfo)
@handle_http_errors
async def bookmark_post(
    post_id: str,
    user: CurrentUserDep,
    posts: PostRepoDep,
    bookmarks: BookmarkRepoDep,
) -> BookmarkInfo:
    command = BookmarkPostCommand(posts, bookmarks)
    return await command.execute(user, PostIdInput(post_id=post_id))


@router.delete("/{post_id}/bookmark", response_model=BookmarkInfo)
@handle_http_errors
async def remove_bookmark(
    post_id: str,
    user: CurrentUserDep,
    posts: PostRepoDep,
    bookmarks: BookmarkRepoDep,
) -> BookmarkInfo:
    command = RemoveBookmarkCommand(posts, bookmarks)
    return await command.execute(user, PostIdInput(post_id=post_id))
