from fastapi import APIRouter

from socialnet.commands.like_commands import (
    GetLikeInfoCommand,
    LikePostCommand,
    UnlikePostCommand,
)
from socialnet.commands.post_commands import PostIdInput
from socialnet.dependencies import (
    CurrentUserDep,
    LikeRepoDep,
    NotificationRepoDep,
    PostRepoDep,
)
from socialnet.schemas.post import LikeInfo
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api/posts", tags=["likes"])


@router.get("/{post_id}/likes", response_model=LikeInfo)
@handle_http_errors
async def get_like_info(
    post_id: str,
    user: CurrentUserDep,
    posts: PostRepoDep,
    likes: LikeRepoDep,
    notifications: NotificationRepoDep,
) -> LikeInfo:
    command = GetLikeInfoCommand(posts, likes, notifications)
    return await command.execute(user, PostIdInput(post_id=post_id))


@router.post("/{post_id}/likes", response_model=LikeInfo)
@handle_http_errors
async def like_post(
    post_id: str,
    user: CurrentUserDep,
    posts: PostRepoDep,
    likes: LikeRepoDep,
    notifications: NotificationRepoDep,
) -> LikeInfo:
    """Like a post. Liking an already liked post changes nothing."""
    command = LikePostCommand(posts, likes, notifications)
    return await command.execute(user, PostIdInput(post_id=post_id))


@router.delete("/{post_id}/likes", response_model=LikeInfo)
@handle_http_errors
async def unlike_post(
    post_id: str,
    user: CurrentUserDep,
    posts: PostRepoDep,
    likes: LikeRepoDep,
    notifications: NotificationRepoDep,
) -> LikeInfo:
    command = UnlikePostCommand(posts, likes, notifications)
    return await command.execute(user, PostIdInput(post_id=post_id))
