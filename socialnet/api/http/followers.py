from fastapi import APIRouter

from socialnet.commands.follow_commands import (
    FollowUserCommand,
    GetFollowerInfoCommand,
    UnfollowUserCommand,
    UserIdInput,
)
from socialnet.dependencies import (
    CurrentUserDep,
    FollowRepoDep,
    NotificationRepoDep,
    UserRepoDep,
)
from socialnet.schemas.user import FollowerInfo
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api/users", tags=["followers"])


@router.get("/{user_id}/followers", response_model=FollowerInfo)
@handle_http_errors
async def get_follower_info(
    user_id: str,
    user: CurrentUserDep,
    users: UserRepoDep,
    follows: FollowRepoDep,
    notifications: NotificationRepoDep,
) -> FollowerInfo:
    command = GetFollowerInfoCommand(users, follows, notifications)
    return await command.execute(user, UserIdInput(user_id=user_id))


@router.post("/{user_id}/followers", response_model=FollowerInfo)
@handle_http_errors
async def follow_user(
    user_id: str,
    user: CurrentUserDep,
    users: UserRepoDep,
    follows: FollowRepoDep,
    notifications: NotificationRepoDep,
) -> FollowerInfo:
    """Follow ``user_id``. Following oneself is rejected with 400."""
    command = FollowUserCommand(users, follows, notifications)
    return await command.execute(user, UserIdInput(user_id=user_id))


@router.delete("/{user_id}/followers", response_model=FollowerInfo)
@handle_http_errors
async def unfollow_user(
    user_id: str,
    user: CurrentUserDep,
    users: UserRepoDep,
    follows: FollowRepoDep,
    notifications: NotificationRepoDep,
) -> FollowerInfo:
    command = UnfollowUserCommand(users, follows, notifications)
    return await command.execute(user, UserIdInput(user_id=user_id))
