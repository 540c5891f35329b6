from pydantic import BaseModel, Field

from socialnet.commands.base import BaseCommand
from socialnet.constants import NOTIFICATION_FOLLOW
from socialnet.exceptions import NotFoundError, ValidationError
from socialnet.models import Follow
from socialnet.repositories.follow_repository import FollowRepository
from socialnet.repositories.notification_repository import (
    NotificationRepository,
)
from socialnet.repositories.user_repository import UserRepository
from socialnet.schemas.user import FollowerInfo, UserContext


class UserIdInput(BaseModel):  # type: ignore[misc]
    user_id: str = Field(..., description="Target user ID")


class _FollowCommand(BaseCommand[UserIdInput, FollowerInfo]):
    def __init__(
        self,
        users: UserRepository,
        follows: FollowRepository,
        notifications: NotificationRepository,
    ):
        self.users = users
        self.follows = follows
        self.notifications = notifications

    async def _ensure_user(self, user_id: str) -> None:
        if await self.users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")


class GetFollowerInfoCommand(_FollowCommand):
    async def execute(
        self, user: UserContext, input_data: UserIdInput
    ) -> FollowerInfo:
        await self._ensure_user(input_data.user_id)
        return await self.users.follower_info(input_data.user_id, user.id)


class FollowUserCommand(_FollowCommand):
    """
    Follow a user and notify them.

    Raises:
        ValidationError: If the caller tries to follow themselves.
        NotFoundError: If the target user does not exist.
    """

    async def execute(
        self, user: UserContext, input_data: UserIdInput
    ) -> FollowerInfo:
        if input_data.user_id == user.id:
            raise ValidationError("You cannot follow yourself")
        await self._ensure_user(input_data.user_id)

        if await self.follows.create_if_absent(
            Follow(follower_id=user.id, following_id=input_data.user_id)
        ):
            await self.notifications.notify(
                recipient_id=input_data.user_id,
                issuer_id=user.id,
                type=NOTIFICATION_FOLLOW,
            )

        return await self.users.follower_info(input_data.user_id, user.id)


class UnfollowUserCommand(_FollowCommand):
    async def execute(
        self, user: UserContext, input_data: UserIdInput
    ) -> FollowerInfo:
        await self._ensure_user(input_data.user_id)

        follow = await self.follows.get_one(
            follower_id=user.id, following_id=input_data.user_id
        )
        if follow is not None:
            await self.follows.delete(follow)
        await self.notifications.retract(
            recipient_id=input_data.user_id,
            issuer_id=user.id,
            type=NOTIFICATION_FOLLOW,
        )

        return await self.users.follower_info(input_data.user_id, user.id)
