from pydantic import BaseModel

from socialnet.commands.base import BaseCommand
from socialnet.exceptions import NotFoundError
from socialnet.repositories.user_repository import UserRepository
from socialnet.schemas.user import (
    UpdateProfileInput,
    UserContext,
    UserProfile,
    UserSummary,
)
from socialnet.settings import app_settings


class UsernameInput(BaseModel):  # type: ignore[misc]
    username: str


class GetUserProfileCommand(BaseCommand[UsernameInput, UserProfile]):
    """Profile lookup by username (case-insensitive) with counters."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: UsernameInput
    ) -> UserProfile:
        found = await self.repository.get_by_username(input_data.username)
        if found is None:
            raise NotFoundError("User not found")
        return await self.repository.profile(found, user.id)


class UpdateProfileCommand(BaseCommand[UpdateProfileInput, UserProfile]):
    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: UpdateProfileInput
    ) -> UserProfile:
        me = await self.repository.get_by_id(user.id)
        if me is None:
            raise NotFoundError("User not found")

        me.display_name = input_data.display_name
        me.bio = input_data.bio
        me = await self.repository.update(me)
        return await self.repository.profile(me, user.id)


class GetRecommendationsCommand(BaseCommand[None, list[UserSummary]]):
    """Users the caller might want to follow."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: None = None
    ) -> list[UserSummary]:
        return await self.repository.recommendations(
            user.id, app_settings.RECOMMENDATIONS_LIMIT
        )
