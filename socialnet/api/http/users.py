from fastapi import APIRouter

from socialnet.commands.user_commands import (
    GetRecommendationsCommand,
    GetUserProfileCommand,
    UpdateProfileCommand,
    UsernameInput,
)
from socialnet.dependencies import CurrentUserDep, UserRepoDep
from socialnet.schemas.user import UpdateProfileInput, UserProfile, UserSummary
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/username/{username}", response_model=UserProfile)
@handle_http_errors
async def get_user_by_username(
    username: str, user: CurrentUserDep, repo: UserRepoDep
) -> UserProfile:
    """
    Look up a profile by username (case-insensitive).

    Example:
        GET /api/users/username/Alice
    """
    return await GetUserProfileCommand(repo).execute(
        user, UsernameInput(username=username)
    )


@router.patch("/me", response_model=UserProfile)
@handle_http_errors
async def update_profile(
    data: UpdateProfileInput, user: CurrentUserDep, repo: UserRepoDep
) -> UserProfile:
    return await UpdateProfileCommand(repo).execute(user, data)


@router.get("/recommendations", response_model=list[UserSummary])
@handle_http_errors
async def get_recommendations(
    user: CurrentUserDep, repo: UserRepoDep
) -> list[UserSummary]:
    """Up to RECOMMENDATIONS_LIMIT users the caller does not follow yet."""
    return await GetRecommendationsCommand(repo).execute(user)
