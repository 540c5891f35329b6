from fastapi import APIRouter

from socialnet.commands.trending_commands import GetTrendingTopicsCommand
from socialnet.dependencies import CurrentUserDep, PostRepoDep
from socialnet.schemas.response import TrendingHashtag
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api", tags=["trending"])


@router.get("/trending", response_model=list[TrendingHashtag])
@handle_http_errors
async def get_trending(
    user: CurrentUserDep, repo: PostRepoDep
) -> list[TrendingHashtag]:
    """Most used hashtags (cached in Redis)."""
    return await GetTrendingTopicsCommand(repo).execute(user)
