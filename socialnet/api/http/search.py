from fastapi import APIRouter, Query

from socialnet.commands.feed_commands import SearchInput, SearchPostsCommand
from socialnet.dependencies import CurrentUserDep, PageInputDep, PostRepoDep
from socialnet.schemas.post import PostData
from socialnet.schemas.response import CursorPage
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search", response_model=CursorPage[PostData])
@handle_http_errors
async def search_posts(
    user: CurrentUserDep,
    repo: PostRepoDep,
    page: PageInputDep,
    q: str = Query(default="", description="Search terms"),
) -> CursorPage[PostData]:
    """
    Posts matching every whitespace-separated term of ``q``.

    Example:
        GET /api/search?q=python%20async
    """
    input_data = SearchInput(
        q=q, cursor=page.cursor, page_size=page.page_size
    )
    return await SearchPostsCommand(repo).execute(user, input_data)
