"""
Post endpoints: the post feeds, single posts, creation and deletion.

Feeds are cursor-paginated. A response carries ``nextCursor`` when more
posts exist; passing it back as ``cursor`` returns the following page.
"""

from fastapi import APIRouter, status

from socialnet.commands.feed_commands import (
    GetBookmarksCommand,
    GetFollowingFeedCommand,
    GetForYouFeedCommand,
    GetUserPostsCommand,
    UserPostsInput,
)
from socialnet.commands.post_commands import (
    CreatePostCommand,
    DeletePostCommand,
    GetPostCommand,
    PostIdInput,
)
from socialnet.dependencies import (
    BookmarkRepoDep,
    CurrentUserDep,
    PageInputDep,
    PostRepoDep,
)
from socialnet.schemas.post import CreatePostInput, PostData
from socialnet.schemas.response import CursorPage
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api", tags=["posts"])


@router.get(
    "/posts/for-you",
    response_model=CursorPage[PostData],
    summary="For-you feed",
)
@handle_http_errors
async def for_you_feed(
    user: CurrentUserDep, repo: PostRepoDep, page: PageInputDep
) -> CursorPage[PostData]:
    """
    All posts, newest first.

    Example:
        GET /api/posts/for-you
        GET /api/posts/for-you?cursor=0f8b...&page_size=20
    """
    return await GetForYouFeedCommand(repo).execute(user, page)


@router.get(
    "/posts/following",
    response_model=CursorPage[PostData],
    summary="Following feed",
)
@handle_http_errors
async def following_feed(
    user: CurrentUserDep, repo: PostRepoDep, page: PageInputDep
) -> CursorPage[PostData]:
    """Posts by users the caller follows, newest first."""
    return await GetFollowingFeedCommand(repo).execute(user, page)


@router.get(
    "/posts/bookmarked",
    response_model=CursorPage[PostData],
    summary="Bookmarked posts",
)
@handle_http_errors
async def bookmarked_posts(
    user: CurrentUserDep, repo: BookmarkRepoDep, page: PageInputDep
) -> CursorPage[PostData]:
    """
    Caller's bookmarks, most recently bookmarked first.

    The cursor of this feed is a bookmark id, not a post id.
    """
    return await GetBookmarksCommand(repo).execute(user, page)


@router.get(
    "/users/{user_id}/posts",
    response_model=CursorPage[PostData],
    summary="Posts of one user",
)
@handle_http_errors
async def user_posts(
    user_id: str,
    user: CurrentUserDep,
    repo: PostRepoDep,
    page: PageInputDep,
) -> CursorPage[PostData]:
    input_data = UserPostsInput(
        user_id=user_id, cursor=page.cursor, page_size=page.page_size
    )
    return await GetUserPostsCommand(repo).execute(user, input_data)


@router.get(
    "/posts/{post_id}",
    response_model=PostData,
    summary="One post",
)
@handle_http_errors
async def get_post(
    post_id: str, user: CurrentUserDep, repo: PostRepoDep
) -> PostData:
    return await GetPostCommand(repo).execute(
        user, PostIdInput(post_id=post_id)
    )


@router.post(
    "/posts",
    response_model=PostData,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@handle_http_errors
async def create_post(
    data: CreatePostInput, user: CurrentUserDep, repo: PostRepoDep
) -> PostData:
    return await CreatePostCommand(repo).execute(user, data)


@router.delete(
    "/posts/{post_id}",
    response_model=PostData,
    summary="Delete a post",
)
@handle_http_errors
async def delete_post(
    post_id: str, user: CurrentUserDep, repo: PostRepoDep
) -> PostData:
    """
    Delete one of the caller's posts.

    Returns:
        The deleted post.

    Raises:
        404 if the post does not exist, 403 if the caller is not its author.
    """
    return await DeletePostCommand(repo).execute(
        user, PostIdInput(post_id=post_id)
    )
