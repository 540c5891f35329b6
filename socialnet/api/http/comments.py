"""
Comment endpoints.

The comment feed loads backwards: the first page holds the newest
comments (displayed oldest-first) and ``previousCursor`` loads older ones.
"""

from fastapi import APIRouter, status

from socialnet.commands.comment_commands import (
    AddCommentInput,
    CommentIdInput,
    CreateCommentCommand,
    DeleteCommentCommand,
)
from socialnet.commands.feed_commands import CommentsInput, GetCommentsCommand
from socialnet.dependencies import (
    CommentRepoDep,
    CurrentUserDep,
    NotificationRepoDep,
    PageInputDep,
    PostRepoDep,
)
from socialnet.schemas.comment import CommentData, CreateCommentInput
from socialnet.schemas.response import BackwardCursorPage
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api", tags=["comments"])


@router.get(
    "/posts/{post_id}/comments",
    response_model=BackwardCursorPage[CommentData],
    summary="Comments of a post",
)
@handle_http_errors
async def get_comments(
    post_id: str,
    user: CurrentUserDep,
    repo: CommentRepoDep,
    page: PageInputDep,
) -> BackwardCursorPage[CommentData]:
    """
    Example:
        GET /api/posts/{post_id}/comments
        GET /api/posts/{post_id}/comments?cursor=<previousCursor>
    """
    input_data = CommentsInput(
        post_id=post_id, cursor=page.cursor, page_size=page.page_size
    )
    return await GetCommentsCommand(repo).execute(user, input_data)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentData,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
)
@handle_http_errors
async def create_comment(
    post_id: str,
    data: CreateCommentInput,
    user: CurrentUserDep,
    posts: PostRepoDep,
    comments: CommentRepoDep,
    notifications: NotificationRepoDep,
) -> CommentData:
    command = CreateCommentCommand(posts, comments, notifications)
    return await command.execute(
        user, AddCommentInput(post_id=post_id, content=data.content)
    )


@router.delete(
    "/comments/{comment_id}",
    response_model=CommentData,
    summary="Delete a comment",
)
@handle_http_errors
async def delete_comment(
    comment_id: str, user: CurrentUserDep, comments: CommentRepoDep
) -> CommentData:
    return await DeleteCommentCommand(comments).execute(
        user, CommentIdInput(comment_id=comment_id)
    )
