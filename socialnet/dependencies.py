"""
Dependency injection configuration for FastAPI.

This module provides dependency injection setup for the request session,
the authenticated user and repositories. Every repository of a request
shares the same session, so a command touching several tables commits
in one transaction.

Example:
    ```python
    from fastapi import APIRouter
    from socialnet.dependencies import CurrentUserDep, PostRepoDep

    router = APIRouter()

    @router.get("/posts/for-you")
    async def for_you(user: CurrentUserDep, repo: PostRepoDep):
        return await GetForYouFeedCommand(repo).execute(user, PageInput())
    ```
"""

from typing import Annotated

from fastapi import Depends, Query, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.commands.feed_commands import PageInput
from socialnet.exceptions import UnauthorizedError
from socialnet.repositories.bookmark_repository import BookmarkRepository
from socialnet.repositories.comment_repository import CommentRepository
from socialnet.repositories.follow_repository import FollowRepository
from socialnet.repositories.like_repository import LikeRepository
from socialnet.repositories.notification_repository import (
    NotificationRepository,
)
from socialnet.repositories.post_repository import PostRepository
from socialnet.repositories.user_repository import UserRepository
from socialnet.schemas.user import UserContext
from socialnet.storage.db import get_session

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Authentication Dependencies
# ============================================================================


def get_current_user(request: Request) -> UserContext:
    """
    Return the caller resolved by ``SessionAuthBackend``.

    Raises:
        UnauthorizedError: If the request carries no valid session.
    """
    user = request.user
    if not user.is_authenticated:
        raise UnauthorizedError()
    return user


CurrentUserDep = Annotated[UserContext, Depends(get_current_user)]


# ============================================================================
# Repository Dependencies
# ============================================================================


def get_post_repository(session: SessionDep) -> PostRepository:
    return PostRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


def get_like_repository(session: SessionDep) -> LikeRepository:
    return LikeRepository(session)


def get_bookmark_repository(session: SessionDep) -> BookmarkRepository:
    return BookmarkRepository(session)


def get_follow_repository(session: SessionDep) -> FollowRepository:
    return FollowRepository(session)


def get_notification_repository(session: SessionDep) -> NotificationRepository:
    return NotificationRepository(session)


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
LikeRepoDep = Annotated[LikeRepository, Depends(get_like_repository)]
BookmarkRepoDep = Annotated[BookmarkRepository, Depends(get_bookmark_repository)]
FollowRepoDep = Annotated[FollowRepository, Depends(get_follow_repository)]
NotificationRepoDep = Annotated[
    NotificationRepository, Depends(get_notification_repository)
]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


# ============================================================================
# Pagination Dependencies
# ============================================================================


def get_page_input(
    cursor: Annotated[str | None, Query(description="Opaque cursor")] = None,
    page_size: Annotated[
        int | None, Query(ge=1, description="Items per page")
    ] = None,
) -> PageInput:
    return PageInput(cursor=cursor, page_size=page_size)


PageInputDep = Annotated[PageInput, Depends(get_page_input)]
