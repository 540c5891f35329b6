from fastapi import APIRouter, status

from socialnet.commands.feed_commands import GetNotificationsCommand
from socialnet.commands.notification_commands import (
    GetUnreadCountCommand,
    MarkNotificationsReadCommand,
)
from socialnet.dependencies import (
    CurrentUserDep,
    NotificationRepoDep,
    PageInputDep,
)
from socialnet.schemas.notification import (
    NotificationCountInfo,
    NotificationData,
)
from socialnet.schemas.response import CursorPage
from socialnet.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=CursorPage[NotificationData])
@handle_http_errors
async def get_notifications(
    user: CurrentUserDep, repo: NotificationRepoDep, page: PageInputDep
) -> CursorPage[NotificationData]:
    """Caller's notifications, newest first."""
    return await GetNotificationsCommand(repo).execute(user, page)


@router.get("/unread-count", response_model=NotificationCountInfo)
@handle_http_errors
async def get_unread_count(
    user: CurrentUserDep, repo: NotificationRepoDep
) -> NotificationCountInfo:
    return await GetUnreadCountCommand(repo).execute(user)


@router.patch("/mark-as-read", status_code=status.HTTP_204_NO_CONTENT)
@handle_http_errors
async def mark_as_read(user: CurrentUserDep, repo: NotificationRepoDep) -> None:
    await MarkNotificationsReadCommand(repo).execute(user)
