from socialnet.commands.base import BaseCommand
from socialnet.repositories.notification_repository import (
    NotificationRepository,
)
from socialnet.schemas.notification import NotificationCountInfo
from socialnet.schemas.user import UserContext


class GetUnreadCountCommand(BaseCommand[None, NotificationCountInfo]):
    def __init__(self, repository: NotificationRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: None = None
    ) -> NotificationCountInfo:
        return NotificationCountInfo(
            unread_count=await self.repository.count(
                recipient_id=user.id, read=False
            )
        )


class MarkNotificationsReadCommand(BaseCommand[None, None]):
    def __init__(self, repository: NotificationRepository):
        self.repository = repository

    async def execute(self, user: UserContext, input_data: None = None) -> None:
        await self.repository.mark_all_read(user.id)
