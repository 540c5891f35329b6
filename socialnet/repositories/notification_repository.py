from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.logging import logger
from socialnet.models import Notification
from socialnet.repositories.base import BaseRepository
from socialnet.schemas.notification import NotificationData
from socialnet.storage.pagination.fetcher import CursorPaginationStrategy
from socialnet.storage.pagination.trimmer import Page


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Notification)

    async def notifications_page(
        self, recipient_id: str, cursor: str | None, page_size: int
    ) -> Page[NotificationData]:
        strategy = CursorPaginationStrategy(self.session, cursor=cursor)
        page = await strategy.paginate(
            select(Notification).where(
                Notification.recipient_id == recipient_id
            ),
            Notification,
            page_size,
        )
        return Page(
            items=[NotificationData.model_validate(n) for n in page.items],
            cursor=page.cursor,
        )

    async def notify(
        self,
        recipient_id: str,
        issuer_id: str,
        type: str,
        post_id: str | None = None,
    ) -> Notification | None:
        """
        Create a notification unless the issuer is the recipient.

        Returns:
            The created notification, or None for self-actions.
        """
        if recipient_id == issuer_id:
            return None
        return await self.create(
            Notification(
                recipient_id=recipient_id,
                issuer_id=issuer_id,
                post_id=post_id,
                type=type,
            )
        )

    async def retract(
        self,
        recipient_id: str,
        issuer_id: str,
        type: str,
        post_id: str | None = None,
    ) -> None:
        """Delete notifications created by ``notify`` for the same action."""
        for notification in await self.get_all(
            recipient_id=recipient_id,
            issuer_id=issuer_id,
            type=type,
            post_id=post_id,
        ):
            await self.delete(notification)

    async def mark_all_read(self, recipient_id: str) -> None:
        try:
            await self.session.exec(
                update(Notification)
                .where(
                    col(Notification.recipient_id) == recipient_id,
                    col(Notification.read).is_(False),
                )
                .values(read=True)
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error marking notifications read: {e}")
            raise
