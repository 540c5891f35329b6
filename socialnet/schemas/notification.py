from datetime import datetime

from socialnet.schemas.base import CamelModel
from socialnet.schemas.user import UserSummary


class NotificationPost(CamelModel):
    id: str
    content: str


class NotificationData(CamelModel):
    id: str
    type: str
    read: bool
    created_at: datetime
    issuer: UserSummary
    post: NotificationPost | None = None


class NotificationCountInfo(CamelModel):
    unread_count: int
