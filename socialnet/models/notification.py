from sqlmodel import Field, Relationship

from socialnet.models.base import BaseModel
from socialnet.models.post import Post
from socialnet.models.user import User


class Notification(BaseModel, table=True):
    """
    Notification delivered to ``recipient_id`` about an action of
    ``issuer_id``.

    Attributes:
        type: One of LIKE, FOLLOW, COMMENT.
        post_id: Post the action refers to (None for FOLLOW).
        read: Whether the recipient has seen it.
    """

    __tablename__ = "notifications"

    recipient_id: str = Field(foreign_key="users.id", index=True)
    issuer_id: str = Field(foreign_key="users.id", index=True)
    post_id: str | None = Field(default=None, foreign_key="posts.id")
    type: str = Field(max_length=16)
    read: bool = Field(default=False, index=True)

    issuer: User = Relationship(
        sa_relationship_kwargs={
            "lazy": "selectin",
            "foreign_keys": "Notification.issuer_id",
        }
    )
    post: Post | None = Relationship(
        sa_relationship_kwargs={"lazy": "selectin"}
    )
