from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from socialnet.models.base import BaseModel


class Follow(BaseModel, table=True):
    """Directed follow edge: follower_id follows following_id."""

    __tablename__ = "follows"
    __table_args__ = (UniqueConstraint("follower_id", "following_id"),)

    follower_id: str = Field(foreign_key="users.id", index=True)
    following_id: str = Field(foreign_key="users.id", index=True)
