from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from socialnet.models.base import BaseModel


class User(BaseModel, table=True):
    """
    SQLModel representing a user account.

    Attributes:
        username: Unique handle, looked up case-insensitively.
        display_name: Name shown next to posts and comments.
        email: Contact address.
        bio: Free-form profile text (at most 1000 characters).
        avatar_url: Optional avatar location.
    """

    __tablename__ = "users"

    username: str = Field(index=True, unique=True, max_length=64)
    display_name: str = Field(max_length=128)
    email: str | None = Field(default=None, max_length=256)
    bio: str | None = Field(default=None, max_length=1000)
    avatar_url: str | None = Field(default=None)


class Session(BaseModel, table=True):
    """
    Login session issued by the authentication service.

    The id doubles as the bearer token; the row is only read here.
    """

    __tablename__ = "sessions"

    user_id: str = Field(foreign_key="users.id", index=True)
    expires_at: datetime = Field(sa_type=DateTime(timezone=True))
