from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from socialnet.constants import MAX_BIO_LENGTH
from socialnet.schemas.base import CamelModel


class UserContext(BaseModel):  # type: ignore[misc]
    """
    Authenticated caller, threaded explicitly through commands.

    Produced by the authentication backend from a valid session and
    never read from ambient state.
    """

    id: str
    username: str
    display_name: str

    # Starlette's AuthenticationMiddleware checks this on request.user
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def identity(self) -> str:
        return self.id


class UserSummary(CamelModel):
    id: str
    username: str
    display_name: str
    avatar_url: str | None = None


class UserProfile(UserSummary):
    """Public profile with counters as seen by the requesting user."""

    bio: str | None = None
    created_at: datetime
    followers: int = 0
    posts: int = 0
    is_followed_by_user: bool = False


class FollowerInfo(CamelModel):
    followers: int
    is_followed_by_user: bool


class UpdateProfileInput(CamelModel):
    display_name: str = Field(..., description="New display name")
    bio: str = Field(default="", max_length=MAX_BIO_LENGTH)

    @field_validator("display_name")
    @classmethod
    def display_name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Required")
        return v
