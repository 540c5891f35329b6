from datetime import datetime

from pydantic import Field, field_validator

from socialnet.schemas.base import CamelModel
from socialnet.schemas.user import UserSummary


class PostData(CamelModel):
    """Post as rendered in every feed, with per-viewer flags."""

    id: str
    content: str
    created_at: datetime
    user: UserSummary
    likes: int = 0
    comments: int = 0
    is_liked_by_user: bool = False
    is_bookmarked_by_user: bool = False


class CreatePostInput(CamelModel):
    content: str = Field(..., description="Post body")

    @field_validator("content")
    @classmethod
    def content_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Required")
        return v


class LikeInfo(CamelModel):
    likes: int
    is_liked_by_user: bool


class BookmarkInfo(CamelModel):
    is_bookmarked_by_user: bool
