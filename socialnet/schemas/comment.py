from datetime import datetime

from pydantic import Field, field_validator

from socialnet.schemas.base import CamelModel
from socialnet.schemas.user import UserSummary


class CommentData(CamelModel):
    id: str
    content: str
    created_at: datetime
    post_id: str
    user: UserSummary


class CreateCommentInput(CamelModel):
    content: str = Field(..., description="Comment body")

    @field_validator("content")
    @classmethod
    def content_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Required")
        return v
