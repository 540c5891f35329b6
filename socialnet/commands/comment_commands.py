from pydantic import BaseModel, Field

from socialnet.commands.base import BaseCommand
from socialnet.constants import NOTIFICATION_COMMENT
from socialnet.exceptions import ForbiddenError, NotFoundError
from socialnet.models import Comment
from socialnet.repositories.comment_repository import CommentRepository
from socialnet.repositories.notification_repository import (
    NotificationRepository,
)
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.comment import CommentData
from socialnet.schemas.user import UserContext


class AddCommentInput(BaseModel):  # type: ignore[misc]
    post_id: str
    content: str = Field(..., min_length=1)


class CommentIdInput(BaseModel):  # type: ignore[misc]
    comment_id: str


class CreateCommentCommand(BaseCommand[AddCommentInput, CommentData]):
    """Comment on a post and notify its author (unless commenting on one's own post)."""

    def __init__(
        self,
        posts: PostRepository,
        comments: CommentRepository,
        notifications: NotificationRepository,
    ):
        self.posts = posts
        self.comments = comments
        self.notifications = notifications

    async def execute(
        self, user: UserContext, input_data: AddCommentInput
    ) -> CommentData:
        post = await self.posts.get_by_id(input_data.post_id)
        if post is None:
            raise NotFoundError("Post not found")

        comment = await self.comments.create(
            Comment(
                content=input_data.content,
                user_id=user.id,
                post_id=post.id,
            )
        )
        await self.notifications.notify(
            recipient_id=post.user_id,
            issuer_id=user.id,
            type=NOTIFICATION_COMMENT,
            post_id=post.id,
        )
        return CommentData.model_validate(comment)


class DeleteCommentCommand(BaseCommand[CommentIdInput, CommentData]):
    def __init__(self, comments: CommentRepository):
        self.comments = comments

    async def execute(
        self, user: UserContext, input_data: CommentIdInput
    ) -> CommentData:
        comment = await self.comments.get_by_id(input_data.comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.user_id != user.id:
            raise ForbiddenError("Unauthorized")

        deleted = CommentData.model_validate(comment)
        await self.comments.delete(comment)
        return deleted
