from pydantic import BaseModel, Field

from socialnet.commands.base import BaseCommand
from socialnet.exceptions import ForbiddenError, NotFoundError
from socialnet.logging import logger
from socialnet.models import Post
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.post import CreatePostInput, PostData
from socialnet.schemas.user import UserContext


class PostIdInput(BaseModel):  # type: ignore[misc]
    post_id: str = Field(..., description="Target post ID")


class GetPostCommand(BaseCommand[PostIdInput, PostData]):
    """
    One post as the caller sees it.

    Raises:
        NotFoundError: If the post does not exist.
    """

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> PostData:
        post = await self.repository.get_by_id(input_data.post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return (await self.repository.to_post_data([post], user.id))[0]


class CreatePostCommand(BaseCommand[CreatePostInput, PostData]):
    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: CreatePostInput
    ) -> PostData:
        post = await self.repository.create(
            Post(content=input_data.content, user_id=user.id)
        )
        logger.info(f"Post {post.id} created by {user.username}")
        return (await self.repository.to_post_data([post], user.id))[0]


class DeletePostCommand(BaseCommand[PostIdInput, PostData]):
    """
    Delete a post owned by the caller.

    Likes, bookmarks, comments and notifications referring to the post
    are removed in the same transaction.

    Raises:
        NotFoundError: If the post does not exist.
        ForbiddenError: If the caller is not the author.
    """

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> PostData:
        post = await self.repository.get_by_id(input_data.post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if post.user_id != user.id:
            raise ForbiddenError("Unauthorized")

        deleted = (await self.repository.to_post_data([post], user.id))[0]
        await self.repository.delete_with_dependents(post)
        logger.info(f"Post {post.id} deleted by {user.username}")
        return deleted
