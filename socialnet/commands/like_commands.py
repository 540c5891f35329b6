"""
Like toggles.

Liking is idempotent (an existing like is kept) and unliking a post that
is not liked is a no-op, so a client retrying after a lost response
converges on the intended state. The LIKE notification to the post
author is written and removed in the same transaction as the like.
"""

from socialnet.commands.base import BaseCommand
from socialnet.commands.post_commands import PostIdInput
from socialnet.constants import NOTIFICATION_LIKE
from socialnet.exceptions import NotFoundError
from socialnet.models import Like, Post
from socialnet.repositories.like_repository import LikeRepository
from socialnet.repositories.notification_repository import (
    NotificationRepository,
)
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.post import LikeInfo
from socialnet.schemas.user import UserContext


class _LikeCommand(BaseCommand[PostIdInput, LikeInfo]):
    def __init__(
        self,
        posts: PostRepository,
        likes: LikeRepository,
        notifications: NotificationRepository,
    ):
        self.posts = posts
        self.likes = likes
        self.notifications = notifications

    async def _get_post(self, post_id: str) -> Post:
        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def _info(self, post_id: str, user_id: str) -> LikeInfo:
        return LikeInfo(
            likes=await self.likes.count(post_id=post_id),
            is_liked_by_user=await self.likes.exists(
                user_id=user_id, post_id=post_id
            ),
        )


class GetLikeInfoCommand(_LikeCommand):
    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> LikeInfo:
        post = await self._get_post(input_data.post_id)
        return await self._info(post.id, user.id)


class LikePostCommand(_LikeCommand):
    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> LikeInfo:
        post = await self._get_post(input_data.post_id)

        if await self.likes.create_if_absent(
            Like(user_id=user.id, post_id=post.id)
        ):
            await self.notifications.notify(
                recipient_id=post.user_id,
                issuer_id=user.id,
                type=NOTIFICATION_LIKE,
                post_id=post.id,
            )

        return await self._info(post.id, user.id)


class UnlikePostCommand(_LikeCommand):
    async def execute(
        self, user: UserContext, input_data: PostIdInput
    ) -> LikeInfo:
        post = await self._get_post(input_data.post_id)

        like = await self.likes.get_one(user_id=user.id, post_id=post.id)
        if like is not None:
            await self.likes.delete(like)
        await self.notifications.retract(
            recipient_id=post.user_id,
            issuer_id=user.id,
            type=NOTIFICATION_LIKE,
            post_id=post.id,
        )

        return await self._info(post.id, user.id)
