"""
Tests for like/unlike commands using mocked repositories.
"""

from unittest.mock import AsyncMock

import pytest

from socialnet.commands.like_commands import (
    GetLikeInfoCommand,
    LikePostCommand,
    UnlikePostCommand,
)
from socialnet.commands.post_commands import PostIdInput
from socialnet.constants import NOTIFICATION_LIKE
from socialnet.exceptions import NotFoundError
from socialnet.models import Like, Post
from socialnet.schemas.user import UserContext
from tests.mocks.repository_mocks import (
    create_mock_like_repository,
    create_mock_notification_repository,
    create_mock_post_repository,
)

VIEWER = UserContext(id="viewer-id", username="viewer", display_name="Viewer")


@pytest.fixture
def repos():
    posts = create_mock_post_repository()
    posts.get_by_id = AsyncMock(
        return_value=Post(id="post-1", content="hi", user_id="owner-id")
    )
    return posts, create_mock_like_repository(), create_mock_notification_repository()


class TestLikePostCommand:
    @pytest.mark.asyncio
    async def test_like_creates_like_and_notifies_owner(self, repos):
        posts, likes, notifications = repos
        likes.count = AsyncMock(return_value=1)
        likes.exists = AsyncMock(return_value=True)

        info = await LikePostCommand(posts, likes, notifications).execute(
            VIEWER, PostIdInput(post_id="post-1")
        )

        created = likes.create_if_absent.call_args.args[0]
        assert isinstance(created, Like)
        assert created.user_id == "viewer-id"
        assert created.post_id == "post-1"
        notifications.notify.assert_awaited_once_with(
            recipient_id="owner-id",
            issuer_id="viewer-id",
            type=NOTIFICATION_LIKE,
            post_id="post-1",
        )
        assert info.likes == 1
        assert info.is_liked_by_user is True

    @pytest.mark.asyncio
    async def test_existing_like_is_not_notified_again(self, repos):
        posts, likes, notifications = repos
        likes.create_if_absent = AsyncMock(return_value=False)
        likes.exists = AsyncMock(return_value=True)
        likes.count = AsyncMock(return_value=1)

        info = await LikePostCommand(posts, likes, notifications).execute(
            VIEWER, PostIdInput(post_id="post-1")
        )

        notifications.notify.assert_not_called()
        assert info.likes == 1
        assert info.is_liked_by_user is True

    @pytest.mark.asyncio
    async def test_unknown_post(self, repos):
        posts, likes, notifications = repos
        posts.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await LikePostCommand(posts, likes, notifications).execute(
                VIEWER, PostIdInput(post_id="missing")
            )

        likes.create_if_absent.assert_not_called()


class TestUnlikePostCommand:
    @pytest.mark.asyncio
    async def test_unlike_removes_like_and_notification(self, repos):
        posts, likes, notifications = repos
        existing = Like(user_id="viewer-id", post_id="post-1")
        likes.get_one = AsyncMock(return_value=existing)

        info = await UnlikePostCommand(posts, likes, notifications).execute(
            VIEWER, PostIdInput(post_id="post-1")
        )

        likes.delete.assert_awaited_once_with(existing)
        notifications.retract.assert_awaited_once_with(
            recipient_id="owner-id",
            issuer_id="viewer-id",
            type=NOTIFICATION_LIKE,
            post_id="post-1",
        )
        assert info.is_liked_by_user is False

    @pytest.mark.asyncio
    async def test_unlike_without_like_is_noop(self, repos):
        posts, likes, notifications = repos

        await UnlikePostCommand(posts, likes, notifications).execute(
            VIEWER, PostIdInput(post_id="post-1")
        )

        likes.delete.assert_not_called()


@pytest.mark.asyncio
async def test_get_like_info(repos):
    posts, likes, notifications = repos
    likes.count = AsyncMock(return_value=7)
    likes.exists = AsyncMock(return_value=True)

    info = await GetLikeInfoCommand(posts, likes, notifications).execute(
        VIEWER, PostIdInput(post_id="post-1")
    )

    assert info.likes == 7
    assert info.is_liked_by_user is True
    likes.count.assert_awaited_once_with(post_id="post-1")
