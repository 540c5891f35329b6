from unittest.mock import AsyncMock

import pytest

from socialnet.commands.comment_commands import (
    AddCommentInput,
    CommentIdInput,
    CreateCommentCommand,
    DeleteCommentCommand,
)
from socialnet.constants import NOTIFICATION_COMMENT
from socialnet.exceptions import ForbiddenError, NotFoundError
from socialnet.models import Comment, Post, User
from socialnet.schemas.user import UserContext
from tests.mocks.repository_mocks import (
    create_mock_comment_repository,
    create_mock_notification_repository,
    create_mock_post_repository,
)

VIEWER = UserContext(id="viewer-id", username="viewer", display_name="Viewer")


class TestCommentCommands:
    @pytest.mark.asyncio
    async def test_comment_on_unknown_post(self):
        posts = create_mock_post_repository()
        comments = create_mock_comment_repository()
        notifications = create_mock_notification_repository()

        with pytest.raises(NotFoundError):
            await CreateCommentCommand(posts, comments, notifications).execute(
                VIEWER, AddCommentInput(post_id="missing", content="hello")
            )

        comments.create.assert_not_called()
        notifications.notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_comment_notifies_post_author(self):
        posts = create_mock_post_repository()
        posts.get_by_id = AsyncMock(
            return_value=Post(id="post-1", content="x", user_id="owner-id")
        )
        author = User(id="viewer-id", username="viewer", display_name="Viewer")

        def _create(entity):
            entity.user = author
            return entity

        comments = create_mock_comment_repository()
        comments.create = AsyncMock(side_effect=_create)
        notifications = create_mock_notification_repository()

        data = await CreateCommentCommand(posts, comments, notifications).execute(
            VIEWER, AddCommentInput(post_id="post-1", content="hello")
        )

        assert data.content == "hello"
        assert data.user.username == "viewer"
        notifications.notify.assert_awaited_once_with(
            recipient_id="owner-id",
            issuer_id="viewer-id",
            type=NOTIFICATION_COMMENT,
            post_id="post-1",
        )

    @pytest.mark.asyncio
    async def test_delete_foreign_comment_forbidden(self):
        comments = create_mock_comment_repository()
        comments.get_by_id = AsyncMock(
            return_value=Comment(id="c", content="x", user_id="other", post_id="p")
        )

        with pytest.raises(ForbiddenError):
            await DeleteCommentCommand(comments).execute(
                VIEWER, CommentIdInput(comment_id="c")
            )

        comments.delete.assert_not_called()
