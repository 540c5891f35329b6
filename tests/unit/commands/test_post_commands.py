from unittest.mock import AsyncMock

import pytest

from socialnet.commands.post_commands import (
    DeletePostCommand,
    GetPostCommand,
    PostIdInput,
)
from socialnet.exceptions import ForbiddenError, NotFoundError
from socialnet.models import Post
from socialnet.schemas.post import PostData
from socialnet.schemas.user import UserContext
from tests.mocks.repository_mocks import create_mock_post_repository

VIEWER = UserContext(id="viewer-id", username="viewer", display_name="Viewer")


class TestGetPostCommand:
    @pytest.mark.asyncio
    async def test_missing_post(self):
        repo = create_mock_post_repository()

        with pytest.raises(NotFoundError):
            await GetPostCommand(repo).execute(
                VIEWER, PostIdInput(post_id="missing")
            )

        repo.to_post_data.assert_not_called()

    @pytest.mark.asyncio
    async def test_hydrated_for_the_caller(self):
        repo = create_mock_post_repository()
        post = Post(id="p", content="x", user_id="owner-id")
        repo.get_by_id = AsyncMock(return_value=post)
        data = PostData.model_validate(
            {
                "id": "p",
                "content": "x",
                "createdAt": post.created_at,
                "user": {
                    "id": "owner-id",
                    "username": "owner",
                    "displayName": "Owner",
                },
            }
        )
        repo.to_post_data = AsyncMock(return_value=[data])

        result = await GetPostCommand(repo).execute(
            VIEWER, PostIdInput(post_id="p")
        )

        assert result is data
        repo.to_post_data.assert_awaited_once_with([post], "viewer-id")


class TestDeletePostCommand:
    @pytest.mark.asyncio
    async def test_missing_post(self):
        repo = create_mock_post_repository()

        with pytest.raises(NotFoundError):
            await DeletePostCommand(repo).execute(
                VIEWER, PostIdInput(post_id="missing")
            )

    @pytest.mark.asyncio
    async def test_only_author_may_delete(self):
        repo = create_mock_post_repository()
        repo.get_by_id = AsyncMock(
            return_value=Post(id="p", content="x", user_id="someone-else")
        )

        with pytest.raises(ForbiddenError) as exc_info:
            await DeletePostCommand(repo).execute(VIEWER, PostIdInput(post_id="p"))

        assert exc_info.value.http_status == 403
        repo.delete_with_dependents.assert_not_called()
