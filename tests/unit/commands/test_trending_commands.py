import json
from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from socialnet.commands.trending_commands import GetTrendingTopicsCommand
from socialnet.repositories.post_repository import rank_hashtags
from socialnet.schemas.user import UserContext
from tests.mocks.redis_mocks import create_mock_redis_connection
from tests.mocks.repository_mocks import create_mock_post_repository

VIEWER = UserContext(id="viewer-id", username="viewer", display_name="Viewer")


def test_rank_hashtags_counts_posts_not_mentions():
    contents = [
        "#Python and #python again",
        "more #python",
        "#fastapi #async",
        "#async",
        "no tags here",
    ]

    ranked = rank_hashtags(contents, limit=5)

    assert ranked == [
        ("#async", 2),
        ("#python", 2),
        ("#fastapi", 1),
    ]


def test_rank_hashtags_ties_sorted_alphabetically_and_limited():
    ranked = rank_hashtags(["#b", "#a", "#c"], limit=2)

    assert ranked == [("#a", 1), ("#b", 1)]


class TestGetTrendingTopicsCommand:
    @pytest.mark.asyncio
    async def test_cache_hit_skips_database(self):
        repo = create_mock_post_repository()
        cached = json.dumps([{"hashtag": "#cached", "count": 3}])
        redis = create_mock_redis_connection(cached=cached)

        with patch(
            "socialnet.utils.trending_cache.get_redis_connection",
            AsyncMock(return_value=redis),
        ):
            result = await GetTrendingTopicsCommand(repo).execute(VIEWER)

        assert [h.hashtag for h in result] == ["#cached"]
        repo.trending_hashtags.assert_not_called()

    @pytest.mark.asyncio
    async def test_cache_miss_computes_and_stores(self):
        repo = create_mock_post_repository()
        repo.trending_hashtags = AsyncMock(
            return_value=[("#one", 2), ("#two", 1)]
        )
        redis = create_mock_redis_connection(cached=None)

        with patch(
            "socialnet.utils.trending_cache.get_redis_connection",
            AsyncMock(return_value=redis),
        ):
            result = await GetTrendingTopicsCommand(repo).execute(VIEWER)

        assert [(h.hashtag, h.count) for h in result] == [("#one", 2), ("#two", 1)]
        redis.setex.assert_awaited_once()
        key, ttl, payload = redis.setex.call_args.args
        assert key == "trending:hashtags"
        assert ttl == 3 * 60 * 60
        assert json.loads(payload)[0] == {"hashtag": "#one", "count": 2}

    @pytest.mark.asyncio
    async def test_redis_failure_falls_back_to_database(self):
        repo = create_mock_post_repository()
        repo.trending_hashtags = AsyncMock(return_value=[("#x", 1)])
        redis = create_mock_redis_connection()
        redis.get.side_effect = RedisConnectionError("down")
        redis.setex.side_effect = RedisConnectionError("down")

        with patch(
            "socialnet.utils.trending_cache.get_redis_connection",
            AsyncMock(return_value=redis),
        ):
            result = await GetTrendingTopicsCommand(repo).execute(VIEWER)

        assert [h.hashtag for h in result] == ["#x"]
