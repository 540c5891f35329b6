"""
Trending hashtags.

Counts, for every hashtag, the number of posts that mention it (a post
mentioning a tag twice counts once). Tags are compared lowercased; ties
are broken alphabetically so the ranking is deterministic.
"""

from socialnet.commands.base import BaseCommand
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.response import TrendingHashtag
from socialnet.schemas.user import UserContext
from socialnet.settings import app_settings
from socialnet.utils.trending_cache import (
    get_cached_trending,
    set_cached_trending,
)


class GetTrendingTopicsCommand(BaseCommand[None, list[TrendingHashtag]]):
    """
    Top hashtags, served from Redis when cached.

    A cache miss (or an unreachable Redis) recomputes the ranking in the
    store and tries to cache it again.
    """

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def execute(
        self, user: UserContext, input_data: None = None
    ) -> list[TrendingHashtag]:
        cached = await get_cached_trending()
        if cached is not None:
            return cached

        ranked = await self.repository.trending_hashtags(
            app_settings.TRENDING_LIMIT
        )
        hashtags = [
            TrendingHashtag(hashtag=tag, count=count) for tag, count in ranked
        ]
        await set_cached_trending(hashtags)
        return hashtags
