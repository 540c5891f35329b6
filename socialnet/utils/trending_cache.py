"""
Redis cache for the trending hashtag widget.

Trending topics are computed by scanning post content, which is too
expensive to repeat on every page load. The result is cached for
TRENDING_CACHE_TTL seconds; when Redis is unavailable callers simply
recompute.
"""

import json

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from redis.exceptions import RedisError

from socialnet.constants import TRENDING_CACHE_KEY
from socialnet.logging import logger
from socialnet.schemas.response import TrendingHashtag
from socialnet.settings import app_settings
from socialnet.storage.redis import get_redis_connection
from socialnet.utils.metrics import (
    trending_cache_hits_total,
    trending_cache_misses_total,
)

_hashtags_adapter = TypeAdapter(list[TrendingHashtag])


async def get_cached_trending() -> list[TrendingHashtag] | None:
    """
    Get cached trending hashtags.

    Returns:
        Cached hashtags if available, None otherwise.
    """
    try:
        redis = await get_redis_connection()
        if redis is None:
            logger.warning("Redis unavailable, skipping trending cache lookup")
            return None

        cached = await redis.get(TRENDING_CACHE_KEY)
        if cached is None:
            trending_cache_misses_total.inc()
            logger.debug("Trending cache miss")
            return None

        trending_cache_hits_total.inc()
        return _hashtags_adapter.validate_json(cached)

    except (RedisError, ConnectionError) as ex:
        logger.error(f"Error reading trending cache: {ex}")
        return None
    except PydanticValidationError as ex:
        logger.error(f"Invalid trending cache data format: {ex}")
        return None


async def set_cached_trending(
    hashtags: list[TrendingHashtag],
    ttl: int = app_settings.TRENDING_CACHE_TTL,
) -> None:
    """
    Cache computed trending hashtags.

    Args:
        hashtags: Hashtags ordered by descending count.
        ttl: Time-to-live in seconds (default: 3 hours).
    """
    try:
        redis = await get_redis_connection()
        if redis is None:
            logger.warning("Redis unavailable, skipping trending cache storage")
            return

        payload = json.dumps([h.model_dump() for h in hashtags])
        await redis.setex(TRENDING_CACHE_KEY, ttl, payload)
        logger.debug(f"Cached {len(hashtags)} trending hashtags (TTL: {ttl}s)")

    except (RedisError, ConnectionError) as ex:
        logger.error(f"Error writing trending cache: {ex}")
