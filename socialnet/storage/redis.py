"""
Shared Redis client.

Redis only backs caches (the trending widget), so a single lazily built
client is enough. Building it never touches the network; connection
errors surface on the first command and callers treat them as misses.
"""

from redis.asyncio import ConnectionPool, Redis

from socialnet.logging import logger
from socialnet.settings import Settings, app_settings

_client: Redis | None = None


def build_pool(settings: Settings = app_settings) -> ConnectionPool:
    """Create the connection pool for the cache database."""
    pool = ConnectionPool.from_url(
        f"redis://{settings.REDIS_IP}:{settings.REDIS_PORT}",
        db=settings.MAIN_REDIS_DB,
        decode_responses=True,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_CONNECT_TIMEOUT,
        health_check_interval=settings.REDIS_HEALTH_CHECK_INTERVAL,
        retry_on_timeout=settings.REDIS_RETRY_ON_TIMEOUT,
    )

    from socialnet.utils.metrics import redis_pool_max_connections

    redis_pool_max_connections.labels(db=str(settings.MAIN_REDIS_DB)).set(
        pool.max_connections
    )
    return pool


async def get_redis_connection() -> Redis | None:
    """
    Return the shared Redis client, or None when it cannot be built.

    Example:
        ```python
        redis = await get_redis_connection()
        if redis is not None:
            await redis.get(TRENDING_CACHE_KEY)
        ```
    """
    global _client

    if _client is None:
        try:
            _client = Redis.from_pool(build_pool())
        except (ConnectionError, OSError, ValueError) as ex:
            logger.error(f"Redis unavailable: {ex}")
            return None
        logger.info(
            f"Redis client ready at {app_settings.REDIS_IP}:{app_settings.REDIS_PORT}"
        )
    return _client


async def close_redis() -> None:
    """Close the shared client and its pool; a no-op if never opened."""
    global _client

    if _client is None:
        return

    client, _client = _client, None
    await client.aclose()
    logger.info("Redis connection pool closed")
