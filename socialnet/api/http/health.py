"""Liveness of the store and the cache, for load balancers and probes."""

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from socialnet.logging import logger
from socialnet.storage.db import Database, get_database
from socialnet.storage.redis import get_redis_connection

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    database: str
    redis: str


async def _check_database(db: Database) -> str:
    try:
        async with db.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.error(f"Database health check failed: {e}")
        return UNHEALTHY
    return HEALTHY


async def _check_redis() -> str:
    redis = await get_redis_connection()
    if redis is None:
        return UNHEALTHY
    try:
        await redis.ping()
    except (RedisError, OSError, TimeoutError) as e:
        logger.error(f"Redis health check failed: {e}")
        return UNHEALTHY
    return HEALTHY


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Report each dependency separately.

    Responds 503 when either check fails. Without Redis the API still
    serves requests (trending is recomputed), but the instance is
    reported degraded so operators notice.
    """
    result = HealthResponse(
        status=HEALTHY,
        database=await _check_database(get_database(request)),
        redis=await _check_redis(),
    )
    if UNHEALTHY in (result.database, result.redis):
        result.status = UNHEALTHY
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result
