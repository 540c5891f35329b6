"""Prometheus scrape endpoint (served without authentication)."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_class=Response, include_in_schema=False)
async def metrics() -> Response:
    """
    Example:
        ```
        pagination_pages_total{feed="for-you",has_more="true"} 42.0
        trending_cache_hits_total 17.0
        ```
    """
    return Response(
        content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST
    )
