"""
Prometheus metrics.

HTTP metrics are recorded by ``PrometheusMiddleware``; the feed and cache
metrics by the code serving feeds and the trending widget. Everything is
exposed at ``/metrics``.
"""

from typing import Any, TypeVar

from prometheus_client import REGISTRY, Counter, Gauge, Histogram

_Metric = TypeVar("_Metric", Counter, Gauge, Histogram)


def _metric(
    kind: type[_Metric],
    name: str,
    doc: str,
    labels: tuple[str, ...] = (),
    **kwargs: Any,
) -> _Metric:
    """
    Register a metric, or return the one already registered as ``name``.

    Module reloads (``uvicorn --reload``) would otherwise fail with a
    duplicate timeseries error.
    """
    existing = REGISTRY._names_to_collectors.get(name)
    if existing is not None:
        return existing
    return kind(name, doc, labels, **kwargs)


# HTTP
http_requests_total = _metric(
    Counter,
    "http_requests_total",
    "HTTP requests by method, route-shaped endpoint and status",
    ("method", "endpoint", "status_code"),
)
http_request_duration_seconds = _metric(
    Histogram,
    "http_request_duration_seconds",
    "HTTP request latency",
    ("method", "endpoint"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
http_requests_in_progress = _metric(
    Gauge,
    "http_requests_in_progress",
    "HTTP requests being handled",
    ("method", "endpoint"),
)
app_errors_total = _metric(
    Counter,
    "app_errors_total",
    "Application errors raised by endpoint handlers",
    ("error_type", "handler"),
)

# Feeds
pagination_pages_total = _metric(
    Counter,
    "pagination_pages_total",
    "Feed pages served; has_more tells whether a next cursor was returned",
    ("feed", "has_more"),
)

# Trending cache
trending_cache_hits_total = _metric(
    Counter, "trending_cache_hits_total", "Trending hashtags served from Redis"
)
trending_cache_misses_total = _metric(
    Counter,
    "trending_cache_misses_total",
    "Trending hashtags recomputed from posts",
)
redis_pool_max_connections = _metric(
    Gauge,
    "redis_pool_max_connections",
    "Size limit of the Redis connection pool",
    ("db",),
)


def record_page(feed: str, has_more: bool) -> None:
    pagination_pages_total.labels(
        feed=feed, has_more=str(has_more).lower()
    ).inc()
