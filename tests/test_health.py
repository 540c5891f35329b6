"""Tests for the health check endpoint."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError


@pytest.fixture
def db_conn():
    """Connection returned by the mocked engine."""
    return AsyncMock()


@pytest.fixture
def client(db_conn):
    """
    Create a test client for a minimal app with only the health endpoint.

    The store handle on ``app.state`` exposes a mocked engine.
    """
    from socialnet.api.http.health import router

    test_app = FastAPI()
    test_app.include_router(router)

    engine = MagicMock()
    engine.connect.return_value.__aenter__.return_value = db_conn
    test_app.state.db = MagicMock(engine=engine)
    return TestClient(test_app)


def test_all_services_healthy(client):
    mock_redis = AsyncMock()
    mock_redis.ping.return_value = True

    with patch(
        "socialnet.api.http.health.get_redis_connection",
        new=AsyncMock(return_value=mock_redis),
    ):
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "database": "healthy",
        "redis": "healthy",
    }


def test_database_unhealthy(client, db_conn):
    db_conn.execute.side_effect = OperationalError("SELECT 1", {}, Exception())
    mock_redis = AsyncMock()

    with patch(
        "socialnet.api.http.health.get_redis_connection",
        new=AsyncMock(return_value=mock_redis),
    ):
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "unhealthy"
    assert response.json()["redis"] == "healthy"


def test_redis_unavailable(client):
    with patch(
        "socialnet.api.http.health.get_redis_connection",
        new=AsyncMock(return_value=None),
    ):
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["redis"] == "unhealthy"


def test_redis_ping_fails(client):
    mock_redis = AsyncMock()
    mock_redis.ping.side_effect = RedisConnectionError("refused")

    with patch(
        "socialnet.api.http.health.get_redis_connection",
        new=AsyncMock(return_value=mock_redis),
    ):
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
