"""
Tests for the middleware stack of the full application.
"""

import pytest

from socialnet.middlewares.prometheus import endpoint_label


class TestCorrelationID:
    @pytest.mark.asyncio
    async def test_generated_when_missing(self, anonymous_client):
        response = await anonymous_client.get("/metrics")

        assert len(response.headers["X-Correlation-ID"]) == 8

    @pytest.mark.asyncio
    async def test_incoming_id_is_echoed(self, anonymous_client):
        response = await anonymous_client.get(
            "/metrics", headers={"X-Correlation-ID": "abcd1234"}
        )

        assert response.headers["X-Correlation-ID"] == "abcd1234"


class TestPrometheusMiddleware:
    @pytest.mark.asyncio
    async def test_requests_are_counted(self, client):
        await client.get("/api/notifications/unread-count")

        body = (await client.get("/metrics")).text

        assert "http_requests_total" in body
        assert 'endpoint="/api/notifications/unread-count"' in body


class TestEndpointLabel:
    @pytest.mark.parametrize(
        "path,label",
        [
            (
                "/api/posts/0f8b3c1e-7d2a-4b6e-9c1f-2a3b4c5d6e7f/likes",
                "/api/posts/{id}/likes",
            ),
            (
                "/api/users/0F8B3C1E-7D2A-4B6E-9C1F-2A3B4C5D6E7F",
                "/api/users/{id}",
            ),
            ("/api/users/username/alice", "/api/users/username/{username}"),
            ("/api/posts/for-you", "/api/posts/for-you"),
        ],
    )
    def test_variable_segments_are_collapsed(self, path, label):
        assert endpoint_label(path) == label
