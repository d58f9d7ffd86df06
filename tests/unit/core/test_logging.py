"""
Unit tests for logging setup and the request context middleware.
"""

import logging

import pytest
import structlog

from docvault.core.logging import HealthAccessFilter, is_health_path
from docvault.core.middleware import RequestContextMiddleware


def _access_record(path: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="uvicorn.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='%s - "%s %s HTTP/%s" %d',
        args=("127.0.0.1:5000", "GET", path, "1.1", 200),
        exc_info=None,
    )


class TestHealthAccessFilter:
    """Tests for HealthAccessFilter."""

    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["/health", "/ready", "/live", "/health?verbose=1"])
    def test_health_requests_dropped(self, path):
        assert HealthAccessFilter().filter(_access_record(path)) is False

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "path", ["/api/v1/documents", "/api/v1/owners/health", "/healthz"]
    )
    def test_other_requests_kept(self, path):
        assert HealthAccessFilter().filter(_access_record(path)) is True

    @pytest.mark.unit
    def test_records_without_access_args_kept(self):
        record = logging.LogRecord(
            "uvicorn.access", logging.INFO, __file__, 1, "plain message", None, None
        )

        assert HealthAccessFilter().filter(record) is True

    @pytest.mark.unit
    def test_trailing_slash_is_health_path(self):
        assert is_health_path("/live/")


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware at the ASGI level."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_request_id_bound_during_request_and_cleared_after(self):
        """Test downstream code sees the request id in the logging context."""
        seen = {}

        async def app(scope, receive, send):
            seen.update(structlog.contextvars.get_contextvars())
            await send({"type": "http.response.start", "status": 204, "headers": []})
            await send({"type": "http.response.body", "body": b""})

        sent = []

        async def send(message):
            sent.append(message)

        scope = {
            "type": "http",
            "method": "POST",
            "path": "/api/v1/documents",
            "headers": [(b"x-request-id", b"req-42")],
        }

        await RequestContextMiddleware(app)(scope, None, send)

        assert seen == {"request_id": "req-42", "method": "POST", "path": "/api/v1/documents"}
        assert structlog.contextvars.get_contextvars() == {}
        headers = dict(sent[0]["headers"])
        assert headers[b"x-request-id"] == b"req-42"
        assert b"x-process-time" in headers

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_http_scopes_pass_through(self):
        calls = []

        async def app(scope, receive, send):
            calls.append(scope["type"])

        await RequestContextMiddleware(app)({"type": "lifespan"}, None, None)

        assert calls == ["lifespan"]
