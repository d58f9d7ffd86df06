"""Middleware configuration for FastAPI application.

Provides:
- CORS middleware setup
- Request context middleware (request id, timing, request logs)
"""

import time
import uuid

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from docvault.core.config import settings
from docvault.core.logging import get_logger, is_health_path

logger = get_logger(__name__)
request_logger = get_logger("request")

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class RequestContextMiddleware:
    """
    Bind a request id to the logging context for the life of a request.

    An incoming ``X-Request-ID`` header is reused, otherwise a fresh id is
    generated. The id and the processing time are returned as response
    headers. Health endpoints are served without start/complete log lines.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        request_id = headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        path = scope["path"]
        quiet = is_health_path(path)
        start = time.perf_counter()
        status_code = 500

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id, method=scope["method"], path=path
        )

        if not quiet:
            request_logger.info(
                "Request started",
                is_file_upload="multipart/form-data" in headers.get("content-type", ""),
                content_length=headers.get("content-length"),
            )

        async def send_with_headers(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_headers = MutableHeaders(scope=message)
                response_headers[REQUEST_ID_HEADER] = request_id
                response_headers[PROCESS_TIME_HEADER] = str(
                    round(time.perf_counter() - start, 4)
                )
            await send(message)

        try:
            await self.app(scope, receive, send_with_headers)
        finally:
            if not quiet:
                request_logger.info(
                    "Request completed",
                    status_code=status_code,
                    duration=round(time.perf_counter() - start, 4),
                )
            structlog.contextvars.clear_contextvars()


def setup_cors_middleware(app: FastAPI) -> None:
    """Configure CORS middleware with settings from config.

    Args:
        app: FastAPI application instance
    """
    cors_origins = settings.resolved_cors_origins

    logger.info("CORS configuration", origins=cors_origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=[*settings.CORS_HEADERS, REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, PROCESS_TIME_HEADER],
    )


def setup_all_middleware(app: FastAPI) -> None:
    """Setup all middleware.

    The request context middleware is added last so it wraps CORS and sees
    every request, preflights included.
    """
    setup_cors_middleware(app)
    app.add_middleware(RequestContextMiddleware)
