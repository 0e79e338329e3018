"""Request logging middleware.

Binds a request id into the structlog context so that every event logged
while handling the request (loader, linter, link checker) carries it, and
logs one line per request with status and timing.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from skilldocs.utils.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs every HTTP request and tags its log events with a request id."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "request_failed",
                elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

        log_fn = logger.info if response.status_code < 400 else logger.warning
        log_fn("request_completed", status_code=response.status_code, elapsed_ms=elapsed_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        structlog.contextvars.clear_contextvars()
        return response
