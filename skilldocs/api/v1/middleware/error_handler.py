"""Global error-handling middleware.

Translates domain exceptions into structured JSON error responses with
appropriate HTTP status codes.  Failed lint checks are not errors: they are
returned in the report body with a 200.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from skilldocs.utils.exceptions import (
    DocumentLoadError,
    FrontmatterError,
    LinkCheckError,
    MetadataError,
    ReportRenderError,
    SkillDocsError,
    SkillNotFoundError,
)
from skilldocs.utils.logging import get_logger

logger = get_logger(__name__)

# Map exception types to HTTP status codes.
_STATUS_MAP: dict[type, int] = {
    SkillNotFoundError: 404,
    FrontmatterError: 422,
    MetadataError: 422,
    DocumentLoadError: 422,
    LinkCheckError: 502,
    ReportRenderError: 500,
}


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Wrap every request and convert known exceptions to JSON errors.

    Unknown exceptions are logged and returned as HTTP 500.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)

        except SkillDocsError as exc:
            status_code = _STATUS_MAP.get(type(exc), 500)
            logger.warning(
                "handled_error",
                error_type=type(exc).__name__,
                status_code=status_code,
                detail=str(exc),
                path=request.url.path,
            )
            return JSONResponse(
                status_code=status_code,
                content={"error": type(exc).__name__, "detail": str(exc)},
            )

        except Exception as exc:
            logger.error(
                "unhandled_error",
                error_type=type(exc).__name__,
                detail=str(exc),
                path=request.url.path,
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "InternalServerError",
                    "detail": "An unexpected error occurred.",
                },
            )
