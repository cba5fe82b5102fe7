"""
Middleware - Request processing.

Provides:
- Request logging with a correlation id
- Error handling
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..logging import bind_request_id, generate_request_id

logger = structlog.get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request/response details.

    Logs method, path, status code, and duration.
    Excludes health check endpoints from verbose logging.
    """

    QUIET_PATHS = {"/health"}

    async def dispatch(self, request: Request, call_next) -> Response:
        structlog.contextvars.clear_contextvars()
        bind_request_id(request.headers.get("x-request-id") or generate_request_id())
        start = time.monotonic()

        response = await call_next(request)

        duration_ms = (time.monotonic() - start) * 1000

        if request.url.path not in self.QUIET_PATHS:
            logger.info(
                "request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

        return response


class ErrorMiddleware(BaseHTTPMiddleware):
    """Catches unhandled exceptions and returns JSON errors.

    Prevents stack traces from leaking to clients while
    logging full details server-side.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_error",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )

            return JSONResponse(
                status_code=500,
                content={
                    "error": "internal_server_error",
                    "message": "An unexpected error occurred",
                },
            )
