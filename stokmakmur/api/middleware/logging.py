"""
Per-request logging.

Binds request_id, method, path and acting role into structlog's context
variables so every event logged while serving the request carries them.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from stokmakmur.config import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            role=request.headers.get("x-user-role", "MANAGER"),
        )

        started = time.perf_counter()
        logger.info("request_started")
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request_failed",
                error=str(exc),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info("request_completed", status=response.status_code, duration_ms=round(elapsed_ms, 2))
        structlog.contextvars.clear_contextvars()

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
        return response
