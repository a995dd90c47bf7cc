"""
API error translation.

Every failure leaves the API as an ErrorResponse body carrying a stable
error_code, the message, and a recovery hint for the caller.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stokmakmur.application.dto.responses import ErrorResponse
from stokmakmur.config import get_logger
from stokmakmur.core.exceptions import (
    CategoryNotFoundError,
    ConfigurationError,
    ItemNotFoundError,
    LLMError,
    PermissionDeniedError,
    SheetError,
    StokError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Checked in order; the first isinstance match decides the status
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ItemNotFoundError: status.HTTP_404_NOT_FOUND,
    CategoryNotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    SheetError: status.HTTP_502_BAD_GATEWAY,
    LLMError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

HINT_MAP: dict[str, str] = {
    "ITEM_NOT_FOUND": "List items with GET /api/inventory/items to find a valid ID.",
    "CATEGORY_NOT_FOUND": "List categories with GET /api/categories.",
    "PERMISSION_DENIED": "Send X-User-Role: MANAGER for manager-only operations.",
    "INVALID_SHEET_URL": "Use the full https:// link of the spreadsheet.",
    "SHEET_NOT_FOUND": "Check the spreadsheet link.",
    "SHEET_NOT_PUBLISHED": "In Google Sheets use File > Share > Publish to web, as CSV.",
    "SHEET_EMPTY": "The sheet needs a header row and at least one item row.",
    "LLM_UNAVAILABLE": "Start the language model server or try again later.",
    "LLM_TIMEOUT": "The language model took too long. Try again later.",
    "CIRCUIT_BREAKER_OPEN": "Insights are paused after repeated failures. Wait for the cooldown.",
    "VALIDATION_ERROR": "Compare the request with the schema at /docs.",
    "DATABASE_ERROR": "The local cache could not be written. See the server log.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Fix the request parameters and retry.",
    403: "This operation is not allowed for the current role.",
    404: "Nothing exists at this path or ID.",
    422: "The request body or query does not match the expected types.",
    500: "Unexpected server failure. See the server log.",
    502: "The spreadsheet could not be read. Check the sync settings.",
    503: "A dependency is temporarily unavailable. Try again later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log exc and turn it into an ErrorResponse with the mapped status."""
    status_code = _status_for(exc)
    error_code = exc.code if isinstance(exc, StokError) else type(exc).__name__
    server_side = status_code >= 500

    (logger.error if server_side else logger.warning)(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        error_code=error_code,
        error=str(exc),
        traceback=traceback.format_exc() if server_side else None,
    )

    return _json(
        status_code,
        ErrorResponse(
            error_code=error_code,
            message=str(exc),
            hint=_get_hint(error_code, status_code),
            path=request.url.path,
        ),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last-resort conversion of exceptions that escape the routers."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return build_error_response(request, exc)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, validation and HTTP errors."""

    @app.exception_handler(StokError)
    async def stok_error_handler(request: Request, exc: StokError) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return _json(
            422,
            ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint=HINT_MAP["VALIDATION_ERROR"],
                detail="; ".join(problems),
                path=request.url.path,
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
        error_code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return _json(
            exc.status_code,
            ErrorResponse(
                error_code=error_code,
                message=str(exc.detail or "Request failed"),
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ),
        )
