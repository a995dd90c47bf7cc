"""API middleware."""

from stokmakmur.api.middleware.error_handler import ErrorHandlerMiddleware
from stokmakmur.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
