"""
Domain exceptions for the Stok Makmur application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StokError(Exception):
    """Base exception for all Stok Makmur errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Sheet Exceptions
class SheetError(StokError):
    """Base exception for remote spreadsheet operations."""

    pass


class InvalidSheetURLError(SheetError):
    """Source URL is empty, not an HTTP(S) link, or malformed."""

    def __init__(self, url: str, reason: str | None = None):
        message = "Sheet URL must start with http:// or https://"
        if reason:
            message = f"Sheet URL is malformed: {reason}"
        super().__init__(
            message,
            code="INVALID_SHEET_URL",
            details={"url": url, "reason": reason},
        )


class SheetNotFoundError(SheetError):
    """Spreadsheet export returned 404."""

    def __init__(self, url: str):
        super().__init__(
            "Sheet not found. Make sure the URL is correct.",
            code="SHEET_NOT_FOUND",
            details={"url": url},
        )


class SheetNotPublishedError(SheetError):
    """Spreadsheet is private or redirects to a login page."""

    def __init__(self, url: str, status_code: int | None = None):
        super().__init__(
            'Sheet is not published. Use "Publish to web" and share the CSV link.',
            code="SHEET_NOT_PUBLISHED",
            details={"url": url, "status_code": status_code},
        )


class SheetHTTPError(SheetError):
    """Spreadsheet export returned an unexpected HTTP status."""

    def __init__(self, url: str, status_code: int, reason: str):
        super().__init__(
            f"Error: {reason or status_code}",
            code="SHEET_HTTP_ERROR",
            details={"url": url, "status_code": status_code, "reason": reason},
        )


class SheetNetworkError(SheetError):
    """Spreadsheet could not be reached."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Could not reach sheet: {reason}",
            code="SHEET_NETWORK_ERROR",
            details={"url": url, "reason": reason},
        )


class SheetEmptyError(SheetError):
    """Export has no header row or no data rows."""

    def __init__(self, rows: int):
        super().__init__(
            "Sheet is empty or malformed.",
            code="SHEET_EMPTY",
            details={"rows": rows},
        )


# Inventory Exceptions
class InventoryError(StokError):
    """Base exception for inventory operations."""

    pass


class ItemNotFoundError(InventoryError):
    """Inventory item not found."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class CategoryNotFoundError(InventoryError):
    """Category not found in the category set."""

    def __init__(self, name: str):
        super().__init__(
            f"Category not found: {name}",
            code="CATEGORY_NOT_FOUND",
            details={"name": name},
        )


class PermissionDeniedError(InventoryError):
    """Operation is reserved for another role."""

    def __init__(self, role: str, operation: str):
        super().__init__(
            f"Role '{role}' may not {operation}",
            code="PERMISSION_DENIED",
            details={"role": role, "operation": operation},
        )


# Storage Exceptions
class StorageError(StokError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# LLM Exceptions
class LLMError(StokError):
    """Base exception for LLM operations."""

    pass


class LLMUnavailableError(LLMError):
    """LLM provider is not available."""

    def __init__(self, provider: str, reason: str | None = None):
        super().__init__(
            f"LLM provider unavailable: {provider}" + (f" - {reason}" if reason else ""),
            code="LLM_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class LLMTimeoutError(LLMError):
    """LLM request timed out."""

    def __init__(self, timeout: int, operation: str = "generation"):
        super().__init__(
            f"LLM {operation} timed out after {timeout} seconds",
            code="LLM_TIMEOUT",
            details={"timeout": timeout, "operation": operation},
        )


class LLMResponseError(LLMError):
    """LLM returned invalid or empty response."""

    def __init__(self, reason: str, response: str | None = None):
        super().__init__(
            f"Invalid LLM response: {reason}",
            code="LLM_RESPONSE_ERROR",
            details={"reason": reason, "response_preview": (response or "")[:200]},
        )


class ModelNotFoundError(LLMError):
    """Requested model not found."""

    def __init__(self, model: str, provider: str):
        super().__init__(
            f"Model '{model}' not found on {provider}",
            code="MODEL_NOT_FOUND",
            details={"model": model, "provider": provider},
        )


class CircuitBreakerOpenError(LLMError):
    """Circuit breaker is open due to repeated failures."""

    def __init__(self, provider: str, cooldown_remaining: int):
        super().__init__(
            f"Circuit breaker open for {provider}, retry in {cooldown_remaining}s",
            code="CIRCUIT_BREAKER_OPEN",
            details={"provider": provider, "cooldown_remaining": cooldown_remaining},
        )


# Validation Exceptions
class ValidationError(StokError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ConfigurationError(StokError):
    """Configuration error."""

    pass
