"""
Dependency injection container for FastAPI.

Provides the state container, use cases and the caller's role to route
handlers.
"""

from fastapi import Header

from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.application.services import get_inventory_state
from stokmakmur.application.use_cases import (
    AdjustStockUseCase,
    ExportInventoryUseCase,
    GenerateInsightsUseCase,
    SyncSheetUseCase,
)
from stokmakmur.core.entities.inventory import UserRole
from stokmakmur.core.exceptions import ValidationError


def get_current_role(
    x_user_role: str = Header(default=UserRole.MANAGER.value),
) -> UserRole:
    """Resolve the acting role from the X-User-Role header."""
    try:
        return UserRole(x_user_role.strip().upper())
    except ValueError:
        raise ValidationError("X-User-Role", "Expected MANAGER or WAREHOUSE", x_user_role)


# State dependency
def get_state() -> InventoryState:
    """Get the inventory state container."""
    return get_inventory_state()


# Use case dependencies
def get_adjust_stock_use_case() -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase()


def get_sync_sheet_use_case() -> SyncSheetUseCase:
    """Get sync sheet use case."""
    return SyncSheetUseCase()


def get_export_inventory_use_case() -> ExportInventoryUseCase:
    """Get export inventory use case."""
    return ExportInventoryUseCase()


def get_generate_insights_use_case() -> GenerateInsightsUseCase:
    """Get generate insights use case."""
    return GenerateInsightsUseCase()
