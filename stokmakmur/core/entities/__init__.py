"""Core domain entities."""

from stokmakmur.core.entities.inventory import (
    CategoryStat,
    InventoryItem,
    InventorySummary,
    StockLog,
    StockStatus,
    UserRole,
)

__all__ = [
    "InventoryItem",
    "StockLog",
    "StockStatus",
    "UserRole",
    "CategoryStat",
    "InventorySummary",
]
