"""Inventory domain entities."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    """Roles that can view and adjust stock."""

    MANAGER = "MANAGER"
    WAREHOUSE = "WAREHOUSE"


class StockStatus(str, Enum):
    """Stock health relative to the reorder level."""

    HEALTHY = "HEALTHY"
    LOW = "LOW"
    CRITICAL = "CRITICAL"


# Cached JSON keeps the camelCase keys of the browser storage format.
_CACHE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InventoryItem(BaseModel):
    """A stock-keeping unit with its current quantity and supplier."""

    model_config = _CACHE_CONFIG

    id: str
    sku: str
    name: str
    category: str
    quantity: int = 0
    reorder_level: int = 5
    price: float = 0.0
    supplier: str = ""
    supplier_email: str = ""

    location: str | None = None
    condition: str | None = None
    responsible_person: str | None = None
    last_restocked: str | None = None

    @property
    def total_value(self) -> float:
        """Stock value = quantity * unit price."""
        return self.quantity * self.price


class StockLog(BaseModel):
    """Immutable audit record of one quantity adjustment."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    item_id: str  # weak reference, ids are positional after a sheet refresh
    item_sku: str | None = None
    item_name: str
    change: int
    previous_quantity: int
    new_quantity: int
    reason: str
    timestamp: str  # ISO instant
    user: str
    role: UserRole


class CategoryStat(BaseModel):
    """Item count and stock value for one category."""

    name: str
    count: int = 0
    value: float = 0.0


class InventorySummary(BaseModel):
    """Dashboard aggregates over the item collection."""

    total_items: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    critical_stock_count: int = 0
    stock_health_percent: int = 100
    categories: list[CategoryStat] = Field(default_factory=list)
