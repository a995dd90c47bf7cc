"""Response DTOs for API endpoints.

Prices and stock value are omitted (None) for warehouse staff.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from stokmakmur.core.entities.inventory import (
    InventoryItem,
    InventorySummary,
    StockLog,
    UserRole,
)
from stokmakmur.core.services.stock_ledger import item_status


class InventoryItemResponse(BaseModel):
    """Inventory item as seen by a role."""

    id: str
    sku: str
    name: str
    category: str
    quantity: int
    reorder_level: int
    status: str
    price: float | None = None
    total_value: float | None = None
    supplier: str
    supplier_email: str
    location: str | None = None
    condition: str | None = None
    responsible_person: str | None = None

    @classmethod
    def from_item(cls, item: InventoryItem, role: UserRole) -> "InventoryItemResponse":
        show_value = role == UserRole.MANAGER
        return cls(
            id=item.id,
            sku=item.sku,
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            reorder_level=item.reorder_level,
            status=item_status(item).value,
            price=item.price if show_value else None,
            total_value=item.total_value if show_value else None,
            supplier=item.supplier,
            supplier_email=item.supplier_email,
            location=item.location,
            condition=item.condition,
            responsible_person=item.responsible_person,
        )


class StockLogResponse(BaseModel):
    """Audit log entry."""

    id: str
    item_id: str
    item_sku: str | None = None
    item_name: str
    change: int
    previous_quantity: int
    new_quantity: int
    reason: str
    timestamp: str
    user: str
    role: str

    @classmethod
    def from_log(cls, log: StockLog) -> "StockLogResponse":
        return cls(**log.model_dump(exclude={"role"}), role=log.role.value)


class ItemListResponse(BaseModel):
    items: list[InventoryItemResponse]
    total: int


class ItemDetailResponse(BaseModel):
    item: InventoryItemResponse
    history: list[StockLogResponse]


class AdjustStockResponse(BaseModel):
    """Committed adjustment. Scheduled side effects are not confirmations."""

    item: InventoryItemResponse
    log: StockLogResponse
    should_alert: bool
    alert_scheduled: bool
    sync_scheduled: bool


class CategoryStatResponse(BaseModel):
    name: str
    count: int
    value: float | None = None


class SummaryResponse(BaseModel):
    """Dashboard metrics."""

    total_items: int
    total_value: float | None = None
    low_stock_count: int
    critical_stock_count: int
    stock_health_percent: int
    categories: list[CategoryStatResponse] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: InventorySummary, role: UserRole) -> "SummaryResponse":
        show_value = role == UserRole.MANAGER
        return cls(
            total_items=summary.total_items,
            total_value=summary.total_value if show_value else None,
            low_stock_count=summary.low_stock_count,
            critical_stock_count=summary.critical_stock_count,
            stock_health_percent=summary.stock_health_percent,
            categories=[
                CategoryStatResponse(
                    name=stat.name,
                    count=stat.count,
                    value=stat.value if show_value else None,
                )
                for stat in summary.categories
            ],
        )


class CategoryListResponse(BaseModel):
    categories: list[str]


class CategoryRenameResponse(BaseModel):
    old_name: str
    new_name: str
    items_updated: int


class SyncStatusResponse(BaseModel):
    """Spreadsheet link state."""

    sheet_url: str
    bridge_url: str
    cloud_linked: bool
    is_syncing: bool
    last_error: str | None = None
    last_alert_at: str | None = None
    item_count: int


class RestockLinkResponse(BaseModel):
    mailto: str


class InsightResponse(BaseModel):
    text: str
    generated_at: datetime = Field(default_factory=datetime.now)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
