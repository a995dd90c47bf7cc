"""Request and response DTOs."""

from stokmakmur.application.dto.requests import (
    AdjustStockRequest,
    CategoryCreateRequest,
    CategoryRenameRequest,
    SheetURLRequest,
)
from stokmakmur.application.dto.responses import (
    AdjustStockResponse,
    CategoryListResponse,
    CategoryRenameResponse,
    ErrorResponse,
    HealthResponse,
    InsightResponse,
    InventoryItemResponse,
    ItemDetailResponse,
    ItemListResponse,
    RestockLinkResponse,
    StockLogResponse,
    SummaryResponse,
    SyncStatusResponse,
)

__all__ = [
    # Requests
    "AdjustStockRequest",
    "CategoryCreateRequest",
    "CategoryRenameRequest",
    "SheetURLRequest",
    # Responses
    "AdjustStockResponse",
    "CategoryListResponse",
    "CategoryRenameResponse",
    "ErrorResponse",
    "HealthResponse",
    "InsightResponse",
    "InventoryItemResponse",
    "ItemDetailResponse",
    "ItemListResponse",
    "RestockLinkResponse",
    "StockLogResponse",
    "SummaryResponse",
    "SyncStatusResponse",
]
