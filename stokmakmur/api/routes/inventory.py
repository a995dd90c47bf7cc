"""Inventory endpoints: items, adjustments, history, summary and export."""

from fastapi import APIRouter, Depends, Response

from stokmakmur.api.dependencies import (
    get_adjust_stock_use_case,
    get_current_role,
    get_export_inventory_use_case,
    get_state,
)
from stokmakmur.application.dto.requests import AdjustStockRequest
from stokmakmur.application.dto.responses import (
    AdjustStockResponse,
    ErrorResponse,
    InventoryItemResponse,
    ItemDetailResponse,
    ItemListResponse,
    RestockLinkResponse,
    StockLogResponse,
    SummaryResponse,
)
from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.application.permissions import require_manager
from stokmakmur.application.use_cases.adjust_stock import AdjustStockUseCase
from stokmakmur.application.use_cases.export_inventory import ExportInventoryUseCase
from stokmakmur.core.entities.inventory import UserRole
from stokmakmur.core.services.inventory_report import (
    FILTER_ALL,
    filter_items,
    restock_mailto,
    summarize,
)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("/items", response_model=ItemListResponse)
async def list_items(
    q: str = "",
    filter: str = FILTER_ALL,
    role: UserRole = Depends(get_current_role),
    state: InventoryState = Depends(get_state),
) -> ItemListResponse:
    """List items, searching name/SKU and filtering by category or low stock."""
    items = filter_items(state.items, query=q, filter_by=filter)
    return ItemListResponse(
        items=[InventoryItemResponse.from_item(item, role) for item in items],
        total=len(items),
    )


@router.get(
    "/items/{item_id}",
    response_model=ItemDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: str,
    role: UserRole = Depends(get_current_role),
    state: InventoryState = Depends(get_state),
) -> ItemDetailResponse:
    """Item detail with its adjustment history, newest first."""
    item = state.get_item(item_id)
    return ItemDetailResponse(
        item=InventoryItemResponse.from_item(item, role),
        history=[StockLogResponse.from_log(log) for log in state.logs_for_item(item)],
    )


@router.post(
    "/items/{item_id}/adjust",
    response_model=AdjustStockResponse,
    responses={404: {"model": ErrorResponse}},
)
async def adjust_stock(
    item_id: str,
    request: AdjustStockRequest,
    role: UserRole = Depends(get_current_role),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> AdjustStockResponse:
    """Add or remove stock; low-stock alerts and sheet sync run in the background."""
    outcome = await use_case.execute(item_id, request, role)
    return use_case.to_response(outcome, role)


@router.get(
    "/items/{item_id}/restock-link",
    response_model=RestockLinkResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def restock_link(
    item_id: str,
    role: UserRole = Depends(get_current_role),
    state: InventoryState = Depends(get_state),
) -> RestockLinkResponse:
    """Mail-compose link asking the supplier for a restock."""
    require_manager(role, "request a restock")
    return RestockLinkResponse(mailto=restock_mailto(state.get_item(item_id), role))


@router.get("/logs", response_model=list[StockLogResponse])
async def list_logs(
    limit: int | None = None,
    state: InventoryState = Depends(get_state),
) -> list[StockLogResponse]:
    """Audit log, newest first, optionally cut to the latest `limit` entries."""
    logs = list(reversed(state.logs))[:limit]
    return [StockLogResponse.from_log(log) for log in logs]


@router.get("/summary", response_model=SummaryResponse)
async def summary(
    role: UserRole = Depends(get_current_role),
    state: InventoryState = Depends(get_state),
) -> SummaryResponse:
    """Dashboard metrics; stock value is visible to managers only."""
    return SummaryResponse.from_summary(summarize(state.items), role)


@router.get("/export", responses={403: {"model": ErrorResponse}})
async def export_inventory(
    role: UserRole = Depends(get_current_role),
    use_case: ExportInventoryUseCase = Depends(get_export_inventory_use_case),
) -> Response:
    """Download the inventory report as CSV."""
    export = use_case.execute(role)
    return Response(
        content=export.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
