"""Spreadsheet sync endpoints."""

from fastapi import APIRouter, Depends

from stokmakmur.api.dependencies import get_current_role, get_sync_sheet_use_case
from stokmakmur.application.dto.requests import SheetURLRequest
from stokmakmur.application.dto.responses import ErrorResponse, SyncStatusResponse
from stokmakmur.application.permissions import require_manager
from stokmakmur.application.use_cases.sync_sheet import SyncSheetUseCase
from stokmakmur.core.entities.inventory import UserRole

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.get("/status", response_model=SyncStatusResponse)
async def sync_status(
    use_case: SyncSheetUseCase = Depends(get_sync_sheet_use_case),
) -> SyncStatusResponse:
    return use_case.status()


@router.post("/refresh", response_model=SyncStatusResponse)
async def refresh(
    use_case: SyncSheetUseCase = Depends(get_sync_sheet_use_case),
) -> SyncStatusResponse:
    """Reload items from the linked sheet. Failures are reported in last_error."""
    return await use_case.refresh()


@router.put(
    "/sheet-url",
    response_model=SyncStatusResponse,
    responses={403: {"model": ErrorResponse}},
)
async def link_sheet(
    request: SheetURLRequest,
    role: UserRole = Depends(get_current_role),
    use_case: SyncSheetUseCase = Depends(get_sync_sheet_use_case),
) -> SyncStatusResponse:
    require_manager(role, "change the sheet link")
    return await use_case.link_sheet(request.url)


@router.put(
    "/bridge-url",
    response_model=SyncStatusResponse,
    responses={403: {"model": ErrorResponse}},
)
async def link_bridge(
    request: SheetURLRequest,
    role: UserRole = Depends(get_current_role),
    use_case: SyncSheetUseCase = Depends(get_sync_sheet_use_case),
) -> SyncStatusResponse:
    require_manager(role, "change the write bridge")
    return await use_case.link_bridge(request.url)
