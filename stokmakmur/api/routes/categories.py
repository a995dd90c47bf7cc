"""Category set endpoints."""

from fastapi import APIRouter, Depends, status

from stokmakmur.api.dependencies import get_current_role, get_state
from stokmakmur.application.dto.requests import CategoryCreateRequest, CategoryRenameRequest
from stokmakmur.application.dto.responses import (
    CategoryListResponse,
    CategoryRenameResponse,
    ErrorResponse,
)
from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.application.permissions import require_manager
from stokmakmur.core.entities.inventory import UserRole

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    state: InventoryState = Depends(get_state),
) -> CategoryListResponse:
    return CategoryListResponse(categories=state.categories)


@router.post(
    "",
    response_model=CategoryListResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}},
)
async def add_category(
    request: CategoryCreateRequest,
    role: UserRole = Depends(get_current_role),
    state: InventoryState = Depends(get_state),
) -> CategoryListResponse:
    """Add a category; adding an existing name is a no-op."""
    require_manager(role, "manage categories")
    await state.add_category(request.name)
    return CategoryListResponse(categories=state.categories)


@router.put(
    "/{name}",
    response_model=CategoryRenameResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def rename_category(
    name: str,
    request: CategoryRenameRequest,
    role: UserRole = Depends(get_current_role),
    state: InventoryState = Depends(get_state),
) -> CategoryRenameResponse:
    """Rename a category and move its items to the new name."""
    require_manager(role, "manage categories")
    moved = await state.rename_category(name, request.new_name)
    return CategoryRenameResponse(
        old_name=name, new_name=request.new_name.strip(), items_updated=moved
    )


@router.delete(
    "/{name}",
    response_model=CategoryListResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_category(
    name: str,
    role: UserRole = Depends(get_current_role),
    state: InventoryState = Depends(get_state),
) -> CategoryListResponse:
    """Delete a category. Items that use it keep the old name."""
    require_manager(role, "manage categories")
    await state.delete_category(name)
    return CategoryListResponse(categories=state.categories)
