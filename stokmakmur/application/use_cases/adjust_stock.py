"""Adjust Stock Use Case -- signed quantity change with audit log."""

from stokmakmur.application.dto.requests import AdjustStockRequest
from stokmakmur.application.dto.responses import (
    AdjustStockResponse,
    InventoryItemResponse,
    StockLogResponse,
)
from stokmakmur.application.inventory_state import AdjustmentOutcome, InventoryState
from stokmakmur.config import get_logger
from stokmakmur.core.entities.inventory import UserRole

logger = get_logger(__name__)


class AdjustStockUseCase:
    """Apply a stock adjustment through the state container."""

    def __init__(self, state: InventoryState | None = None):
        self._state = state

    def _get_state(self) -> InventoryState:
        if self._state is None:
            from stokmakmur.application.services import get_inventory_state

            self._state = get_inventory_state()
        return self._state

    async def execute(
        self,
        item_id: str,
        request: AdjustStockRequest,
        role: UserRole,
    ) -> AdjustmentOutcome:
        """Execute adjust stock use case."""
        logger.info(
            "adjust_stock_started",
            item_id=item_id,
            change=request.change,
            role=role.value,
        )

        outcome = await self._get_state().adjust_stock(
            item_id, request.change, request.reason, role
        )

        if outcome.should_alert:
            logger.info(
                "low_stock_reached",
                sku=outcome.item.sku,
                quantity=outcome.item.quantity,
                reorder_level=outcome.item.reorder_level,
            )
        return outcome

    def to_response(self, outcome: AdjustmentOutcome, role: UserRole) -> AdjustStockResponse:
        """Convert outcome to API response."""
        return AdjustStockResponse(
            item=InventoryItemResponse.from_item(outcome.item, role),
            log=StockLogResponse.from_log(outcome.log),
            should_alert=outcome.should_alert,
            alert_scheduled=outcome.alert_scheduled,
            sync_scheduled=outcome.sync_scheduled,
        )
