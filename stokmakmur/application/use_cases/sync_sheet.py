"""Sync Sheet Use Case -- link the spreadsheet and refresh items from it."""

from stokmakmur.application.dto.responses import SyncStatusResponse
from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.config import get_logger

logger = get_logger(__name__)


class SyncSheetUseCase:
    """Configure the sheet source and write bridge, and trigger refreshes.

    Refresh failures never raise: they are reported in last_error.
    """

    def __init__(self, state: InventoryState | None = None):
        self._state = state

    def _get_state(self) -> InventoryState:
        if self._state is None:
            from stokmakmur.application.services import get_inventory_state

            self._state = get_inventory_state()
        return self._state

    async def refresh(self) -> SyncStatusResponse:
        committed = await self._get_state().refresh()
        logger.info("sheet_sync_requested", committed=committed)
        return self.status()

    async def link_sheet(self, url: str) -> SyncStatusResponse:
        await self._get_state().set_sheet_url(url)
        return self.status()

    async def link_bridge(self, url: str) -> SyncStatusResponse:
        await self._get_state().set_bridge_url(url)
        return self.status()

    def status(self) -> SyncStatusResponse:
        state = self._get_state()
        return SyncStatusResponse(
            sheet_url=state.sheet_url,
            bridge_url=state.bridge_url,
            cloud_linked=bool(state.sheet_url),
            is_syncing=state.is_syncing,
            last_error=state.last_error,
            last_alert_at=state.last_alert_at,
            item_count=len(state.items),
        )
