"""Generate Insights Use Case -- LLM advice over the current stock."""

from stokmakmur.application.dto.responses import InsightResponse
from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.application.permissions import require_manager
from stokmakmur.core.entities.inventory import UserRole
from stokmakmur.core.services.insight_service import InsightService


class GenerateInsightsUseCase:
    """Ask the insight service about the current items (managers only)."""

    def __init__(
        self,
        state: InventoryState | None = None,
        insight_service: InsightService | None = None,
    ):
        self._state = state
        self._insight_service = insight_service

    def _get_state(self) -> InventoryState:
        if self._state is None:
            from stokmakmur.application.services import get_inventory_state

            self._state = get_inventory_state()
        return self._state

    def _get_insight_service(self) -> InsightService:
        if self._insight_service is None:
            from stokmakmur.application.services import get_insight_service

            self._insight_service = get_insight_service()
        return self._insight_service

    async def execute(self, role: UserRole) -> InsightResponse:
        require_manager(role, "generate insights")
        text = await self._get_insight_service().generate(self._get_state().items)
        return InsightResponse(text=text)
