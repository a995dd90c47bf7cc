"""Export Inventory Use Case -- dated CSV report of all items."""

from dataclasses import dataclass
from datetime import date

from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.application.permissions import require_manager
from stokmakmur.config import get_logger
from stokmakmur.core.entities.inventory import UserRole
from stokmakmur.core.services.inventory_report import export_csv, export_filename

logger = get_logger(__name__)


@dataclass
class InventoryExport:
    filename: str
    content: str
    rows: int


class ExportInventoryUseCase:
    """Serialize the item collection to CSV (managers only)."""

    def __init__(self, state: InventoryState | None = None):
        self._state = state

    def _get_state(self) -> InventoryState:
        if self._state is None:
            from stokmakmur.application.services import get_inventory_state

            self._state = get_inventory_state()
        return self._state

    def execute(self, role: UserRole, on: date | None = None) -> InventoryExport:
        require_manager(role, "export the inventory report")
        items = self._get_state().items
        export = InventoryExport(
            filename=export_filename(on),
            content=export_csv(items),
            rows=len(items),
        )
        logger.info("inventory_exported", filename=export.filename, rows=export.rows)
        return export
