"""
Stock ledger.

Applies a signed quantity delta to an item and produces the matching
audit log entry. The ledger is pure: it returns new values and the
state container commits them.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from stokmakmur.core.entities.inventory import (
    InventoryItem,
    StockLog,
    StockStatus,
    UserRole,
)

# Fraction of the reorder level at or below which stock is critical
CRITICAL_RATIO = 0.5

ROLE_DISPLAY_NAMES: dict[UserRole, str] = {
    UserRole.MANAGER: "Manager",
    UserRole.WAREHOUSE: "Warehouse staff",
}


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of one ledger adjustment."""

    item: InventoryItem
    log: StockLog
    should_alert: bool


def stock_status(quantity: int, reorder_level: int) -> StockStatus:
    """Classify stock health. Critical is checked before low."""
    if quantity <= reorder_level * CRITICAL_RATIO:
        return StockStatus.CRITICAL
    if quantity <= reorder_level:
        return StockStatus.LOW
    return StockStatus.HEALTHY


def item_status(item: InventoryItem) -> StockStatus:
    return stock_status(item.quantity, item.reorder_level)


def is_low_stock(item: InventoryItem) -> bool:
    """True at or below the reorder level (critical items included)."""
    return item.quantity <= item.reorder_level


def actor_name(role: UserRole) -> str:
    return ROLE_DISPLAY_NAMES[role]


def new_log_id() -> str:
    return uuid.uuid4().hex[:9]


class StockLedger:
    """Applies quantity adjustments and writes audit entries."""

    def apply_adjustment(
        self,
        item: InventoryItem,
        delta: int,
        reason: str,
        role: UserRole,
        now: datetime | None = None,
    ) -> AdjustmentResult:
        """
        Apply delta to item.

        Negative results are allowed. The alert flag uses the inclusive
        reorder threshold, not the critical one.

        Args:
            item: Current item snapshot
            delta: Signed quantity change
            reason: Free-text reason shown in the history
            role: Acting user role
            now: Timestamp override (defaults to current UTC time)

        Returns:
            AdjustmentResult with updated item, log entry and alert flag
        """
        previous_quantity = item.quantity
        new_quantity = previous_quantity + delta
        updated = item.model_copy(update={"quantity": new_quantity})

        timestamp = (now or datetime.now(timezone.utc)).isoformat()
        log = StockLog(
            id=new_log_id(),
            item_id=item.id,
            item_sku=item.sku,
            item_name=item.name,
            change=delta,
            previous_quantity=previous_quantity,
            new_quantity=new_quantity,
            reason=reason,
            timestamp=timestamp,
            user=actor_name(role),
            role=role,
        )

        return AdjustmentResult(
            item=updated,
            log=log,
            should_alert=new_quantity <= item.reorder_level,
        )
