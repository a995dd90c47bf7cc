"""Abstract interface for low-stock alerts."""

from abc import ABC, abstractmethod

from stokmakmur.core.entities.inventory import InventoryItem, UserRole


class IStockAlertNotifier(ABC):
    """Delivers a low or critical stock warning for one item."""

    @abstractmethod
    async def send_low_stock_alert(
        self, item: InventoryItem, user: str, role: UserRole
    ) -> bool:
        """Send the alert; returns True when it was delivered."""
        pass
