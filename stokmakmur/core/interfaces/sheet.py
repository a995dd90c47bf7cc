"""Abstract interfaces for the remote spreadsheet."""

from abc import ABC, abstractmethod

from stokmakmur.core.entities.inventory import InventoryItem


class ISheetSource(ABC):
    """Reads a published spreadsheet export into inventory items."""

    @abstractmethod
    async def fetch_items(self, url: str) -> list[InventoryItem]:
        """
        Fetch and parse the sheet behind url.

        Raises:
            SheetError: on any transport, HTTP, or shape failure
        """
        pass


class ISheetWriter(ABC):
    """Pushes single-field updates back to the spreadsheet."""

    @abstractmethod
    async def push_quantity(self, bridge_url: str, sku: str, new_quantity: int) -> bool:
        """
        Send the new quantity for a SKU.

        Returns True when the request was dispatched. Delivery is unconfirmed.
        """
        pass
