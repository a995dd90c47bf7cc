"""Starter catalogue shown to new users before a sheet is linked."""

from stokmakmur.core.entities.inventory import InventoryItem

DEFAULT_ITEMS: list[dict] = [
    {
        "id": "1", "sku": "LAP-001", "name": 'MacBook Pro 14"', "category": "Electronics",
        "quantity": 12, "reorder_level": 5, "price": 30000000,
        "supplier": "Apple Inc.", "supplier_email": "sales@apple.com",
        "location": "Rack A1", "condition": "New", "responsible_person": "Budi",
    },
    {
        "id": "2", "sku": "PHN-002", "name": "iPhone 15 Pro", "category": "Electronics",
        "quantity": 3, "reorder_level": 10, "price": 20000000,
        "supplier": "Apple Inc.", "supplier_email": "sales@apple.com",
        "location": "Rack A2", "condition": "New", "responsible_person": "Siti",
    },
    {
        "id": "3", "sku": "MON-003", "name": "Studio Display", "category": "Peripherals",
        "quantity": 1, "reorder_level": 4, "price": 25000000,
        "supplier": "Apple Inc.", "supplier_email": "sales@apple.com",
        "location": "Rack B1", "condition": "Used/Display", "responsible_person": "Budi",
    },
    {
        "id": "4", "sku": "MOU-004", "name": "Magic Mouse", "category": "Peripherals",
        "quantity": 25, "reorder_level": 10, "price": 1200000,
        "supplier": "Logitech", "supplier_email": "b2b@logitech.com",
        "location": "Drawer C3", "condition": "New", "responsible_person": "Agus",
    },
    {
        "id": "5", "sku": "KBD-005", "name": "Mechanical Keyboard", "category": "Peripherals",
        "quantity": 8, "reorder_level": 15, "price": 2000000,
        "supplier": "Keychron", "supplier_email": "support@keychron.com",
        "location": "Rack B2", "condition": "New", "responsible_person": "Agus",
    },
]


def default_items() -> list[InventoryItem]:
    """Fresh copies of the starter catalogue."""
    return [InventoryItem(**data) for data in DEFAULT_ITEMS]
