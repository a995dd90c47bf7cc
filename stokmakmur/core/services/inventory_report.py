"""
Inventory reporting helpers.

Dashboard aggregates, search and filtering, CSV export and the
supplier restock e-mail link.
"""

import csv
import io
from datetime import date
from urllib.parse import quote

from stokmakmur.core.entities.inventory import (
    CategoryStat,
    InventoryItem,
    InventorySummary,
    StockStatus,
    UserRole,
)
from stokmakmur.core.services.stock_ledger import is_low_stock, item_status

FILTER_ALL = "all"
FILTER_LOW_STOCK = "low_stock"

EXPORT_HEADERS = [
    "Product name",
    "SKU",
    "Category",
    "Stock",
    "Unit price",
    "Total value",
    "Supplier",
]


def _format_number(value: float) -> str:
    """Render whole floats without a trailing .0."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def stock_health_percent(total: int, critical: int) -> int:
    """Share of items not in critical state, rounded half up; 100 when empty."""
    if total <= 0:
        return 100
    return int((total - critical) * 100 / total + 0.5)


def summarize(items: list[InventoryItem]) -> InventorySummary:
    """Counts, total value, and per-category value sorted high to low."""
    stats: dict[str, CategoryStat] = {}
    for item in items:
        stat = stats.setdefault(item.category, CategoryStat(name=item.category))
        stat.count += 1
        stat.value += item.total_value

    critical = sum(1 for item in items if item_status(item) == StockStatus.CRITICAL)
    return InventorySummary(
        total_items=len(items),
        total_value=sum(item.total_value for item in items),
        low_stock_count=sum(1 for item in items if is_low_stock(item)),
        critical_stock_count=critical,
        stock_health_percent=stock_health_percent(len(items), critical),
        categories=sorted(stats.values(), key=lambda s: s.value, reverse=True),
    )


def filter_items(
    items: list[InventoryItem],
    query: str = "",
    filter_by: str = FILTER_ALL,
) -> list[InventoryItem]:
    """
    Search by name or SKU and filter by category or low stock.

    filter_by is FILTER_ALL, FILTER_LOW_STOCK, or a category name.
    """
    needle = query.strip().lower()

    def matches(item: InventoryItem) -> bool:
        if needle and needle not in item.name.lower() and needle not in item.sku.lower():
            return False
        if filter_by == FILTER_ALL:
            return True
        if filter_by == FILTER_LOW_STOCK:
            return is_low_stock(item)
        return item.category == filter_by

    return [item for item in items if matches(item)]


def export_csv(items: list[InventoryItem]) -> str:
    """One header line plus one line per item, fixed column order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for item in items:
        writer.writerow(
            [
                item.name,
                item.sku,
                item.category,
                item.quantity,
                _format_number(item.price),
                _format_number(item.total_value),
                item.supplier,
            ]
        )
    return buffer.getvalue().rstrip("\n")


def export_filename(on: date | None = None) -> str:
    return f"Inventory_Report_{(on or date.today()).isoformat()}.csv"


def restock_mailto(item: InventoryItem, role: UserRole) -> str:
    """Prefilled mail-compose link asking the supplier to restock item."""
    subject = f"Restock request: {item.name} ({item.sku})"
    body = (
        f"Hello {item.supplier},\n\n"
        f"We would like to request a restock of {item.name}.\n"
        f"SKU: {item.sku}\n"
        f"Requested quantity: [fill in quantity]\n\n"
        f"Please let us know the earliest delivery date.\n\n"
        f"Regards,\n"
        f"Warehouse team {role.value}"
    )
    return (
        f"mailto:{item.supplier_email}"
        f"?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
    )
