"""
Spreadsheet export parser.

Turns the CSV text of a published spreadsheet into inventory items.
Columns are located by keyword: each field takes the first header that
contains any of its keywords (Indonesian and English). Numbers are
cleaned of currency symbols and separators with a configurable rule.

Pure service -- no network access. The HTTP side lives in
infrastructure/sheets.
"""

import math
import re
from dataclasses import dataclass, field

from stokmakmur.config import get_logger
from stokmakmur.core.entities.inventory import InventoryItem
from stokmakmur.core.exceptions import SheetEmptyError

logger = get_logger(__name__)

NOT_FOUND = -1

# Ordered keyword lists; header order decides ties, not keyword order.
FIELD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "name": ("nama", "produk", "item", "barang", "name", "product"),
    "sku": ("sku", "kode", "id", "code"),
    "category": ("kategori", "jenis", "group", "category"),
    "quantity": ("stok", "jumlah", "qty", "stock", "kuantitas", "quantity", "amount"),
    "price": ("harga", "price", "nilai", "cost"),
    "supplier": ("pemasok", "supplier", "vendor"),
    "supplier_email": ("email", "kontak", "contact"),
}

DEFAULT_NAME = "Unnamed product"
DEFAULT_CATEGORY = "General"
DEFAULT_SUPPLIER = "General supplier"
DEFAULT_SUPPLIER_EMAIL = "admin@supplier.com"

_NON_NUMERIC = re.compile(r"[^0-9.,\-]")
_NUMERIC_PREFIX = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)")


@dataclass(frozen=True)
class NumberFormat:
    """How to read separators in numeric cells.

    decimal_separator "." keeps periods as decimal points and turns the
    first comma into one ("1.234" -> 1.234). "," drops periods as
    thousands separators first ("1.234" -> 1234, "15.000,5" -> 15000.5).
    """

    decimal_separator: str = "."

    def __post_init__(self) -> None:
        if self.decimal_separator not in (".", ","):
            raise ValueError(f"Unsupported decimal separator: {self.decimal_separator!r}")


@dataclass
class ColumnMap:
    """Header index per item field; NOT_FOUND when no header matched."""

    indexes: dict[str, int] = field(default_factory=dict)

    def index(self, field_name: str) -> int:
        return self.indexes.get(field_name, NOT_FOUND)

    def cell(self, row: list[str], field_name: str) -> str:
        """Trimmed cell text for a field, empty when unmapped or short row."""
        idx = self.index(field_name)
        if idx == NOT_FOUND or idx >= len(row):
            return ""
        return row[idx].strip()


def parse_csv_row(line: str) -> list[str]:
    """Split one CSV line, honoring double-quoted fields that contain commas."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def split_rows(text: str) -> list[list[str]]:
    """Parse CSV text into rows, dropping blank lines and single-cell rows."""
    rows = (parse_csv_row(line.strip()) for line in text.split("\n"))
    return [row for row in rows if len(row) > 1]


def map_columns(headers: list[str]) -> ColumnMap:
    """Locate each item field among the header cells."""
    normalized = [h.strip().lower() for h in headers]
    indexes: dict[str, int] = {}

    for field_name, keywords in FIELD_KEYWORDS.items():
        indexes[field_name] = NOT_FOUND
        for i, header in enumerate(normalized):
            if any(keyword in header for keyword in keywords):
                indexes[field_name] = i
                break

    return ColumnMap(indexes=indexes)


def clean_number(value: str, number_format: NumberFormat | None = None) -> float:
    """
    Best-effort numeric coercion of a spreadsheet cell.

    Strips everything but digits, separators and minus, normalizes the
    decimal separator, then reads the longest numeric prefix. Returns 0.0
    when nothing numeric remains.
    """
    if not value:
        return 0.0

    number_format = number_format or NumberFormat()
    cleaned = _NON_NUMERIC.sub("", value)

    if number_format.decimal_separator == ",":
        cleaned = cleaned.replace(".", "")
    cleaned = cleaned.replace(",", ".", 1)

    match = _NUMERIC_PREFIX.match(cleaned)
    if match is None:
        return 0.0
    return float(match.group(0))


def rows_to_items(
    rows: list[list[str]],
    number_format: NumberFormat | None = None,
    default_reorder_level: int = 5,
) -> list[InventoryItem]:
    """
    Map parsed rows (header first) to inventory items.

    Raises:
        SheetEmptyError: fewer than one header row plus one data row
    """
    if len(rows) < 2:
        raise SheetEmptyError(len(rows))

    columns = map_columns(rows[0])
    logger.debug("sheet_columns_mapped", columns=columns.indexes)

    kept = [
        row for row in rows[1:]
        if columns.cell(row, "name") or columns.cell(row, "sku")
    ]

    items: list[InventoryItem] = []
    for position, row in enumerate(kept, start=1):
        quantity = clean_number(columns.cell(row, "quantity") or "0", number_format)
        price = clean_number(columns.cell(row, "price") or "0", number_format)

        items.append(
            InventoryItem(
                id=str(position),
                name=columns.cell(row, "name") or DEFAULT_NAME,
                sku=columns.cell(row, "sku") or f"SKU-{position}",
                category=columns.cell(row, "category") or DEFAULT_CATEGORY,
                quantity=math.floor(quantity),
                reorder_level=default_reorder_level,
                price=price,
                supplier=columns.cell(row, "supplier") or DEFAULT_SUPPLIER,
                supplier_email=columns.cell(row, "supplier_email") or DEFAULT_SUPPLIER_EMAIL,
            )
        )

    return items


def parse_sheet_csv(
    text: str,
    number_format: NumberFormat | None = None,
    default_reorder_level: int = 5,
) -> list[InventoryItem]:
    """Parse a full CSV export into inventory items."""
    rows = split_rows(text)
    items = rows_to_items(rows, number_format, default_reorder_level)
    logger.info("sheet_parsed", rows=len(rows) - 1, items=len(items))
    return items
