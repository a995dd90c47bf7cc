"""Remote spreadsheet read and write adapters."""

from stokmakmur.infrastructure.sheets.sheet_bridge import SheetWriteBridge
from stokmakmur.infrastructure.sheets.sheet_fetcher import (
    GoogleSheetFetcher,
    normalize_sheet_url,
)

__all__ = ["GoogleSheetFetcher", "SheetWriteBridge", "normalize_sheet_url"]
