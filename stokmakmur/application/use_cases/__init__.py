"""Application use cases."""

from stokmakmur.application.use_cases.adjust_stock import AdjustStockUseCase
from stokmakmur.application.use_cases.export_inventory import (
    ExportInventoryUseCase,
    InventoryExport,
)
from stokmakmur.application.use_cases.generate_insights import GenerateInsightsUseCase
from stokmakmur.application.use_cases.sync_sheet import SyncSheetUseCase

__all__ = [
    "AdjustStockUseCase",
    "ExportInventoryUseCase",
    "InventoryExport",
    "GenerateInsightsUseCase",
    "SyncSheetUseCase",
]
