"""
Core business logic services.

Layer-pure services that depend only on:
- stokmakmur/core/entities/*
- stokmakmur/core/interfaces/*
- stokmakmur/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stokmakmur.core.services.insight_service import InsightService
from stokmakmur.core.services.sheet_parser import NumberFormat, parse_sheet_csv
from stokmakmur.core.services.stock_ledger import (
    AdjustmentResult,
    StockLedger,
    item_status,
    stock_status,
)

__all__ = [
    # Sheet parser
    "NumberFormat",
    "parse_sheet_csv",
    # Ledger
    "StockLedger",
    "AdjustmentResult",
    "stock_status",
    "item_status",
    # Insights
    "InsightService",
]
