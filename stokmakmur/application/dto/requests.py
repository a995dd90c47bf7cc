"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import BaseModel, Field


class AdjustStockRequest(BaseModel):
    """Request to add or remove stock for one item."""

    change: int = Field(
        ...,
        description="Signed quantity delta (negative for outgoing stock)",
        examples=[10, -3],
    )
    reason: str = Field(
        default="Stock update",
        max_length=200,
        description="Reason recorded in the audit log",
        examples=["Restock from supplier", "Sold", "Damaged"],
    )


class CategoryCreateRequest(BaseModel):
    """Request to add a category."""

    name: str = Field(..., min_length=1, max_length=100)


class CategoryRenameRequest(BaseModel):
    """Request to rename a category (cascades to items)."""

    new_name: str = Field(..., min_length=1, max_length=100)


class SheetURLRequest(BaseModel):
    """Request to link a spreadsheet or write bridge.

    An empty URL unlinks it.
    """

    url: str = Field(
        default="",
        description="Google Sheets link or published CSV export URL",
        examples=["https://docs.google.com/spreadsheets/d/abc123/edit#gid=0"],
    )
