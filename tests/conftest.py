"""Pytest configuration and fixtures."""

import os

import pytest

# Keep tests off the on-disk cache and the network-backed defaults
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SHEET_SOURCE_URL", "")
os.environ.setdefault("SHEET_BRIDGE_URL", "")
os.environ.setdefault("ALERT_WEBHOOK_URL", "")

from stokmakmur.application.services import (  # noqa: E402
    reset_insight_service,
    reset_inventory_state,
)
from stokmakmur.config import reset_settings  # noqa: E402
from stokmakmur.core.entities.inventory import InventoryItem  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_singletons():
    """Reset cached settings and state between tests."""
    reset_settings()
    reset_inventory_state()
    reset_insight_service()
    yield
    reset_settings()
    reset_inventory_state()
    reset_insight_service()


@pytest.fixture
def sample_items() -> list[InventoryItem]:
    """Three items: healthy, low and critical."""
    return [
        InventoryItem(
            id="1", sku="BRS-001", name="Beras Premium 5kg", category="Sembako",
            quantity=40, reorder_level=10, price=75000,
            supplier="PT Padi Jaya", supplier_email="order@padijaya.co.id",
        ),
        InventoryItem(
            id="2", sku="GUL-002", name="Gula Pasir 1kg", category="Sembako",
            quantity=8, reorder_level=10, price=15000,
            supplier="PT Manis", supplier_email="sales@manis.co.id",
        ),
        InventoryItem(
            id="3", sku="SBN-003", name="Sabun Cuci", category="Kebersihan",
            quantity=2, reorder_level=6, price=12000,
            supplier="CV Bersih", supplier_email="cs@bersih.id",
        ),
    ]
