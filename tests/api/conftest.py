"""Fixtures for API tests: a loaded in-memory state behind the app."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from stokmakmur.api.dependencies import (
    get_adjust_stock_use_case,
    get_export_inventory_use_case,
    get_generate_insights_use_case,
    get_state,
    get_sync_sheet_use_case,
)
from stokmakmur.api.main import app
from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.application.use_cases import (
    AdjustStockUseCase,
    ExportInventoryUseCase,
    GenerateInsightsUseCase,
    SyncSheetUseCase,
)
from stokmakmur.infrastructure.storage.memory import MemoryKeyValueStore

SHEET_URL = "https://example.com/inventory.csv"

OVERRIDDEN = (
    get_state,
    get_adjust_stock_use_case,
    get_sync_sheet_use_case,
    get_export_inventory_use_case,
    get_generate_insights_use_case,
)


@pytest.fixture
def mock_source(sample_items):
    source = AsyncMock()
    source.fetch_items.return_value = sample_items
    return source


@pytest.fixture
def mock_insight_service():
    service = AsyncMock()
    service.generate.return_value = "Restock Sabun Cuci this week."
    return service


@pytest.fixture
async def inventory_state(mock_source):
    notifier = AsyncMock()
    notifier.send_low_stock_alert.return_value = True
    state = InventoryState(
        cache=MemoryKeyValueStore(),
        source=mock_source,
        bridge=AsyncMock(),
        notifier=notifier,
    )
    await state.set_sheet_url(SHEET_URL)
    return state


@pytest.fixture
async def api_client(inventory_state, mock_insight_service):
    app.dependency_overrides[get_state] = lambda: inventory_state
    app.dependency_overrides[get_adjust_stock_use_case] = lambda: AdjustStockUseCase(inventory_state)
    app.dependency_overrides[get_sync_sheet_use_case] = lambda: SyncSheetUseCase(inventory_state)
    app.dependency_overrides[get_export_inventory_use_case] = lambda: ExportInventoryUseCase(
        inventory_state
    )
    app.dependency_overrides[get_generate_insights_use_case] = lambda: GenerateInsightsUseCase(
        inventory_state, mock_insight_service
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await inventory_state.drain()
    for dependency in OVERRIDDEN:
        app.dependency_overrides.pop(dependency, None)

