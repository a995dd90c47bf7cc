"""Tests for SyncSheetUseCase."""

from unittest.mock import AsyncMock

import pytest

from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.application.use_cases.sync_sheet import SyncSheetUseCase
from stokmakmur.core.exceptions import SheetNotFoundError
from stokmakmur.infrastructure.storage.memory import MemoryKeyValueStore

SHEET_URL = "https://example.com/inventory.csv"


@pytest.fixture
def source():
    return AsyncMock()


@pytest.fixture
def state(source):
    return InventoryState(
        cache=MemoryKeyValueStore(), source=source, bridge=AsyncMock(), notifier=AsyncMock(),
    )


@pytest.fixture
def use_case(state):
    return SyncSheetUseCase(state=state)


class TestSyncSheetUseCase:
    async def test_link_sheet_loads_items(self, use_case, source, sample_items):
        source.fetch_items.return_value = sample_items

        status = await use_case.link_sheet(SHEET_URL)

        assert status.cloud_linked
        assert status.sheet_url == SHEET_URL
        assert status.item_count == 3
        assert status.last_error is None

    async def test_refresh_failure_reported_not_raised(self, use_case, source, sample_items):
        source.fetch_items.return_value = sample_items
        await use_case.link_sheet(SHEET_URL)
        source.fetch_items.side_effect = SheetNotFoundError(SHEET_URL)

        status = await use_case.refresh()

        assert status.last_error is not None
        assert status.item_count == 3
        assert not status.is_syncing

    async def test_refresh_without_link_seeds(self, use_case, source):
        status = await use_case.refresh()

        assert not status.cloud_linked
        assert status.item_count > 0
        source.fetch_items.assert_not_called()

    async def test_link_bridge(self, use_case):
        status = await use_case.link_bridge(" https://script.google.com/exec ")
        assert status.bridge_url == "https://script.google.com/exec"
