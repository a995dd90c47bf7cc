"""Tests for the InventoryState container."""

import asyncio
import json
from unittest.mock import AsyncMock

import httpx
import pytest

from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.core.entities.inventory import InventoryItem, UserRole
from stokmakmur.core.exceptions import (
    CategoryNotFoundError,
    ItemNotFoundError,
    SheetNotPublishedError,
    ValidationError,
)
from stokmakmur.core.seed import DEFAULT_ITEMS
from stokmakmur.infrastructure.sheets.sheet_fetcher import GoogleSheetFetcher
from stokmakmur.infrastructure.storage.memory import MemoryKeyValueStore

SHEET_URL = "https://docs.google.com/spreadsheets/d/abc/pub?output=csv"
BRIDGE_URL = "https://script.google.com/macros/s/xyz/exec"
MALFORMED_SHEET_URL = "https://docs.google.com/spreadsheets/d/abc\n/pub?output=csv"


@pytest.fixture
def cache():
    return MemoryKeyValueStore()


@pytest.fixture
def source():
    return AsyncMock()


@pytest.fixture
def bridge():
    bridge = AsyncMock()
    bridge.push_quantity.return_value = True
    return bridge


@pytest.fixture
def notifier():
    notifier = AsyncMock()
    notifier.send_low_stock_alert.return_value = True
    return notifier


@pytest.fixture
def state(cache, source, bridge, notifier):
    return InventoryState(cache=cache, source=source, bridge=bridge, notifier=notifier)


async def _loaded(state: InventoryState, items: list[InventoryItem]) -> InventoryState:
    state._source.fetch_items.return_value = items
    await state.refresh(SHEET_URL)
    return state


class TestLoad:
    async def test_empty_cache_seeds_starter_items(self, state, cache, source):
        await state.load()

        assert len(state.items) == len(DEFAULT_ITEMS)
        assert "Electronics" in state.categories
        assert "stok_makmur_items" in cache.snapshot()
        source.fetch_items.assert_not_called()

    async def test_cached_items_without_sheet_skip_refresh(self, cache, source, bridge, notifier, sample_items):
        cache_state = InventoryState(cache=cache, source=source, bridge=bridge, notifier=notifier)
        await _loaded(cache_state, sample_items)
        source.reset_mock()
        await cache.delete("stok_makmur_sheet_url")

        fresh = InventoryState(cache=cache, source=source, bridge=bridge, notifier=notifier)
        await fresh.load()

        assert [i.sku for i in fresh.items] == [i.sku for i in sample_items]
        source.fetch_items.assert_not_called()

    async def test_linked_sheet_refreshes_on_load(self, cache, source, bridge, notifier, sample_items):
        await cache.set("stok_makmur_sheet_url", SHEET_URL)
        source.fetch_items.return_value = sample_items

        state = InventoryState(cache=cache, source=source, bridge=bridge, notifier=notifier)
        await state.load()

        source.fetch_items.assert_awaited_once_with(SHEET_URL)
        assert len(state.items) == 3

    async def test_cleared_sheet_url_survives_restart(self, cache, source, bridge, notifier, sample_items):
        linked = InventoryState(
            cache=cache, source=source, bridge=bridge, notifier=notifier,
            default_sheet_url=SHEET_URL,
        )
        await _loaded(linked, sample_items)
        await linked.set_sheet_url("")
        source.reset_mock()

        restarted = InventoryState(
            cache=cache, source=source, bridge=bridge, notifier=notifier,
            default_sheet_url=SHEET_URL,
        )
        await restarted.load()

        assert restarted.sheet_url == ""
        assert [i.sku for i in restarted.items] == [i.sku for i in sample_items]
        source.fetch_items.assert_not_called()

    async def test_default_sheet_url_used_when_never_set(self, cache, source, bridge, notifier, sample_items):
        source.fetch_items.return_value = sample_items

        state = InventoryState(
            cache=cache, source=source, bridge=bridge, notifier=notifier,
            default_sheet_url=SHEET_URL,
        )
        await state.load()

        assert state.sheet_url == SHEET_URL
        source.fetch_items.assert_awaited_once_with(SHEET_URL)

    async def test_unreadable_slot_treated_as_empty(self, cache, state):
        await cache.set("stok_makmur_items", "{not json")

        await state.load()

        assert len(state.items) == len(DEFAULT_ITEMS)

    async def test_cache_uses_camel_case_keys(self, cache, state):
        await state.load()

        stored = json.loads(cache.snapshot()["stok_makmur_items"])
        assert "reorderLevel" in stored[0]
        assert "supplierEmail" in stored[0]


class TestRefresh:
    async def test_success_replaces_items_and_unions_categories(self, state, sample_items):
        await state.add_category("Custom")
        await _loaded(state, sample_items)

        assert state.items == sample_items
        assert state.categories == ["Custom", "Sembako", "Kebersihan"]
        assert state.last_error is None
        assert not state.is_syncing

    async def test_failure_keeps_existing_items(self, state, source, sample_items):
        await _loaded(state, sample_items)
        source.fetch_items.side_effect = SheetNotPublishedError(SHEET_URL)

        committed = await state.refresh(SHEET_URL)

        assert committed is False
        assert state.items == sample_items
        assert state.last_error is not None
        assert "publish" in state.last_error.lower()
        assert not state.is_syncing

    async def test_no_url_and_items_present_is_noop(self, state, source, sample_items):
        await _loaded(state, sample_items)
        state._sheet_url = ""
        source.reset_mock()

        assert await state.refresh() is False
        source.fetch_items.assert_not_called()

    async def test_latest_started_refresh_wins(self, state, source, sample_items):
        gate = asyncio.Event()
        stale = [sample_items[0]]
        fresh = sample_items[1:]

        async def fetch(url: str) -> list[InventoryItem]:
            if "slow" in url:
                await gate.wait()
                return stale
            return fresh

        source.fetch_items.side_effect = fetch

        slow = asyncio.create_task(state.refresh("https://example.com/slow.csv"))
        await asyncio.sleep(0)
        assert await state.refresh("https://example.com/fast.csv") is True

        gate.set()
        assert await slow is False
        assert state.items == fresh
        assert not state.is_syncing

    async def test_set_sheet_url_persists_and_refreshes(self, state, cache, source, sample_items):
        source.fetch_items.return_value = sample_items

        assert await state.set_sheet_url(f"  {SHEET_URL}  ") is True

        assert state.sheet_url == SHEET_URL
        assert cache.snapshot()["stok_makmur_sheet_url"] == SHEET_URL

    async def test_clearing_sheet_url_keeps_items(self, state, source, sample_items):
        await _loaded(state, sample_items)
        source.reset_mock()

        await state.set_sheet_url("")

        assert state.items == sample_items
        source.fetch_items.assert_not_called()

    async def test_malformed_sheet_url_is_reported_not_raised(self, cache, bridge, notifier, sample_items):
        fetcher = GoogleSheetFetcher(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, text="unused"))
        )
        state = InventoryState(cache=cache, source=fetcher, bridge=bridge, notifier=notifier)
        state._items = list(sample_items)

        assert await state.set_sheet_url(MALFORMED_SHEET_URL) is False

        assert state.items == sample_items
        assert "malformed" in state.last_error
        assert not state.is_syncing

        restarted = InventoryState(cache=cache, source=fetcher, bridge=bridge, notifier=notifier)
        await restarted.load()

        assert restarted.last_error is not None


class TestAdjustStock:
    async def test_commit_persists_items_and_logs(self, state, cache, sample_items):
        await _loaded(state, sample_items)

        outcome = await state.adjust_stock("1", -5, "Sold", UserRole.WAREHOUSE)

        assert outcome.item.quantity == 35
        assert state.get_item("1").quantity == 35
        assert state.logs == [outcome.log]
        stored_logs = json.loads(cache.snapshot()["stok_makmur_logs"])
        assert stored_logs[0]["newQuantity"] == 35
        stored_items = json.loads(cache.snapshot()["stok_makmur_items"])
        assert stored_items[0]["quantity"] == 35

    async def test_unknown_item(self, state, sample_items):
        await _loaded(state, sample_items)
        with pytest.raises(ItemNotFoundError):
            await state.adjust_stock("99", 1, "x", UserRole.MANAGER)

    async def test_bridge_push_scheduled(self, state, bridge, sample_items):
        await _loaded(state, sample_items)
        await state.set_bridge_url(BRIDGE_URL)

        outcome = await state.adjust_stock("1", 2, "Restock", UserRole.MANAGER)
        await state.drain()

        assert outcome.sync_scheduled
        bridge.push_quantity.assert_awaited_once_with(BRIDGE_URL, "BRS-001", 42)

    async def test_no_bridge_no_push(self, state, bridge, sample_items):
        await _loaded(state, sample_items)

        outcome = await state.adjust_stock("1", 2, "Restock", UserRole.MANAGER)
        await state.drain()

        assert not outcome.sync_scheduled
        bridge.push_quantity.assert_not_called()

    async def test_alert_when_reaching_reorder_level(self, state, notifier, sample_items):
        await _loaded(state, sample_items)

        outcome = await state.adjust_stock("2", -1, "Sold", UserRole.WAREHOUSE)
        await state.drain()

        assert outcome.should_alert and outcome.alert_scheduled
        notifier.send_low_stock_alert.assert_awaited_once()
        item, user, role = notifier.send_low_stock_alert.call_args.args
        assert item.quantity == 7
        assert user == "Warehouse staff"
        assert role == UserRole.WAREHOUSE
        assert state.last_alert_at is not None

    async def test_no_alert_above_reorder_level(self, state, notifier, sample_items):
        await _loaded(state, sample_items)

        outcome = await state.adjust_stock("1", -1, "Sold", UserRole.MANAGER)
        await state.drain()

        assert not outcome.should_alert
        notifier.send_low_stock_alert.assert_not_called()

    async def test_alerts_disabled(self, cache, source, bridge, notifier, sample_items):
        state = InventoryState(
            cache=cache, source=source, bridge=bridge, notifier=notifier, alerts_enabled=False
        )
        await _loaded(state, sample_items)

        outcome = await state.adjust_stock("3", -1, "Sold", UserRole.MANAGER)
        await state.drain()

        assert outcome.should_alert and not outcome.alert_scheduled
        notifier.send_low_stock_alert.assert_not_called()

    async def test_failing_side_effects_do_not_undo_commit(self, state, bridge, notifier, sample_items):
        await _loaded(state, sample_items)
        await state.set_bridge_url(BRIDGE_URL)
        bridge.push_quantity.side_effect = RuntimeError("bridge down")
        notifier.send_low_stock_alert.side_effect = RuntimeError("webhook down")

        outcome = await state.adjust_stock("3", -1, "Damaged", UserRole.MANAGER)
        await state.drain()

        assert state.get_item("3").quantity == 1
        assert state.logs == [outcome.log]
        assert state.last_alert_at is None

    async def test_history_follows_sku_after_renumbering(self, state, source, sample_items):
        await _loaded(state, sample_items)
        await state.adjust_stock("2", 3, "Restock", UserRole.MANAGER)

        beras, gula, sabun = sample_items
        renumbered = [
            gula.model_copy(update={"id": "1"}),
            sabun.model_copy(update={"id": "2"}),
            beras.model_copy(update={"id": "3"}),
        ]
        source.fetch_items.return_value = renumbered
        await state.refresh(SHEET_URL)

        history = state.logs_for_item(state.get_item("1"))
        assert [log.item_sku for log in history] == ["GUL-002"]
        assert state.logs_for_item(state.get_item("2")) == []


class TestCategories:
    async def test_add_is_idempotent(self, state):
        assert await state.add_category("Minuman") is True
        assert await state.add_category("Minuman") is False
        assert state.categories.count("Minuman") == 1

    async def test_add_empty_rejected(self, state):
        with pytest.raises(ValidationError):
            await state.add_category("   ")

    async def test_rename_cascades_to_items(self, state, sample_items):
        await _loaded(state, sample_items)

        moved = await state.rename_category("Sembako", "Bahan Pokok")

        assert moved == 2
        assert "Sembako" not in state.categories
        assert state.categories[0] == "Bahan Pokok"
        assert {i.category for i in state.items} == {"Bahan Pokok", "Kebersihan"}

    async def test_rename_into_existing_merges(self, state, sample_items):
        await _loaded(state, sample_items)

        await state.rename_category("Kebersihan", "Sembako")

        assert state.categories == ["Sembako"]
        assert all(i.category == "Sembako" for i in state.items)

    async def test_rename_unknown(self, state):
        with pytest.raises(CategoryNotFoundError):
            await state.rename_category("Nope", "Other")

    async def test_delete_leaves_items_untouched(self, state, sample_items):
        await _loaded(state, sample_items)

        await state.delete_category("Kebersihan")

        assert "Kebersihan" not in state.categories
        assert state.get_item("3").category == "Kebersihan"

    async def test_delete_unknown(self, state):
        with pytest.raises(CategoryNotFoundError):
            await state.delete_category("Nope")
