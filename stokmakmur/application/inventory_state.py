"""
Inventory state container.

Owns the item, category and log collections. State is read from the
local cache once in load() and written back after every committed
change. Sheet pushes and stock alerts run as detached tasks that never
block or roll back a commit.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from stokmakmur.config import get_logger
from stokmakmur.core.entities.inventory import InventoryItem, StockLog, UserRole
from stokmakmur.core.exceptions import (
    CategoryNotFoundError,
    ItemNotFoundError,
    SheetError,
    ValidationError,
)
from stokmakmur.core.interfaces.notifier import IStockAlertNotifier
from stokmakmur.core.interfaces.sheet import ISheetSource, ISheetWriter
from stokmakmur.core.interfaces.storage import IKeyValueStore
from stokmakmur.core.seed import default_items
from stokmakmur.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)

T = TypeVar("T")

SLOT_ITEMS = "items"
SLOT_CATEGORIES = "categories"
SLOT_LOGS = "logs"
SLOT_SHEET_URL = "sheet_url"
SLOT_BRIDGE_URL = "bridge_url"

_ITEMS = TypeAdapter(list[InventoryItem])
_LOGS = TypeAdapter(list[StockLog])
_CATEGORIES = TypeAdapter(list[str])


def _union(existing: Iterable[str], incoming: Iterable[str]) -> list[str]:
    """Ordered union; existing entries keep their position."""
    merged = list(dict.fromkeys(existing))
    for name in incoming:
        if name not in merged:
            merged.append(name)
    return merged


@dataclass(frozen=True)
class AdjustmentOutcome:
    """Committed adjustment plus the side effects that were scheduled."""

    item: InventoryItem
    log: StockLog
    should_alert: bool
    alert_scheduled: bool
    sync_scheduled: bool


class InventoryState:
    """Single-viewer inventory state with write-through caching."""

    def __init__(
        self,
        cache: IKeyValueStore,
        source: ISheetSource,
        bridge: ISheetWriter,
        notifier: IStockAlertNotifier,
        ledger: StockLedger | None = None,
        key_prefix: str = "stok_makmur_",
        default_sheet_url: str = "",
        default_bridge_url: str = "",
        alerts_enabled: bool = True,
    ):
        self._cache = cache
        self._source = source
        self._bridge = bridge
        self._notifier = notifier
        self._ledger = ledger or StockLedger()
        self._key_prefix = key_prefix
        self._default_sheet_url = default_sheet_url
        self._default_bridge_url = default_bridge_url
        self._alerts_enabled = alerts_enabled

        self._items: list[InventoryItem] = []
        self._categories: list[str] = []
        self._logs: list[StockLog] = []
        self._sheet_url = ""
        self._bridge_url = ""

        self._last_error: str | None = None
        self._syncing = False
        self._last_alert_at: str | None = None
        self._refresh_ticket = 0
        self._tasks: set[asyncio.Task] = set()

    # -- read-only views ----------------------------------------------------

    @property
    def items(self) -> list[InventoryItem]:
        return list(self._items)

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    @property
    def logs(self) -> list[StockLog]:
        return list(self._logs)

    @property
    def sheet_url(self) -> str:
        return self._sheet_url

    @property
    def bridge_url(self) -> str:
        return self._bridge_url

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def is_syncing(self) -> bool:
        return self._syncing

    @property
    def last_alert_at(self) -> str | None:
        return self._last_alert_at

    def get_item(self, item_id: str) -> InventoryItem:
        return self._items[self._index_of(item_id)]

    def logs_for_item(self, item: InventoryItem) -> list[StockLog]:
        """History for item, newest first.

        Logs are matched on their SKU snapshot so history survives a sheet
        refresh that renumbers ids; logs without a SKU fall back to the id.
        """
        def belongs(log: StockLog) -> bool:
            if log.item_sku:
                return log.item_sku == item.sku
            return log.item_id == item.id

        return [log for log in reversed(self._logs) if belongs(log)]

    # -- lifecycle ----------------------------------------------------------

    async def load(self) -> None:
        """Read cached state, then refresh from the sheet when needed."""
        self._items = await self._read(SLOT_ITEMS, _ITEMS)
        self._categories = await self._read(SLOT_CATEGORIES, _CATEGORIES)
        self._logs = await self._read(SLOT_LOGS, _LOGS)
        self._sheet_url = await self._read_url(SLOT_SHEET_URL, self._default_sheet_url)
        self._bridge_url = await self._read_url(SLOT_BRIDGE_URL, self._default_bridge_url)

        logger.info(
            "inventory_state_loaded",
            items=len(self._items),
            categories=len(self._categories),
            logs=len(self._logs),
            sheet_linked=bool(self._sheet_url),
        )

        if not self._items or self._sheet_url:
            await self.refresh()

    async def refresh(self, url: str | None = None) -> bool:
        """
        Replace items with the sheet contents.

        Without a sheet URL, seeds the starter catalogue when there are no
        items. On failure existing data is kept and the message is stored
        in last_error. Only the most recently started refresh may commit.

        Returns:
            True when remote items were committed
        """
        target = url or self._sheet_url
        if not target:
            if not self._items:
                await self._seed()
            return False

        self._refresh_ticket += 1
        ticket = self._refresh_ticket
        self._syncing = True
        self._last_error = None

        try:
            remote = await self._source.fetch_items(target)
        except SheetError as e:
            logger.warning("sheet_refresh_failed", url=target, code=e.code, error=e.message)
            if ticket == self._refresh_ticket:
                self._last_error = e.message
            return False
        finally:
            if ticket == self._refresh_ticket:
                self._syncing = False

        if ticket != self._refresh_ticket:
            logger.info("sheet_refresh_superseded", ticket=ticket, latest=self._refresh_ticket)
            return False

        if not remote:
            return False

        self._items = remote
        self._categories = _union(self._categories, (item.category for item in remote))
        await self._persist(SLOT_ITEMS, SLOT_CATEGORIES)
        logger.info("sheet_refresh_committed", url=target, items=len(remote))
        return True

    async def set_sheet_url(self, url: str) -> bool:
        self._sheet_url = url.strip()
        await self._cache.set(self._key(SLOT_SHEET_URL), self._sheet_url)
        return await self.refresh(self._sheet_url or None)

    async def set_bridge_url(self, url: str) -> None:
        self._bridge_url = url.strip()
        await self._cache.set(self._key(SLOT_BRIDGE_URL), self._bridge_url)

    async def drain(self) -> None:
        """Wait for outstanding background tasks."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    # -- stock --------------------------------------------------------------

    async def adjust_stock(
        self,
        item_id: str,
        delta: int,
        reason: str,
        role: UserRole,
    ) -> AdjustmentOutcome:
        """Commit a ledger adjustment, then schedule sheet push and alert."""
        index = self._index_of(item_id)
        result = self._ledger.apply_adjustment(self._items[index], delta, reason, role)

        self._items[index] = result.item
        self._logs.append(result.log)
        await self._persist(SLOT_ITEMS, SLOT_LOGS)

        logger.info(
            "stock_adjusted",
            item_id=item_id,
            sku=result.item.sku,
            change=delta,
            new_quantity=result.item.quantity,
            role=role.value,
        )

        sync_scheduled = False
        if self._bridge_url:
            self._dispatch(
                "sheet_push",
                self._bridge.push_quantity(self._bridge_url, result.item.sku, result.item.quantity),
            )
            sync_scheduled = True

        alert_scheduled = False
        if result.should_alert and self._alerts_enabled:
            self._dispatch(
                "low_stock_alert",
                self._notifier.send_low_stock_alert(result.item, result.log.user, role),
                on_result=self._record_alert,
            )
            alert_scheduled = True

        return AdjustmentOutcome(
            item=result.item,
            log=result.log,
            should_alert=result.should_alert,
            alert_scheduled=alert_scheduled,
            sync_scheduled=sync_scheduled,
        )

    # -- categories ---------------------------------------------------------

    async def add_category(self, name: str) -> bool:
        name = name.strip()
        if not name:
            raise ValidationError("name", "Category name must not be empty", name)
        if name in self._categories:
            return False
        self._categories.append(name)
        await self._persist(SLOT_CATEGORIES)
        return True

    async def rename_category(self, old_name: str, new_name: str) -> int:
        """Rename a category and every item that references it.

        Returns:
            Number of items moved to the new name
        """
        new_name = new_name.strip()
        if not new_name:
            raise ValidationError("new_name", "Category name must not be empty", new_name)
        if old_name not in self._categories:
            raise CategoryNotFoundError(old_name)

        renamed = [new_name if c == old_name else c for c in self._categories]
        self._categories = list(dict.fromkeys(renamed))

        moved = 0
        for i, item in enumerate(self._items):
            if item.category == old_name:
                self._items[i] = item.model_copy(update={"category": new_name})
                moved += 1

        await self._persist(SLOT_CATEGORIES, SLOT_ITEMS)
        logger.info("category_renamed", old=old_name, new=new_name, items=moved)
        return moved

    async def delete_category(self, name: str) -> None:
        """Remove a category. Items keep the orphaned name."""
        if name not in self._categories:
            raise CategoryNotFoundError(name)
        self._categories.remove(name)
        await self._persist(SLOT_CATEGORIES)
        logger.info("category_deleted", name=name)

    # -- internals ----------------------------------------------------------

    def _key(self, slot: str) -> str:
        return f"{self._key_prefix}{slot}"

    def _index_of(self, item_id: str) -> int:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        raise ItemNotFoundError(item_id)

    async def _seed(self) -> None:
        self._items = default_items()
        self._categories = _union(self._categories, (item.category for item in self._items))
        await self._persist(SLOT_ITEMS, SLOT_CATEGORIES)
        logger.info("seed_items_loaded", items=len(self._items))

    async def _read(self, slot: str, adapter: TypeAdapter[list[T]]) -> list[T]:
        raw = await self._cache.get(self._key(slot))
        if not raw:
            return []
        try:
            return adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("cache_slot_unreadable", slot=slot, errors=e.error_count())
            return []

    async def _read_url(self, slot: str, default: str) -> str:
        # A stored "" is an explicit unlink and overrides the default
        raw = await self._cache.get(self._key(slot))
        return default if raw is None else raw

    async def _persist(self, *slots: str) -> None:
        for slot in slots:
            if slot == SLOT_ITEMS:
                raw = _ITEMS.dump_json(self._items, by_alias=True, exclude_none=True)
            elif slot == SLOT_CATEGORIES:
                raw = _CATEGORIES.dump_json(self._categories)
            elif slot == SLOT_LOGS:
                raw = _LOGS.dump_json(self._logs, by_alias=True, exclude_none=True)
            else:
                raise ValueError(f"Unknown cache slot: {slot}")
            await self._cache.set(self._key(slot), raw.decode())

    def _dispatch(
        self,
        name: str,
        operation: Awaitable[Any],
        on_result: Callable[[Any], None] | None = None,
    ) -> asyncio.Task:
        task = asyncio.create_task(self._guarded(name, operation, on_result))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @staticmethod
    async def _guarded(
        name: str,
        operation: Awaitable[Any],
        on_result: Callable[[Any], None] | None,
    ) -> Any:
        try:
            result = await operation
        except Exception as e:
            logger.error("background_task_failed", task=name, error=str(e), error_type=type(e).__name__)
            return None
        if on_result is not None:
            on_result(result)
        return result

    def _record_alert(self, sent: bool) -> None:
        if sent:
            self._last_alert_at = datetime.now(timezone.utc).isoformat()
