"""
Service factory functions for dependency injection.

Wires infrastructure implementations to the state container and core
services. Use cases and the API import from here.
"""

from stokmakmur.application.inventory_state import InventoryState
from stokmakmur.config import get_settings
from stokmakmur.core.interfaces import (
    IKeyValueStore,
    ILLMProvider,
    ISheetSource,
    ISheetWriter,
    IStockAlertNotifier,
)
from stokmakmur.core.services import InsightService, NumberFormat

# Singleton service instances
_inventory_state: InventoryState | None = None
_insight_service: InsightService | None = None


def build_inventory_state(
    cache: IKeyValueStore | None = None,
    source: ISheetSource | None = None,
    bridge: ISheetWriter | None = None,
    notifier: IStockAlertNotifier | None = None,
) -> InventoryState:
    """
    Create an InventoryState from settings.

    Creates infrastructure dependencies if not provided.
    """
    settings = get_settings()

    if cache is None:
        from stokmakmur.infrastructure.storage import create_cache_store

        cache = create_cache_store(settings.storage.backend)

    if source is None:
        from stokmakmur.infrastructure.sheets import GoogleSheetFetcher

        source = GoogleSheetFetcher(
            timeout=settings.sheet.timeout,
            number_format=NumberFormat(settings.sheet.decimal_separator),
            default_reorder_level=settings.sheet.default_reorder_level,
        )

    if bridge is None:
        from stokmakmur.infrastructure.sheets import SheetWriteBridge

        bridge = SheetWriteBridge(timeout=settings.sheet.timeout)

    if notifier is None:
        from stokmakmur.infrastructure.notifications import SlackNotifier

        notifier = SlackNotifier(
            webhook_url=settings.alert.webhook_url,
            timeout=settings.alert.timeout,
            footer=settings.alert.footer,
        )

    return InventoryState(
        cache=cache,
        source=source,
        bridge=bridge,
        notifier=notifier,
        key_prefix=settings.storage.key_prefix,
        default_sheet_url=settings.sheet.source_url,
        default_bridge_url=settings.sheet.bridge_url,
        alerts_enabled=settings.alert.enabled,
    )


def get_inventory_state() -> InventoryState:
    """Get or create the process-wide InventoryState (not yet loaded)."""
    global _inventory_state
    if _inventory_state is None:
        _inventory_state = build_inventory_state()
    return _inventory_state


def reset_inventory_state() -> None:
    """Drop the singleton (for testing)."""
    global _inventory_state
    _inventory_state = None


def get_insight_service(llm: ILLMProvider | None = None) -> InsightService:
    """Get or create InsightService instance."""
    global _insight_service
    if llm is not None:
        settings = get_settings()
        return InsightService(llm, settings.llm.temperature, settings.llm.top_p)

    if _insight_service is None:
        from stokmakmur.infrastructure.llm import get_llm_provider

        settings = get_settings()
        _insight_service = InsightService(
            get_llm_provider(),
            temperature=settings.llm.temperature,
            top_p=settings.llm.top_p,
        )
    return _insight_service


def reset_insight_service() -> None:
    """Drop the insight service and its provider (for testing)."""
    global _insight_service
    _insight_service = None

    from stokmakmur.infrastructure.llm.ollama import reset_ollama_provider

    reset_ollama_provider()
