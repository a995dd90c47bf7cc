"""Core interfaces (ports) implemented by the infrastructure layer."""

from stokmakmur.core.interfaces.llm import HealthStatus, ILLMProvider, LLMResponse
from stokmakmur.core.interfaces.notifier import IStockAlertNotifier
from stokmakmur.core.interfaces.sheet import ISheetSource, ISheetWriter
from stokmakmur.core.interfaces.storage import IKeyValueStore

__all__ = [
    "IKeyValueStore",
    "ISheetSource",
    "ISheetWriter",
    "IStockAlertNotifier",
    "ILLMProvider",
    "LLMResponse",
    "HealthStatus",
]
