"""
Inventory insight service.

Sends an aggregate summary of the stock to a text-generation provider
and returns its advice verbatim. Any provider failure degrades to a
fixed fallback message.
"""

import json

from stokmakmur.config import get_logger
from stokmakmur.core.entities.inventory import InventoryItem
from stokmakmur.core.exceptions import LLMError
from stokmakmur.core.interfaces.llm import ILLMProvider
from stokmakmur.core.services.inventory_report import summarize
from stokmakmur.core.services.stock_ledger import is_low_stock

logger = get_logger(__name__)

FALLBACK_MESSAGE = (
    "Could not generate AI insights right now. "
    "Check the language model configuration."
)
EMPTY_MESSAGE = "No insights available."

PROMPT_TEMPLATE = """Analyze the following inventory data:
Total items: {total_items}
Total value: {total_value}
Low stock items: {low_stock}

Give 3 short strategic insights for the warehouse manager:
1. Which items need restocking right away?
2. Is there any risk of overstock?
3. Suggested actions for suppliers.
Keep the answer professional and directly actionable."""


def build_insight_prompt(items: list[InventoryItem]) -> str:
    summary = summarize(items)
    low_stock = [
        {"name": item.name, "qty": item.quantity, "min": item.reorder_level}
        for item in items
        if is_low_stock(item)
    ]
    return PROMPT_TEMPLATE.format(
        total_items=summary.total_items,
        total_value=f"{summary.total_value:,.0f}",
        low_stock=json.dumps(low_stock, ensure_ascii=False),
    )


class InsightService:
    """Generates strategic stock advice through an LLM provider."""

    def __init__(
        self,
        llm: ILLMProvider,
        temperature: float = 0.7,
        top_p: float = 0.9,
    ) -> None:
        self._llm = llm
        self._temperature = temperature
        self._top_p = top_p

    async def generate(self, items: list[InventoryItem]) -> str:
        prompt = build_insight_prompt(items)
        try:
            response = await self._llm.generate(
                prompt,
                temperature=self._temperature,
                top_p=self._top_p,
            )
        except LLMError as e:
            logger.warning("insight_generation_failed", error=str(e), code=e.code)
            return FALLBACK_MESSAGE

        logger.info("insight_generated", items=len(items), response_len=len(response.text))
        return response.text.strip() or EMPTY_MESSAGE
