"""
Slack low-stock notifier.

Builds an incoming-webhook message with a colored attachment. When no
webhook URL is configured the message is only logged and reported as
sent, so alerts stay visible in development.
"""

import httpx

from stokmakmur.config import get_logger
from stokmakmur.core.entities.inventory import InventoryItem, StockStatus, UserRole
from stokmakmur.core.interfaces.notifier import IStockAlertNotifier
from stokmakmur.core.services.stock_ledger import item_status

logger = get_logger(__name__)

_CRITICAL_COLOR = "#ef4444"
_LOW_COLOR = "#f59e0b"


def build_alert_message(
    item: InventoryItem,
    user: str,
    role: UserRole,
    footer: str = "Stok Makmur stock notifications",
) -> dict:
    """Slack payload for a low or critical stock warning."""
    critical = item_status(item) == StockStatus.CRITICAL
    label = "CRITICAL" if critical else "LOW"

    return {
        "text": f"*Stock warning: {label}*",
        "attachments": [
            {
                "color": _CRITICAL_COLOR if critical else _LOW_COLOR,
                "fields": [
                    {"title": "Product", "value": item.name, "short": True},
                    {"title": "SKU", "value": item.sku, "short": True},
                    {"title": "Remaining stock", "value": f"{item.quantity} units", "short": True},
                    {"title": "Minimum level", "value": f"{item.reorder_level} units", "short": True},
                    {"title": "Updated by", "value": f"{user} ({role.value})", "short": False},
                ],
                "footer": footer,
            }
        ],
    }


class SlackNotifier(IStockAlertNotifier):
    """Posts stock alerts to a Slack incoming webhook."""

    def __init__(
        self,
        webhook_url: str = "",
        timeout: float = 10.0,
        footer: str = "Stok Makmur stock notifications",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._footer = footer
        self._transport = transport

    async def send_low_stock_alert(
        self, item: InventoryItem, user: str, role: UserRole
    ) -> bool:
        message = build_alert_message(item, user, role, self._footer)

        if not self._webhook_url:
            logger.info("slack_notification_logged", sku=item.sku, message=message)
            return True

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.post(self._webhook_url, json=message)

        if not response.is_success:
            logger.warning(
                "slack_notification_rejected",
                sku=item.sku,
                status_code=response.status_code,
            )
            return False

        logger.info("slack_notification_sent", sku=item.sku)
        return True
