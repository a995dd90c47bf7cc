"""
Spreadsheet write bridge.

Posts {sku, newQuantity} to a user-supplied endpoint (typically an Apps
Script web app). The response is never inspected: a True return only
means the request left without a local exception.
"""

import httpx

from stokmakmur.config import get_logger
from stokmakmur.core.interfaces.sheet import ISheetWriter

logger = get_logger(__name__)


class SheetWriteBridge(ISheetWriter):
    """At-most-once, unconfirmed quantity push."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout = timeout
        self._transport = transport

    async def push_quantity(self, bridge_url: str, sku: str, new_quantity: int) -> bool:
        if not bridge_url or not bridge_url.startswith("http"):
            return False

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                await client.post(
                    bridge_url,
                    json={"sku": sku, "newQuantity": new_quantity},
                )
        except (httpx.InvalidURL, httpx.HTTPError) as exc:
            logger.error("sheet_push_failed", sku=sku, error=str(exc))
            return False

        logger.info("sheet_push_dispatched", sku=sku, new_quantity=new_quantity)
        return True
