"""Tests for SheetWriteBridge."""

import json

import httpx

from stokmakmur.infrastructure.sheets.sheet_bridge import SheetWriteBridge

BRIDGE_URL = "https://script.google.com/macros/s/xyz/exec"
MALFORMED_URL = "https://script.google.com/macros/s/xyz\n/exec"


class TestSheetWriteBridge:
    async def test_posts_sku_and_quantity(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text="ok")

        bridge = SheetWriteBridge(transport=httpx.MockTransport(handler))

        assert await bridge.push_quantity(BRIDGE_URL, "GUL-002", 7) is True
        assert requests[0].method == "POST"
        assert json.loads(requests[0].content) == {"sku": "GUL-002", "newQuantity": 7}

    async def test_response_status_not_inspected(self):
        bridge = SheetWriteBridge(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
        assert await bridge.push_quantity(BRIDGE_URL, "GUL-002", 7) is True

    async def test_non_http_url_skipped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        bridge = SheetWriteBridge(transport=httpx.MockTransport(handler))

        assert await bridge.push_quantity("", "GUL-002", 7) is False
        assert await bridge.push_quantity("script.google.com/exec", "GUL-002", 7) is False

    async def test_network_error_returns_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        bridge = SheetWriteBridge(transport=httpx.MockTransport(handler))

        assert await bridge.push_quantity(BRIDGE_URL, "GUL-002", 7) is False

    async def test_malformed_url_returns_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        bridge = SheetWriteBridge(transport=httpx.MockTransport(handler))

        assert await bridge.push_quantity(MALFORMED_URL, "GUL-002", 7) is False
