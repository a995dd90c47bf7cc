"""
Published spreadsheet fetcher.

Normalizes Google Sheets links to their CSV export form, downloads the
export, classifies failures (not found / not published / other HTTP /
network), rejects HTML login pages, and hands the text to the sheet
parser. No retry is performed.
"""

import re

import httpx

from stokmakmur.config import get_logger
from stokmakmur.core.entities.inventory import InventoryItem
from stokmakmur.core.exceptions import (
    InvalidSheetURLError,
    SheetHTTPError,
    SheetNetworkError,
    SheetNotFoundError,
    SheetNotPublishedError,
)
from stokmakmur.core.interfaces.sheet import ISheetSource
from stokmakmur.core.services.sheet_parser import NumberFormat, parse_sheet_csv

logger = get_logger(__name__)

GOOGLE_SHEETS_MARKER = "docs.google.com/spreadsheets"
EXPORT_MARKER = "output=csv"

_EDIT_SUFFIX = re.compile(r"/edit.*$")

# Served instead of CSV when the sheet is private
_HTML_MARKERS = ("<!doctype html>", "google-signin")


def normalize_sheet_url(url: str) -> str:
    """
    Rewrite a Google Sheets link to its published CSV export.

    ".../edit#gid=0" becomes ".../pub?output=csv"; other Google links get
    output=csv appended when missing. Non-Google URLs are returned trimmed.
    """
    csv_url = url.strip()
    if GOOGLE_SHEETS_MARKER not in csv_url:
        return csv_url

    if "/edit" in csv_url:
        return _EDIT_SUFFIX.sub("/pub?output=csv", csv_url)

    if EXPORT_MARKER not in csv_url:
        separator = "&" if "?" in csv_url else "?"
        csv_url = f"{csv_url}{separator}{EXPORT_MARKER}"
    return csv_url


def looks_like_html(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in _HTML_MARKERS)


class GoogleSheetFetcher(ISheetSource):
    """Reads inventory items from a spreadsheet published as CSV."""

    def __init__(
        self,
        timeout: float = 30.0,
        number_format: NumberFormat | None = None,
        default_reorder_level: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout = timeout
        self._number_format = number_format or NumberFormat()
        self._default_reorder_level = default_reorder_level
        self._transport = transport

    async def fetch_items(self, url: str) -> list[InventoryItem]:
        """Fetch the sheet behind url and parse it into items."""
        if not url or not url.startswith("http"):
            raise InvalidSheetURLError(url)

        csv_url = normalize_sheet_url(url)
        logger.info("sheet_fetch_started", url=csv_url)

        text = await self._download(csv_url)
        if looks_like_html(text):
            logger.warning("sheet_not_published", url=csv_url)
            raise SheetNotPublishedError(csv_url)

        items = parse_sheet_csv(
            text,
            number_format=self._number_format,
            default_reorder_level=self._default_reorder_level,
        )
        logger.info("sheet_fetch_complete", url=csv_url, items=len(items))
        return items

    async def _download(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.InvalidURL as exc:
            logger.warning("sheet_url_malformed", url=url, error=str(exc))
            raise InvalidSheetURLError(url, str(exc)) from exc
        except httpx.HTTPError as exc:
            logger.error("sheet_fetch_network_error", url=url, error=str(exc))
            raise SheetNetworkError(url, str(exc)) from exc

        if response.status_code == 404:
            raise SheetNotFoundError(url)
        if response.status_code == 403:
            raise SheetNotPublishedError(url, status_code=403)
        if not response.is_success:
            logger.error(
                "sheet_fetch_http_error",
                url=url,
                status_code=response.status_code,
            )
            raise SheetHTTPError(url, response.status_code, response.reason_phrase)

        return response.text
