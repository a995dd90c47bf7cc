"""Tests for summaries, filtering, CSV export and restock links."""

from datetime import date
from urllib.parse import unquote

from stokmakmur.core.entities.inventory import InventoryItem, UserRole
from stokmakmur.core.services.inventory_report import (
    EXPORT_HEADERS,
    FILTER_LOW_STOCK,
    export_csv,
    export_filename,
    filter_items,
    restock_mailto,
    stock_health_percent,
    summarize,
)


class TestSummarize:
    def test_totals(self, sample_items):
        summary = summarize(sample_items)

        assert summary.total_items == 3
        assert summary.total_value == 3_144_000
        assert summary.low_stock_count == 2
        assert summary.critical_stock_count == 1
        assert summary.stock_health_percent == 67

    def test_categories_sorted_by_value(self, sample_items):
        categories = summarize(sample_items).categories

        assert [c.name for c in categories] == ["Sembako", "Kebersihan"]
        assert categories[0].count == 2
        assert categories[0].value == 3_120_000

    def test_empty(self):
        summary = summarize([])
        assert summary.total_items == 0
        assert summary.categories == []
        assert summary.stock_health_percent == 100

    def test_health_percent_rounds_half_up(self):
        assert stock_health_percent(8, 1) == 88
        assert stock_health_percent(4, 4) == 0
        assert stock_health_percent(0, 0) == 100


class TestFilterItems:
    def test_search_by_name(self, sample_items):
        assert [i.sku for i in filter_items(sample_items, query="gula")] == ["GUL-002"]

    def test_search_by_sku(self, sample_items):
        assert [i.sku for i in filter_items(sample_items, query="sbn")] == ["SBN-003"]

    def test_low_stock_filter(self, sample_items):
        low = filter_items(sample_items, filter_by=FILTER_LOW_STOCK)
        assert [i.sku for i in low] == ["GUL-002", "SBN-003"]

    def test_category_filter_combined_with_query(self, sample_items):
        assert filter_items(sample_items, query="beras", filter_by="Kebersihan") == []
        assert len(filter_items(sample_items, filter_by="Sembako")) == 2


class TestExportCsv:
    def test_one_line_per_item_plus_header(self, sample_items):
        lines = export_csv(sample_items).split("\n")

        assert len(lines) == len(sample_items) + 1
        assert lines[0] == ",".join(EXPORT_HEADERS)
        assert lines[1] == "Beras Premium 5kg,BRS-001,Sembako,40,75000,3000000,PT Padi Jaya"

    def test_fields_with_commas_are_quoted(self):
        item = InventoryItem(
            id="1", sku="X-1", name="Gula, Pasir", category="Sembako",
            quantity=2, price=1.5, supplier="PT A",
        )
        lines = export_csv([item]).split("\n")
        assert lines[1] == '"Gula, Pasir",X-1,Sembako,2,1.5,3,PT A'

    def test_empty_inventory_is_header_only(self):
        assert export_csv([]) == ",".join(EXPORT_HEADERS)

    def test_filename_is_dated(self):
        assert export_filename(date(2024, 3, 5)) == "Inventory_Report_2024-03-05.csv"


class TestRestockMailto:
    def test_link_addresses_supplier(self, sample_items):
        link = restock_mailto(sample_items[1], UserRole.MANAGER)

        assert link.startswith("mailto:sales@manis.co.id?subject=")
        assert " " not in link
        decoded = unquote(link)
        assert "Restock request: Gula Pasir 1kg (GUL-002)" in decoded
        assert "Hello PT Manis" in decoded
        assert "MANAGER" in decoded
