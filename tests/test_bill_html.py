"""Tests for the HTML rendering of bills."""

from medbill.bill import assemble_bill
from medbill.models import BillMeta, CustomerDetails, LineItem, StoreDetails, compute_totals
from medbill.printing.bill_html import build_preview_html, build_print_html


def _doc(gst_number=""):
    store = StoreDetails(store_name="A & B PHARMA", dl_number="DL-9", gst_number=gst_number)
    items = [LineItem(quantity=3, product_name="TELMA <40>", unit_price=227.14)]
    customer = CustomerDetails(customer_name="Jane Doe", customer_address="Line 1\nLine 2")
    meta = BillMeta(bill_number="7", bill_date="2024-02-18", bill_time="09:15")
    return assemble_bill(store, customer, items, compute_totals(items, 0), meta)


class TestBuildPreviewHtml:
    """Tests for build_preview_html."""

    def test_contains_bill_content(self):
        html = build_preview_html(_doc())
        assert "D.L. NO. DL-9" in html
        assert "18/02/2024" in html
        assert "681.42" in html
        assert "₹681.00" in html
        assert "RS. SIX HUNDRED EIGHTY ONE ONLY" in html
        assert "Line 1<br>Line 2" in html

    def test_text_is_escaped(self):
        html = build_preview_html(_doc())
        assert "A &amp; B PHARMA" in html
        assert "TELMA &lt;40&gt;" in html

    def test_tax_line_is_optional(self):
        assert "GST NO" not in build_preview_html(_doc())
        assert "GST NO: 23AAA" in build_preview_html(_doc("23AAA"))


class TestBuildPrintHtml:
    """Tests for build_print_html."""

    def test_is_self_contained(self):
        html = build_print_html(_doc(), "Jane_Doe_0915_2024-02-18")
        assert "<title>Jane_Doe_0915_2024-02-18</title>" in html
        assert "<style>" in html
        assert ".items-table" in html
        assert build_preview_html(_doc()) in html
