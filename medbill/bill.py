"""Assemble a markup-free bill document from the session data."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional

from medbill import config
from medbill.models import (
    BillMeta,
    CustomerDetails,
    LineItem,
    StoreDetails,
    Totals,
    format_currency,
    format_quantity,
)
from medbill.words import number_to_words


@dataclass(frozen=True)
class BillRow:
    serial: int
    quantity: str
    product: str
    batch_no: str
    expiry: str
    mrp: str
    discount: str
    amount: str


@dataclass(frozen=True)
class TotalsBlock:
    subtotal: str
    discount: str
    after_discount: str
    cash_discount: str
    round_off: str
    payable: str
    amount_in_words: str


@dataclass(frozen=True)
class BillDocument:
    store_name: str
    address_lines: List[str]
    subtitle: str
    license_line: str
    tax_line: Optional[str]
    customer_name: str
    customer_address_lines: List[str]
    prescribed_by: str
    bill_number: str
    bill_date: str
    bill_time: str
    rows: List[BillRow] = field(default_factory=list)
    totals: Optional[TotalsBlock] = None
    footer_lines: List[str] = field(default_factory=list)
    issued_by: str = ""


def format_bill_date(value: str) -> str:
    """Convert an ISO date to DD/MM/YYYY; unparseable text is returned as is."""
    value = (value or "").strip()
    if not value:
        return ""
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return value
    return parsed.strftime("%d/%m/%Y")


def amount_in_words(total: int) -> str:
    words = number_to_words(round(total)).upper() if total >= 0 else ""
    return f"RS. {words} ONLY"


def _build_rows(items: Iterable[LineItem]) -> List[BillRow]:
    return [
        BillRow(
            serial=index,
            quantity=format_quantity(item.quantity),
            product=item.product_name,
            batch_no=item.batch_no,
            expiry=item.expiry,
            mrp=format_currency(item.unit_price),
            discount=f"{item.discount_percent:.1f}%",
            amount=format_currency(item.line_amount),
        )
        for index, item in enumerate(items, start=1)
    ]


def _build_totals(totals: Totals) -> TotalsBlock:
    return TotalsBlock(
        subtotal=format_currency(totals.subtotal),
        discount=format_currency(totals.total_discount),
        after_discount=format_currency(totals.after_discount),
        cash_discount=format_currency(totals.cash_discount),
        round_off=f"{totals.round_off:.3f}",
        payable=format_currency(totals.total),
        amount_in_words=amount_in_words(totals.total),
    )


def assemble_bill(
    store: StoreDetails,
    customer: CustomerDetails,
    items: Iterable[LineItem],
    totals: Totals,
    meta: BillMeta,
) -> BillDocument:
    """Merge store, customer, items and totals into one bill document."""
    jurisdiction = store.jurisdiction or config.DEFAULT_JURISDICTION
    return BillDocument(
        store_name=store.store_name,
        address_lines=store.store_address.split("\n"),
        subtitle=store.store_subtitle,
        license_line=f"D.L. NO. {store.dl_number}",
        tax_line=f"GST NO: {store.gst_number}" if store.gst_number else None,
        customer_name=customer.customer_name,
        customer_address_lines=customer.customer_address.split("\n"),
        prescribed_by=customer.prescribed_by,
        bill_number=meta.bill_number,
        bill_date=format_bill_date(meta.bill_date),
        bill_time=meta.bill_time,
        rows=_build_rows(items),
        totals=_build_totals(totals),
        footer_lines=[
            f"All Medicines subject to {jurisdiction} Jurisdiction only",
            "Price Inclusive of all taxes",
        ],
        issued_by=f"ISSUED BY : {store.store_name}",
    )


def _sanitize(part: str) -> str:
    part = re.sub(r"\s+", "_", part)
    part = re.sub(r"[^A-Za-z0-9._-]", "", part)
    part = re.sub(r"_+", "_", part)
    return part[: config.FILENAME_PART_MAX]


def print_file_base(
    customer_name: str,
    bill_time: str,
    bill_date: str,
    now: Optional[datetime] = None,
) -> str:
    """Build the print title, e.g. ``Jane_Doe_0915_2024-02-18``."""
    now = now or datetime.now()
    name_part = _sanitize((customer_name or "").strip() or config.DEFAULT_FILE_NAME)
    name_part = name_part or config.DEFAULT_FILE_NAME
    date_part = _sanitize((bill_date or "").strip() or now.date().isoformat())
    time_raw = (bill_time or "").strip() or now.strftime("%H:%M")
    time_part = _sanitize(time_raw.replace(":", "", 1))
    return f"{name_part}_{time_part}_{date_part}"
