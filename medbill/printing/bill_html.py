"""HTML rendering of a bill document for the preview pane and for printing."""

from __future__ import annotations

from html import escape
from typing import List

from medbill import config
from medbill.bill import BillDocument

PRINT_STYLESHEET = """
    body { font-family: 'Courier New', monospace; margin: 0; padding: 20px; font-size: 12px; }
    .items-table { width: 100%; border-collapse: collapse; margin: 15px 0; }
    .items-table th, .items-table td { border: 1px solid #000; padding: 6px 4px; font-size: 11px; }
    .items-table th { background: #f0f0f0; text-align: center; font-weight: bold; }
    .number-col { text-align: right; }
    .center-col { text-align: center; }
    .bill-header { text-align: center; margin-bottom: 20px; }
    .store-name { font-size: 18px; font-weight: bold; margin-bottom: 5px; }
    .store-address { font-size: 11px; margin-bottom: 3px; }
    .bill-info { width: 100%; margin: 20px 0; }
    .bill-total { width: 100%; margin-top: 20px; }
    .payable td { font-size: 14px; border-top: 2px solid #000; padding-top: 10px; }
    .amount-words { text-align: center; margin: 20px 0; font-weight: bold; }
    .bill-footer { margin-top: 30px; text-align: center; font-size: 10px; }
    @media print { @page { margin: 0; size: auto; } body { margin: 0; padding: 0; } }
"""

_COLUMNS = ["S.N", "QTY", "PRODUCT", "BATCH NO", "EXP", "MRP", "DISC %", "AMOUNT"]


def _lines(lines: List[str]) -> str:
    return "<br>".join(escape(line) for line in lines)


def _header(doc: BillDocument) -> str:
    tax = f"<div class='store-address'>{escape(doc.tax_line)}</div>" if doc.tax_line else ""
    return f"""
        <div class='bill-header'>
            <div class='store-name'>{escape(doc.store_name)}</div>
            <div class='store-address'>{_lines(doc.address_lines)}</div>
            <div class='store-address'>{escape(doc.subtitle)}</div>
            <div class='store-address'>{escape(doc.license_line)}</div>
            {tax}
        </div>
        <hr />
    """


def _info(doc: BillDocument) -> str:
    return f"""
        <table class='bill-info'>
            <tr>
                <td valign='top'>
                    <b>TO:</b><br>
                    {escape(doc.customer_name)}<br>
                    {_lines(doc.customer_address_lines)}
                    <br><br>
                    <b>PRES. BY:</b> {escape(doc.prescribed_by)}
                </td>
                <td valign='top' align='right'>
                    <b>BILL NO.:</b> {escape(doc.bill_number)}<br>
                    <b>BILL DATE:</b> {escape(doc.bill_date)}<br>
                    <b>BILL TIME:</b> {escape(doc.bill_time)}
                </td>
            </tr>
        </table>
    """


def _items(doc: BillDocument) -> str:
    header = "".join(f"<th>{name}</th>" for name in _COLUMNS)
    rows = [
        f"<tr><td class='center-col'>{row.serial}</td>"
        f"<td class='number-col'>{escape(row.quantity)}</td>"
        f"<td>{escape(row.product)}</td>"
        f"<td class='center-col'>{escape(row.batch_no)}</td>"
        f"<td class='center-col'>{escape(row.expiry)}</td>"
        f"<td class='number-col'>{row.mrp}</td>"
        f"<td class='number-col'>{row.discount}</td>"
        f"<td class='number-col'>{row.amount}</td></tr>"
        for row in doc.rows
    ]
    return f"""
        <table class='items-table' border='1' cellspacing='0' cellpadding='4' width='100%'>
            <thead><tr>{header}</tr></thead>
            <tbody>{''.join(rows)}</tbody>
        </table>
    """


def _totals(doc: BillDocument) -> str:
    totals = doc.totals
    if totals is None:
        return ""
    lines = [
        ("SUBTOTAL:", totals.subtotal),
        ("DISCOUNT:", totals.discount),
        ("AFTER DISCOUNT:", totals.after_discount),
        ("CASH DISC:", totals.cash_discount),
        ("ROUND OFF:", totals.round_off),
    ]
    rows = "".join(
        f"<tr><td><b>{label}</b></td><td align='right'><b>{value}</b></td></tr>"
        for label, value in lines
    )
    return f"""
        <hr />
        <table class='bill-total' width='100%'>
            {rows}
            <tr class='payable'>
                <td><b>PLEASE PAY:</b></td>
                <td align='right'><b>{config.CURRENCY_SYMBOL}{totals.payable}</b></td>
            </tr>
        </table>
        <p class='amount-words' align='center'><b>{escape(totals.amount_in_words)}</b></p>
    """


def _footer(doc: BillDocument) -> str:
    return f"""
        <div class='bill-footer'>
            {_lines(doc.footer_lines)}<br><br>
            <div align='right'>{escape(doc.issued_by)}</div>
        </div>
    """


def build_preview_html(doc: BillDocument) -> str:
    """Return the bill body as an HTML fragment."""
    return "".join([_header(doc), _info(doc), _items(doc), _totals(doc), _footer(doc)])


def build_print_html(doc: BillDocument, title: str) -> str:
    """Return a self-contained HTML document, stylesheet included."""
    return f"""
    <html>
    <head>
        <title>{escape(title)}</title>
        <style>{PRINT_STYLESHEET}</style>
    </head>
    <body>
        <div class='bill-preview'>{build_preview_html(doc)}</div>
    </body>
    </html>
    """
