"""PyQt5 UI for the MedBill invoice generator."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QShortcut,
    QTableWidget,
    QTableWidgetItem,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from medbill import config
from medbill.data_store import StoreDetailsStore
from medbill.models import format_currency, format_quantity
from medbill.printing.bill_html import build_preview_html
from medbill.printing.bill_printer import BillPrinter
from medbill.scheduler import CoalescingScheduler
from medbill.session import BillSession

logger = logging.getLogger(__name__)

STORE_LABELS = {
    "store_name": "Store Name",
    "store_address": "Address",
    "store_subtitle": "Subtitle",
    "jurisdiction": "Jurisdiction",
    "dl_number": "D.L. No.",
    "gst_number": "GST No.",
}

# Table columns mapped to line item fields; the last column is the derived amount.
ITEM_COLUMNS = [
    ("Qty", "quantity"),
    ("Product Name", "product_name"),
    ("Batch No", "batch_no"),
    ("Expiry", "expiry"),
    ("MRP", "unit_price"),
    ("Disc %", "discount_percent"),
]
AMOUNT_COLUMN = len(ITEM_COLUMNS)


class QtTimer:
    """Single-shot QTimer exposing the start/stop interface the scheduler expects."""

    def __init__(self, parent) -> None:
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)
        self._fn: Optional[Callable[[], None]] = None

    def start(self, ms: int, fn: Callable[[], None]) -> None:
        self._fn = fn
        self._timer.start(ms)

    def stop(self) -> None:
        self._timer.stop()

    def _on_timeout(self) -> None:
        if self._fn:
            self._fn()


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, data_store: Optional[StoreDetailsStore] = None) -> None:
        super().__init__()
        self.setWindowTitle("MedBill - Bill Generator")
        self.resize(1200, 750)

        self.session = BillSession()
        self.data_store = data_store or StoreDetailsStore()
        self.printer = BillPrinter()
        self.store_inputs: Dict[str, QWidget] = {}

        self._preview_scheduler = CoalescingScheduler(self._update_preview, QtTimer(self))
        self._persist_scheduler = CoalescingScheduler(self._persist_store_details, QtTimer(self))

        self._build_ui()
        self._load_session()

    # ------------------------------------------------------------------ layout

    def _build_ui(self) -> None:
        root = QWidget()
        main_layout = QHBoxLayout()
        main_layout.addLayout(self._build_form_panel(), 3)
        main_layout.addLayout(self._build_preview_panel(), 2)
        root.setLayout(main_layout)
        self.setCentralWidget(root)

        QShortcut(QKeySequence("Ctrl+S"), self, activated=self._save_bill)

    def _build_form_panel(self) -> QVBoxLayout:
        layout = QVBoxLayout()

        top = QHBoxLayout()
        top.addWidget(self._build_store_group())
        top.addWidget(self._build_customer_group())
        layout.addLayout(top)

        layout.addWidget(self._build_items_group(), 1)
        layout.addWidget(self._build_totals_group())

        buttons = QHBoxLayout()
        for text, slot in (
            ("Generate Bill", self._generate_bill),
            ("Save", self._save_bill),
            ("PRINT", self._on_print),
            ("Export PDF", self._on_export_pdf),
        ):
            button = QPushButton(text)
            button.clicked.connect(slot)
            buttons.addWidget(button)
        layout.addLayout(buttons)
        return layout

    def _build_store_group(self) -> QGroupBox:
        group = QGroupBox("Store Details")
        form = QFormLayout()
        for name in config.STORE_FIELDS:
            if name == "store_address":
                widget = QPlainTextEdit()
                widget.setFixedHeight(60)
                widget.textChanged.connect(lambda n=name: self._on_store_text_changed(n))
            else:
                widget = QLineEdit()
                widget.textEdited.connect(lambda text, n=name: self._on_store_line_edited(n, text))
            self.store_inputs[name] = widget
            form.addRow(STORE_LABELS[name], widget)
        group.setLayout(form)
        return group

    def _build_customer_group(self) -> QGroupBox:
        group = QGroupBox("Customer & Bill")
        form = QFormLayout()

        self.customer_name = QLineEdit()
        self.customer_name.textEdited.connect(
            lambda text: self._on_field_edited(self.session.set_customer_field, "customer_name", text)
        )
        self.customer_address = QPlainTextEdit()
        self.customer_address.setFixedHeight(60)
        self.customer_address.textChanged.connect(
            lambda: self._on_field_edited(
                self.session.set_customer_field,
                "customer_address",
                self.customer_address.toPlainText(),
            )
        )
        self.prescribed_by = QLineEdit()
        self.prescribed_by.textEdited.connect(
            lambda text: self._on_field_edited(self.session.set_customer_field, "prescribed_by", text)
        )
        self.bill_number = QLineEdit()
        self.bill_number.textEdited.connect(
            lambda text: self._on_field_edited(self.session.set_meta_field, "bill_number", text)
        )
        self.bill_date = QLineEdit()
        self.bill_date.setPlaceholderText("YYYY-MM-DD")
        self.bill_date.textEdited.connect(
            lambda text: self._on_field_edited(self.session.set_meta_field, "bill_date", text)
        )
        self.bill_time = QLineEdit()
        self.bill_time.setPlaceholderText("HH:MM")
        self.bill_time.textEdited.connect(
            lambda text: self._on_field_edited(self.session.set_meta_field, "bill_time", text)
        )

        form.addRow("Customer Name", self.customer_name)
        form.addRow("Address", self.customer_address)
        form.addRow("Prescribed By", self.prescribed_by)
        form.addRow("Bill No.", self.bill_number)
        form.addRow("Bill Date", self.bill_date)
        form.addRow("Bill Time", self.bill_time)
        group.setLayout(form)
        return group

    def _build_items_group(self) -> QGroupBox:
        group = QGroupBox("Medical Items")
        layout = QVBoxLayout()

        self.table = QTableWidget(0, AMOUNT_COLUMN + 1)
        self.table.setHorizontalHeaderLabels([label for label, _ in ITEM_COLUMNS] + ["Amount"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.cellChanged.connect(self._on_cell_changed)
        layout.addWidget(self.table, 1)

        buttons = QHBoxLayout()
        add_button = QPushButton("Add Item")
        add_button.clicked.connect(self._add_item)
        remove_button = QPushButton("Remove Item")
        remove_button.clicked.connect(self._remove_selected_item)
        buttons.addWidget(add_button)
        buttons.addWidget(remove_button)
        buttons.addStretch()
        layout.addLayout(buttons)

        group.setLayout(layout)
        return group

    def _build_totals_group(self) -> QGroupBox:
        group = QGroupBox("Totals")
        form = QFormLayout()
        self.cash_discount = QLineEdit()
        self.cash_discount.setPlaceholderText("0")
        self.cash_discount.textEdited.connect(self._on_cash_discount_edited)
        self.round_off = QLineEdit()
        self.round_off.setReadOnly(True)
        form.addRow("Cash Discount", self.cash_discount)
        form.addRow("Round Off", self.round_off)
        group.setLayout(form)
        return group

    def _build_preview_panel(self) -> QVBoxLayout:
        layout = QVBoxLayout()
        self.preview = QTextBrowser()
        layout.addWidget(self.preview, 1)
        return layout

    # ----------------------------------------------------------------- session

    def _load_session(self) -> None:
        self.session.stamp_now()
        self.session.load_store_details(self.data_store)
        self.session.items.add_item()

        # Loaded values are shown verbatim; only user edits are uppercased.
        for name, widget in self.store_inputs.items():
            value = getattr(self.session.store, name)
            widget.blockSignals(True)
            if isinstance(widget, QPlainTextEdit):
                widget.setPlainText(value)
            else:
                widget.setText(value)
            widget.blockSignals(False)

        self.bill_date.setText(self.session.meta.bill_date)
        self.bill_time.setText(self.session.meta.bill_time)
        self._refresh_table()
        self._update_preview()

    def _on_store_line_edited(self, name: str, text: str) -> None:
        widget = self.store_inputs[name]
        stored = self.session.set_store_field(name, text)
        if stored != text:
            pos = widget.cursorPosition()
            widget.setText(stored)
            widget.setCursorPosition(pos)
        self._persist_scheduler.request()
        self._preview_scheduler.request()

    def _on_store_text_changed(self, name: str) -> None:
        widget = self.store_inputs[name]
        text = widget.toPlainText()
        stored = self.session.set_store_field(name, text)
        if stored != text:
            cursor = widget.textCursor()
            pos = cursor.position()
            widget.blockSignals(True)
            widget.setPlainText(stored)
            cursor = widget.textCursor()
            cursor.setPosition(min(pos, len(stored)))
            widget.setTextCursor(cursor)
            widget.blockSignals(False)
        self._persist_scheduler.request()
        self._preview_scheduler.request()

    def _on_field_edited(self, setter, name: str, text: str) -> None:
        setter(name, text)
        self._preview_scheduler.request()

    def _on_cash_discount_edited(self, text: str) -> None:
        self.session.set_cash_discount(text)
        self._preview_scheduler.request()

    # ------------------------------------------------------------------- items

    def _add_item(self) -> None:
        self.session.items.add_item()
        self._refresh_table()
        self._update_preview()

    def _remove_selected_item(self) -> None:
        row = self.table.currentRow()
        if row < 0:
            QMessageBox.information(self, "Select item", "Select a row to remove.")
            return
        self.session.items.remove_item(row)
        self._refresh_table()
        self._update_preview()

    def _refresh_table(self) -> None:
        self.table.blockSignals(True)
        self.table.setRowCount(len(self.session.items))
        for row, item in enumerate(self.session.items):
            values = [
                format_quantity(item.quantity),
                item.product_name,
                item.batch_no,
                item.expiry,
                format_quantity(item.unit_price),
                format_quantity(item.discount_percent),
            ]
            for col, val in enumerate(values):
                self.table.setItem(row, col, QTableWidgetItem(val))
            self._set_amount_cell(row, item.line_amount)
        self.table.blockSignals(False)

    def _set_amount_cell(self, row: int, amount: float) -> None:
        cell = QTableWidgetItem(f"{config.CURRENCY_SYMBOL}{format_currency(amount)}")
        cell.setFlags(cell.flags() & ~Qt.ItemIsEditable)
        cell.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
        self.table.setItem(row, AMOUNT_COLUMN, cell)

    def _on_cell_changed(self, row: int, column: int) -> None:
        if column >= AMOUNT_COLUMN or row >= len(self.session.items):
            return
        field_name = ITEM_COLUMNS[column][1]
        amount = self.session.items.update_field(row, field_name, self.table.item(row, column).text())
        self.table.blockSignals(True)
        self.table.item(row, column).setText(self.session.items.display_value(row, field_name))
        self._set_amount_cell(row, amount)
        self.table.blockSignals(False)
        self._preview_scheduler.request()

    # ----------------------------------------------------------------- actions

    def _update_preview(self) -> None:
        totals = self.session.totals()
        self.round_off.setText(f"{totals.round_off:.3f}")
        self.preview.setHtml(build_preview_html(self.session.assemble()))

    def _persist_store_details(self) -> None:
        self.session.persist_store_details(self.data_store)

    def _save_bill(self) -> None:
        self._persist_scheduler.cancel()
        self._persist_store_details()
        self.statusBar().showMessage("Saved", config.SAVE_INDICATOR_MS)

    def _generate_bill(self) -> None:
        self._preview_scheduler.cancel()
        self._update_preview()
        self._save_bill()

    def _on_print(self) -> None:
        self._preview_scheduler.flush()
        if not self.session.items:
            QMessageBox.information(self, "No items", "Add at least one item to print.")
            return
        title = self.session.file_base()
        if not self.printer.print_bill(self.session.assemble(), title):
            QMessageBox.critical(self, "Printer Error", "Printer not available.")

    def _on_export_pdf(self) -> None:
        self._preview_scheduler.flush()
        try:
            target = self.printer.export_pdf(self.session.assemble(), self.session.file_base())
        except OSError as exc:
            logger.warning("PDF export failed: %s", exc)
            QMessageBox.critical(self, "Export Error", f"Failed to export PDF: {exc}")
            return
        self.statusBar().showMessage(f"Exported {target}", config.SAVE_INDICATOR_MS)

    def closeEvent(self, event) -> None:  # noqa: N802
        self._persist_scheduler.flush()
        super().closeEvent(event)


if __name__ == "__main__":
    app = QApplication([])
    window = MainWindow()
    window.show()
    app.exec_()
