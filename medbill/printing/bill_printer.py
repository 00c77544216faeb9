"""Bill printing and PDF export via QTextDocument."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt5.QtGui import QTextDocument
from PyQt5.QtPrintSupport import QPrinter

from medbill import config
from medbill.bill import BillDocument
from medbill.printing.bill_html import build_print_html

logger = logging.getLogger(__name__)


class BillPrinter:
    """Render a bill document and send it to a printer or a PDF file."""

    def __init__(self, printer_name: str | None = None, export_dir: Path | str | None = None) -> None:
        self.printer_name = printer_name if printer_name is not None else config.PRINTER_NAME
        self.export_dir = Path(export_dir) if export_dir else config.EXPORT_DIR

    def _document(self, doc: BillDocument, title: str) -> QTextDocument:
        text_doc = QTextDocument()
        text_doc.setMetaInformation(QTextDocument.DocumentTitle, title)
        text_doc.setHtml(build_print_html(doc, title))
        return text_doc

    def print_bill(self, doc: BillDocument, title: str) -> bool:
        """Send the bill to the printer; returns True on success."""
        printer = QPrinter(QPrinter.HighResolution)
        if self.printer_name:
            printer.setPrinterName(self.printer_name)
        printer.setDocName(title)

        if not printer.isValid():
            logger.warning("Printer %r is not available.", self.printer_name or "<default>")
            return False

        self._document(doc, title).print_(printer)
        return printer.isValid()

    def export_pdf(self, doc: BillDocument, title: str) -> Path:
        """Write the bill to ``<export_dir>/<title>.pdf`` and return the path."""
        self.export_dir.mkdir(parents=True, exist_ok=True)
        target = self.export_dir / f"{title}.pdf"

        printer = QPrinter(QPrinter.HighResolution)
        printer.setOutputFormat(QPrinter.PdfFormat)
        printer.setOutputFileName(str(target))
        printer.setDocName(title)

        self._document(doc, title).print_(printer)
        logger.info("Exported bill to %s", target)
        return target
