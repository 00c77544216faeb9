"""A single editable bill: items, form fields and store persistence."""

from __future__ import annotations

import logging
from dataclasses import fields
from datetime import datetime
from typing import Optional

from medbill import config
from medbill.bill import BillDocument, assemble_bill, print_file_base
from medbill.data_store import StoreDetailsStore
from medbill.models import (
    BillItems,
    BillMeta,
    CustomerDetails,
    StoreDetails,
    Totals,
    compute_totals,
)

logger = logging.getLogger(__name__)


def _field_names(record) -> set:
    return {f.name for f in fields(record)}


class BillSession:
    """Owns everything the bill is built from.

    The UI writes edits through the ``set_*`` methods and reads back
    ``totals()`` and ``assemble()``; nothing here knows about widgets.
    """

    def __init__(self, store: Optional[StoreDetails] = None) -> None:
        self.items = BillItems()
        self.store = store or StoreDetails.defaults()
        self.customer = CustomerDetails()
        self.meta = BillMeta()
        self.cash_discount: str = ""

    def set_store_field(self, name: str, value: str) -> str:
        """Store an edited store detail, uppercased as typed; returns the stored text."""
        if name not in config.STORE_FIELDS:
            raise KeyError(f"Unknown store field '{name}'.")
        value = str(value).upper()
        setattr(self.store, name, value)
        return value

    def set_customer_field(self, name: str, value: str) -> None:
        if name not in _field_names(self.customer):
            raise KeyError(f"Unknown customer field '{name}'.")
        setattr(self.customer, name, value)

    def set_meta_field(self, name: str, value: str) -> None:
        if name not in _field_names(self.meta):
            raise KeyError(f"Unknown bill field '{name}'.")
        setattr(self.meta, name, value)

    def set_cash_discount(self, value: str) -> None:
        self.cash_discount = value

    def stamp_now(self, now: Optional[datetime] = None) -> None:
        """Set the bill date and time to the current moment."""
        now = now or datetime.now()
        self.meta.bill_date = now.date().isoformat()
        self.meta.bill_time = now.strftime("%H:%M")

    def totals(self) -> Totals:
        return compute_totals(self.items, self.cash_discount)

    def assemble(self) -> BillDocument:
        return assemble_bill(self.store, self.customer, self.items, self.totals(), self.meta)

    def file_base(self, now: Optional[datetime] = None) -> str:
        return print_file_base(
            self.customer.customer_name, self.meta.bill_time, self.meta.bill_date, now=now
        )

    def load_store_details(self, data_store: StoreDetailsStore) -> None:
        """Replace store details with the saved ones, or save the current ones on first run."""
        saved = data_store.load()
        if saved is None:
            # An unreadable file is left alone; only a missing one is seeded.
            if not data_store.path.exists():
                logger.info("No saved store details; persisting current defaults.")
                self.persist_store_details(data_store)
            return
        for name in config.STORE_FIELDS:
            if name in saved:
                setattr(self.store, name, saved[name])

    def persist_store_details(self, data_store: StoreDetailsStore) -> bool:
        return data_store.save(self.store.to_mapping())
