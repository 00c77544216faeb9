"""Bill data models and the totals engine."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, fields
from typing import Dict, Iterable, List

from medbill import config


NUMERIC_FIELDS = ("quantity", "unit_price", "discount_percent")
TEXT_FIELDS = ("product_name", "batch_no", "expiry")

# Leading number, the way a browser's parseFloat reads "12.5abc" as 12.5.
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(raw) -> float:
    """Coerce a raw field value to a float, falling back to 0."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
        return value if math.isfinite(value) else 0.0
    text = str(raw if raw is not None else "").replace(",", ".", 1)
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0.0
    try:
        value = float(match.group(1))
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


@dataclass
class LineItem:
    quantity: float = 1
    product_name: str = ""
    batch_no: str = ""
    expiry: str = ""
    unit_price: float = 0.0
    discount_percent: float = 0.0

    @property
    def line_amount(self) -> float:
        # The row's own discount only affects the aggregate totals.
        return self.quantity * self.unit_price

    @property
    def discount_amount(self) -> float:
        return self.quantity * self.unit_price * self.discount_percent / 100


@dataclass
class BillItems:
    """Ordered, editable collection of line items."""

    items: List[LineItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index: int) -> LineItem:
        return self.items[index]

    def add_item(self) -> None:
        """Append a row with default values."""
        self.items.append(LineItem())

    def remove_item(self, index: int) -> None:
        """Remove the row at index; out of range indices are ignored."""
        if 0 <= index < len(self.items):
            del self.items[index]

    def update_field(self, index: int, field_name: str, raw_value) -> float:
        """Store a raw edit on one row and return the row's new amount."""
        item = self.items[index]
        if field_name in NUMERIC_FIELDS:
            setattr(item, field_name, parse_amount(raw_value))
        elif field_name in TEXT_FIELDS:
            setattr(item, field_name, raw_value)
        else:
            raise KeyError(f"Unknown line item field '{field_name}'.")
        return item.line_amount

    def display_value(self, index: int, field_name: str) -> str:
        """Text to show in the edit cell after a field has been stored."""
        value = getattr(self.items[index], field_name)
        if field_name in NUMERIC_FIELDS:
            return format_quantity(value)
        return value

    def clear(self) -> None:
        self.items.clear()


@dataclass(frozen=True)
class Totals:
    subtotal: float
    total_discount: float
    after_discount: float
    cash_discount: float
    total_before_round: float
    round_off: float
    total: int


def compute_totals(items: Iterable[LineItem], cash_discount=0) -> Totals:
    """Aggregate line items and the cash discount into the payable total.

    The payable amount is the floor of the running total; the dropped
    fraction is reported as ``round_off`` to three decimals.
    """
    items = list(items)
    cash = parse_amount(cash_discount)
    subtotal = sum((item.line_amount for item in items), 0.0)
    total_discount = sum((item.discount_amount for item in items), 0.0)
    after_discount = subtotal - total_discount
    total_before_round = after_discount - cash
    if not math.isfinite(total_before_round):
        # Finite inputs can still overflow once multiplied.
        total_before_round = 0.0
    total = math.floor(total_before_round)
    round_off = round(total_before_round - total, 3)
    return Totals(
        subtotal=subtotal,
        total_discount=total_discount,
        after_discount=after_discount,
        cash_discount=cash,
        total_before_round=total_before_round,
        round_off=round_off,
        total=total,
    )


@dataclass
class StoreDetails:
    store_name: str = ""
    store_address: str = ""
    store_subtitle: str = ""
    jurisdiction: str = ""
    dl_number: str = ""
    gst_number: str = ""

    @classmethod
    def defaults(cls) -> "StoreDetails":
        return cls.from_mapping(config.DEFAULT_STORE_DETAILS)

    @classmethod
    def from_mapping(cls, data: Dict[str, str]) -> "StoreDetails":
        """Build from a mapping, ignoring unknown keys and keeping values verbatim."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_mapping(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in config.STORE_FIELDS}


@dataclass
class CustomerDetails:
    customer_name: str = ""
    customer_address: str = ""
    prescribed_by: str = ""


@dataclass
class BillMeta:
    bill_number: str = ""
    bill_date: str = ""
    bill_time: str = ""


def format_currency(amount: float) -> str:
    """Return amount formatted to two decimals."""
    return f"{amount:.2f}"


def format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return str(quantity)
