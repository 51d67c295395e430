"""Pricing Engine

Pure computation turning line items into financial totals. No I/O.

Rules:
- line subtotal = quantity * rate (exact to the cent)
- line tax = line subtotal * tax_percentage / 100, quantized once per line
- line total = line subtotal + line tax
- header subtotal / tax are the sums of the line values as stored on the
  line rows, so the stored lines always add up to their header
- header total = subtotal + tax
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Iterable, Optional

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0.00")

MAX_RATE = Decimal("9999999999.99")
MAX_TAX_PERCENTAGE = Decimal("999.99")


class ReferenceKind(str, Enum):
    """What catalog entry, if any, a line was drawn from"""
    MENU_ITEM = "menu_item"
    SERVICE = "service"
    NONE = "none"


class InvalidLineItem(ValueError):
    """A caller supplied line field could not be parsed"""

    def __init__(self, index: int, field: str, message: str):
        self.index = index
        self.field = field
        super().__init__(f"Line {index + 1}: {field} {message}")


def to_currency(value: Decimal) -> Decimal:
    """Quantize to two fractional digits (half up)"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class FinancialTotals:
    """Derived subtotal / tax / total of an item set"""

    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal

    @classmethod
    def zero(cls) -> "FinancialTotals":
        return cls(subtotal=ZERO, tax_amount=ZERO, total_amount=ZERO)


@dataclass(frozen=True)
class LineItem:
    """One priced entry, validated and ready for computation"""

    name: str
    quantity: int
    rate: Decimal
    tax_percentage: Decimal
    reference_kind: ReferenceKind = ReferenceKind.NONE
    reference_id: Optional[int] = None
    booking_date: Optional[date] = None

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.rate

    @property
    def tax_amount(self) -> Decimal:
        return self.subtotal * self.tax_percentage / HUNDRED

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax_amount

    @property
    def rounded_tax_amount(self) -> Decimal:
        """Line tax as stored on a line row"""
        return to_currency(self.tax_amount)

    @property
    def rounded_total(self) -> Decimal:
        """Line total as stored on a line row (subtotal is already exact to the cent)"""
        return to_currency(self.subtotal) + self.rounded_tax_amount


def parse_quantity(index: int, value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise InvalidLineItem(index, "quantity", "is required and must be a positive integer")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidLineItem(index, "quantity", f"'{value}' is not a number")
    if not parsed.is_finite() or parsed != parsed.to_integral_value():
        raise InvalidLineItem(index, "quantity", f"'{value}' is not an integer")
    if parsed <= 0:
        raise InvalidLineItem(index, "quantity", "must be greater than 0")
    return int(parsed)


def parse_amount(index: int, field: str, value: Any, maximum: Decimal) -> Decimal:
    """Parse a non-negative amount with at most two fractional digits"""
    if isinstance(value, bool) or value is None:
        raise InvalidLineItem(index, field, "is required")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidLineItem(index, field, f"'{value}' is not a decimal number")
    if not parsed.is_finite():
        raise InvalidLineItem(index, field, f"'{value}' is not a finite number")
    if parsed < 0:
        raise InvalidLineItem(index, field, "must not be negative")
    if parsed > maximum:
        raise InvalidLineItem(index, field, f"must not exceed {maximum}")
    if parsed != parsed.quantize(CENT, rounding=ROUND_HALF_UP):
        raise InvalidLineItem(index, field, "must have at most two decimal places")
    return parsed


def parse_line_item(
    index: int,
    name: Any,
    quantity: Any,
    rate: Any,
    tax_percentage: Any,
    reference_kind: ReferenceKind = ReferenceKind.NONE,
    reference_id: Optional[int] = None,
    booking_date: Optional[date] = None,
) -> LineItem:
    """
    Build a LineItem from raw caller values

    Raises:
        InvalidLineItem: If any field is missing or unparseable
    """
    clean_name = str(name).strip() if name is not None else ""
    if not clean_name:
        raise InvalidLineItem(index, "name", "is required")

    return LineItem(
        name=clean_name,
        quantity=parse_quantity(index, quantity),
        rate=parse_amount(index, "rate", rate, MAX_RATE),
        tax_percentage=parse_amount(index, "tax_percentage", tax_percentage, MAX_TAX_PERCENTAGE),
        reference_kind=reference_kind,
        reference_id=reference_id,
        booking_date=booking_date,
    )


def compute_totals(lines: Iterable[LineItem]) -> FinancialTotals:
    """
    Compute header totals for a set of line items

    Deterministic and side-effect free; an empty set yields all zeros.
    The header equals the sum of the rounded line rows.
    """
    items = list(lines)
    subtotal = to_currency(sum((line.subtotal for line in items), Decimal("0")))
    tax_amount = sum((line.rounded_tax_amount for line in items), ZERO)
    return FinancialTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=subtotal + tax_amount,
    )
