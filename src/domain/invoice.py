"""Invoice Domain Entity

Header row of a resort or kitchen invoice. Line rows live in invoice_items.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text, Date
from src.domain.base import BaseModel, BigIntId, MONEY_PRECISION, utc_now
from src.domain.identifiers import KITCHEN_INVOICE_PREFIX, RESORT_INVOICE_PREFIX
from src.domain.pricing import FinancialTotals


class InvoiceType(str, Enum):
    """Invoice types"""
    RESORT = "resort"
    KITCHEN = "kitchen"

    @property
    def number_prefix(self) -> str:
        if self is InvoiceType.RESORT:
            return RESORT_INVOICE_PREFIX
        return KITCHEN_INVOICE_PREFIX


class PaymentStatus(str, Enum):
    """Payment status types (no enforced transitions)"""
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """Payment method types"""
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    OTHER = "other"


class Invoice(BaseModel, table=True):
    """
    Invoice - resort or kitchen bill

    Domain Rules:
    - invoice_number is generated at creation and never reassigned
    - subtotal / tax_amount / total_amount equal the recomputation over the
      invoice's own lines
    - total_amount = subtotal + tax_amount
    - payment_status / payment_method may be overwritten with any declared value
    - Deleting the invoice deletes its lines
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_invoice_date', 'invoice_date'),
        Index('ix_invoices_type_invoice_date', 'type', 'invoice_date'),
        CheckConstraint('subtotal >= 0', name='invoice_subtotal_non_negative'),
        CheckConstraint('tax_amount >= 0', name='invoice_tax_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., RS202403050042)"
    )

    invoice_date: datetime = Field(
        default_factory=utc_now,
        description="Invoice timestamp used for all date-range reporting"
    )

    guest_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("guests.id", ondelete="SET NULL"), nullable=True),
    )

    room_number: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))

    guest_name: str = Field(sa_column=Column(String(100), nullable=False))

    guest_mobile: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))

    type: InvoiceType = Field(description="Invoice type (resort, kitchen)")

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False),
        description="Sum of quantity * rate over all lines"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False),
        description="Sum of line GST"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False),
        description="subtotal + tax_amount"
    )

    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)

    payment_method: PaymentMethod = Field(default=PaymentMethod.CASH)

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    booking_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    created_by: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def totals(self) -> FinancialTotals:
        return FinancialTotals(
            subtotal=self.subtotal,
            tax_amount=self.tax_amount,
            total_amount=self.total_amount,
        )
