"""Invoice Line Domain Entity

Tracks individual line items within an invoice.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Date
from src.domain.base import BaseModel, BigIntId, MONEY_PRECISION, PERCENT_PRECISION, utc_now
from src.domain.pricing import LineItem, ReferenceKind


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - Individual line item within an invoice

    Domain Rules:
    - Each line belongs to exactly one invoice and is deleted with it
    - A line references a menu item OR a service OR nothing
    - item_name / rate are a snapshot; the catalog reference may become NULL
      when the catalog entry is removed
    - line_total = quantity * rate + tax_amount
    """

    __tablename__ = "invoice_items"
    __table_args__ = (
        Index('ix_invoice_items_invoice_id', 'invoice_id'),
        CheckConstraint('quantity > 0', name='invoice_line_quantity_positive'),
        CheckConstraint(
            'menu_item_id IS NULL OR service_id IS NULL',
            name='invoice_line_single_reference',
        ),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique invoice line identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    menu_item_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True),
    )

    service_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("services.id", ondelete="SET NULL"), nullable=True),
    )

    item_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Item name at billing time"
    )

    quantity: int = Field(sa_column=Column(Integer, nullable=False))

    rate: Decimal = Field(
        sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False),
        description="Price per unit at billing time"
    )

    tax_percentage: Decimal = Field(sa_column=Column(Numeric(*PERCENT_PRECISION), nullable=False))

    tax_amount: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    line_total: Decimal = Field(
        sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False),
        description="quantity * rate + tax_amount"
    )

    booking_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    created_at: datetime = Field(default_factory=utc_now)

    @property
    def reference_kind(self) -> ReferenceKind:
        if self.menu_item_id is not None:
            return ReferenceKind.MENU_ITEM
        if self.service_id is not None:
            return ReferenceKind.SERVICE
        return ReferenceKind.NONE

    def to_line_item(self) -> LineItem:
        return LineItem(
            name=self.item_name,
            quantity=self.quantity,
            rate=self.rate,
            tax_percentage=self.tax_percentage,
            reference_kind=self.reference_kind,
            reference_id=self.menu_item_id or self.service_id,
            booking_date=self.booking_date,
        )
