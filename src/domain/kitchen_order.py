"""Kitchen Order Domain Entity

Header row of an order placed with the kitchen, later billed through exactly
one kitchen invoice.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.base import BaseModel, BigIntId, MONEY_PRECISION, utc_now
from src.domain.pricing import FinancialTotals


class OrderType(str, Enum):
    ROOM = "room"
    WALK_IN = "walk_in"


class OrderStatus(str, Enum):
    """Order status types (no enforced transitions)"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


OPEN_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.PROCESSING)


class KitchenOrder(BaseModel, table=True):
    """
    Kitchen Order - order header

    Domain Rules:
    - Created with status=pending; status only changes through an explicit update
    - invoice_id is NULL until the order is converted, then set exactly once
    - invoice_id is unique: an invoice is the target of at most one order
    - Totals equal the recomputation over the order's own lines
    """

    __tablename__ = "kitchen_orders"
    __table_args__ = (
        Index('ix_kitchen_orders_order_date', 'order_date'),
        Index('ix_kitchen_orders_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    order_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique order number (e.g., KO202403050042)"
    )

    order_date: datetime = Field(default_factory=utc_now)

    guest_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("guests.id", ondelete="SET NULL"), nullable=True),
    )

    room_number: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))

    guest_name: str = Field(sa_column=Column(String(100), nullable=False))

    order_type: OrderType = Field(description="room or walk_in")

    status: OrderStatus = Field(default=OrderStatus.PENDING)

    subtotal: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    tax_amount: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    total_amount: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            BigIntId,
            ForeignKey("invoices.id", ondelete="SET NULL"),
            nullable=True,
            unique=True,
        ),
        description="Invoice generated from this order (set once)"
    )

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

    @property
    def is_invoiced(self) -> bool:
        return self.invoice_id is not None
