"""Kitchen Order Line Domain Entity"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, BigIntId, MONEY_PRECISION, PERCENT_PRECISION, utc_now
from src.domain.pricing import LineItem, ReferenceKind


class KitchenOrderLine(BaseModel, table=True):
    """
    Kitchen Order Line - one dish on a kitchen order

    Domain Rules:
    - Deleted with its order
    - Deleted when the referenced menu item is deleted (unlike invoice lines)
    - line_total = quantity * rate + tax_amount
    """

    __tablename__ = "kitchen_order_items"
    __table_args__ = (
        Index('ix_kitchen_order_items_order_id', 'order_id'),
        Index('ix_kitchen_order_items_menu_item_id', 'menu_item_id'),
        CheckConstraint('quantity > 0', name='kitchen_order_line_quantity_positive'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    order_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("kitchen_orders.id", ondelete="CASCADE"), nullable=False),
    )

    menu_item_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=True),
    )

    item_name: str = Field(sa_column=Column(String(100), nullable=False))

    quantity: int = Field(sa_column=Column(Integer, nullable=False))

    rate: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    tax_percentage: Decimal = Field(sa_column=Column(Numeric(*PERCENT_PRECISION), nullable=False))

    tax_amount: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    line_total: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    created_at: datetime = Field(default_factory=utc_now)

    def to_line_item(self) -> LineItem:
        return LineItem(
            name=self.item_name,
            quantity=self.quantity,
            rate=self.rate,
            tax_percentage=self.tax_percentage,
            reference_kind=ReferenceKind.MENU_ITEM if self.menu_item_id else ReferenceKind.NONE,
            reference_id=self.menu_item_id,
        )
