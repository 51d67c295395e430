"""Menu Item Domain Entity

Catalog entry a kitchen order line or invoice line may be drawn from.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Numeric, String, Text
from src.domain.base import BaseModel, BigIntId, MONEY_PRECISION, PERCENT_PRECISION, utc_now


class CatalogType(str, Enum):
    """Which side of the business sells the item"""
    KITCHEN = "kitchen"
    RESORT = "resort"


class MenuItem(BaseModel, table=True):
    """
    Menu Item - priced catalog entry

    Domain Rules:
    - price and tax_percentage are defaults copied into lines at order time
    - Lines keep their own name/price snapshot, so later edits never
      change historical documents
    """

    __tablename__ = "menu_items"
    __table_args__ = (
        Index('ix_menu_items_type', 'type'),
        CheckConstraint('price >= 0', name='menu_item_price_non_negative'),
        CheckConstraint('tax_percentage >= 0', name='menu_item_tax_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    name: str = Field(sa_column=Column(String(100), nullable=False))

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    price: Decimal = Field(
        sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False),
        description="Unit price (precision: 12,2)"
    )

    tax_percentage: Decimal = Field(
        default=Decimal("18.00"),
        sa_column=Column(Numeric(*PERCENT_PRECISION), nullable=False, default=Decimal("18.00")),
        description="GST percentage"
    )

    type: CatalogType = Field(description="kitchen or resort")

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)
