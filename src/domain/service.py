"""Service Domain Entity

Resort services (conference halls, laundry, transfers) billable on resort
invoices.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, Numeric, String, Text
from src.domain.base import BaseModel, BigIntId, MONEY_PRECISION, PERCENT_PRECISION, utc_now


class Service(BaseModel, table=True):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint('price >= 0', name='service_price_non_negative'),
        CheckConstraint('tax_percentage >= 0', name='service_tax_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    name: str = Field(sa_column=Column(String(100), nullable=False))

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    price: Decimal = Field(sa_column=Column(Numeric(*MONEY_PRECISION), nullable=False))

    tax_percentage: Decimal = Field(
        default=Decimal("18.00"),
        sa_column=Column(Numeric(*PERCENT_PRECISION), nullable=False, default=Decimal("18.00")),
    )

    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)
