"""Resort Settings Domain Entity

Single-row record with the resort identity and tax registration numbers
printed on invoices and reports.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String, Text
from src.domain.base import BaseModel, BigIntId, PERCENT_PRECISION, utc_now
from src.domain.invoice import InvoiceType


class ResortSettings(BaseModel, table=True):
    """
    Resort Settings - identity block for documents

    Domain Rules:
    - Resort invoices carry resort_gstin, kitchen invoices carry kitchen_gstin
    - tax_rate is the default GST percentage suggested for new catalog entries
    """

    __tablename__ = "settings"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    resort_name: str = Field(sa_column=Column(String(100), nullable=False))

    resort_gstin: str = Field(sa_column=Column(String(20), nullable=False))

    kitchen_gstin: str = Field(sa_column=Column(String(20), nullable=False))

    resort_address: str = Field(sa_column=Column(Text, nullable=False))

    resort_contact: str = Field(sa_column=Column(String(100), nullable=False))

    resort_email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    tax_rate: Decimal = Field(
        default=Decimal("18.00"),
        sa_column=Column(Numeric(*PERCENT_PRECISION), nullable=False, default=Decimal("18.00")),
    )

    logo_path: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)

    def gstin_for(self, invoice_type: InvoiceType) -> str:
        if invoice_type == InvoiceType.RESORT:
            return self.resort_gstin
        return self.kitchen_gstin
