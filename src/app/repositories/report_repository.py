"""Report Repository Interface

Database-side aggregation over invoices and kitchen orders. Every bound is an
inclusive timestamp; callers expand calendar dates before querying.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from src.domain.invoice import InvoiceType


@dataclass(frozen=True)
class SalesRow:
    day: date
    type: InvoiceType
    invoice_count: int
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class TypeTotalsRow:
    type: InvoiceType
    invoice_count: int
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class KitchenItemRow:
    menu_item_id: Optional[int]
    item_name: str
    total_quantity: int
    total_amount: Decimal


@dataclass(frozen=True)
class InvoiceTotalsRow:
    invoice_count: int
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    payment_status_counts: Dict[str, int]


class ReportRepository(ABC):
    """
    Repository interface for reporting queries

    Sums are returned as Decimal; groups without rows are simply absent and
    the caller fills zeros.
    """

    @abstractmethod
    async def sales_by_day(
        self,
        start_at: datetime,
        end_at: datetime,
        invoice_type: Optional[InvoiceType] = None,
    ) -> List[SalesRow]:
        """
        Invoice totals grouped by calendar day and type

        Returns:
            Rows ordered by day, then type
        """
        pass

    @abstractmethod
    async def totals_by_type(self, start_at: datetime, end_at: datetime) -> List[TypeTotalsRow]:
        pass

    @abstractmethod
    async def kitchen_items(self, start_at: datetime, end_at: datetime) -> List[KitchenItemRow]:
        """
        Kitchen order line quantities grouped by menu item

        Returns:
            Rows ordered by total_quantity descending
        """
        pass

    @abstractmethod
    async def invoice_totals(
        self,
        invoice_type: InvoiceType,
        start_at: datetime,
        end_at: datetime,
        guest_name: Optional[str] = None,
    ) -> InvoiceTotalsRow:
        """
        SUM/COUNT over the same predicate the aggregated listing uses

        Returns:
            Totals (zero when nothing matches) and per-payment-status counts
        """
        pass
