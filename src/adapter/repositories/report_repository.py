"""SQLAlchemy Report Repository Implementation

Grouped SUM/COUNT queries. SQLite returns DATE() as text and NUMERIC sums as
floats, so every value is normalized before leaving the repository.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union
from sqlalchemy import func, select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.report_repository import (
    ReportRepository,
    SalesRow,
    TypeTotalsRow,
    KitchenItemRow,
    InvoiceTotalsRow,
)
from src.domain.invoice import Invoice, InvoiceType, PaymentStatus
from src.domain.kitchen_order import KitchenOrder
from src.domain.kitchen_order_line import KitchenOrderLine
from src.domain.pricing import to_currency


def _money(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return to_currency(Decimal(str(value)))


def _day(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _sum(column):
    return func.coalesce(func.sum(column), 0)


class SqlAlchemyReportRepository(ReportRepository):
    """
    SQLAlchemy implementation of ReportRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def sales_by_day(
        self,
        start_at: datetime,
        end_at: datetime,
        invoice_type: Optional[InvoiceType] = None,
    ) -> List[SalesRow]:
        day = func.date(Invoice.invoice_date).label("day")
        stmt = (
            select(
                day,
                Invoice.type,
                func.count(Invoice.id),
                _sum(Invoice.subtotal),
                _sum(Invoice.tax_amount),
                _sum(Invoice.total_amount),
            )
            .where(Invoice.invoice_date >= start_at)
            .where(Invoice.invoice_date <= end_at)
        )
        if invoice_type:
            stmt = stmt.where(Invoice.type == invoice_type)
        stmt = stmt.group_by(day, Invoice.type).order_by(day, Invoice.type)

        result = await self.session.execute(stmt)
        return [
            SalesRow(
                day=_day(row[0]),
                type=InvoiceType(row[1]),
                invoice_count=int(row[2]),
                subtotal=_money(row[3]),
                tax_amount=_money(row[4]),
                total_amount=_money(row[5]),
            )
            for row in result.all()
        ]

    async def totals_by_type(self, start_at: datetime, end_at: datetime) -> List[TypeTotalsRow]:
        stmt = (
            select(
                Invoice.type,
                func.count(Invoice.id),
                _sum(Invoice.subtotal),
                _sum(Invoice.tax_amount),
                _sum(Invoice.total_amount),
            )
            .where(Invoice.invoice_date >= start_at)
            .where(Invoice.invoice_date <= end_at)
            .group_by(Invoice.type)
        )
        result = await self.session.execute(stmt)
        return [
            TypeTotalsRow(
                type=InvoiceType(row[0]),
                invoice_count=int(row[1]),
                subtotal=_money(row[2]),
                tax_amount=_money(row[3]),
                total_amount=_money(row[4]),
            )
            for row in result.all()
        ]

    async def kitchen_items(self, start_at: datetime, end_at: datetime) -> List[KitchenItemRow]:
        total_quantity = func.sum(KitchenOrderLine.quantity).label("total_quantity")
        stmt = (
            select(
                KitchenOrderLine.menu_item_id,
                KitchenOrderLine.item_name,
                total_quantity,
                _sum(KitchenOrderLine.line_total),
            )
            .join(KitchenOrder, KitchenOrder.id == KitchenOrderLine.order_id)
            .where(KitchenOrder.order_date >= start_at)
            .where(KitchenOrder.order_date <= end_at)
            .group_by(KitchenOrderLine.menu_item_id, KitchenOrderLine.item_name)
            .order_by(total_quantity.desc(), KitchenOrderLine.item_name)
        )
        result = await self.session.execute(stmt)
        return [
            KitchenItemRow(
                menu_item_id=row[0],
                item_name=row[1],
                total_quantity=int(row[2] or 0),
                total_amount=_money(row[3]),
            )
            for row in result.all()
        ]

    async def invoice_totals(
        self,
        invoice_type: InvoiceType,
        start_at: datetime,
        end_at: datetime,
        guest_name: Optional[str] = None,
    ) -> InvoiceTotalsRow:
        predicate = [
            Invoice.type == invoice_type,
            Invoice.invoice_date >= start_at,
            Invoice.invoice_date <= end_at,
        ]
        if guest_name:
            predicate.append(Invoice.guest_name.icontains(guest_name, autoescape=True))

        totals_stmt = select(
            func.count(Invoice.id),
            _sum(Invoice.subtotal),
            _sum(Invoice.tax_amount),
            _sum(Invoice.total_amount),
        ).where(*predicate)
        totals = (await self.session.execute(totals_stmt)).one()

        status_stmt = (
            select(Invoice.payment_status, func.count(Invoice.id))
            .where(*predicate)
            .group_by(Invoice.payment_status)
        )
        status_counts = {status.value: 0 for status in PaymentStatus}
        for status, count in (await self.session.execute(status_stmt)).all():
            status_counts[PaymentStatus(status).value] = int(count)

        return InvoiceTotalsRow(
            invoice_count=int(totals[0]),
            subtotal=_money(totals[1]),
            tax_amount=_money(totals[2]),
            total_amount=_money(totals[3]),
            payment_status_counts=status_counts,
        )
