"""DashboardSnapshot Use Case"""

import calendar
from datetime import date, datetime
from decimal import Decimal
from typing import Callable
from libs.result import Result, Return
from src.app.errors import persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.repositories.report_repository import ReportRepository
from src.app.use_cases.date_range import day_bounds
from src.domain.base import utc_now
from src.domain.invoice import InvoiceType
from .dtos import (
    CountTotalDTO,
    DashboardDTO,
    DashboardPeriodDTO,
    PendingOrderDTO,
    RecentInvoiceDTO,
)

RECENT_INVOICE_LIMIT = 5


class DashboardSnapshot:
    """
    Use Case: Front-desk dashboard

    Contents:
    - today and current month: invoice count and total per type
    - the 5 most recent invoices
    - pending and processing kitchen orders, oldest first
    """

    def __init__(
        self,
        report_repo: ReportRepository,
        invoice_repo: InvoiceRepository,
        order_repo: KitchenOrderRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.report_repo = report_repo
        self.invoice_repo = invoice_repo
        self.order_repo = order_repo
        self.clock = clock

    async def execute(self) -> Result[DashboardDTO]:
        try:
            today = self.clock().date()
            month_start = today.replace(day=1)
            month_end = today.replace(day=calendar.monthrange(today.year, today.month)[1])

            today_stats = await self._period(today, today)
            month_stats = await self._period(month_start, month_end)

            recent = await self.invoice_repo.list_recent(RECENT_INVOICE_LIMIT)
            open_orders = await self.order_repo.list_open()

            return Return.ok(
                DashboardDTO(
                    today=today_stats,
                    month=month_stats,
                    recent_invoices=[
                        RecentInvoiceDTO(
                            id=invoice.id,
                            invoice_number=invoice.invoice_number,
                            invoice_date=invoice.invoice_date,
                            guest_name=invoice.guest_name,
                            type=invoice.type,
                            total_amount=invoice.total_amount,
                            payment_status=invoice.payment_status,
                        )
                        for invoice in recent
                    ],
                    pending_orders=[
                        PendingOrderDTO(
                            id=order.id,
                            order_number=order.order_number,
                            order_date=order.order_date,
                            guest_name=order.guest_name,
                            room_number=order.room_number,
                            total_amount=order.total_amount,
                            status=order.status,
                        )
                        for order in open_orders
                    ],
                )
            )
        except Exception as e:
            return Return.err(persistence_error("Failed to load dashboard", e))

    async def _period(self, start: date, end: date) -> DashboardPeriodDTO:
        start_at, end_at = day_bounds(start, end)
        rows = {row.type: row for row in await self.report_repo.totals_by_type(start_at, end_at)}

        period = DashboardPeriodDTO(start_date=start, end_date=end)
        total = Decimal("0.00")
        for invoice_type in InvoiceType:
            row = rows.get(invoice_type)
            if not row:
                continue
            bucket = CountTotalDTO(count=row.invoice_count, total=row.total_amount)
            setattr(period, invoice_type.value, bucket)
            total += row.total_amount
        period.total = total
        return period
