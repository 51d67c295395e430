"""SalesReport Use Case"""

from datetime import date
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.report_repository import ReportRepository
from src.app.use_cases.date_range import InvalidDateRange, required_day_bounds
from src.domain.invoice import InvoiceType
from .dtos import PeriodDTO, SalesDayDTO, SalesReportDTO, SalesSummaryDTO


class SalesReport:
    """
    Use Case: Sales per calendar day and invoice type

    Business Rules:
    1. Both dates are required; the end date is inclusive through its last microsecond
    2. Optional filter by invoice type
    3. summary is the exact Decimal sum of the daily rows (zero when empty)
    """

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(
        self,
        start_date: Optional[date],
        end_date: Optional[date],
        invoice_type: Optional[InvoiceType] = None,
    ) -> Result[SalesReportDTO]:
        try:
            start_at, end_at = required_day_bounds(start_date, end_date)
        except InvalidDateRange as e:
            return Return.err(error(ErrorCode.INVALID_DATE_RANGE, str(e)))

        try:
            rows = await self.report_repo.sales_by_day(start_at, end_at, invoice_type)

            daily = [
                SalesDayDTO(
                    date=row.day,
                    type=row.type,
                    invoice_count=row.invoice_count,
                    subtotal=row.subtotal,
                    tax_amount=row.tax_amount,
                    total_amount=row.total_amount,
                )
                for row in rows
            ]
            summary = SalesSummaryDTO(
                invoice_count=sum(row.invoice_count for row in rows),
                subtotal=sum((row.subtotal for row in rows), Decimal("0.00")),
                tax_amount=sum((row.tax_amount for row in rows), Decimal("0.00")),
                total_amount=sum((row.total_amount for row in rows), Decimal("0.00")),
            )

            return Return.ok(
                SalesReportDTO(
                    period=PeriodDTO(start_date=start_date, end_date=end_date),
                    summary=summary,
                    daily=daily,
                )
            )
        except Exception as e:
            return Return.err(persistence_error("Failed to generate sales report", e))
