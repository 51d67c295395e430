"""GstReport Use Case"""

from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.report_repository import ReportRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.use_cases.date_range import InvalidDateRange, required_day_bounds
from src.domain.invoice import InvoiceType
from .dtos import GstBucketDTO, GstReportDTO, PeriodDTO


class GstReport:
    """
    Use Case: GST liability per invoice type

    Business Rules:
    1. Both dates are required; the end date is inclusive through its last microsecond
    2. Each type carries its own GSTIN from settings
    3. A type without invoices reports zeros
    """

    def __init__(self, report_repo: ReportRepository, settings_repo: SettingsRepository):
        self.report_repo = report_repo
        self.settings_repo = settings_repo

    async def execute(self, start_date: Optional[date], end_date: Optional[date]) -> Result[GstReportDTO]:
        try:
            start_at, end_at = required_day_bounds(start_date, end_date)
        except InvalidDateRange as e:
            return Return.err(error(ErrorCode.INVALID_DATE_RANGE, str(e)))

        try:
            rows = {row.type: row for row in await self.report_repo.totals_by_type(start_at, end_at)}
            settings = await self.settings_repo.get()

            buckets = {}
            for invoice_type in InvoiceType:
                row = rows.get(invoice_type)
                bucket = GstBucketDTO(gstin=settings.gstin_for(invoice_type) if settings else None)
                if row:
                    bucket.invoice_count = row.invoice_count
                    bucket.taxable_amount = row.subtotal
                    bucket.tax_amount = row.tax_amount
                    bucket.total_amount = row.total_amount
                buckets[invoice_type] = bucket

            return Return.ok(
                GstReportDTO(
                    period=PeriodDTO(start_date=start_date, end_date=end_date),
                    resort=buckets[InvoiceType.RESORT],
                    kitchen=buckets[InvoiceType.KITCHEN],
                )
            )
        except Exception as e:
            return Return.err(persistence_error("Failed to generate GST report", e))
