"""AggregateInvoices Use Case

Bulk listing of resort or kitchen invoices for a date range with their lines
and a recomputed summary. This is the document the exporters render.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.repositories.report_repository import ReportRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.use_cases.billing.dtos import invoice_to_dto
from src.app.use_cases.date_range import InvalidDateRange, required_day_bounds
from src.domain.base import utc_now
from src.domain.invoice import InvoiceType
from src.domain.invoice_line import InvoiceLine
from src.domain.kitchen_order import OrderType
from src.domain.pricing import ReferenceKind
from .dtos import (
    AggregateQueryDTO,
    AggregateReportDTO,
    AggregateSummaryDTO,
    AggregatedInvoiceDTO,
    AggregatedLineDTO,
    PeriodDTO,
    ResortInfoDTO,
)

logger = logging.getLogger(__name__)

_ITEM_TYPES = {
    ReferenceKind.MENU_ITEM: "menu_item",
    ReferenceKind.SERVICE: "service",
    ReferenceKind.NONE: "other",
}


def _aggregated_line(line: InvoiceLine) -> AggregatedLineDTO:
    return AggregatedLineDTO(
        id=line.id,
        menu_item_id=line.menu_item_id,
        service_id=line.service_id,
        item_name=line.item_name,
        quantity=line.quantity,
        rate=line.rate,
        tax_percentage=line.tax_percentage,
        tax_amount=line.tax_amount,
        line_total=line.line_total,
        booking_date=line.booking_date,
        item_type=_ITEM_TYPES[line.reference_kind],
    )


class AggregateInvoices:
    """
    Use Case: Aggregated resort / kitchen invoice report

    Business Rules:
    1. Both dates are required; the end date is inclusive through its last microsecond
    2. Optional case-insensitive guest name substring filter
    3. Lines of all matching invoices are fetched in one batch and attached
       to their invoice in memory
    4. The summary is recomputed from the fetched headers and must equal a
       database SUM/COUNT over the same predicate
    5. An empty range yields an empty listing with a zero summary

    Flow:
    1. Fetch headers for the range
    2. Fetch all their lines in one query
    3. Attach lines (and, for kitchen, the originating order type)
    4. Recompute summary
    5. Cross-check the summary against the database
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        order_repo: KitchenOrderRepository,
        settings_repo: SettingsRepository,
        report_repo: ReportRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.order_repo = order_repo
        self.settings_repo = settings_repo
        self.report_repo = report_repo
        self.clock = clock

    async def execute(
        self, invoice_type: InvoiceType, query: AggregateQueryDTO
    ) -> Result[AggregateReportDTO]:
        try:
            start_at, end_at = required_day_bounds(query.from_date, query.to_date)
        except InvalidDateRange as e:
            return Return.err(error(ErrorCode.INVALID_DATE_RANGE, str(e)))

        guest_name = (query.guest_name or "").strip() or None

        try:
            # Step 1: Fetch headers
            invoices = await self.invoice_repo.list_for_range(
                invoice_type, start_at, end_at, guest_name
            )

            # Step 2: Fetch lines in one batch
            lines_by_invoice = await self.invoice_line_repo.get_by_invoice_ids(
                invoice.id for invoice in invoices
            )

            # Step 3: Attach lines
            order_types = {}
            if invoice_type == InvoiceType.KITCHEN:
                order_types = await self.order_repo.order_types_by_invoice_ids(
                    invoice.id for invoice in invoices
                )

            aggregated = []
            for invoice in invoices:
                base = invoice_to_dto(invoice).model_dump(exclude={"lines"})
                aggregated.append(
                    AggregatedInvoiceDTO(
                        **base,
                        lines=[_aggregated_line(line) for line in lines_by_invoice.get(invoice.id, [])],
                        order_type=order_types.get(invoice.id),
                    )
                )

            # Step 4: Recompute summary
            summary = AggregateSummaryDTO(total_invoices=len(invoices))
            if invoice_type == InvoiceType.KITCHEN:
                summary.order_type_summary = {order_type.value: 0 for order_type in OrderType}

            subtotal = tax = total = Decimal("0.00")
            for invoice in invoices:
                subtotal += invoice.subtotal
                tax += invoice.tax_amount
                total += invoice.total_amount
                summary.payment_status_summary[invoice.payment_status.value] += 1
                summary.payment_method_summary[invoice.payment_method.value] += 1
                order_type = order_types.get(invoice.id)
                if order_type is not None:
                    summary.order_type_summary[order_type.value] += 1

            summary.total_subtotal = subtotal
            summary.total_tax = tax
            summary.total_amount = total

            # Step 5: Cross-check against the database
            await self._verify(invoice_type, start_at, end_at, guest_name, summary)

            settings = await self.settings_repo.get()
            resort_info = None
            if settings:
                resort_info = ResortInfoDTO(
                    resort_name=settings.resort_name,
                    resort_address=settings.resort_address,
                    resort_contact=settings.resort_contact,
                    resort_email=settings.resort_email,
                    gstin=settings.gstin_for(invoice_type),
                )

            return Return.ok(
                AggregateReportDTO(
                    report_type=invoice_type,
                    resort_info=resort_info,
                    date_range=PeriodDTO(start_date=query.from_date, end_date=query.to_date),
                    guest_filter=guest_name or "All Guests",
                    invoices=aggregated,
                    summary=summary,
                    generated_at=self.clock(),
                )
            )

        except Exception as e:
            logger.error(f"Aggregated {invoice_type.value} report failed: {e}")
            return Return.err(
                persistence_error(f"Failed to generate aggregated {invoice_type.value} report", e)
            )

    async def _verify(self, invoice_type, start_at, end_at, guest_name, summary: AggregateSummaryDTO):
        expected = await self.report_repo.invoice_totals(invoice_type, start_at, end_at, guest_name)
        matches = (
            expected.invoice_count == summary.total_invoices
            and expected.subtotal == summary.total_subtotal
            and expected.tax_amount == summary.total_tax
            and expected.total_amount == summary.total_amount
            and expected.payment_status_counts == summary.payment_status_summary
        )
        if not matches:
            logger.error(
                f"Aggregated {invoice_type.value} summary disagrees with database totals: "
                f"memory={summary.total_invoices}/{summary.total_amount}, "
                f"database={expected.invoice_count}/{expected.total_amount}"
            )
        return matches
