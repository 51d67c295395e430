"""ReconcileTotals Use Case

Recomputes every header in a date range from its own lines and reports any
header whose stored totals drifted.
"""

import logging
import time
from datetime import date
from typing import List
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.repositories.kitchen_order_line_repository import KitchenOrderLineRepository
from src.app.use_cases.date_range import InvalidDateRange, day_bounds
from src.domain.base import utc_now
from src.domain.invoice import InvoiceType
from src.domain.pricing import FinancialTotals, compute_totals
from .dtos import ReconciliationResultDTO, TotalsDiscrepancyDTO

logger = logging.getLogger(__name__)


def _discrepancy(document: str, document_id: int, number: str,
                 stored: FinancialTotals, computed: FinancialTotals) -> TotalsDiscrepancyDTO:
    return TotalsDiscrepancyDTO(
        document=document,
        document_id=document_id,
        number=number,
        stored_subtotal=stored.subtotal,
        stored_tax_amount=stored.tax_amount,
        stored_total_amount=stored.total_amount,
        computed_subtotal=computed.subtotal,
        computed_tax_amount=computed.tax_amount,
        computed_total_amount=computed.total_amount,
    )


class ReconcileTotals:
    """
    Use Case: Reconcile header totals against line rows

    Business Rules:
    1. Every invoice and kitchen order in the range is recomputed from its lines
    2. A header is a discrepancy when any of subtotal / tax / total differs
    3. Does NOT modify any data (read-only reconciliation)
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        order_repo: KitchenOrderRepository,
        order_line_repo: KitchenOrderLineRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.order_repo = order_repo
        self.order_line_repo = order_line_repo

    async def execute(self, start_date: date, end_date: date) -> Result[ReconciliationResultDTO]:
        """
        Execute totals reconciliation

        Args:
            start_date: First calendar day to check
            end_date: Last calendar day to check (inclusive)

        Returns:
            Result[ReconciliationResultDTO]: Reconciliation result with any discrepancies
        """
        start_time = time.time()
        reconciliation_time = utc_now()

        try:
            start_at, end_at = day_bounds(start_date, end_date)
        except InvalidDateRange as e:
            return Return.err(error(ErrorCode.INVALID_DATE_RANGE, str(e)))

        try:
            logger.info(f"Starting totals reconciliation for {start_date} to {end_date}")
            discrepancies: List[TotalsDiscrepancyDTO] = []

            # Step 1: Invoices
            invoices = []
            for invoice_type in InvoiceType:
                invoices.extend(
                    await self.invoice_repo.list_for_range(invoice_type, start_at, end_at)
                )
            invoice_lines = await self.invoice_line_repo.get_by_invoice_ids(i.id for i in invoices)

            for invoice in invoices:
                computed = compute_totals(
                    line.to_line_item() for line in invoice_lines.get(invoice.id, [])
                )
                if computed != invoice.totals:
                    discrepancies.append(
                        _discrepancy("invoice", invoice.id, invoice.invoice_number,
                                     invoice.totals, computed)
                    )

            # Step 2: Kitchen orders
            orders = await self.order_repo.list_for_range(start_at, end_at)
            order_lines = await self.order_line_repo.get_by_order_ids(o.id for o in orders)

            for order in orders:
                computed = compute_totals(
                    line.to_line_item() for line in order_lines.get(order.id, [])
                )
                if computed != order.totals:
                    discrepancies.append(
                        _discrepancy("kitchen_order", order.id, order.order_number,
                                     order.totals, computed)
                    )

            for item in discrepancies:
                logger.warning(
                    f"Totals drift on {item.document} {item.number}: "
                    f"stored={item.stored_subtotal}/{item.stored_tax_amount}/{item.stored_total_amount}, "
                    f"computed={item.computed_subtotal}/{item.computed_tax_amount}/{item.computed_total_amount}"
                )

            # Step 3: Build response
            execution_time_ms = int((time.time() - start_time) * 1000)

            response = ReconciliationResultDTO(
                start_date=start_date,
                end_date=end_date,
                invoices_checked=len(invoices),
                orders_checked=len(orders),
                discrepancies_found=len(discrepancies),
                discrepancies=discrepancies,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            logger.info(
                f"Reconciliation complete: {len(invoices)} invoices, {len(orders)} orders, "
                f"{len(discrepancies)} discrepancies in {execution_time_ms}ms"
            )
            return Return.ok(response)

        except Exception as e:
            logger.error(f"Totals reconciliation failed: {e}")
            return Return.err(persistence_error("Failed to reconcile totals", e))
