"""ListInvoices Use Case"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.date_range import InvalidDateRange, optional_day_bounds
from .dtos import ListInvoicesQueryDTO, ListInvoicesResponseDTO, invoice_to_dto


class ListInvoices:
    """
    Use Case: List invoices, newest first

    Optional filters: calendar date range on invoice_date, invoice type.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, query: ListInvoicesQueryDTO) -> Result[ListInvoicesResponseDTO]:
        try:
            start_at, end_at = optional_day_bounds(query.start_date, query.end_date)
        except InvalidDateRange as e:
            return Return.err(error(ErrorCode.INVALID_DATE_RANGE, str(e)))

        try:
            invoices = await self.invoice_repo.list(
                start_at=start_at,
                end_at=end_at,
                invoice_type=query.type,
                limit=query.limit,
                offset=query.offset,
            )
            return Return.ok(
                ListInvoicesResponseDTO(
                    invoices=[invoice_to_dto(invoice) for invoice in invoices],
                    limit=query.limit,
                    offset=query.offset,
                )
            )
        except Exception as e:
            return Return.err(persistence_error("Failed to list invoices", e))
