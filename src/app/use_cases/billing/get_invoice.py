"""GetInvoice Use Case"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from .dtos import InvoiceDTO, invoice_to_dto


class GetInvoice:
    """
    Use Case: Read one invoice with its lines
    """

    def __init__(self, invoice_repo: InvoiceRepository, invoice_line_repo: InvoiceLineRepository):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    error(ErrorCode.INVOICE_NOT_FOUND, f"Invoice with ID {invoice_id} not found")
                )

            lines = await self.invoice_line_repo.get_by_invoice_id(invoice_id)
            return Return.ok(invoice_to_dto(invoice, lines))

        except Exception as e:
            return Return.err(persistence_error("Failed to load invoice", e))
