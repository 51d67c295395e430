"""DeleteInvoice Use Case"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice and its lines

    Business Rules:
    1. Invoice must exist before deletion
    2. Lines are deleted before the header, in the same transaction
    3. A kitchen order billed by this invoice loses its invoice reference
       (foreign key ON DELETE SET NULL) and may be billed again
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, invoice_id: int) -> Result[None]:
        try:
            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    error(ErrorCode.INVOICE_NOT_FOUND, f"Invoice with ID {invoice_id} not found")
                )

            # Step 2: Delete lines, then header
            removed = await self.invoice_line_repo.delete_by_invoice_id(invoice_id)
            await self.invoice_repo.delete(invoice)

            # Step 3: Commit transaction
            await self.uow.commit()

            logger.info(f"Invoice {invoice.invoice_number} deleted with {removed} lines")
            return Return.ok()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Deleting invoice {invoice_id} failed: {e}")
            return Return.err(persistence_error("Failed to delete invoice", e))
