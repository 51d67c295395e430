"""SetInvoicePayment Use Case"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import InvoiceDTO, SetInvoicePaymentCommandDTO, invoice_to_dto

logger = logging.getLogger(__name__)


class SetInvoicePayment:
    """
    Use Case: Overwrite an invoice's payment status and method

    Business Rules:
    1. Invoice must exist
    2. Any declared status/method is accepted from any prior value
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: int, command: SetInvoicePaymentCommandDTO) -> Result[InvoiceDTO]:
        try:
            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    error(ErrorCode.INVOICE_NOT_FOUND, f"Invoice with ID {invoice_id} not found")
                )

            # Step 2: Overwrite payment fields
            invoice.payment_status = command.payment_status
            invoice.payment_method = command.payment_method
            updated = await self.invoice_repo.update(invoice)

            # Step 3: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Invoice {updated.invoice_number} payment set to "
                f"{updated.payment_status.value}/{updated.payment_method.value}"
            )
            return Return.ok(invoice_to_dto(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to update invoice payment", e))
