"""ConvertOrderToInvoice Use Case

Bills a kitchen order: a KT invoice is created from the order's stored lines
and linked to the order, at most once per order.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from libs.result import Result, Return
from src.app.errors import ConstraintViolationError, ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.repositories.kitchen_order_line_repository import KitchenOrderLineRepository
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.billing.dtos import InvoiceDTO, invoice_to_dto
from src.app.use_cases.numbering import NumberAllocationExhausted, write_with_unique_number
from src.domain.base import utc_now
from src.domain.invoice import Invoice, InvoiceType
from src.domain.invoice_line import InvoiceLine
from .dtos import ConvertOrderCommandDTO

logger = logging.getLogger(__name__)


class ConvertOrderToInvoice:
    """
    Use Case: Create the kitchen invoice for an order

    Business Rules:
    1. Order must exist
    2. Order must not already reference an invoice (checked before any write)
    3. Invoice totals are copied from the order, not recomputed
    4. Each order line becomes one invoice line with the same name,
       quantity, rate, tax and total
    5. The order is linked with a conditional update that only succeeds
       while invoice_id IS NULL; losing that race rolls everything back

    Flow:
    1. Read and lock the order
    2. Check that it has no invoice
    3. Read its lines
    4. Insert the KT invoice header (retrying on number collision)
    5. Insert the invoice lines
    6. Claim the order
    7. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: KitchenOrderRepository,
        order_line_repo: KitchenOrderLineRepository,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        max_attempts: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.order_line_repo = order_line_repo
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.max_attempts = max_attempts
        self.clock = clock

    async def execute(
        self,
        order_id: int,
        command: ConvertOrderCommandDTO,
        created_by: Optional[int] = None,
    ) -> Result[InvoiceDTO]:
        """
        Execute order to invoice conversion

        Args:
            order_id: Kitchen order ID
            command: Payment status / method for the new invoice
            created_by: ID of the user billing the order

        Returns:
            Result[InvoiceDTO]: Created invoice with lines, or error
        """
        now = self.clock()

        async def write(invoice_number: str) -> Result[InvoiceDTO]:
            # Step 1: Read and lock the order
            order = await self.order_repo.get_by_id(order_id, for_update=True)
            if not order:
                return Return.err(
                    error(ErrorCode.ORDER_NOT_FOUND, f"Kitchen order with ID {order_id} not found")
                )

            # Step 2: Check that it has no invoice
            if order.invoice_id is not None:
                return Return.err(self._already_invoiced(order_id))

            # Step 3: Read its lines
            order_lines = await self.order_line_repo.get_by_order_id(order_id)

            # Step 4: Insert the invoice header
            invoice = Invoice(
                invoice_number=invoice_number,
                invoice_date=now,
                guest_id=order.guest_id,
                room_number=order.room_number,
                guest_name=order.guest_name,
                type=InvoiceType.KITCHEN,
                subtotal=order.subtotal,
                tax_amount=order.tax_amount,
                total_amount=order.total_amount,
                payment_status=command.payment_status,
                payment_method=command.payment_method,
                notes=command.notes,
                created_by=created_by,
                created_at=now,
                updated_at=now,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            # Step 5: Insert the invoice lines
            invoice_lines = [
                InvoiceLine(
                    invoice_id=created_invoice.id,
                    menu_item_id=line.menu_item_id,
                    item_name=line.item_name,
                    quantity=line.quantity,
                    rate=line.rate,
                    tax_percentage=line.tax_percentage,
                    tax_amount=line.tax_amount,
                    line_total=line.line_total,
                    created_at=now,
                )
                for line in order_lines
            ]
            created_lines = await self.invoice_line_repo.create_many(invoice_lines)

            # Step 6: Claim the order
            try:
                claimed = await self.order_repo.claim_invoice(order_id, created_invoice.id)
            except ConstraintViolationError:
                claimed = False
            if not claimed:
                logger.warning(f"Kitchen order {order_id} was invoiced concurrently")
                return Return.err(self._already_invoiced(order_id))

            return Return.ok(invoice_to_dto(created_invoice, created_lines))

        try:
            result = await write_with_unique_number(
                self.uow,
                InvoiceType.KITCHEN.number_prefix,
                now,
                write,
                self._number_taken,
                self.max_attempts,
            )

            if result.is_err():
                await self.uow.rollback()
                return result

            # Step 7: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Kitchen order {order_id} billed as {result.value.invoice_number} "
                f"(total={result.value.total_amount})"
            )
            return result

        except NumberAllocationExhausted as e:
            await self.uow.rollback()
            logger.error(str(e))
            return Return.err(
                error(
                    ErrorCode.NUMBER_GENERATION_EXHAUSTED,
                    "Could not allocate a unique invoice number, please retry",
                    reason=str(e),
                )
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Conversion of kitchen order {order_id} failed: {e}")
            return Return.err(persistence_error("Failed to create invoice from order", e))

    @staticmethod
    def _already_invoiced(order_id: int):
        return error(
            ErrorCode.ORDER_ALREADY_INVOICED,
            f"Invoice already exists for kitchen order {order_id}",
        )

    async def _number_taken(self, invoice_number: str) -> bool:
        return await self.invoice_repo.get_by_invoice_number(invoice_number) is not None
