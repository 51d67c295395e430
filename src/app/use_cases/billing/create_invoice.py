"""CreateInvoice Use Case

Creates a resort or kitchen invoice directly from submitted line items.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.catalog_repository import MenuItemRepository, ServiceRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.line_items import UnknownCatalogReference, resolve_line_items
from src.app.use_cases.numbering import NumberAllocationExhausted, write_with_unique_number
from src.domain.base import utc_now
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from src.domain.pricing import InvalidLineItem, ReferenceKind, compute_totals
from .dtos import CreateInvoiceCommandDTO, InvoiceDTO, invoice_to_dto

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create invoice from line items

    Business Rules:
    1. Guest name must not be blank and at least one line is required
    2. A line references a menu item, a service, or nothing (never both)
    3. Omitted name/rate/tax of a referenced line come from the catalog
    4. Totals come from the pricing rules, never from the caller
    5. Invoice number is RS/KT + YYYYMMDD + 4 random digits, regenerated on collision

    Flow:
    1. Validate header
    2. Resolve and validate lines against the catalogs
    3. Compute totals
    4. Insert header and lines (retrying on number collision)
    5. Commit transaction
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        menu_item_repo: MenuItemRepository,
        service_repo: ServiceRepository,
        max_attempts: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.menu_item_repo = menu_item_repo
        self.service_repo = service_repo
        self.max_attempts = max_attempts
        self.clock = clock

    async def execute(
        self, command: CreateInvoiceCommandDTO, created_by: Optional[int] = None
    ) -> Result[InvoiceDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with guest info, type, lines and payment
            created_by: ID of the user issuing the invoice

        Returns:
            Result[InvoiceDTO]: Created invoice with lines, or error
        """
        # Step 1: Validate header
        guest_name = (command.guest_name or "").strip()
        if not guest_name:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "Guest name is required"))

        if not command.lines:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "At least one line item is required"))

        try:
            # Step 2: Resolve lines
            try:
                items = await resolve_line_items(
                    command.lines, self.menu_item_repo, self.service_repo
                )
            except InvalidLineItem as e:
                return Return.err(error(ErrorCode.INVALID_LINE_ITEM, str(e)))
            except UnknownCatalogReference as e:
                return Return.err(error(ErrorCode.UNKNOWN_CATALOG_REFERENCE, str(e)))

            # Step 3: Compute totals
            totals = compute_totals(items)
            now = self.clock()

            # Step 4: Insert header and lines
            async def write(invoice_number: str):
                invoice = Invoice(
                    invoice_number=invoice_number,
                    invoice_date=now,
                    guest_id=command.guest_id,
                    room_number=command.room_number,
                    guest_name=guest_name,
                    guest_mobile=command.guest_mobile,
                    type=command.type,
                    subtotal=totals.subtotal,
                    tax_amount=totals.tax_amount,
                    total_amount=totals.total_amount,
                    payment_status=command.payment_status,
                    payment_method=command.payment_method,
                    notes=command.notes,
                    booking_date=command.booking_date,
                    created_by=created_by,
                    created_at=now,
                    updated_at=now,
                )
                created_invoice = await self.invoice_repo.create(invoice)

                lines = [
                    InvoiceLine(
                        invoice_id=created_invoice.id,
                        menu_item_id=item.reference_id if item.reference_kind == ReferenceKind.MENU_ITEM else None,
                        service_id=item.reference_id if item.reference_kind == ReferenceKind.SERVICE else None,
                        item_name=item.name,
                        quantity=item.quantity,
                        rate=item.rate,
                        tax_percentage=item.tax_percentage,
                        tax_amount=item.rounded_tax_amount,
                        line_total=item.rounded_total,
                        booking_date=item.booking_date,
                        created_at=now,
                    )
                    for item in items
                ]
                created_lines = await self.invoice_line_repo.create_many(lines)
                return created_invoice, created_lines

            invoice, lines = await write_with_unique_number(
                self.uow,
                command.type.number_prefix,
                now,
                write,
                self._number_taken,
                self.max_attempts,
            )

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Invoice {invoice.invoice_number} created: "
                f"{len(lines)} lines, total={invoice.total_amount}"
            )

            # Step 6: Build response
            return Return.ok(invoice_to_dto(invoice, lines))

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
            logger.error(f"Invoice creation failed: {e}")
            return Return.err(persistence_error("Failed to create invoice", e))

    async def _number_taken(self, invoice_number: str) -> bool:
        return await self.invoice_repo.get_by_invoice_number(invoice_number) is not None
