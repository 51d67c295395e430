"""GenerateInvoicePdf Use Case

Renders an invoice as a PDF with the resort identity block.
"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.pdf_service import PdfService
from .dtos import InvoicePdfDTO


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must exist
    2. Resort invoices print the resort GSTIN, kitchen invoices the kitchen GSTIN
    3. Amounts are printed as stored, never recomputed

    Flow:
    1. Retrieve invoice by ID
    2. Retrieve invoice line items
    3. Retrieve resort settings
    4. Generate PDF using PDF service
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        settings_repo: SettingsRepository,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.settings_repo = settings_repo
        self.pdf_service = pdf_service

    async def execute(self, invoice_id: int) -> Result[InvoicePdfDTO]:
        """
        Execute invoice PDF generation

        Args:
            invoice_id: Invoice ID

        Returns:
            Result[InvoicePdfDTO]: PDF bytes and a download filename, or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)

            if not invoice:
                return Return.err(
                    error(ErrorCode.INVOICE_NOT_FOUND, f"Invoice with ID {invoice_id} not found")
                )

            # Step 2: Retrieve invoice line items
            invoice_lines = await self.invoice_line_repo.get_by_invoice_id(invoice_id)

            # Step 3: Retrieve settings
            settings = await self.settings_repo.get()

            # Step 4: Generate PDF
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                invoice_lines=invoice_lines,
                settings=settings,
            )

            return Return.ok(
                InvoicePdfDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    filename=f"invoice_{invoice.invoice_number}.pdf",
                    content=pdf_bytes,
                )
            )

        except Exception as e:
            return Return.err(persistence_error("Failed to generate invoice PDF", e))
