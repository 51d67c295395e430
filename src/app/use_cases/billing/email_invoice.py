"""EmailInvoice Use Case

Sends an invoice to the guest's e-mail address: HTML summary in the body,
PDF attached.
"""

import logging
from html import escape
from typing import List, Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.settings_repository import GuestRepository, SettingsRepository
from src.app.services.mail_service import MailAttachment, MailMessage, MailService
from src.app.services.pdf_service import PdfService
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from src.domain.settings import ResortSettings
from .dtos import EmailInvoiceResponseDTO

logger = logging.getLogger(__name__)

_CELL = 'style="padding: 8px; border: 1px solid #ddd;"'


def render_invoice_html(
    invoice: Invoice, lines: List[InvoiceLine], settings: Optional[ResortSettings]
) -> str:
    """HTML body of an invoice e-mail"""
    resort_name = settings.resort_name if settings else ""
    header = ""
    if settings:
        header = (
            f"<h2>{escape(settings.resort_name)}</h2>"
            f"<p>{escape(settings.resort_address)}</p>"
            f"<p>Contact: {escape(settings.resort_contact)}</p>"
            f"<p>GSTIN: {escape(settings.gstin_for(invoice.type))}</p>"
        )

    rows = "".join(
        "<tr>"
        f"<td {_CELL}>{escape(line.item_name)}</td>"
        f"<td {_CELL}>{line.quantity}</td>"
        f"<td {_CELL}>{line.rate:.2f}</td>"
        f"<td {_CELL}>{line.quantity * line.rate:.2f}</td>"
        f"<td {_CELL}>{line.tax_percentage}%</td>"
        f"<td {_CELL}>{line.tax_amount:.2f}</td>"
        f"<td {_CELL}>{line.line_total:.2f}</td>"
        "</tr>"
        for line in lines
    )
    headings = "".join(
        f"<th {_CELL}>{title}</th>"
        for title in ("Item", "Qty", "Rate", "Amount", "GST%", "GST Amount", "Total")
    )
    totals = "".join(
        '<tr style="font-weight: bold;">'
        f'<td colspan="3" {_CELL}>{label}:</td>'
        f'<td colspan="4" {_CELL}>{amount:.2f}</td>'
        "</tr>"
        for label, amount in (
            ("Subtotal", invoice.subtotal),
            ("GST", invoice.tax_amount),
            ("Total", invoice.total_amount),
        )
    )
    room = f"<p>Room: {escape(invoice.room_number)}</p>" if invoice.room_number else ""

    return (
        f"{header}"
        f"<h3>Invoice #{escape(invoice.invoice_number)}</h3>"
        f"<p>Date: {invoice.invoice_date:%a %b %d %Y}</p>"
        f"<p>Guest: {escape(invoice.guest_name)}</p>"
        f"{room}"
        '<table style="width: 100%; border-collapse: collapse;">'
        f'<thead><tr style="background-color: #f2f2f2;">{headings}</tr></thead>'
        f"<tbody>{rows}</tbody>"
        f"<tfoot>{totals}</tfoot>"
        "</table>"
        f"<p>Payment Status: {invoice.payment_status.value}</p>"
        f'<p style="margin-top: 20px;">Thank you for staying with {escape(resort_name) or "us"}!</p>'
    )


class EmailInvoice:
    """
    Use Case: E-mail an invoice to its guest

    Business Rules:
    1. Invoice must exist
    2. The invoice's guest must have an e-mail address
    3. Delivery failure is reported, the invoice is left untouched

    Flow:
    1. Retrieve invoice and lines
    2. Resolve guest e-mail
    3. Render HTML body and PDF attachment
    4. Send through the mail service
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        guest_repo: GuestRepository,
        settings_repo: SettingsRepository,
        pdf_service: PdfService,
        mail_service: MailService,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.guest_repo = guest_repo
        self.settings_repo = settings_repo
        self.pdf_service = pdf_service
        self.mail_service = mail_service

    async def execute(self, invoice_id: int) -> Result[EmailInvoiceResponseDTO]:
        try:
            # Step 1: Retrieve invoice and lines
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    error(ErrorCode.INVOICE_NOT_FOUND, f"Invoice with ID {invoice_id} not found")
                )
            lines = await self.invoice_line_repo.get_by_invoice_id(invoice_id)

            # Step 2: Resolve guest e-mail
            guest = await self.guest_repo.get_by_id(invoice.guest_id) if invoice.guest_id else None
            recipient = (guest.email or "").strip() if guest else ""
            if not recipient:
                return Return.err(
                    error(ErrorCode.GUEST_EMAIL_MISSING, "Email address is required")
                )

            # Step 3: Render body and attachment
            settings = await self.settings_repo.get()
            html = render_invoice_html(invoice, lines, settings)
            pdf_bytes = self.pdf_service.generate_invoice(invoice, lines, settings)

            sender_name = settings.resort_name if settings else "Resort"
            message = MailMessage(
                to=recipient,
                subject=f"Invoice #{invoice.invoice_number} from {sender_name}",
                html=html,
                attachments=[
                    MailAttachment(
                        filename=f"invoice_{invoice.invoice_number}.pdf",
                        content=pdf_bytes,
                    )
                ],
            )

            # Step 4: Send
            if not await self.mail_service.send(message):
                return Return.err(
                    error(
                        ErrorCode.EMAIL_DELIVERY_FAILED,
                        f"Could not deliver invoice {invoice.invoice_number}",
                    )
                )

            logger.info(f"Invoice {invoice.invoice_number} e-mailed to {recipient}")
            return Return.ok(
                EmailInvoiceResponseDTO(
                    invoice_id=invoice.id,
                    recipient=recipient,
                    message=f"Invoice sent successfully to {recipient}",
                )
            )

        except Exception as e:
            logger.error(f"E-mailing invoice {invoice_id} failed: {e}")
            return Return.err(persistence_error("Failed to e-mail invoice", e))
