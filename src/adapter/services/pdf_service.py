"""ReportLab PDF Generation Service Implementation

Renders invoices and aggregated reports with ReportLab.
"""

from decimal import Decimal
from io import BytesIO
from xml.sax.saxutils import escape
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.app.use_cases.reporting.dtos import AggregateReportDTO
from src.domain.invoice import Invoice, InvoiceType
from src.domain.invoice_line import InvoiceLine
from src.domain.settings import ResortSettings

HEADER_COLOR = colors.HexColor("#2C3E50")
MUTED_COLOR = colors.HexColor("#7F8C8D")
GRID_COLOR = colors.HexColor("#BDC3C7")
STRIPE_COLOR = colors.HexColor("#F8F9F9")

TITLES = {
    InvoiceType.RESORT: "TAX INVOICE",
    InvoiceType.KITCHEN: "KITCHEN TAX INVOICE",
}


def _money(value: Decimal) -> str:
    return f"Rs. {value:,.2f}"


def _grid_style() -> TableStyle:
    return TableStyle(
        [
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 9),
            ("ALIGN", (0, 0), (-1, 0), "CENTER"),
            ("FONTSIZE", (0, 1), (-1, -1), 8),
            ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
            ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ("TOPPADDING", (0, 0), (-1, -1), 5),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE_COLOR]),
        ]
    )


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Only lays out values it is given; amounts are printed as stored.
    """

    def __init__(self):
        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=6,
            textColor=HEADER_COLOR,
        )
        self.subtitle_style = ParagraphStyle(
            "SubtitleStyle",
            parent=styles["Heading2"],
            fontSize=13,
            spaceAfter=12,
            textColor=colors.HexColor("#E74C3C"),
        )
        self.muted_style = ParagraphStyle(
            "MutedStyle",
            parent=styles["Normal"],
            fontSize=9,
            textColor=MUTED_COLOR,
        )
        self.normal_style = ParagraphStyle("NormalStyle", parent=styles["Normal"], fontSize=10)
        self.bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

    def _identity(self, elements: list, settings: Optional[ResortSettings], gstin: Optional[str]):
        if settings:
            elements.append(Paragraph(escape(settings.resort_name), self.title_style))
            elements.append(Paragraph(escape(settings.resort_address), self.muted_style))
            contact = settings.resort_contact
            if settings.resort_email:
                contact = f"{contact} | {settings.resort_email}"
            elements.append(Paragraph(escape(contact), self.muted_style))
        if gstin:
            elements.append(Paragraph(f"GSTIN: {gstin}", self.bold_style))
        elements.append(Spacer(1, 8 * mm))

    def generate_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        settings: Optional[ResortSettings] = None,
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=15 * mm,
            leftMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
            title=invoice.invoice_number,
        )
        elements = []

        gstin = settings.gstin_for(invoice.type) if settings else None
        self._identity(elements, settings, gstin)
        elements.append(Paragraph(TITLES[invoice.type], self.subtitle_style))

        # Invoice details
        details = [
            ["Invoice Number:", invoice.invoice_number],
            ["Invoice Date:", invoice.invoice_date.strftime("%Y-%m-%d %H:%M")],
            ["Guest:", invoice.guest_name],
        ]
        if invoice.room_number:
            details.append(["Room:", invoice.room_number])
        if invoice.guest_mobile:
            details.append(["Mobile:", invoice.guest_mobile])
        if invoice.booking_date:
            details.append(["Booking Date:", invoice.booking_date.isoformat()])
        details.append(["Payment:", f"{invoice.payment_status.value.upper()} ({invoice.payment_method.value})"])

        details_table = Table(details, colWidths=[35 * mm, 110 * mm])
        details_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED_COLOR),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ]
            )
        )
        elements.append(details_table)
        elements.append(Spacer(1, 8 * mm))

        # Line items
        line_data = [["#", "Item", "Qty", "Rate", "GST %", "GST", "Amount"]]
        for position, line in enumerate(invoice_lines, start=1):
            name = line.item_name
            if line.booking_date:
                name = f"{name} ({line.booking_date.isoformat()})"
            line_data.append(
                [
                    str(position),
                    Paragraph(escape(name), self.normal_style),
                    str(line.quantity),
                    f"{line.rate:,.2f}",
                    f"{line.tax_percentage:,.2f}",
                    f"{line.tax_amount:,.2f}",
                    f"{line.line_total:,.2f}",
                ]
            )
        line_table = Table(
            line_data,
            colWidths=[8 * mm, 62 * mm, 14 * mm, 26 * mm, 16 * mm, 24 * mm, 30 * mm],
            repeatRows=1,
        )
        line_table.setStyle(_grid_style())
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        totals = [
            ["Subtotal:", _money(invoice.subtotal)],
            ["GST:", _money(invoice.tax_amount)],
            ["Total:", _money(invoice.total_amount)],
        ]
        totals_table = Table(totals, colWidths=[150 * mm, 30 * mm])
        totals_table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("LINEABOVE", (1, -1), (1, -1), 1.5, HEADER_COLOR),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(totals_table)

        if invoice.notes:
            elements.append(Spacer(1, 6 * mm))
            elements.append(Paragraph(f"<i>Notes: {escape(invoice.notes)}</i>", self.muted_style))

        elements.append(Spacer(1, 12 * mm))
        elements.append(Paragraph("<i>This is a computer generated invoice.</i>", self.muted_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def generate_aggregate_report(self, report: AggregateReportDTO) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            rightMargin=12 * mm,
            leftMargin=12 * mm,
            topMargin=12 * mm,
            bottomMargin=12 * mm,
        )
        elements = []

        info = report.resort_info
        if info:
            elements.append(Paragraph(escape(info.resort_name), self.title_style))
            elements.append(Paragraph(escape(info.resort_address), self.muted_style))
            elements.append(Paragraph(f"GSTIN: {info.gstin}", self.bold_style))
            elements.append(Spacer(1, 5 * mm))

        elements.append(
            Paragraph(f"{report.report_type.value.title()} Invoices Report", self.subtitle_style)
        )
        elements.append(
            Paragraph(
                f"Period: {report.date_range.start_date.isoformat()} to "
                f"{report.date_range.end_date.isoformat()} | Guest: {escape(report.guest_filter)} | "
                f"Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M')}",
                self.muted_style,
            )
        )
        elements.append(Spacer(1, 6 * mm))

        rows = [["Invoice", "Date", "Guest", "Room", "Status", "Method", "Subtotal", "GST", "Total"]]
        for invoice in report.invoices:
            rows.append(
                [
                    invoice.invoice_number,
                    invoice.invoice_date.strftime("%Y-%m-%d"),
                    Paragraph(escape(invoice.guest_name), self.normal_style),
                    invoice.room_number or "-",
                    invoice.payment_status.value,
                    invoice.payment_method.value,
                    f"{invoice.subtotal:,.2f}",
                    f"{invoice.tax_amount:,.2f}",
                    f"{invoice.total_amount:,.2f}",
                ]
            )
        table = Table(
            rows,
            colWidths=[34 * mm, 22 * mm, 55 * mm, 16 * mm, 22 * mm, 20 * mm, 30 * mm, 28 * mm, 30 * mm],
            repeatRows=1,
        )
        table.setStyle(_grid_style())
        elements.append(table)
        elements.append(Spacer(1, 6 * mm))

        summary = report.summary
        summary_rows = [
            ["Invoices:", str(summary.total_invoices)],
            ["Subtotal:", _money(summary.total_subtotal)],
            ["GST:", _money(summary.total_tax)],
            ["Total:", _money(summary.total_amount)],
            ["By status:", ", ".join(f"{k}: {v}" for k, v in summary.payment_status_summary.items())],
            ["By method:", ", ".join(f"{k}: {v}" for k, v in summary.payment_method_summary.items())],
        ]
        if summary.order_type_summary is not None:
            summary_rows.append(
                ["By order type:", ", ".join(f"{k}: {v}" for k, v in summary.order_type_summary.items())]
            )
        summary_table = Table(summary_rows, colWidths=[35 * mm, 120 * mm])
        summary_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED_COLOR),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ]
            )
        )
        elements.append(summary_table)

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
