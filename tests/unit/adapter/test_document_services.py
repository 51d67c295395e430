"""Unit tests for the PDF and spreadsheet renderers"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO

from openpyxl import load_workbook

from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.spreadsheet_service import OpenpyxlSpreadsheetService
from src.app.use_cases.reporting.dtos import (
    AggregateReportDTO,
    AggregateSummaryDTO,
    AggregatedInvoiceDTO,
    AggregatedLineDTO,
    PeriodDTO,
    ResortInfoDTO,
)
from src.domain.invoice import Invoice, InvoiceType, PaymentMethod, PaymentStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.kitchen_order import OrderType
from src.domain.settings import ResortSettings

NOW = datetime(2024, 3, 5, 18, 0, 0)


@pytest.fixture
def settings():
    return ResortSettings(
        id=1,
        resort_name="Hillside & Lake Resort",
        resort_gstin="29ABCDE1234F1Z5",
        kitchen_gstin="29ABCDE1234F2Z4",
        resort_address="12 Lake Road",
        resort_contact="+91 80000 00000",
        resort_email="stay@example.com",
    )


@pytest.fixture
def invoice():
    return Invoice(
        id=21,
        invoice_number="KT202403050042",
        invoice_date=NOW,
        guest_name="A. Guest <VIP>",
        room_number="204",
        type=InvoiceType.KITCHEN,
        subtotal=Decimal("980.00"),
        tax_amount=Decimal("176.40"),
        total_amount=Decimal("1156.40"),
        payment_status=PaymentStatus.PAID,
        payment_method=PaymentMethod.UPI,
        notes="Deliver after 8pm",
    )


@pytest.fixture
def lines():
    return [
        InvoiceLine(
            id=1, invoice_id=21, menu_item_id=3, item_name="Paneer Tikka", quantity=2,
            rate=Decimal("450.00"), tax_percentage=Decimal("18.00"),
            tax_amount=Decimal("162.00"), line_total=Decimal("1062.00"),
        ),
        InvoiceLine(
            id=2, invoice_id=21, menu_item_id=7, item_name="Butter Naan", quantity=1,
            rate=Decimal("80.00"), tax_percentage=Decimal("18.00"),
            tax_amount=Decimal("14.40"), line_total=Decimal("94.40"),
        ),
    ]


@pytest.fixture
def report():
    invoice = AggregatedInvoiceDTO(
        id=21,
        invoice_number="KT202403050042",
        invoice_date=NOW,
        type=InvoiceType.KITCHEN,
        guest_name="A. Guest",
        room_number="204",
        subtotal=Decimal("980.00"),
        tax_amount=Decimal("176.40"),
        total_amount=Decimal("1156.40"),
        payment_status=PaymentStatus.PAID,
        payment_method=PaymentMethod.UPI,
        created_at=NOW,
        updated_at=NOW,
        order_type=OrderType.ROOM,
        lines=[
            AggregatedLineDTO(
                id=1, menu_item_id=3, item_name="Paneer Tikka", quantity=2,
                rate=Decimal("450.00"), tax_percentage=Decimal("18.00"),
                tax_amount=Decimal("162.00"), line_total=Decimal("1062.00"), item_type="menu_item",
            ),
            AggregatedLineDTO(
                id=2, menu_item_id=7, item_name="Butter Naan", quantity=1,
                rate=Decimal("80.00"), tax_percentage=Decimal("18.00"),
                tax_amount=Decimal("14.40"), line_total=Decimal("94.40"), item_type="menu_item",
            ),
        ],
    )
    summary = AggregateSummaryDTO(
        total_invoices=1,
        total_subtotal=Decimal("980.00"),
        total_tax=Decimal("176.40"),
        total_amount=Decimal("1156.40"),
        order_type_summary={"room": 1, "walk_in": 0},
    )
    summary.payment_status_summary["paid"] = 1
    summary.payment_method_summary["upi"] = 1
    return AggregateReportDTO(
        report_type=InvoiceType.KITCHEN,
        resort_info=ResortInfoDTO(
            resort_name="Hillside Resort",
            resort_address="12 Lake Road",
            resort_contact="+91 80000 00000",
            gstin="29ABCDE1234F2Z4",
        ),
        date_range=PeriodDTO(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)),
        invoices=[invoice],
        summary=summary,
        generated_at=NOW,
    )


class TestReportLabPdfService:

    def test_invoice_pdf(self, invoice, lines, settings):
        content = ReportLabPdfService().generate_invoice(invoice, lines, settings)

        assert content.startswith(b"%PDF")

    def test_invoice_pdf_without_settings(self, invoice, lines):
        content = ReportLabPdfService().generate_invoice(invoice, lines, None)

        assert content.startswith(b"%PDF")

    def test_aggregate_report_pdf(self, report):
        content = ReportLabPdfService().generate_aggregate_report(report)

        assert content.startswith(b"%PDF")

    def test_empty_aggregate_report_pdf(self, report):
        empty = report.model_copy(update={"invoices": [], "summary": AggregateSummaryDTO()})

        content = ReportLabPdfService().generate_aggregate_report(empty)

        assert content.startswith(b"%PDF")


class TestOpenpyxlSpreadsheetService:

    def test_workbook_sheets_and_values(self, report):
        content = OpenpyxlSpreadsheetService().generate_aggregate_report(report)

        wb = load_workbook(BytesIO(content))
        assert wb.sheetnames == ["Summary", "Invoices", "Lines"]

        invoices_ws = wb["Invoices"]
        assert invoices_ws.max_row == 2
        assert invoices_ws["A2"].value == "KT202403050042"
        assert invoices_ws["I2"].value == pytest.approx(1156.40)

        lines_ws = wb["Lines"]
        assert lines_ws.max_row == 3
        assert [cell.value for cell in lines_ws[2]][:4] == ["KT202403050042", "Paneer Tikka", "menu_item", 2]

        summary_rows = {row[0]: row[1] for row in wb["Summary"].iter_rows(values_only=True) if row[0]}
        assert summary_rows["Invoices"] == 1
        assert summary_rows["Total"] == pytest.approx(1156.40)
        assert summary_rows["Status: paid"] == 1
        assert summary_rows["Order type: room"] == 1

    def test_empty_report(self, report):
        empty = report.model_copy(update={"invoices": [], "summary": AggregateSummaryDTO()})

        wb = load_workbook(BytesIO(OpenpyxlSpreadsheetService().generate_aggregate_report(empty)))

        assert wb["Invoices"].max_row == 1
        assert wb["Lines"].max_row == 1
