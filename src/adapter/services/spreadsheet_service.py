"""openpyxl Spreadsheet Export Service Implementation"""

from io import BytesIO
from openpyxl import Workbook
from openpyxl.styles import Font
from src.app.services.spreadsheet_service import SpreadsheetService
from src.app.use_cases.reporting.dtos import AggregateReportDTO

INVOICE_COLUMNS = [
    "Invoice Number",
    "Invoice Date",
    "Guest Name",
    "Room",
    "Payment Status",
    "Payment Method",
    "Subtotal",
    "Tax",
    "Total",
]

LINE_COLUMNS = [
    "Invoice Number",
    "Item",
    "Item Type",
    "Quantity",
    "Rate",
    "Tax %",
    "Tax",
    "Line Total",
    "Booking Date",
]


class OpenpyxlSpreadsheetService(SpreadsheetService):
    """
    Writes an aggregated report as a workbook with three sheets:
    Summary, Invoices and Lines. Amounts are written as numbers.
    """

    def generate_aggregate_report(self, report: AggregateReportDTO) -> bytes:
        wb = Workbook()
        bold = Font(bold=True)

        ws = wb.active
        ws.title = "Summary"
        if report.resort_info:
            ws.append(["Resort", report.resort_info.resort_name])
            ws.append(["GSTIN", report.resort_info.gstin])
        ws.append(["Report", f"{report.report_type.value} invoices"])
        ws.append(["From", report.date_range.start_date])
        ws.append(["To", report.date_range.end_date])
        ws.append(["Guest", report.guest_filter])
        ws.append(["Generated", report.generated_at])
        ws.append([])

        summary = report.summary
        ws.append(["Invoices", summary.total_invoices])
        ws.append(["Subtotal", float(summary.total_subtotal)])
        ws.append(["Tax", float(summary.total_tax)])
        ws.append(["Total", float(summary.total_amount)])
        for status, count in summary.payment_status_summary.items():
            ws.append([f"Status: {status}", count])
        for method, count in summary.payment_method_summary.items():
            ws.append([f"Method: {method}", count])
        if summary.order_type_summary is not None:
            for order_type, count in summary.order_type_summary.items():
                ws.append([f"Order type: {order_type}", count])
        for row in ws.iter_rows(min_col=1, max_col=1):
            row[0].font = bold

        invoices_ws = wb.create_sheet("Invoices")
        invoices_ws.append(INVOICE_COLUMNS)
        lines_ws = wb.create_sheet("Lines")
        lines_ws.append(LINE_COLUMNS)
        for cell in invoices_ws[1] + lines_ws[1]:
            cell.font = bold

        for invoice in report.invoices:
            invoices_ws.append(
                [
                    invoice.invoice_number,
                    invoice.invoice_date,
                    invoice.guest_name,
                    invoice.room_number,
                    invoice.payment_status.value,
                    invoice.payment_method.value,
                    float(invoice.subtotal),
                    float(invoice.tax_amount),
                    float(invoice.total_amount),
                ]
            )
            for line in invoice.lines:
                lines_ws.append(
                    [
                        invoice.invoice_number,
                        line.item_name,
                        line.item_type,
                        line.quantity,
                        float(line.rate),
                        float(line.tax_percentage),
                        float(line.tax_amount),
                        float(line.line_total),
                        line.booking_date,
                    ]
                )

        buffer = BytesIO()
        wb.save(buffer)
        content = buffer.getvalue()
        buffer.close()
        return content
