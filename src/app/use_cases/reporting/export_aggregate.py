"""ExportAggregateReport Use Case

Hands a finished aggregate document to the requested sink.
"""

from libs.result import Result, Return
from src.app.errors import persistence_error
from src.app.services.pdf_service import PdfService
from src.app.services.spreadsheet_service import SpreadsheetService
from src.domain.invoice import InvoiceType
from .aggregate_invoices import AggregateInvoices
from .dtos import AggregateQueryDTO, ExportFileDTO, ExportFormat

_MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.PDF: "application/pdf",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class ExportAggregateReport:
    """
    Use Case: Export aggregated resort / kitchen report

    Formats: json, pdf (ReportLab), xlsx (openpyxl). The exporters only
    render; every number comes from AggregateInvoices.
    """

    def __init__(
        self,
        aggregate: AggregateInvoices,
        pdf_service: PdfService,
        spreadsheet_service: SpreadsheetService,
    ):
        self.aggregate = aggregate
        self.pdf_service = pdf_service
        self.spreadsheet_service = spreadsheet_service

    async def execute(
        self,
        invoice_type: InvoiceType,
        query: AggregateQueryDTO,
        export_format: ExportFormat,
    ) -> Result[ExportFileDTO]:
        result = await self.aggregate.execute(invoice_type, query)
        if result.is_err():
            return result

        report = result.value
        try:
            if export_format == ExportFormat.PDF:
                content = self.pdf_service.generate_aggregate_report(report)
            elif export_format == ExportFormat.XLSX:
                content = self.spreadsheet_service.generate_aggregate_report(report)
            else:
                content = report.model_dump_json(indent=2).encode("utf-8")
        except Exception as e:
            return Return.err(persistence_error("Failed to render aggregated report", e))

        filename = (
            f"{invoice_type.value}_invoices_{report.date_range.start_date:%Y%m%d}_"
            f"{report.date_range.end_date:%Y%m%d}.{export_format.value}"
        )
        return Return.ok(
            ExportFileDTO(
                filename=filename,
                media_type=_MEDIA_TYPES[export_format],
                content=content,
            )
        )
