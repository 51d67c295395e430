"""Report API Routes

Sales, GST, kitchen item and dashboard reports, plus the aggregated resort /
kitchen invoice report with JSON, PDF and XLSX export.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.kitchen_order_repository import SqlAlchemyKitchenOrderRepository
from src.adapter.repositories.report_repository import SqlAlchemyReportRepository
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.spreadsheet_service import OpenpyxlSpreadsheetService
from src.api.auth import Principal, get_principal
from src.api.error import ClientError, error_responses
from src.app.use_cases.reporting import (
    AggregateInvoices,
    AggregateQueryDTO,
    DashboardDTO,
    DashboardSnapshot,
    ExportAggregateReport,
    ExportFormat,
    GstReport,
    GstReportDTO,
    KitchenItemsReport,
    KitchenItemsReportDTO,
    SalesReport,
    SalesReportDTO,
)
from src.depends import get_session
from src.domain.invoice import InvoiceType

router = APIRouter(prefix="/reports", tags=["Reports"])

DATE_ERRORS = error_responses((400, "INVALID_DATE_RANGE", "Start date and end date are required"))


@router.get("/sales", response_model=SalesReportDTO, responses=DATE_ERRORS)
async def sales_report(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    invoice_type: Optional[InvoiceType] = Query(default=None, alias="type"),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """Invoice count and totals per day and type; empty ranges return zeros."""
    result = await SalesReport(SqlAlchemyReportRepository(session)).execute(
        start_date, end_date, invoice_type
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/gst", response_model=GstReportDTO, responses=DATE_ERRORS)
async def gst_report(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """Taxable amount and GST per invoice type, with the registered GSTINs."""
    use_case = GstReport(SqlAlchemyReportRepository(session), SqlAlchemySettingsRepository(session))
    result = await use_case.execute(start_date, end_date)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/kitchen-items", response_model=KitchenItemsReportDTO, responses=DATE_ERRORS)
async def kitchen_items_report(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """Quantity and amount ordered per menu item, highest quantity first."""
    result = await KitchenItemsReport(SqlAlchemyReportRepository(session)).execute(
        start_date, end_date
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/dashboard", response_model=DashboardDTO)
async def dashboard(
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """Today's and this month's sales, recent invoices and open kitchen orders."""
    use_case = DashboardSnapshot(
        SqlAlchemyReportRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyKitchenOrderRepository(session),
    )
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/aggregated/{invoice_type}",
    responses={
        200: {
            "content": {
                "application/json": {},
                "application/pdf": {},
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": {},
            },
            "description": "Aggregated report",
        },
        **DATE_ERRORS,
    },
)
async def aggregated_report(
    invoice_type: InvoiceType,
    from_date: Optional[date] = Query(default=None),
    to_date: Optional[date] = Query(default=None),
    guest_name: Optional[str] = Query(default=None),
    export_format: ExportFormat = Query(default=ExportFormat.JSON, alias="format"),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """
    All invoices of one type in a date range with their lines and a summary.

    **Query parameters:**
    - `from_date`, `to_date` (required): inclusive day range
    - `guest_name` (optional): case-insensitive substring match
    - `format`: `json` (default), `pdf` or `xlsx`
    """
    aggregate = AggregateInvoices(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyKitchenOrderRepository(session),
        SqlAlchemySettingsRepository(session),
        SqlAlchemyReportRepository(session),
    )
    use_case = ExportAggregateReport(aggregate, ReportLabPdfService(), OpenpyxlSpreadsheetService())
    query = AggregateQueryDTO(from_date=from_date, to_date=to_date, guest_name=guest_name)
    result = await use_case.execute(invoice_type, query, export_format)

    if result.is_err():
        raise ClientError(result.error)

    export = result.value
    headers = {}
    if export_format != ExportFormat.JSON:
        headers["Content-Disposition"] = f'attachment; filename="{export.filename}"'
    return Response(content=export.content, media_type=export.media_type, headers=headers)
