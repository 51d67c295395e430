"""Invoice API Routes

FastAPI routes for resort and kitchen invoices: direct creation, listing,
payment updates, deletion, PDF download and e-mail delivery.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.catalog_repository import (
    SqlAlchemyMenuItemRepository,
    SqlAlchemyServiceRepository,
)
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.settings_repository import (
    SqlAlchemyGuestRepository,
    SqlAlchemySettingsRepository,
)
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.auth import Principal, get_principal, require_reception
from src.api.error import ClientError, error_responses
from src.app.services.mail_service import MailService
from src.app.use_cases.billing import (
    CreateInvoice,
    CreateInvoiceCommandDTO,
    DeleteInvoice,
    EmailInvoice,
    EmailInvoiceResponseDTO,
    GenerateInvoicePdf,
    GetInvoice,
    InvoiceDTO,
    ListInvoices,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    SetInvoicePayment,
    SetInvoicePaymentCommandDTO,
)
from src.depends import get_config, get_mail_service, get_session
from src.domain.invoice import InvoiceType

router = APIRouter(prefix="/invoices", tags=["Invoices"])

NOT_FOUND = (404, "INVOICE_NOT_FOUND", "Invoice with ID 123 not found")


@router.post(
    "",
    response_model=InvoiceDTO,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(
        (400, "UNKNOWN_CATALOG_REFERENCE", "Line 1: service 42 does not exist"),
        (409, "NUMBER_GENERATION_EXHAUSTED", "Could not allocate a unique invoice number, please retry"),
    ),
)
async def create_invoice(
    command: CreateInvoiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_reception),
    config=Depends(get_config),
):
    """
    Create a resort or kitchen invoice directly from line items.

    The invoice number uses the `RS` or `KT` prefix by type.
    """
    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        menu_item_repo=SqlAlchemyMenuItemRepository(session),
        service_repo=SqlAlchemyServiceRepository(session),
        max_attempts=config.NUMBER_RETRY_ATTEMPTS,
    )
    result = await use_case.execute(command, created_by=principal.user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    invoice_type: Optional[InvoiceType] = Query(default=None, alias="type"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """List invoices, newest first, optionally by date range and type."""
    query = ListInvoicesQueryDTO(
        start_date=start_date,
        end_date=end_date,
        type=invoice_type,
        limit=limit,
        offset=offset,
    )
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(query)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{invoice_id}", response_model=InvoiceDTO, responses=error_responses(NOT_FOUND))
async def get_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/{invoice_id}/payment", response_model=InvoiceDTO, responses=error_responses(NOT_FOUND))
async def set_invoice_payment(
    invoice_id: int,
    command: SetInvoicePaymentCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_reception),
):
    use_case = SetInvoicePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(invoice_id, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=error_responses(NOT_FOUND),
)
async def delete_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_reception),
):
    """Delete an invoice and its lines; a billed kitchen order becomes unbilled."""
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        **error_responses(NOT_FOUND),
    },
)
async def download_invoice_pdf(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    use_case = GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemySettingsRepository(session),
        ReportLabPdfService(),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    pdf = result.value
    return Response(
        content=pdf.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf.filename}"'},
    )


@router.post(
    "/{invoice_id}/email",
    response_model=EmailInvoiceResponseDTO,
    responses=error_responses(
        NOT_FOUND,
        (400, "GUEST_EMAIL_MISSING", "Guest e-mail address not found"),
        (502, "EMAIL_DELIVERY_FAILED", "Invoice e-mail could not be delivered"),
    ),
)
async def email_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    mail_service: MailService = Depends(get_mail_service),
    principal: Principal = Depends(require_reception),
):
    """Send the invoice PDF to the registered guest's e-mail address."""
    use_case = EmailInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyGuestRepository(session),
        SqlAlchemySettingsRepository(session),
        ReportLabPdfService(),
        mail_service,
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
