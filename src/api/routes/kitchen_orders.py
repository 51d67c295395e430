"""Kitchen Order API Routes

FastAPI routes for kitchen orders and their conversion into kitchen invoices.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.catalog_repository import SqlAlchemyMenuItemRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.kitchen_order_line_repository import SqlAlchemyKitchenOrderLineRepository
from src.adapter.repositories.kitchen_order_repository import SqlAlchemyKitchenOrderRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.auth import Principal, get_principal, require_kitchen_staff, require_reception
from src.api.error import ClientError, error_responses
from src.app.use_cases.billing.dtos import InvoiceDTO
from src.app.use_cases.kitchen import (
    ConvertOrderCommandDTO,
    ConvertOrderToInvoice,
    CreateKitchenOrder,
    CreateKitchenOrderCommandDTO,
    GetKitchenOrder,
    KitchenOrderDTO,
    ListKitchenOrders,
    ListKitchenOrdersQueryDTO,
    ListKitchenOrdersResponseDTO,
    SetKitchenOrderStatus,
    SetOrderStatusCommandDTO,
)
from src.depends import get_config, get_session
from src.domain.kitchen_order import OrderStatus

router = APIRouter(prefix="/kitchen-orders", tags=["Kitchen Orders"])


@router.post(
    "",
    response_model=KitchenOrderDTO,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(
        (400, "INVALID_LINE_ITEM", "Line 1: quantity must be greater than 0"),
        (409, "NUMBER_GENERATION_EXHAUSTED", "Could not allocate a unique order number, please retry"),
    ),
)
async def create_kitchen_order(
    command: CreateKitchenOrderCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_kitchen_staff),
    config=Depends(get_config),
):
    """
    Create a kitchen order.

    Totals are computed from the submitted lines; the order starts as
    `pending` with a generated `KO` number.
    """
    use_case = CreateKitchenOrder(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyKitchenOrderRepository(session),
        order_line_repo=SqlAlchemyKitchenOrderLineRepository(session),
        menu_item_repo=SqlAlchemyMenuItemRepository(session),
        max_attempts=config.NUMBER_RETRY_ATTEMPTS,
    )
    result = await use_case.execute(command, created_by=principal.user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=ListKitchenOrdersResponseDTO)
async def list_kitchen_orders(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    order_status: Optional[OrderStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """List kitchen orders, newest first, optionally by date range and status."""
    query = ListKitchenOrdersQueryDTO(
        start_date=start_date,
        end_date=end_date,
        status=order_status,
        limit=limit,
        offset=offset,
    )
    result = await ListKitchenOrders(SqlAlchemyKitchenOrderRepository(session)).execute(query)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{order_id}",
    response_model=KitchenOrderDTO,
    responses=error_responses((404, "ORDER_NOT_FOUND", "Kitchen order with ID 123 not found")),
)
async def get_kitchen_order(
    order_id: int,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    use_case = GetKitchenOrder(
        SqlAlchemyKitchenOrderRepository(session),
        SqlAlchemyKitchenOrderLineRepository(session),
    )
    result = await use_case.execute(order_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{order_id}/status",
    response_model=KitchenOrderDTO,
    responses=error_responses((404, "ORDER_NOT_FOUND", "Kitchen order with ID 123 not found")),
)
async def set_kitchen_order_status(
    order_id: int,
    command: SetOrderStatusCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_kitchen_staff),
):
    use_case = SetKitchenOrderStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyKitchenOrderRepository(session),
    )
    result = await use_case.execute(order_id, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{order_id}/invoice",
    response_model=InvoiceDTO,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(
        (404, "ORDER_NOT_FOUND", "Kitchen order with ID 123 not found"),
        (409, "ORDER_ALREADY_INVOICED", "Invoice already exists for kitchen order 123"),
    ),
)
async def convert_kitchen_order(
    order_id: int,
    command: Optional[ConvertOrderCommandDTO] = None,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_reception),
    config=Depends(get_config),
):
    """
    Bill a kitchen order.

    Creates a `KT` invoice with the order's lines and totals and links it to
    the order. An order can be billed only once.
    """
    use_case = ConvertOrderToInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyKitchenOrderRepository(session),
        order_line_repo=SqlAlchemyKitchenOrderLineRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        max_attempts=config.NUMBER_RETRY_ATTEMPTS,
    )
    result = await use_case.execute(
        order_id, command or ConvertOrderCommandDTO(), created_by=principal.user_id
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
