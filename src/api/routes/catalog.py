"""Catalog API Routes

Menu items and resort services that invoice and order lines draw from.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.catalog_repository import (
    SqlAlchemyMenuItemRepository,
    SqlAlchemyServiceRepository,
)
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.auth import Principal, get_principal, require_admin
from src.api.error import ClientError, error_responses
from src.app.use_cases.catalog import (
    CreateMenuItem,
    CreateMenuItemCommandDTO,
    CreateService,
    CreateServiceCommandDTO,
    DeleteMenuItem,
    DeleteService,
    ListMenuItems,
    ListServices,
    MenuItemDTO,
    ServiceDTO,
    UpdateMenuItem,
    UpdateMenuItemCommandDTO,
    UpdateService,
    UpdateServiceCommandDTO,
)
from src.depends import get_session
from src.domain.menu_item import CatalogType

router = APIRouter(tags=["Catalog"])


@router.get("/menu-items", response_model=List[MenuItemDTO])
async def list_menu_items(
    item_type: Optional[CatalogType] = Query(default=None, alias="type"),
    active_only: bool = Query(default=False),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    result = await ListMenuItems(SqlAlchemyMenuItemRepository(session)).execute(item_type, active_only)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/menu-items", response_model=MenuItemDTO, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    command: CreateMenuItemCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_admin),
):
    use_case = CreateMenuItem(SqlAlchemyUnitOfWork(session), SqlAlchemyMenuItemRepository(session))
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/menu-items/{item_id}",
    response_model=MenuItemDTO,
    responses=error_responses((404, "MENU_ITEM_NOT_FOUND", "Menu item with ID 123 not found")),
)
async def update_menu_item(
    item_id: int,
    command: UpdateMenuItemCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_admin),
):
    use_case = UpdateMenuItem(SqlAlchemyUnitOfWork(session), SqlAlchemyMenuItemRepository(session))
    result = await use_case.execute(item_id, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/menu-items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=error_responses(
        (404, "MENU_ITEM_NOT_FOUND", "Menu item with ID 123 not found"),
        (409, "CATALOG_ENTRY_IN_USE", "Menu item 123 is referenced by 4 invoice line(s)"),
    ),
)
async def delete_menu_item(
    item_id: int,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_admin),
):
    use_case = DeleteMenuItem(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMenuItemRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(item_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/services", response_model=List[ServiceDTO])
async def list_services(
    active_only: bool = Query(default=False),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    result = await ListServices(SqlAlchemyServiceRepository(session)).execute(active_only)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/services", response_model=ServiceDTO, status_code=status.HTTP_201_CREATED)
async def create_service(
    command: CreateServiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_admin),
):
    use_case = CreateService(SqlAlchemyUnitOfWork(session), SqlAlchemyServiceRepository(session))
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/services/{service_id}",
    response_model=ServiceDTO,
    responses=error_responses((404, "SERVICE_NOT_FOUND", "Service with ID 123 not found")),
)
async def update_service(
    service_id: int,
    command: UpdateServiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_admin),
):
    use_case = UpdateService(SqlAlchemyUnitOfWork(session), SqlAlchemyServiceRepository(session))
    result = await use_case.execute(service_id, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/services/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=error_responses(
        (404, "SERVICE_NOT_FOUND", "Service with ID 123 not found"),
        (409, "CATALOG_ENTRY_IN_USE", "Service 123 is referenced by 2 invoice line(s)"),
    ),
)
async def delete_service(
    service_id: int,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_admin),
):
    use_case = DeleteService(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyServiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(service_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
