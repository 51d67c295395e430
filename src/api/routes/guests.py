"""Guest API Routes

Front desk guest register used to address invoices and e-mails.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.settings_repository import SqlAlchemyGuestRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.auth import Principal, get_principal, require_reception
from src.api.error import ClientError, error_responses
from src.app.use_cases.resort import CreateGuest, CreateGuestCommandDTO, GuestDTO, ListGuests
from src.depends import get_session

router = APIRouter(prefix="/guests", tags=["Guests"])


@router.get("", response_model=List[GuestDTO])
async def list_guests(
    search: Optional[str] = Query(default=None, description="Matches name, mobile or room number"),
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    result = await ListGuests(SqlAlchemyGuestRepository(session)).execute(search)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "",
    response_model=GuestDTO,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses((400, "INVALID_REQUEST", "Guest name is required")),
)
async def create_guest(
    command: CreateGuestCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_reception),
):
    use_case = CreateGuest(SqlAlchemyUnitOfWork(session), SqlAlchemyGuestRepository(session))
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
