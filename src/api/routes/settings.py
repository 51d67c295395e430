"""Settings API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.auth import Principal, get_principal, require_admin
from src.api.error import ClientError, error_responses
from src.app.use_cases.resort import GetSettings, SettingsDTO, UpdateSettings, UpdateSettingsCommandDTO
from src.depends import get_session

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get(
    "",
    response_model=SettingsDTO,
    responses=error_responses((404, "SETTINGS_NOT_FOUND", "Settings not found")),
)
async def get_settings(
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    result = await GetSettings(SqlAlchemySettingsRepository(session)).execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "",
    response_model=SettingsDTO,
    responses=error_responses((400, "INVALID_REQUEST", "resort_gstin must not be blank")),
)
async def update_settings(
    command: UpdateSettingsCommandDTO,
    session: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_admin),
):
    """Update the resort identity and GST registrations. Logo upload is not supported."""
    use_case = UpdateSettings(SqlAlchemyUnitOfWork(session), SqlAlchemySettingsRepository(session))
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
