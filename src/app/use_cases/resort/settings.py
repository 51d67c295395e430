"""Resort settings use cases"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.settings import ResortSettings
from .dtos import SettingsDTO, UpdateSettingsCommandDTO, settings_to_dto

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS_FIELDS = (
    "resort_name",
    "resort_gstin",
    "kitchen_gstin",
    "resort_address",
    "resort_contact",
)


class GetSettings:

    def __init__(self, settings_repo: SettingsRepository):
        self.settings_repo = settings_repo

    async def execute(self) -> Result[SettingsDTO]:
        try:
            settings = await self.settings_repo.get()
        except Exception as e:
            return Return.err(persistence_error("Failed to load settings", e))

        if not settings:
            return Return.err(error(ErrorCode.SETTINGS_NOT_FOUND, "Settings not found"))

        return Return.ok(settings_to_dto(settings))


class UpdateSettings:
    """
    Use Case: Change the resort identity printed on documents

    Business Rules:
    1. Only supplied fields change
    2. Required identity fields may not be blanked
    3. The first update creates the record when none exists yet
    """

    def __init__(self, uow: UnitOfWork, settings_repo: SettingsRepository):
        self.uow = uow
        self.settings_repo = settings_repo

    async def execute(self, command: UpdateSettingsCommandDTO) -> Result[SettingsDTO]:
        changes = command.model_dump(exclude_unset=True)

        for field in REQUIRED_SETTINGS_FIELDS:
            if field in changes and not (changes[field] or "").strip():
                return Return.err(error(ErrorCode.INVALID_REQUEST, f"{field} must not be blank"))
            if field in changes:
                changes[field] = changes[field].strip()

        if "tax_rate" in changes and changes["tax_rate"] is None:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "tax_rate must not be null"))

        try:
            settings = await self.settings_repo.get()

            if settings is None:
                missing = [field for field in REQUIRED_SETTINGS_FIELDS if field not in changes]
                if missing:
                    return Return.err(
                        error(
                            ErrorCode.INVALID_REQUEST,
                            f"Settings are not configured yet; missing {', '.join(missing)}",
                        )
                    )
                settings = await self.settings_repo.create(ResortSettings(**changes))
            else:
                for field, value in changes.items():
                    setattr(settings, field, value)
                settings = await self.settings_repo.update(settings)

            await self.uow.commit()

            logger.info(f"Settings updated: {sorted(changes)}")
            return Return.ok(settings_to_dto(settings))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to update settings", e))
