"""Guest register use cases"""

import logging
from typing import List, Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.settings_repository import GuestRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.guest import Guest
from .dtos import CreateGuestCommandDTO, GuestDTO, guest_to_dto

logger = logging.getLogger(__name__)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class ListGuests:

    def __init__(self, guest_repo: GuestRepository):
        self.guest_repo = guest_repo

    async def execute(self, search: Optional[str] = None) -> Result[List[GuestDTO]]:
        try:
            guests = await self.guest_repo.list(search=_blank_to_none(search))
            return Return.ok([guest_to_dto(guest) for guest in guests])
        except Exception as e:
            return Return.err(persistence_error("Failed to list guests", e))


class CreateGuest:
    """
    Use Case: Register a guest at the front desk

    Business Rules:
    1. Name is required
    2. Check-out may not precede check-in
    """

    def __init__(self, uow: UnitOfWork, guest_repo: GuestRepository):
        self.uow = uow
        self.guest_repo = guest_repo

    async def execute(self, command: CreateGuestCommandDTO) -> Result[GuestDTO]:
        name = command.name.strip()
        if not name:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "Guest name is required"))

        if (
            command.check_in_date
            and command.check_out_date
            and command.check_out_date < command.check_in_date
        ):
            return Return.err(
                error(ErrorCode.INVALID_REQUEST, "check_out_date must not be before check_in_date")
            )

        try:
            guest = await self.guest_repo.create(
                Guest(
                    name=name,
                    mobile=_blank_to_none(command.mobile),
                    email=_blank_to_none(command.email),
                    room_number=_blank_to_none(command.room_number),
                    check_in_date=command.check_in_date,
                    check_out_date=command.check_out_date,
                )
            )
            await self.uow.commit()

            logger.info(f"Guest {guest.id} registered (room {guest.room_number or '-'})")
            return Return.ok(guest_to_dto(guest))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to create guest", e))
