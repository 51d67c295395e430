"""SQLAlchemy Settings and Guest Repository Implementations"""

from typing import List, Optional
from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.settings_repository import SettingsRepository, GuestRepository
from src.domain.base import utc_now
from src.domain.guest import Guest
from src.domain.settings import ResortSettings


class SqlAlchemySettingsRepository(SettingsRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self) -> Optional[ResortSettings]:
        statement = select(ResortSettings).order_by(ResortSettings.id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, settings: ResortSettings) -> ResortSettings:
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings

    async def update(self, settings: ResortSettings) -> ResortSettings:
        settings.updated_at = utc_now()
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings


class SqlAlchemyGuestRepository(GuestRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, guest_id: int) -> Optional[Guest]:
        statement = select(Guest).where(Guest.id == guest_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(self, search: Optional[str] = None) -> List[Guest]:
        statement = select(Guest)
        if search:
            pattern = f"%{search}%"
            statement = statement.where(
                or_(
                    Guest.name.like(pattern),
                    Guest.mobile.like(pattern),
                    Guest.room_number.like(pattern),
                )
            )
        statement = statement.order_by(Guest.created_at.desc(), Guest.id.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, guest: Guest) -> Guest:
        self.session.add(guest)
        await self.session.flush()
        await self.session.refresh(guest)
        return guest
