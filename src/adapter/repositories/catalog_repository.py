"""SQLAlchemy Catalog Repository Implementations"""

from typing import Dict, Iterable, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.catalog_repository import MenuItemRepository, ServiceRepository
from src.domain.base import utc_now
from src.domain.menu_item import MenuItem, CatalogType
from src.domain.service import Service


class SqlAlchemyMenuItemRepository(MenuItemRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, item: MenuItem) -> MenuItem:
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def get_by_id(self, item_id: int) -> Optional[MenuItem]:
        statement = select(MenuItem).where(MenuItem.id == item_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, item_ids: Iterable[int]) -> Dict[int, MenuItem]:
        ids = set(item_ids)
        if not ids:
            return {}
        statement = select(MenuItem).where(MenuItem.id.in_(ids))
        result = await self.session.execute(statement)
        return {item.id: item for item in result.scalars().all()}

    async def list(
        self, item_type: Optional[CatalogType] = None, active_only: bool = False
    ) -> List[MenuItem]:
        statement = select(MenuItem)
        if item_type:
            statement = statement.where(MenuItem.type == item_type)
        if active_only:
            statement = statement.where(MenuItem.is_active == True)  # noqa: E712
        statement = statement.order_by(MenuItem.name, MenuItem.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, item: MenuItem) -> MenuItem:
        item.updated_at = utc_now()
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def delete(self, item: MenuItem) -> None:
        await self.session.delete(item)
        await self.session.flush()


class SqlAlchemyServiceRepository(ServiceRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, service: Service) -> Service:
        self.session.add(service)
        await self.session.flush()
        await self.session.refresh(service)
        return service

    async def get_by_id(self, service_id: int) -> Optional[Service]:
        statement = select(Service).where(Service.id == service_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, service_ids: Iterable[int]) -> Dict[int, Service]:
        ids = set(service_ids)
        if not ids:
            return {}
        statement = select(Service).where(Service.id.in_(ids))
        result = await self.session.execute(statement)
        return {service.id: service for service in result.scalars().all()}

    async def list(self, active_only: bool = False) -> List[Service]:
        statement = select(Service)
        if active_only:
            statement = statement.where(Service.is_active == True)  # noqa: E712
        statement = statement.order_by(Service.name, Service.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, service: Service) -> Service:
        service.updated_at = utc_now()
        self.session.add(service)
        await self.session.flush()
        await self.session.refresh(service)
        return service

    async def delete(self, service: Service) -> None:
        await self.session.delete(service)
        await self.session.flush()
