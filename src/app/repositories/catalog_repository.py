"""Catalog Repository Interfaces

Menu items and services are the two catalogs lines may be drawn from.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from src.domain.menu_item import MenuItem, CatalogType
from src.domain.service import Service


class MenuItemRepository(ABC):

    @abstractmethod
    async def create(self, item: MenuItem) -> MenuItem:
        pass

    @abstractmethod
    async def get_by_id(self, item_id: int) -> Optional[MenuItem]:
        pass

    @abstractmethod
    async def get_by_ids(self, item_ids: Iterable[int]) -> Dict[int, MenuItem]:
        """
        Retrieve several menu items in one query

        Returns:
            Mapping id -> MenuItem; unknown ids are absent
        """
        pass

    @abstractmethod
    async def list(
        self, item_type: Optional[CatalogType] = None, active_only: bool = False
    ) -> List[MenuItem]:
        pass

    @abstractmethod
    async def update(self, item: MenuItem) -> MenuItem:
        pass

    @abstractmethod
    async def delete(self, item: MenuItem) -> None:
        pass


class ServiceRepository(ABC):

    @abstractmethod
    async def create(self, service: Service) -> Service:
        pass

    @abstractmethod
    async def get_by_id(self, service_id: int) -> Optional[Service]:
        pass

    @abstractmethod
    async def get_by_ids(self, service_ids: Iterable[int]) -> Dict[int, Service]:
        pass

    @abstractmethod
    async def list(self, active_only: bool = False) -> List[Service]:
        pass

    @abstractmethod
    async def update(self, service: Service) -> Service:
        pass

    @abstractmethod
    async def delete(self, service: Service) -> None:
        pass
