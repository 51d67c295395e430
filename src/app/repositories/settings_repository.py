"""Settings and Guest Repository Interfaces"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.guest import Guest
from src.domain.settings import ResortSettings


class SettingsRepository(ABC):

    @abstractmethod
    async def get(self) -> Optional[ResortSettings]:
        """Return the settings record (lowest id), or None when not configured"""
        pass

    @abstractmethod
    async def create(self, settings: ResortSettings) -> ResortSettings:
        pass

    @abstractmethod
    async def update(self, settings: ResortSettings) -> ResortSettings:
        pass


class GuestRepository(ABC):

    @abstractmethod
    async def get_by_id(self, guest_id: int) -> Optional[Guest]:
        pass

    @abstractmethod
    async def list(self, search: Optional[str] = None) -> List[Guest]:
        """
        List guests, newest first

        Args:
            search: Optional substring matched against name, mobile and room number
        """
        pass

    @abstractmethod
    async def create(self, guest: Guest) -> Guest:
        pass
