"""Guest register and resort settings use cases"""
from .guests import ListGuests, CreateGuest
from .settings import GetSettings, UpdateSettings
from .dtos import CreateGuestCommandDTO, GuestDTO, SettingsDTO, UpdateSettingsCommandDTO

__all__ = [
    "ListGuests",
    "CreateGuest",
    "GetSettings",
    "UpdateSettings",
    "CreateGuestCommandDTO",
    "GuestDTO",
    "SettingsDTO",
    "UpdateSettingsCommandDTO",
]
