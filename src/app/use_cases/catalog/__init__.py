"""Catalog use cases"""
from .menu_items import ListMenuItems, CreateMenuItem, UpdateMenuItem, DeleteMenuItem
from .services import ListServices, CreateService, UpdateService, DeleteService
from .dtos import (
    CreateMenuItemCommandDTO,
    CreateServiceCommandDTO,
    MenuItemDTO,
    ServiceDTO,
    UpdateMenuItemCommandDTO,
    UpdateServiceCommandDTO,
)

__all__ = [
    "ListMenuItems",
    "CreateMenuItem",
    "UpdateMenuItem",
    "DeleteMenuItem",
    "ListServices",
    "CreateService",
    "UpdateService",
    "DeleteService",
    "CreateMenuItemCommandDTO",
    "CreateServiceCommandDTO",
    "UpdateMenuItemCommandDTO",
    "UpdateServiceCommandDTO",
    "MenuItemDTO",
    "ServiceDTO",
]
