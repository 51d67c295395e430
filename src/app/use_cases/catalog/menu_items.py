"""Menu item catalog use cases"""

import logging
from typing import List, Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.catalog_repository import MenuItemRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.menu_item import MenuItem, CatalogType
from .dtos import (
    CreateMenuItemCommandDTO,
    MenuItemDTO,
    UpdateMenuItemCommandDTO,
    catalog_changes,
    menu_item_to_dto,
)

logger = logging.getLogger(__name__)


class ListMenuItems:

    def __init__(self, menu_item_repo: MenuItemRepository):
        self.menu_item_repo = menu_item_repo

    async def execute(
        self, item_type: Optional[CatalogType] = None, active_only: bool = False
    ) -> Result[List[MenuItemDTO]]:
        try:
            items = await self.menu_item_repo.list(item_type=item_type, active_only=active_only)
            return Return.ok([menu_item_to_dto(item) for item in items])
        except Exception as e:
            return Return.err(persistence_error("Failed to list menu items", e))


class CreateMenuItem:

    def __init__(self, uow: UnitOfWork, menu_item_repo: MenuItemRepository):
        self.uow = uow
        self.menu_item_repo = menu_item_repo

    async def execute(self, command: CreateMenuItemCommandDTO) -> Result[MenuItemDTO]:
        name = command.name.strip()
        if not name:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "Menu item name is required"))

        try:
            item = await self.menu_item_repo.create(
                MenuItem(
                    name=name,
                    description=command.description,
                    price=command.price,
                    tax_percentage=command.tax_percentage,
                    type=command.type,
                    is_active=command.is_active,
                )
            )
            await self.uow.commit()

            logger.info(f"Menu item {item.id} created: {item.name} ({item.type.value})")
            return Return.ok(menu_item_to_dto(item))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to create menu item", e))


class UpdateMenuItem:
    """
    Use Case: Change the pricing or availability of a menu item

    Lines already billed keep the values copied onto them; only new
    lines see the change.
    """

    def __init__(self, uow: UnitOfWork, menu_item_repo: MenuItemRepository):
        self.uow = uow
        self.menu_item_repo = menu_item_repo

    async def execute(self, item_id: int, command: UpdateMenuItemCommandDTO) -> Result[MenuItemDTO]:
        try:
            changes = catalog_changes(command)
        except ValueError as e:
            return Return.err(error(ErrorCode.INVALID_REQUEST, f"Menu item {e}"))

        try:
            item = await self.menu_item_repo.get_by_id(item_id)
            if not item:
                return Return.err(
                    error(ErrorCode.MENU_ITEM_NOT_FOUND, f"Menu item with ID {item_id} not found")
                )

            for field, value in changes.items():
                setattr(item, field, value)

            item = await self.menu_item_repo.update(item)
            await self.uow.commit()

            logger.info(f"Menu item {item_id} updated: {sorted(changes)}")
            return Return.ok(menu_item_to_dto(item))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to update menu item", e))


class DeleteMenuItem:
    """
    Use Case: Remove a menu item from the catalog

    Business Rules:
    1. Menu item must exist
    2. Refused while any invoice line still references it
    3. Kitchen order lines drawn from it are removed with it
    """

    def __init__(
        self,
        uow: UnitOfWork,
        menu_item_repo: MenuItemRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.menu_item_repo = menu_item_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, item_id: int) -> Result[None]:
        try:
            # Step 1: Load menu item
            item = await self.menu_item_repo.get_by_id(item_id)
            if not item:
                return Return.err(
                    error(ErrorCode.MENU_ITEM_NOT_FOUND, f"Menu item with ID {item_id} not found")
                )

            # Step 2: Refuse while billed
            usage = await self.invoice_line_repo.count_by_menu_item(item_id)
            if usage:
                return Return.err(
                    error(
                        ErrorCode.CATALOG_ENTRY_IN_USE,
                        f"Menu item {item_id} is referenced by {usage} invoice line(s)",
                    )
                )

            # Step 3: Delete and commit
            await self.menu_item_repo.delete(item)
            await self.uow.commit()

            logger.info(f"Menu item {item_id} deleted")
            return Return.ok()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to delete menu item", e))
