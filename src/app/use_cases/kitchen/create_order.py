"""CreateKitchenOrder Use Case

Places a kitchen order: header plus one row per dish, written atomically.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.catalog_repository import MenuItemRepository
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.repositories.kitchen_order_line_repository import KitchenOrderLineRepository
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.line_items import UnknownCatalogReference, resolve_line_items
from src.app.use_cases.numbering import NumberAllocationExhausted, write_with_unique_number
from src.domain.base import utc_now
from src.domain.identifiers import KITCHEN_ORDER_PREFIX
from src.domain.kitchen_order import KitchenOrder, OrderStatus
from src.domain.kitchen_order_line import KitchenOrderLine
from src.domain.pricing import InvalidLineItem, compute_totals
from .dtos import CreateKitchenOrderCommandDTO, KitchenOrderDTO, order_to_dto

logger = logging.getLogger(__name__)


class CreateKitchenOrder:
    """
    Use Case: Create a kitchen order

    Business Rules:
    1. Guest name must not be blank and at least one line is required
    2. Lines may reference menu items only; omitted name/rate/tax come from the menu
    3. Totals come from the pricing rules, never from the caller
    4. Order number is KO + YYYYMMDD + 4 random digits, regenerated on collision
    5. Order starts in status=pending with no invoice

    Flow:
    1. Validate header
    2. Resolve and validate lines against the menu
    3. Compute totals
    4. Insert header and lines (retrying on number collision)
    5. Commit transaction
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: KitchenOrderRepository,
        order_line_repo: KitchenOrderLineRepository,
        menu_item_repo: MenuItemRepository,
        max_attempts: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.order_line_repo = order_line_repo
        self.menu_item_repo = menu_item_repo
        self.max_attempts = max_attempts
        self.clock = clock

    async def execute(
        self, command: CreateKitchenOrderCommandDTO, created_by: Optional[int] = None
    ) -> Result[KitchenOrderDTO]:
        """
        Execute kitchen order creation

        Args:
            command: CreateKitchenOrderCommandDTO with guest info and lines
            created_by: ID of the user placing the order

        Returns:
            Result[KitchenOrderDTO]: Created order with lines, or error
        """
        # Step 1: Validate header
        guest_name = (command.guest_name or "").strip()
        if not guest_name:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "Guest name is required"))

        if not command.lines:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "At least one line item is required"))

        try:
            # Step 2: Resolve lines
            try:
                items = await resolve_line_items(command.lines, self.menu_item_repo)
            except InvalidLineItem as e:
                return Return.err(error(ErrorCode.INVALID_LINE_ITEM, str(e)))
            except UnknownCatalogReference as e:
                return Return.err(error(ErrorCode.UNKNOWN_CATALOG_REFERENCE, str(e)))

            # Step 3: Compute totals
            totals = compute_totals(items)
            now = self.clock()

            # Step 4: Insert header and lines
            async def write(order_number: str):
                order = KitchenOrder(
                    order_number=order_number,
                    order_date=now,
                    guest_id=command.guest_id,
                    room_number=command.room_number,
                    guest_name=guest_name,
                    order_type=command.order_type,
                    status=OrderStatus.PENDING,
                    subtotal=totals.subtotal,
                    tax_amount=totals.tax_amount,
                    total_amount=totals.total_amount,
                    created_by=created_by,
                    created_at=now,
                    updated_at=now,
                )
                created_order = await self.order_repo.create(order)

                lines = [
                    KitchenOrderLine(
                        order_id=created_order.id,
                        menu_item_id=item.reference_id,
                        item_name=item.name,
                        quantity=item.quantity,
                        rate=item.rate,
                        tax_percentage=item.tax_percentage,
                        tax_amount=item.rounded_tax_amount,
                        line_total=item.rounded_total,
                        created_at=now,
                    )
                    for item in items
                ]
                created_lines = await self.order_line_repo.create_many(lines)
                return created_order, created_lines

            order, lines = await write_with_unique_number(
                self.uow,
                KITCHEN_ORDER_PREFIX,
                now,
                write,
                self._number_taken,
                self.max_attempts,
            )

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Kitchen order {order.order_number} created: "
                f"{len(lines)} lines, total={order.total_amount}"
            )

            # Step 6: Build response
            return Return.ok(order_to_dto(order, lines))

        except NumberAllocationExhausted as e:
            await self.uow.rollback()
            logger.error(str(e))
            return Return.err(
                error(
                    ErrorCode.NUMBER_GENERATION_EXHAUSTED,
                    "Could not allocate a unique order number, please retry",
                    reason=str(e),
                )
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Kitchen order creation failed: {e}")
            return Return.err(persistence_error("Failed to create kitchen order", e))

    async def _number_taken(self, order_number: str) -> bool:
        return await self.order_repo.get_by_order_number(order_number) is not None
