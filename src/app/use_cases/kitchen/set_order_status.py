"""SetKitchenOrderStatus Use Case"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import KitchenOrderDTO, SetOrderStatusCommandDTO, order_to_dto

logger = logging.getLogger(__name__)


class SetKitchenOrderStatus:
    """
    Use Case: Overwrite a kitchen order's status

    Business Rules:
    1. Order must exist
    2. Any declared status is accepted from any prior status
    """

    def __init__(self, uow: UnitOfWork, order_repo: KitchenOrderRepository):
        self.uow = uow
        self.order_repo = order_repo

    async def execute(self, order_id: int, command: SetOrderStatusCommandDTO) -> Result[KitchenOrderDTO]:
        try:
            # Step 1: Load order
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                return Return.err(
                    error(ErrorCode.ORDER_NOT_FOUND, f"Kitchen order with ID {order_id} not found")
                )

            # Step 2: Overwrite status
            previous = order.status
            order.status = command.status
            updated = await self.order_repo.update(order)

            # Step 3: Commit transaction
            await self.uow.commit()

            logger.info(f"Kitchen order {updated.order_number}: {previous.value} -> {updated.status.value}")
            return Return.ok(order_to_dto(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to update kitchen order status", e))
