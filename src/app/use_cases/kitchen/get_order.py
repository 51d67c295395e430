"""GetKitchenOrder Use Case"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.repositories.kitchen_order_line_repository import KitchenOrderLineRepository
from .dtos import KitchenOrderDTO, order_to_dto


class GetKitchenOrder:
    """
    Use Case: Read one kitchen order with its lines
    """

    def __init__(
        self,
        order_repo: KitchenOrderRepository,
        order_line_repo: KitchenOrderLineRepository,
    ):
        self.order_repo = order_repo
        self.order_line_repo = order_line_repo

    async def execute(self, order_id: int) -> Result[KitchenOrderDTO]:
        try:
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                return Return.err(
                    error(ErrorCode.ORDER_NOT_FOUND, f"Kitchen order with ID {order_id} not found")
                )

            lines = await self.order_line_repo.get_by_order_id(order_id)
            return Return.ok(order_to_dto(order, lines))

        except Exception as e:
            return Return.err(persistence_error("Failed to load kitchen order", e))
