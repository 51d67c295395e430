"""ListKitchenOrders Use Case"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.app.use_cases.date_range import InvalidDateRange, optional_day_bounds
from .dtos import ListKitchenOrdersQueryDTO, ListKitchenOrdersResponseDTO, order_to_dto


class ListKitchenOrders:
    """
    Use Case: List kitchen orders, newest first

    Optional filters: calendar date range on order_date, status.
    """

    def __init__(self, order_repo: KitchenOrderRepository):
        self.order_repo = order_repo

    async def execute(self, query: ListKitchenOrdersQueryDTO) -> Result[ListKitchenOrdersResponseDTO]:
        try:
            start_at, end_at = optional_day_bounds(query.start_date, query.end_date)
        except InvalidDateRange as e:
            return Return.err(error(ErrorCode.INVALID_DATE_RANGE, str(e)))

        try:
            orders = await self.order_repo.list(
                start_at=start_at,
                end_at=end_at,
                status=query.status,
                limit=query.limit,
                offset=query.offset,
            )
            return Return.ok(
                ListKitchenOrdersResponseDTO(
                    orders=[order_to_dto(order) for order in orders],
                    limit=query.limit,
                    offset=query.offset,
                )
            )
        except Exception as e:
            return Return.err(persistence_error("Failed to list kitchen orders", e))
