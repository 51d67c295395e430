"""KitchenItemsReport Use Case"""

from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.report_repository import ReportRepository
from src.app.use_cases.date_range import InvalidDateRange, required_day_bounds
from .dtos import KitchenItemDTO, KitchenItemsReportDTO, PeriodDTO


class KitchenItemsReport:
    """
    Use Case: Dishes ordered in a range, most ordered first
    """

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(
        self, start_date: Optional[date], end_date: Optional[date]
    ) -> Result[KitchenItemsReportDTO]:
        try:
            start_at, end_at = required_day_bounds(start_date, end_date)
        except InvalidDateRange as e:
            return Return.err(error(ErrorCode.INVALID_DATE_RANGE, str(e)))

        try:
            rows = await self.report_repo.kitchen_items(start_at, end_at)
            return Return.ok(
                KitchenItemsReportDTO(
                    period=PeriodDTO(start_date=start_date, end_date=end_date),
                    items=[
                        KitchenItemDTO(
                            menu_item_id=row.menu_item_id,
                            name=row.item_name,
                            total_quantity=row.total_quantity,
                            total_amount=row.total_amount,
                        )
                        for row in rows
                    ],
                )
            )
        except Exception as e:
            return Return.err(persistence_error("Failed to generate kitchen items report", e))
