"""SQLAlchemy Kitchen Order Line Repository Implementation"""

from collections import defaultdict
from typing import Dict, Iterable, List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.kitchen_order_line_repository import KitchenOrderLineRepository
from src.domain.kitchen_order_line import KitchenOrderLine


class SqlAlchemyKitchenOrderLineRepository(KitchenOrderLineRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_many(self, lines: List[KitchenOrderLine]) -> List[KitchenOrderLine]:
        self.session.add_all(lines)
        await self.session.flush()
        for line in lines:
            await self.session.refresh(line)
        return lines

    async def get_by_order_id(self, order_id: int) -> List[KitchenOrderLine]:
        statement = (
            select(KitchenOrderLine)
            .where(KitchenOrderLine.order_id == order_id)
            .order_by(KitchenOrderLine.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_order_ids(self, order_ids: Iterable[int]) -> Dict[int, List[KitchenOrderLine]]:
        ids = list(order_ids)
        if not ids:
            return {}

        statement = (
            select(KitchenOrderLine)
            .where(KitchenOrderLine.order_id.in_(ids))
            .order_by(KitchenOrderLine.id)
        )
        result = await self.session.execute(statement)

        grouped: Dict[int, List[KitchenOrderLine]] = defaultdict(list)
        for line in result.scalars().all():
            grouped[line.order_id].append(line)
        return dict(grouped)
