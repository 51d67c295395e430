"""SQLAlchemy Kitchen Order Repository Implementation"""

from typing import Dict, Iterable, Optional, List
from datetime import datetime
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.errors import ConstraintViolationError
from src.app.repositories.kitchen_order_repository import KitchenOrderRepository
from src.domain.base import utc_now
from src.domain.kitchen_order import KitchenOrder, OrderStatus, OrderType, OPEN_ORDER_STATUSES


class SqlAlchemyKitchenOrderRepository(KitchenOrderRepository):
    """
    SQLAlchemy implementation of KitchenOrderRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, order: KitchenOrder) -> KitchenOrder:
        self.session.add(order)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConstraintViolationError(str(e.orig)) from e
        await self.session.refresh(order)
        return order

    async def get_by_id(self, order_id: int, for_update: bool = False) -> Optional[KitchenOrder]:
        """
        Retrieve order by ID with optional row-level locking

        Args:
            order_id: Order ID
            for_update: If True, locks the row with SELECT FOR UPDATE
                (ignored by SQLite, which serializes writers instead)

        Returns:
            KitchenOrder if found, None otherwise
        """
        stmt = (
            select(KitchenOrder)
            .where(KitchenOrder.id == order_id)
            .execution_options(populate_existing=True)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_order_number(self, order_number: str) -> Optional[KitchenOrder]:
        stmt = select(KitchenOrder).where(KitchenOrder.order_number == order_number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        start_at: Optional[datetime] = None,
        end_at: Optional[datetime] = None,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[KitchenOrder]:
        stmt = select(KitchenOrder)

        if start_at:
            stmt = stmt.where(KitchenOrder.order_date >= start_at)
        if end_at:
            stmt = stmt.where(KitchenOrder.order_date <= end_at)
        if status:
            stmt = stmt.where(KitchenOrder.status == status)

        stmt = stmt.order_by(KitchenOrder.order_date.desc(), KitchenOrder.id.desc())
        stmt = stmt.limit(limit).offset(offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_open(self) -> List[KitchenOrder]:
        stmt = (
            select(KitchenOrder)
            .where(KitchenOrder.status.in_(OPEN_ORDER_STATUSES))
            .order_by(KitchenOrder.order_date.asc(), KitchenOrder.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, order: KitchenOrder) -> KitchenOrder:
        order.updated_at = utc_now()
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)
        return order

    async def claim_invoice(self, order_id: int, invoice_id: int) -> bool:
        """
        Set invoice_id only while it is still NULL

        Note:
            The unique constraint on kitchen_orders.invoice_id backs this up;
            a violation surfaces as ConstraintViolationError.
        """
        stmt = (
            update(KitchenOrder)
            .where(KitchenOrder.id == order_id)
            .where(KitchenOrder.invoice_id.is_(None))
            .values(invoice_id=invoice_id, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConstraintViolationError(str(e.orig)) from e
        return result.rowcount == 1

    async def list_for_range(self, start_at: datetime, end_at: datetime) -> List[KitchenOrder]:
        stmt = (
            select(KitchenOrder)
            .where(KitchenOrder.order_date >= start_at)
            .where(KitchenOrder.order_date <= end_at)
            .order_by(KitchenOrder.order_date.asc(), KitchenOrder.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def order_types_by_invoice_ids(self, invoice_ids: Iterable[int]) -> Dict[int, OrderType]:
        ids = list(invoice_ids)
        if not ids:
            return {}

        stmt = (
            select(KitchenOrder.invoice_id, KitchenOrder.order_type)
            .where(KitchenOrder.invoice_id.in_(ids))
        )
        result = await self.session.execute(stmt)
        return {invoice_id: OrderType(order_type) for invoice_id, order_type in result.all()}
