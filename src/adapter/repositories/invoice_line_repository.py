"""SQLAlchemy Invoice Line Repository Implementation

Implements invoice line persistence using SQLAlchemy async session.
"""

from collections import defaultdict
from typing import Dict, Iterable, List
from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLine


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):
    """
    SQLAlchemy implementation of InvoiceLineRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_many(self, lines: List[InvoiceLine]) -> List[InvoiceLine]:
        """
        Persist several invoice lines in one flush

        Args:
            lines: InvoiceLine entities to persist

        Returns:
            Created lines with generated IDs
        """
        self.session.add_all(lines)
        await self.session.flush()
        for line in lines:
            await self.session.refresh(line)
        return lines

    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine items
        """
        statement = (
            select(InvoiceLine)
            .where(InvoiceLine.invoice_id == invoice_id)
            .order_by(InvoiceLine.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_invoice_ids(self, invoice_ids: Iterable[int]) -> Dict[int, List[InvoiceLine]]:
        ids = list(invoice_ids)
        if not ids:
            return {}

        statement = (
            select(InvoiceLine)
            .where(InvoiceLine.invoice_id.in_(ids))
            .order_by(InvoiceLine.booking_date.asc().nulls_first(), InvoiceLine.id.asc())
        )
        result = await self.session.execute(statement)

        grouped: Dict[int, List[InvoiceLine]] = defaultdict(list)
        for line in result.scalars().all():
            grouped[line.invoice_id].append(line)
        return dict(grouped)

    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        statement = delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        return result.rowcount

    async def count_by_menu_item(self, menu_item_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(InvoiceLine)
            .where(InvoiceLine.menu_item_id == menu_item_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def count_by_service(self, service_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(InvoiceLine)
            .where(InvoiceLine.service_id == service_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
