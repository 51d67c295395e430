"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.errors import ConstraintViolationError
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.invoice import Invoice, InvoiceType


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConstraintViolationError(str(e.orig)) from e
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.invoice_number == invoice_number)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        start_at: Optional[datetime] = None,
        end_at: Optional[datetime] = None,
        invoice_type: Optional[InvoiceType] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Invoice]:
        statement = select(Invoice)

        if start_at:
            statement = statement.where(Invoice.invoice_date >= start_at)
        if end_at:
            statement = statement.where(Invoice.invoice_date <= end_at)
        if invoice_type:
            statement = statement.where(Invoice.type == invoice_type)

        statement = statement.order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_for_range(
        self,
        invoice_type: InvoiceType,
        start_at: datetime,
        end_at: datetime,
        guest_name: Optional[str] = None,
    ) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.type == invoice_type)
            .where(Invoice.invoice_date >= start_at)
            .where(Invoice.invoice_date <= end_at)
        )
        if guest_name:
            statement = statement.where(Invoice.guest_name.icontains(guest_name, autoescape=True))

        statement = statement.order_by(Invoice.invoice_date.asc(), Invoice.id.asc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_recent(self, limit: int = 5) -> List[Invoice]:
        statement = (
            select(Invoice)
            .order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()
