"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List
from src.domain.invoice import Invoice, InvoiceType


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice headers for billing and reporting.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID

        Raises:
            ConstraintViolationError: If a constraint (e.g. unique invoice_number) is violated
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by invoice number

        Args:
            invoice_number: Unique invoice number

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        start_at: Optional[datetime] = None,
        end_at: Optional[datetime] = None,
        invoice_type: Optional[InvoiceType] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        List invoices, newest first

        Args:
            start_at: Inclusive lower bound on invoice_date
            end_at: Inclusive upper bound on invoice_date
            invoice_type: Optional filter by type
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def list_for_range(
        self,
        invoice_type: InvoiceType,
        start_at: datetime,
        end_at: datetime,
        guest_name: Optional[str] = None,
    ) -> List[Invoice]:
        """
        All invoices of one type in a date range, oldest first

        Args:
            invoice_type: Invoice type
            start_at: Inclusive lower bound on invoice_date
            end_at: Inclusive upper bound on invoice_date
            guest_name: Optional case-insensitive substring of guest_name

        Returns:
            List of invoices (unpaginated)
        """
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 5) -> List[Invoice]:
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """Delete the invoice header (lines must already be gone)"""
        pass
