"""Invoice Line Repository Interface

Defines the contract for invoice line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List
from src.domain.invoice_line import InvoiceLine


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLine persistence

    Provides access to invoice line items.
    """

    @abstractmethod
    async def create_many(self, lines: List[InvoiceLine]) -> List[InvoiceLine]:
        """
        Persist several lines of one invoice

        Args:
            lines: InvoiceLine entities (invoice_id already set)

        Returns:
            Created lines with generated IDs
        """
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine entities ordered by id
        """
        pass

    @abstractmethod
    async def get_by_invoice_ids(self, invoice_ids: Iterable[int]) -> Dict[int, List[InvoiceLine]]:
        """
        Retrieve the lines of many invoices in one query

        Args:
            invoice_ids: Invoice IDs

        Returns:
            Mapping invoice_id -> lines ordered by booking_date then id;
            invoices without lines are absent from the mapping
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        """Delete every line of an invoice, returning the number removed"""
        pass

    @abstractmethod
    async def count_by_menu_item(self, menu_item_id: int) -> int:
        pass

    @abstractmethod
    async def count_by_service(self, service_id: int) -> int:
        pass
