"""Kitchen Order Repository Interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, Optional, List
from src.domain.kitchen_order import KitchenOrder, OrderStatus, OrderType


class KitchenOrderRepository(ABC):
    """
    Repository interface for KitchenOrder persistence
    """

    @abstractmethod
    async def create(self, order: KitchenOrder) -> KitchenOrder:
        """
        Create a new kitchen order

        Raises:
            ConstraintViolationError: If a constraint (e.g. unique order_number) is violated
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int, for_update: bool = False) -> Optional[KitchenOrder]:
        """
        Retrieve order by ID

        Args:
            order_id: Order ID
            for_update: Lock the row until the transaction ends (where supported)

        Returns:
            KitchenOrder if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_order_number(self, order_number: str) -> Optional[KitchenOrder]:
        pass

    @abstractmethod
    async def list(
        self,
        start_at: Optional[datetime] = None,
        end_at: Optional[datetime] = None,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[KitchenOrder]:
        """List orders, newest first"""
        pass

    @abstractmethod
    async def list_open(self) -> List[KitchenOrder]:
        """Pending and processing orders, oldest first"""
        pass

    @abstractmethod
    async def update(self, order: KitchenOrder) -> KitchenOrder:
        pass

    @abstractmethod
    async def claim_invoice(self, order_id: int, invoice_id: int) -> bool:
        """
        Link an invoice to an order that has none yet

        Conditional write: only succeeds while the order's invoice_id is NULL.

        Args:
            order_id: Order ID
            invoice_id: Newly created invoice ID

        Returns:
            True if this call set the reference, False if another
            transaction already did
        """
        pass

    @abstractmethod
    async def list_for_range(self, start_at: datetime, end_at: datetime) -> List[KitchenOrder]:
        """All orders in a date range, oldest first (unpaginated)"""
        pass

    @abstractmethod
    async def order_types_by_invoice_ids(self, invoice_ids: Iterable[int]) -> Dict[int, OrderType]:
        """
        Order type of the kitchen order each invoice was converted from

        Returns:
            Mapping invoice_id -> OrderType; invoices not created from an
            order are absent
        """
        pass
