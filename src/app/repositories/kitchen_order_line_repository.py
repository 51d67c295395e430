"""Kitchen Order Line Repository Interface"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List
from src.domain.kitchen_order_line import KitchenOrderLine


class KitchenOrderLineRepository(ABC):

    @abstractmethod
    async def create_many(self, lines: List[KitchenOrderLine]) -> List[KitchenOrderLine]:
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: int) -> List[KitchenOrderLine]:
        """Lines of an order, ordered by id"""
        pass

    @abstractmethod
    async def get_by_order_ids(self, order_ids: Iterable[int]) -> Dict[int, List[KitchenOrderLine]]:
        """Lines of many orders in one query, keyed by order id"""
        pass
