"""Kitchen order use cases"""
from .create_order import CreateKitchenOrder
from .get_order import GetKitchenOrder
from .list_orders import ListKitchenOrders
from .set_order_status import SetKitchenOrderStatus
from .convert_order import ConvertOrderToInvoice
from .dtos import (
    CreateKitchenOrderCommandDTO,
    SetOrderStatusCommandDTO,
    ConvertOrderCommandDTO,
    ListKitchenOrdersQueryDTO,
    KitchenOrderDTO,
    ListKitchenOrdersResponseDTO,
)

__all__ = [
    "CreateKitchenOrder",
    "GetKitchenOrder",
    "ListKitchenOrders",
    "SetKitchenOrderStatus",
    "ConvertOrderToInvoice",
    "CreateKitchenOrderCommandDTO",
    "SetOrderStatusCommandDTO",
    "ConvertOrderCommandDTO",
    "ListKitchenOrdersQueryDTO",
    "KitchenOrderDTO",
    "ListKitchenOrdersResponseDTO",
]
