from .base import BaseModel
from .user import User, UserRole
from .guest import Guest
from .menu_item import MenuItem, CatalogType
from .service import Service
from .invoice import Invoice, InvoiceType, PaymentStatus, PaymentMethod
from .invoice_line import InvoiceLine
from .kitchen_order import KitchenOrder, OrderType, OrderStatus
from .kitchen_order_line import KitchenOrderLine
from .settings import ResortSettings
from .pricing import FinancialTotals, LineItem, ReferenceKind, compute_totals

__all__ = [
    "BaseModel",
    "User",
    "UserRole",
    "Guest",
    "MenuItem",
    "CatalogType",
    "Service",
    "Invoice",
    "InvoiceType",
    "PaymentStatus",
    "PaymentMethod",
    "InvoiceLine",
    "KitchenOrder",
    "OrderType",
    "OrderStatus",
    "KitchenOrderLine",
    "ResortSettings",
    "FinancialTotals",
    "LineItem",
    "ReferenceKind",
    "compute_totals",
]
