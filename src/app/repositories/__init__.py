from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .kitchen_order_repository import KitchenOrderRepository
from .kitchen_order_line_repository import KitchenOrderLineRepository
from .catalog_repository import MenuItemRepository, ServiceRepository
from .settings_repository import SettingsRepository, GuestRepository
from .report_repository import ReportRepository

__all__ = [
    "InvoiceRepository",
    "InvoiceLineRepository",
    "KitchenOrderRepository",
    "KitchenOrderLineRepository",
    "MenuItemRepository",
    "ServiceRepository",
    "SettingsRepository",
    "GuestRepository",
    "ReportRepository",
]
