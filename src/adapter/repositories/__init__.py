from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .kitchen_order_repository import SqlAlchemyKitchenOrderRepository
from .kitchen_order_line_repository import SqlAlchemyKitchenOrderLineRepository
from .catalog_repository import SqlAlchemyMenuItemRepository, SqlAlchemyServiceRepository
from .settings_repository import SqlAlchemySettingsRepository, SqlAlchemyGuestRepository
from .report_repository import SqlAlchemyReportRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyKitchenOrderRepository",
    "SqlAlchemyKitchenOrderLineRepository",
    "SqlAlchemyMenuItemRepository",
    "SqlAlchemyServiceRepository",
    "SqlAlchemySettingsRepository",
    "SqlAlchemyGuestRepository",
    "SqlAlchemyReportRepository",
]
