"""Reporting use cases"""
from .sales_report import SalesReport
from .gst_report import GstReport
from .kitchen_items_report import KitchenItemsReport
from .dashboard import DashboardSnapshot
from .aggregate_invoices import AggregateInvoices
from .export_aggregate import ExportAggregateReport
from .dtos import (
    ExportFormat,
    SalesReportDTO,
    GstReportDTO,
    KitchenItemsReportDTO,
    DashboardDTO,
    AggregateQueryDTO,
    AggregateReportDTO,
    ExportFileDTO,
)

__all__ = [
    "SalesReport",
    "GstReport",
    "KitchenItemsReport",
    "DashboardSnapshot",
    "AggregateInvoices",
    "ExportAggregateReport",
    "ExportFormat",
    "SalesReportDTO",
    "GstReportDTO",
    "KitchenItemsReportDTO",
    "DashboardDTO",
    "AggregateQueryDTO",
    "AggregateReportDTO",
    "ExportFileDTO",
]
