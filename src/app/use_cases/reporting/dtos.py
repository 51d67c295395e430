"""Data Transfer Objects for Reporting Use Cases

Every numeric field defaults to zero so an empty range still yields a
complete document.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.billing.dtos import InvoiceDTO
from src.app.use_cases.line_items import LineItemDTO
from src.domain.invoice import InvoiceType, PaymentMethod, PaymentStatus
from src.domain.kitchen_order import OrderStatus, OrderType

ZERO = Decimal("0.00")

Date = date


class ExportFormat(str, Enum):
    JSON = "json"
    PDF = "pdf"
    XLSX = "xlsx"


class PeriodDTO(BaseModel):
    start_date: date
    end_date: date


class SalesSummaryDTO(BaseModel):
    invoice_count: int = 0
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total_amount: Decimal = ZERO


class SalesDayDTO(BaseModel):
    date: Date
    type: InvoiceType
    invoice_count: int = 0
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total_amount: Decimal = ZERO


class SalesReportDTO(BaseModel):
    """
    Sales report grouped by calendar day and invoice type

    summary equals the sum of the daily rows.
    """

    period: PeriodDTO
    summary: SalesSummaryDTO = Field(default_factory=SalesSummaryDTO)
    daily: List[SalesDayDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "period": {"start_date": "2024-03-01", "end_date": "2024-03-31"},
                "summary": {
                    "invoice_count": 1,
                    "subtotal": "980.00",
                    "tax_amount": "176.40",
                    "total_amount": "1156.40"
                },
                "daily": [
                    {
                        "date": "2024-03-05",
                        "type": "kitchen",
                        "invoice_count": 1,
                        "subtotal": "980.00",
                        "tax_amount": "176.40",
                        "total_amount": "1156.40"
                    }
                ]
            }
        }


class GstBucketDTO(BaseModel):
    gstin: Optional[str] = None
    invoice_count: int = 0
    taxable_amount: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total_amount: Decimal = ZERO


class GstReportDTO(BaseModel):
    period: PeriodDTO
    resort: GstBucketDTO = Field(default_factory=GstBucketDTO)
    kitchen: GstBucketDTO = Field(default_factory=GstBucketDTO)


class KitchenItemDTO(BaseModel):
    menu_item_id: Optional[int] = None
    name: str
    total_quantity: int = 0
    total_amount: Decimal = ZERO


class KitchenItemsReportDTO(BaseModel):
    period: PeriodDTO
    items: List[KitchenItemDTO] = Field(default_factory=list)


class CountTotalDTO(BaseModel):
    count: int = 0
    total: Decimal = ZERO


class DashboardPeriodDTO(BaseModel):
    start_date: date
    end_date: date
    resort: CountTotalDTO = Field(default_factory=CountTotalDTO)
    kitchen: CountTotalDTO = Field(default_factory=CountTotalDTO)
    total: Decimal = ZERO


class RecentInvoiceDTO(BaseModel):
    id: int
    invoice_number: str
    invoice_date: datetime
    guest_name: str
    type: InvoiceType
    total_amount: Decimal
    payment_status: PaymentStatus


class PendingOrderDTO(BaseModel):
    id: int
    order_number: str
    order_date: datetime
    guest_name: str
    room_number: Optional[str] = None
    total_amount: Decimal
    status: OrderStatus


class DashboardDTO(BaseModel):
    today: DashboardPeriodDTO
    month: DashboardPeriodDTO
    recent_invoices: List[RecentInvoiceDTO] = Field(default_factory=list)
    pending_orders: List[PendingOrderDTO] = Field(default_factory=list)


class AggregateQueryDTO(BaseModel):
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    guest_name: Optional[str] = None


class ResortInfoDTO(BaseModel):
    resort_name: str
    resort_address: str
    resort_contact: str
    resort_email: Optional[str] = None
    gstin: str


class AggregatedLineDTO(LineItemDTO):
    item_type: str = Field(..., description="menu_item, service or other")


class AggregatedInvoiceDTO(InvoiceDTO):
    lines: List[AggregatedLineDTO] = Field(default_factory=list)
    order_type: Optional[OrderType] = None


class AggregateSummaryDTO(BaseModel):
    total_invoices: int = 0
    total_subtotal: Decimal = ZERO
    total_tax: Decimal = ZERO
    total_amount: Decimal = ZERO
    payment_status_summary: Dict[str, int] = Field(
        default_factory=lambda: {status.value: 0 for status in PaymentStatus}
    )
    payment_method_summary: Dict[str, int] = Field(
        default_factory=lambda: {method.value: 0 for method in PaymentMethod}
    )
    order_type_summary: Optional[Dict[str, int]] = None


class AggregateReportDTO(BaseModel):
    """
    Aggregated resort or kitchen invoice listing for a date range

    Finished document handed to the PDF / spreadsheet exporters.
    """

    report_type: InvoiceType
    resort_info: Optional[ResortInfoDTO] = None
    date_range: PeriodDTO
    guest_filter: str = "All Guests"
    invoices: List[AggregatedInvoiceDTO] = Field(default_factory=list)
    summary: AggregateSummaryDTO = Field(default_factory=AggregateSummaryDTO)
    generated_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "report_type": "resort",
                "date_range": {"start_date": "2024-03-01", "end_date": "2024-03-31"},
                "guest_filter": "All Guests",
                "invoices": [],
                "summary": {
                    "total_invoices": 3,
                    "total_subtotal": "3000.00",
                    "total_tax": "540.00",
                    "total_amount": "3540.00",
                    "payment_status_summary": {"pending": 1, "paid": 2, "cancelled": 0},
                    "payment_method_summary": {"cash": 2, "card": 1, "upi": 0, "other": 0}
                },
                "generated_at": "2024-04-01T09:00:00"
            }
        }


class ExportFileDTO(BaseModel):
    filename: str
    media_type: str
    content: bytes
