"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.line_items import LineItemInputDTO, LineItemDTO
from src.domain.invoice import Invoice, InvoiceType, PaymentMethod, PaymentStatus
from src.domain.invoice_line import InvoiceLine


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice directly from line items

    Used as input to CreateInvoice use case.
    """

    guest_name: Optional[str] = Field(
        default=None,
        description="Guest name (required, must not be blank)"
    )

    guest_id: Optional[int] = Field(default=None, description="Registered guest, if any")

    guest_mobile: Optional[str] = Field(default=None)

    room_number: Optional[str] = Field(default=None)

    type: InvoiceType = Field(default=InvoiceType.RESORT, description="resort or kitchen")

    lines: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Billed items and services (at least one)"
    )

    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)

    payment_method: PaymentMethod = Field(default=PaymentMethod.CASH)

    notes: Optional[str] = Field(default=None)

    booking_date: Optional[date] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "guest_name": "A. Guest",
                "guest_mobile": "9800000000",
                "room_number": "204",
                "type": "resort",
                "lines": [
                    {"service_id": 2, "quantity": 1, "booking_date": "2024-03-05"},
                    {"name": "Extra bed", "quantity": 2, "rate": "500.00", "tax_percentage": "12"}
                ],
                "payment_status": "pending",
                "payment_method": "card"
            }
        }


class SetInvoicePaymentCommandDTO(BaseModel):
    payment_status: PaymentStatus = Field(..., description="New payment status")
    payment_method: PaymentMethod = Field(..., description="New payment method")


class ListInvoicesQueryDTO(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[InvoiceType] = None
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class InvoiceDTO(BaseModel):
    """Invoice header, with lines when read individually"""

    id: int
    invoice_number: str
    invoice_date: datetime
    type: InvoiceType
    guest_id: Optional[int] = None
    guest_name: str
    guest_mobile: Optional[str] = None
    room_number: Optional[str] = None
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    notes: Optional[str] = None
    booking_date: Optional[date] = None
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    lines: List[LineItemDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_number": "KT202403050042",
                "invoice_date": "2024-03-05T10:00:00",
                "type": "kitchen",
                "guest_name": "A. Guest",
                "room_number": "204",
                "subtotal": "980.00",
                "tax_amount": "176.40",
                "total_amount": "1156.40",
                "payment_status": "paid",
                "payment_method": "upi",
                "created_at": "2024-03-05T10:00:00",
                "updated_at": "2024-03-05T10:00:00",
                "lines": []
            }
        }


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceDTO]
    limit: int
    offset: int


class InvoicePdfDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    filename: str
    content: bytes


class EmailInvoiceResponseDTO(BaseModel):
    invoice_id: int
    recipient: str
    message: str


class TotalsDiscrepancyDTO(BaseModel):
    """A header whose stored totals differ from its lines"""

    document: str = Field(..., description="invoice or kitchen_order")
    document_id: int
    number: str
    stored_subtotal: Decimal
    stored_tax_amount: Decimal
    stored_total_amount: Decimal
    computed_subtotal: Decimal
    computed_tax_amount: Decimal
    computed_total_amount: Decimal


class ReconciliationResultDTO(BaseModel):
    start_date: date
    end_date: date
    invoices_checked: int
    orders_checked: int
    discrepancies_found: int
    discrepancies: List[TotalsDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int


def invoice_line_to_dto(line: InvoiceLine) -> LineItemDTO:
    return LineItemDTO(
        id=line.id,
        menu_item_id=line.menu_item_id,
        service_id=line.service_id,
        item_name=line.item_name,
        quantity=line.quantity,
        rate=line.rate,
        tax_percentage=line.tax_percentage,
        tax_amount=line.tax_amount,
        line_total=line.line_total,
        booking_date=line.booking_date,
    )


def invoice_to_dto(invoice: Invoice, lines: Optional[List[InvoiceLine]] = None) -> InvoiceDTO:
    return InvoiceDTO(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        type=invoice.type,
        guest_id=invoice.guest_id,
        guest_name=invoice.guest_name,
        guest_mobile=invoice.guest_mobile,
        room_number=invoice.room_number,
        subtotal=invoice.subtotal,
        tax_amount=invoice.tax_amount,
        total_amount=invoice.total_amount,
        payment_status=invoice.payment_status,
        payment_method=invoice.payment_method,
        notes=invoice.notes,
        booking_date=invoice.booking_date,
        created_by=invoice.created_by,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
        lines=[invoice_line_to_dto(line) for line in lines or []],
    )
