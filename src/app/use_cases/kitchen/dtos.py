"""Data Transfer Objects for Kitchen Order Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.line_items import LineItemInputDTO, LineItemDTO
from src.domain.invoice import PaymentMethod, PaymentStatus
from src.domain.kitchen_order import KitchenOrder, OrderStatus, OrderType
from src.domain.kitchen_order_line import KitchenOrderLine


class CreateKitchenOrderCommandDTO(BaseModel):
    """
    Command DTO for placing a kitchen order

    Used as input to CreateKitchenOrder use case.
    """

    guest_name: Optional[str] = Field(
        default=None,
        description="Guest name (required, must not be blank)"
    )

    guest_id: Optional[int] = Field(default=None, description="Registered guest, if any")

    room_number: Optional[str] = Field(default=None, description="Room to deliver to")

    order_type: OrderType = Field(default=OrderType.ROOM, description="room or walk_in")

    lines: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Ordered dishes (at least one)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "guest_name": "A. Guest",
                "room_number": "204",
                "order_type": "room",
                "lines": [
                    {"menu_item_id": 3, "quantity": 2, "rate": "450.00", "tax_percentage": "18"},
                    {"menu_item_id": 7, "quantity": 1, "rate": "80.00", "tax_percentage": "18"}
                ]
            }
        }


class SetOrderStatusCommandDTO(BaseModel):
    status: OrderStatus = Field(..., description="New status (any declared value)")


class ConvertOrderCommandDTO(BaseModel):
    """
    Command DTO for billing a kitchen order

    Used as input to ConvertOrderToInvoice use case.
    """

    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)

    payment_method: PaymentMethod = Field(default=PaymentMethod.CASH)

    notes: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "payment_status": "paid",
                "payment_method": "upi"
            }
        }


class ListKitchenOrdersQueryDTO(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[OrderStatus] = None
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class KitchenOrderDTO(BaseModel):
    """Kitchen order header, with lines when read individually"""

    id: int
    order_number: str
    order_date: datetime
    guest_id: Optional[int] = None
    room_number: Optional[str] = None
    guest_name: str
    order_type: OrderType
    status: OrderStatus
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    invoice_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    lines: List[LineItemDTO] = Field(default_factory=list)


class ListKitchenOrdersResponseDTO(BaseModel):
    orders: List[KitchenOrderDTO]
    limit: int
    offset: int


def order_line_to_dto(line: KitchenOrderLine) -> LineItemDTO:
    return LineItemDTO(
        id=line.id,
        menu_item_id=line.menu_item_id,
        item_name=line.item_name,
        quantity=line.quantity,
        rate=line.rate,
        tax_percentage=line.tax_percentage,
        tax_amount=line.tax_amount,
        line_total=line.line_total,
    )


def order_to_dto(order: KitchenOrder, lines: Optional[List[KitchenOrderLine]] = None) -> KitchenOrderDTO:
    return KitchenOrderDTO(
        id=order.id,
        order_number=order.order_number,
        order_date=order.order_date,
        guest_id=order.guest_id,
        room_number=order.room_number,
        guest_name=order.guest_name,
        order_type=order.order_type,
        status=order.status,
        subtotal=order.subtotal,
        tax_amount=order.tax_amount,
        total_amount=order.total_amount,
        invoice_id=order.invoice_id,
        created_by=order.created_by,
        created_at=order.created_at,
        updated_at=order.updated_at,
        lines=[order_line_to_dto(line) for line in lines or []],
    )
