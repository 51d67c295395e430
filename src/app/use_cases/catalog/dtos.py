"""Data Transfer Objects for Catalog Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.menu_item import MenuItem, CatalogType
from src.domain.service import Service


class CreateMenuItemCommandDTO(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    tax_percentage: Decimal = Field(default=Decimal("18.00"), ge=0, max_digits=5, decimal_places=2)
    type: CatalogType = Field(default=CatalogType.KITCHEN, description="kitchen or resort")
    is_active: bool = True

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Paneer Tikka",
                "price": "450.00",
                "tax_percentage": "18.00",
                "type": "kitchen"
            }
        }


class CreateServiceCommandDTO(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    tax_percentage: Decimal = Field(default=Decimal("18.00"), ge=0, max_digits=5, decimal_places=2)
    is_active: bool = True


class UpdateMenuItemCommandDTO(BaseModel):
    """Fields to change; omitted fields keep their stored value"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    tax_percentage: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    type: Optional[CatalogType] = None
    is_active: Optional[bool] = None

    class Config:
        json_schema_extra = {
            "example": {
                "price": "475.00",
                "is_active": False
            }
        }


class UpdateServiceCommandDTO(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    tax_percentage: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    is_active: Optional[bool] = None


class MenuItemDTO(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    tax_percentage: Decimal
    type: CatalogType
    is_active: bool
    created_at: datetime


class ServiceDTO(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    tax_percentage: Decimal
    is_active: bool
    created_at: datetime


def menu_item_to_dto(item: MenuItem) -> MenuItemDTO:
    return MenuItemDTO(
        id=item.id,
        name=item.name,
        description=item.description,
        price=item.price,
        tax_percentage=item.tax_percentage,
        type=item.type,
        is_active=item.is_active,
        created_at=item.created_at,
    )


def service_to_dto(service: Service) -> ServiceDTO:
    return ServiceDTO(
        id=service.id,
        name=service.name,
        description=service.description,
        price=service.price,
        tax_percentage=service.tax_percentage,
        is_active=service.is_active,
        created_at=service.created_at,
    )


# Columns that may be cleared by sending null
NULLABLE_CATALOG_FIELDS = {"description"}


def catalog_changes(command: BaseModel) -> dict:
    """
    Explicitly supplied fields of an update command

    Raises:
        ValueError: If a required column is sent as null or a name is blank
    """
    changes = command.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field not in NULLABLE_CATALOG_FIELDS:
            raise ValueError(f"{field} must not be null")
    if "name" in changes:
        changes["name"] = changes["name"].strip()
        if not changes["name"]:
            raise ValueError("name must not be blank")
    return changes
