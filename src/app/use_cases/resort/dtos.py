"""Data Transfer Objects for Guest and Settings Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.guest import Guest
from src.domain.settings import ResortSettings


class CreateGuestCommandDTO(BaseModel):
    name: str = Field(..., max_length=100)
    mobile: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, max_length=100)
    room_number: Optional[str] = Field(default=None, max_length=20)
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "A. Guest",
                "mobile": "9800000000",
                "email": "guest@example.com",
                "room_number": "204",
                "check_in_date": "2024-03-04T12:00:00",
                "check_out_date": "2024-03-06T11:00:00"
            }
        }


class GuestDTO(BaseModel):
    id: int
    name: str
    mobile: Optional[str] = None
    email: Optional[str] = None
    room_number: Optional[str] = None
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    is_checked_out: bool
    created_at: datetime


class UpdateSettingsCommandDTO(BaseModel):
    """
    Settings fields to change; omitted fields keep their stored value

    When no settings record exists yet, resort_name, both GSTINs,
    resort_address and resort_contact must all be supplied.
    """

    resort_name: Optional[str] = Field(default=None, max_length=100)
    resort_gstin: Optional[str] = Field(default=None, max_length=20)
    kitchen_gstin: Optional[str] = Field(default=None, max_length=20)
    resort_address: Optional[str] = None
    resort_contact: Optional[str] = Field(default=None, max_length=100)
    resort_email: Optional[str] = Field(default=None, max_length=100)
    tax_rate: Optional[Decimal] = Field(
        default=None, ge=0, le=Decimal("999.99"), max_digits=5, decimal_places=2
    )


class SettingsDTO(BaseModel):
    id: int
    resort_name: str
    resort_gstin: str
    kitchen_gstin: str
    resort_address: str
    resort_contact: str
    resort_email: Optional[str] = None
    tax_rate: Decimal
    logo_path: Optional[str] = None
    updated_at: datetime


def guest_to_dto(guest: Guest) -> GuestDTO:
    return GuestDTO(
        id=guest.id,
        name=guest.name,
        mobile=guest.mobile,
        email=guest.email,
        room_number=guest.room_number,
        check_in_date=guest.check_in_date,
        check_out_date=guest.check_out_date,
        is_checked_out=guest.is_checked_out,
        created_at=guest.created_at,
    )


def settings_to_dto(settings: ResortSettings) -> SettingsDTO:
    return SettingsDTO(
        id=settings.id,
        resort_name=settings.resort_name,
        resort_gstin=settings.resort_gstin,
        kitchen_gstin=settings.kitchen_gstin,
        resort_address=settings.resort_address,
        resort_contact=settings.resort_contact,
        resort_email=settings.resort_email,
        tax_rate=settings.tax_rate,
        logo_path=settings.logo_path,
        updated_at=settings.updated_at,
    )
