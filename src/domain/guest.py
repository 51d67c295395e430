"""Guest Domain Entity"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, BigIntId, utc_now


class Guest(BaseModel, table=True):
    __tablename__ = "guests"
    __table_args__ = (
        Index('ix_guests_name', 'name'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    name: str = Field(sa_column=Column(String(100), nullable=False))

    mobile: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))

    email: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    room_number: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))

    check_in_date: Optional[datetime] = Field(default=None)

    check_out_date: Optional[datetime] = Field(default=None)

    is_checked_out: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)
