"""User Domain Entity

Staff accounts that create orders and invoices. Authentication itself is
handled upstream; this table only anchors the created_by references.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, BigIntId, utc_now


class UserRole(str, Enum):
    """Staff roles"""
    ADMIN = "admin"
    RECEPTION = "reception"
    KITCHEN = "kitchen"
    STAFF = "staff"


class User(BaseModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    username: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Login name (unique)"
    )

    full_name: str = Field(
        sa_column=Column(String(100), nullable=False),
    )

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True, unique=True),
    )

    role: UserRole = Field(description="Staff role (admin, reception, kitchen, staff)")

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)
