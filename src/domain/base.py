"""Shared base for SQLModel table entities"""

from datetime import datetime, timezone
from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
BigIntId = BigInteger().with_variant(Integer, "sqlite")

# Column precisions for money and tax rates
MONEY_PRECISION = (12, 2)
PERCENT_PRECISION = (5, 2)


def utc_now() -> datetime:
    """Current time in UTC, without tzinfo (timestamp columns hold naive UTC)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""
