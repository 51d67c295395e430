"""Calendar date ranges

Callers pass calendar dates. The start is inclusive from 00:00:00 and the end
is inclusive through 23:59:59.999999 of the end date.
"""

from datetime import date, datetime
from typing import Optional, Tuple


class InvalidDateRange(ValueError):
    pass


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.max.time())


def day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """
    Expand a pair of calendar dates to inclusive timestamps

    Raises:
        InvalidDateRange: If end is before start
    """
    if end < start:
        raise InvalidDateRange(f"end date {end} is before start date {start}")
    return start_of_day(start), end_of_day(end)


def optional_day_bounds(
    start: Optional[date], end: Optional[date]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Like day_bounds, but either side may be open"""
    if start and end and end < start:
        raise InvalidDateRange(f"end date {end} is before start date {start}")
    return (
        start_of_day(start) if start else None,
        end_of_day(end) if end else None,
    )


def required_day_bounds(start: Optional[date], end: Optional[date]) -> Tuple[datetime, datetime]:
    """Like day_bounds, but both dates must be supplied"""
    if start is None or end is None:
        raise InvalidDateRange("Start date and end date are required")
    return day_bounds(start, end)
