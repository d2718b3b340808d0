"""
Date and time utility functions for the booking service.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from ...domain.errors import InvalidDateError

BOOKING_DATE_FORMAT = "%Y-%m-%d"


def parse_booking_date(value: Any) -> date:
    """Parse a YYYY-MM-DD booking date into a calendar date.

    Accepts ``date``/``datetime`` instances unchanged (datetimes are truncated
    to their date part). Anything else must be a zero-padded ISO date string.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value.strip()) != 10:
        raise InvalidDateError(value)
    try:
        return datetime.strptime(value.strip(), BOOKING_DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateError(value)


def parse_optional_date(value: Any) -> Optional[date]:
    """Parse a possibly-missing date bound."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_booking_date(value)


def format_booking_date(day: date) -> str:
    """Render a calendar date in the stored YYYY-MM-DD form."""
    return day.strftime(BOOKING_DATE_FORMAT)


def date_to_datetime(day: date) -> datetime:
    """Midnight UTC of a calendar date (MongoDB stores datetimes, not dates)."""
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
