"""
Utility functions for the booking service.

This module provides common utility functions used throughout
the application for date parsing and identifier validation.
"""

from .datetime_utils import (
    date_to_datetime,
    format_booking_date,
    parse_booking_date,
    parse_optional_date,
)
from .string_utils import (
    is_valid_party_id,
    validate_party_id,
)

__all__ = [
    # Datetime utilities
    "parse_booking_date",
    "parse_optional_date",
    "format_booking_date",
    "date_to_datetime",
    # String utilities
    "is_valid_party_id",
    "validate_party_id",
]
