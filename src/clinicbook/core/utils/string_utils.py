"""
String utility functions for the booking service.
"""

import re

from ...domain.errors import InvalidIdentifierError

_PARTY_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,100}$")


def is_valid_party_id(value: str) -> bool:
    """Doctor/patient ids: 1-100 chars, alphanumeric, hyphen or underscore."""
    return isinstance(value, str) and bool(_PARTY_ID_PATTERN.match(value))


def validate_party_id(field: str, value: str) -> str:
    """Return the stripped id or raise InvalidIdentifierError."""
    cleaned = value.strip() if isinstance(value, str) else value
    if not is_valid_party_id(cleaned):
        raise InvalidIdentifierError(field, value)
    return cleaned

