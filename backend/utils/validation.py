"""
Input validation helpers shared by entities.
"""
import re
from typing import Optional
from urllib.parse import urlparse

from exceptions import InvalidAirbnbLinkError, InvalidUnitCodeError, ValidationError

UNIT_CODE_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9-]{0,19}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
AIRBNB_HOST_PATTERN = re.compile(r"^([a-z0-9-]+\.)?airbnb\.(com|[a-z]{2})(\.[a-z]{2})?$")
MAX_NAME_LENGTH = 100


def require_text(value, field: str) -> str:
    """Return the stripped string, rejecting None and blanks."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required and must be a non-empty string", field)
    return value.strip()


def normalize_unit_code(value) -> str:
    """
    Canonical apartment unit code: trimmed and upper-cased.

    Raises:
        InvalidUnitCodeError: If the code is empty or has unexpected characters
    """
    if not isinstance(value, str):
        raise InvalidUnitCodeError(str(value))
    code = value.strip().upper()
    if not UNIT_CODE_PATTERN.match(code):
        raise InvalidUnitCodeError(value)
    return code


def validate_name(value) -> str:
    name = require_text(value, "name")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name must be at most {MAX_NAME_LENGTH} characters", "name")
    return name


def validate_email(value: Optional[str]) -> Optional[str]:
    """Stripped email, or None for a blank value."""
    if value is None or not value.strip():
        return None
    email = value.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(f"Invalid email format: {email}", "email")
    return email


def validate_airbnb_link(value: Optional[str]) -> Optional[str]:
    """
    Accept http(s) URLs on an Airbnb host (airbnb.com, www.airbnb.com.br, ...).

    Raises:
        InvalidAirbnbLinkError: If the URL is malformed or points elsewhere
    """
    if value is None or not value.strip():
        return None
    link = value.strip()
    parsed = urlparse(link)
    host = (parsed.hostname or "").lower()
    if parsed.scheme not in ("http", "https") or not AIRBNB_HOST_PATTERN.match(host):
        raise InvalidAirbnbLinkError(link)
    return link
