"""
UserStatus Value Object
"""

from enum import Enum

from exceptions import ValidationError


class UserStatus(str, Enum):
    """Account state of a user."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"

    @classmethod
    def from_string(cls, value: str) -> "UserStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid user status: {value}", "status")
