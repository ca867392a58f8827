"""
UserRole Value Object

Role a user holds towards an apartment.
"""

from enum import Enum

from exceptions import ValidationError


class UserRole(str, Enum):
    """
    Role on a user-apartment relation.

    Tenant roles live in the apartment; staff roles (ADMIN, OPS) manage it.
    """

    PRIMARY_TENANT = "primary_tenant"
    SECONDARY_TENANT = "secondary_tenant"
    EMERGENCY_CONTACT = "emergency_contact"
    ADMIN = "admin"
    OPS = "ops"

    @property
    def is_tenant(self) -> bool:
        return self in {UserRole.PRIMARY_TENANT, UserRole.SECONDARY_TENANT}

    @property
    def is_staff(self) -> bool:
        return self in {UserRole.ADMIN, UserRole.OPS}

    @property
    def requires_relationship_type(self) -> bool:
        """Secondary tenants must say how they relate to the primary tenant."""
        return self is UserRole.SECONDARY_TENANT

    @property
    def priority(self) -> int:
        """Display order on apartment pages (lower first)."""
        return _ROLE_PRIORITY[self]

    @classmethod
    def from_string(cls, value) -> "UserRole":
        """
        Create UserRole from string value.

        Raises:
            ValidationError: If value is empty or not a valid role
        """
        if isinstance(value, cls):
            return value
        if value is None or str(value).strip() == "":
            raise ValidationError("User role is required", "role")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid user role: {value}", "role")


_ROLE_PRIORITY = {
    UserRole.PRIMARY_TENANT: 0,
    UserRole.SECONDARY_TENANT: 1,
    UserRole.EMERGENCY_CONTACT: 2,
    UserRole.ADMIN: 3,
    UserRole.OPS: 4,
}
