"""
UserApartmentRelation Entity

Edge between a user and an apartment, keyed by (unit code, phone, role).
Holds identifiers only, never the User or Apartment objects themselves.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from domain.value_objects.entity_metadata import EntityMetadata
from domain.value_objects.phone_number import PhoneNumber
from domain.value_objects.user_role import UserRole
from exceptions import BusinessRuleViolationError, ValidationError
from utils.validation import normalize_unit_code


def _clean_relationship_type(role: UserRole, relationship_type: Optional[str]) -> Optional[str]:
    if relationship_type is not None and not relationship_type.strip():
        raise ValidationError("Relationship type cannot be empty when provided", "relationship_type")
    if role.requires_relationship_type and relationship_type is None:
        raise ValidationError("Relationship type is required for secondary tenants", "relationship_type")
    return relationship_type.strip() if relationship_type is not None else None


class UserApartmentRelation:
    """Role a user holds towards an apartment, with its own activation state."""

    def __init__(
        self,
        apartment_unit_code: str,
        user_phone_number,
        role: UserRole,
        relationship_type: Optional[str] = None,
        is_active: bool = True,
        metadata: Optional[EntityMetadata] = None,
    ):
        self._apartment_unit_code = normalize_unit_code(apartment_unit_code)
        self._user_phone_number = PhoneNumber.create(user_phone_number)
        self._role = UserRole.from_string(role)
        self._relationship_type = _clean_relationship_type(self._role, relationship_type)
        self._is_active = bool(is_active)
        self._metadata = metadata or EntityMetadata.create()

    @classmethod
    def create(
        cls,
        apartment_unit_code: str,
        user_phone_number,
        role: UserRole,
        relationship_type: Optional[str] = None,
        is_active: bool = True,
        created_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "UserApartmentRelation":
        return cls(
            apartment_unit_code,
            user_phone_number,
            role,
            relationship_type=relationship_type,
            is_active=is_active,
            metadata=EntityMetadata.create(created_by, now),
        )

    @property
    def key(self) -> Tuple[str, str, str]:
        """Composite identity: (unit code, E.164 phone, role)."""
        return (self._apartment_unit_code, self._user_phone_number.value, self._role.value)

    @property
    def apartment_unit_code(self) -> str:
        return self._apartment_unit_code

    @property
    def user_phone_number(self) -> PhoneNumber:
        return self._user_phone_number

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def relationship_type(self) -> Optional[str]:
        return self._relationship_type

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def metadata(self) -> EntityMetadata:
        return self._metadata

    def update_relationship_type(self, relationship_type: Optional[str], updated_by: Optional[str] = None) -> None:
        """
        Raises:
            ValidationError: If blank, or cleared on a secondary tenant
        """
        self._relationship_type = _clean_relationship_type(self._role, relationship_type)
        self._metadata = self._metadata.update(updated_by)

    def activate(self, updated_by: Optional[str] = None) -> None:
        if self._is_active:
            raise BusinessRuleViolationError("Relationship is already active", rule="already_active")
        self._is_active = True
        self._metadata = self._metadata.update(updated_by)

    def deactivate(self, updated_by: Optional[str] = None) -> None:
        if not self._is_active:
            raise BusinessRuleViolationError("Relationship is already inactive", rule="already_inactive")
        self._is_active = False
        self._metadata = self._metadata.update(updated_by)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apartment_unit_code": self._apartment_unit_code,
            "user_phone_number": self._user_phone_number.value,
            "role": self._role.value,
            "relationship_type": self._relationship_type,
            "is_active": self._is_active,
            "metadata": self._metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserApartmentRelation":
        return cls(
            apartment_unit_code=data["apartment_unit_code"],
            user_phone_number=data["user_phone_number"],
            role=data["role"],
            relationship_type=data.get("relationship_type"),
            is_active=data.get("is_active", True),
            metadata=EntityMetadata.from_dict(data.get("metadata")),
        )

    def __repr__(self) -> str:
        unit, phone, role = self.key
        return f"<UserApartmentRelation {unit} {phone} {role}>"
