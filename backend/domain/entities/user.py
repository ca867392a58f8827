"""
User Entity

Anyone related to an apartment: tenants, emergency contacts and staff.
Identified by phone number.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from domain.value_objects.entity_metadata import EntityMetadata
from domain.value_objects.phone_number import PhoneNumber
from domain.value_objects.tax_id import TaxId
from domain.value_objects.user_status import UserStatus
from exceptions import InvalidStatusTransitionError
from utils.validation import validate_email, validate_name

logger = logging.getLogger(__name__)

_UNSET = object()


class User:
    """User aggregate root. Status changes are edge-triggered."""

    def __init__(
        self,
        phone_number,
        name: str,
        document=None,
        email: Optional[str] = None,
        status: UserStatus = UserStatus.ACTIVE,
        metadata: Optional[EntityMetadata] = None,
    ):
        self._phone_number = PhoneNumber.create(phone_number)
        self._name = validate_name(name)
        self._document = TaxId.create(document)
        self._email = validate_email(email)
        self._status = UserStatus.from_string(status)
        self._metadata = metadata or EntityMetadata.create()

    @classmethod
    def create(
        cls,
        phone_number,
        name: str,
        document=None,
        email: Optional[str] = None,
        created_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "User":
        """Register a new ACTIVE user."""
        return cls(
            phone_number,
            name,
            document=document,
            email=email,
            metadata=EntityMetadata.create(created_by, now),
        )

    @property
    def phone_number(self) -> PhoneNumber:
        return self._phone_number

    @property
    def name(self) -> str:
        return self._name

    @property
    def document(self) -> TaxId:
        return self._document

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status is UserStatus.ACTIVE

    @property
    def metadata(self) -> EntityMetadata:
        return self._metadata

    def update_profile(self, name: Optional[str] = None, email=_UNSET, updated_by: Optional[str] = None) -> None:
        """
        Change name and/or email. Passing ``email=None`` clears the email;
        omitting it leaves the email untouched.
        """
        new_name = validate_name(name) if name is not None else self._name
        new_email = validate_email(email) if email is not _UNSET else self._email
        self._name = new_name
        self._email = new_email
        self._metadata = self._metadata.update(updated_by)

    def update_document(self, document, updated_by: Optional[str] = None) -> None:
        self._document = TaxId.create(document)
        self._metadata = self._metadata.update(updated_by)

    def _set_status(self, target: UserStatus, updated_by: Optional[str]) -> None:
        if self._status is target:
            raise InvalidStatusTransitionError("User", self._status.value, target.value)
        previous = self._status
        self._status = target
        self._metadata = self._metadata.update(updated_by)
        logger.info(f"User {self._phone_number} status: {previous.value} -> {target.value}")

    def activate(self, updated_by: Optional[str] = None) -> None:
        self._set_status(UserStatus.ACTIVE, updated_by)

    def deactivate(self, updated_by: Optional[str] = None) -> None:
        self._set_status(UserStatus.INACTIVE, updated_by)

    def suspend(self, updated_by: Optional[str] = None) -> None:
        self._set_status(UserStatus.SUSPENDED, updated_by)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phone_number": self._phone_number.value,
            "name": self._name,
            "document": self._document.to_dict(),
            "email": self._email,
            "status": self._status.value,
            "metadata": self._metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        # Older records stored the CPF under its own key
        document = data.get("document") or data.get("cpf")
        return cls(
            phone_number=data["phone_number"],
            name=data["name"],
            document=TaxId.from_dict(document),
            email=data.get("email"),
            status=data.get("status") or UserStatus.ACTIVE,
            metadata=EntityMetadata.from_dict(data.get("metadata")),
        )

    def __repr__(self) -> str:
        return f"<User {self._phone_number} {self._name!r}>"
