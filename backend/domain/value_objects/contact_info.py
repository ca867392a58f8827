"""
ContactInfo Value Object

Who to reach about an apartment and how.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from domain.value_objects.phone_number import PhoneNumber
from exceptions import ValidationError


class ContactMethod(str, Enum):
    WHATSAPP = "whatsapp"
    CALL = "call"
    EMAIL = "email"

    @classmethod
    def from_string(cls, value: str) -> "ContactMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid contact method: {value}", "contact_method")


@dataclass(frozen=True)
class ContactInfo:
    phone_number: PhoneNumber
    contact_method: ContactMethod = ContactMethod.WHATSAPP
    contact_name: Optional[str] = None
    contact_document: Optional[str] = None
    preferred_language: Optional[str] = None

    @classmethod
    def create(
        cls,
        phone_number: Optional[str],
        contact_method=ContactMethod.WHATSAPP,
        contact_name: Optional[str] = None,
        contact_document: Optional[str] = None,
        preferred_language: Optional[str] = None,
        default_region: Optional[str] = None,
    ) -> Optional["ContactInfo"]:
        """
        Build contact info, or return None when phone or method is missing.

        Raises:
            ValidationError: If the phone number is present but malformed
        """
        if not phone_number or not contact_method:
            return None
        return cls(
            phone_number=PhoneNumber.create(phone_number, default_region),
            contact_method=ContactMethod.from_string(contact_method),
            contact_name=contact_name.strip() if contact_name else None,
            contact_document=contact_document,
            preferred_language=preferred_language,
        )

    @property
    def formatted_phone_number(self) -> str:
        return self.phone_number.formatted

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contact_name": self.contact_name,
            "phone_number": self.phone_number.value,
            "contact_method": self.contact_method.value,
            "contact_document": self.contact_document,
            "preferred_language": self.preferred_language,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["ContactInfo"]:
        if not data:
            return None
        return cls.create(
            data.get("phone_number"),
            data.get("contact_method"),
            contact_name=data.get("contact_name"),
            contact_document=data.get("contact_document"),
            preferred_language=data.get("preferred_language"),
        )
