"""
PhoneNumber Value Object

Immutable phone number stored in E.164 format.
"""

import re
from dataclasses import dataclass
from typing import Optional

import phonenumbers

from config.app_config import get_default_phone_region
from exceptions import ValidationError

_E164 = re.compile(r"^\+[1-9]\d{6,14}$")


@dataclass(frozen=True)
class PhoneNumber:
    """
    Immutable phone number value object.

    ``value`` is always E.164 (``+5511987654321``). Use ``create`` to parse
    user input in national or international notation.
    """

    value: str

    def __post_init__(self):
        """Validate E.164 shape."""
        if not isinstance(self.value, str) or not _E164.match(self.value):
            raise ValidationError(f"Invalid phone number format: {self.value}", "phone_number")

    @classmethod
    def create(cls, raw: str, default_region: Optional[str] = None) -> "PhoneNumber":
        """
        Parse and normalize a phone number.

        Args:
            raw: Number in any common notation
            default_region: Region assumed when ``raw`` has no ``+`` prefix

        Raises:
            ValidationError: If the number is empty or cannot be a real number
        """
        if isinstance(raw, PhoneNumber):
            return raw
        if not raw or not str(raw).strip():
            raise ValidationError("Phone number is required", "phone_number")

        region = default_region or get_default_phone_region()
        try:
            parsed = phonenumbers.parse(str(raw).strip(), region)
        except phonenumbers.NumberParseException:
            raise ValidationError(f"Invalid phone number format: {raw}", "phone_number")

        if not phonenumbers.is_possible_number(parsed):
            raise ValidationError(f"Invalid phone number format: {raw}", "phone_number")

        return cls(phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164))

    @property
    def formatted(self) -> str:
        """International notation, e.g. ``+55 11 98765-4321``."""
        return phonenumbers.format_number(
            phonenumbers.parse(self.value, None),
            phonenumbers.PhoneNumberFormat.INTERNATIONAL,
        )

    @property
    def country(self) -> Optional[str]:
        """ISO region code of the number, if known."""
        return phonenumbers.region_code_for_number(phonenumbers.parse(self.value, None))

    def __str__(self) -> str:
        return self.value
