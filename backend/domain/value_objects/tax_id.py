"""
TaxId Value Object

Brazilian taxpayer document: CPF for individuals (11 digits) or CNPJ for
companies (14 digits), both protected by two check digits.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from exceptions import ValidationError

_CNPJ_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


class DocumentType(str, Enum):
    CPF = "cpf"
    CNPJ = "cnpj"
    NONE = "none"


def _cpf_check_digit(digits: str) -> int:
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    remainder = (total * 10) % 11
    return 0 if remainder == 10 else remainder


def _cnpj_check_digit(digits: str) -> int:
    weights = _CNPJ_WEIGHTS if len(digits) == 12 else (6,) + _CNPJ_WEIGHTS
    remainder = sum(int(d) * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(digits: str) -> bool:
    if len(digits) != 11 or not digits.isdigit() or len(set(digits)) == 1:
        return False
    first = _cpf_check_digit(digits[:9])
    second = _cpf_check_digit(digits[:9] + str(first))
    return digits[9:] == f"{first}{second}"


def is_valid_cnpj(digits: str) -> bool:
    if len(digits) != 14 or not digits.isdigit() or len(set(digits)) == 1:
        return False
    first = _cnpj_check_digit(digits[:12])
    second = _cnpj_check_digit(digits[:12] + str(first))
    return digits[12:] == f"{first}{second}"


@dataclass(frozen=True)
class TaxId:
    """
    Immutable tax document value object.

    ``value`` holds digits only; an empty document has ``value=None`` and type
    NONE so users registered without a document still round-trip.
    """

    value: Optional[str]
    type: DocumentType

    def __post_init__(self):
        """Validate check digits for the declared type."""
        if self.type is DocumentType.NONE:
            if self.value is not None:
                raise ValidationError("Document value given without a type", "document")
            return
        if self.type is DocumentType.CPF and not is_valid_cpf(self.value or ""):
            raise ValidationError(f"Invalid CPF: {self.value}", "document")
        if self.type is DocumentType.CNPJ and not is_valid_cnpj(self.value or ""):
            raise ValidationError(f"Invalid CNPJ: {self.value}", "document")

    @classmethod
    def create(cls, raw: Optional[str]) -> "TaxId":
        """
        Build a TaxId from user input, with or without punctuation.

        Raises:
            ValidationError: If the digits are neither a valid CPF nor CNPJ
        """
        if isinstance(raw, TaxId):
            return raw
        digits = re.sub(r"\D", "", raw or "")
        if not digits:
            return cls(value=None, type=DocumentType.NONE)
        if len(digits) == 11:
            return cls(value=digits, type=DocumentType.CPF)
        if len(digits) == 14:
            return cls(value=digits, type=DocumentType.CNPJ)
        raise ValidationError(f"Document must have 11 (CPF) or 14 (CNPJ) digits: {raw}", "document")

    @property
    def has_document(self) -> bool:
        return self.type is not DocumentType.NONE

    @property
    def formatted(self) -> Optional[str]:
        """``111.444.777-35`` for CPF, ``11.222.333/0001-81`` for CNPJ."""
        v = self.value
        if self.type is DocumentType.CPF:
            return f"{v[:3]}.{v[3:6]}.{v[6:9]}-{v[9:]}"
        if self.type is DocumentType.CNPJ:
            return f"{v[:2]}.{v[2:5]}.{v[5:8]}/{v[8:12]}-{v[12:]}"
        return None

    def to_dict(self) -> dict:
        return {"value": self.value, "type": self.type.value, "formatted": self.formatted}

    @classmethod
    def from_dict(cls, data) -> "TaxId":
        """Accepts the dict produced by ``to_dict`` or a legacy plain string."""
        if data is None or isinstance(data, str):
            return cls.create(data)
        return cls.create(data.get("value"))
