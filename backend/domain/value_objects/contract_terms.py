"""
ContractTerms Value Object
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from domain.value_objects.money import to_money
from exceptions import ValidationError


@dataclass(frozen=True)
class ContractTerms:
    """Financial terms and inclusions agreed in a lease."""

    monthly_rent: Decimal
    payment_due_day: int
    security_deposit: Decimal = Decimal("0")
    utilities_included: bool = False
    cleaning_service_included: bool = False
    internet_included: bool = False
    additional_terms: Optional[str] = None
    renewal_terms: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "monthly_rent", to_money(self.monthly_rent, "monthly_rent"))
        object.__setattr__(self, "security_deposit", to_money(self.security_deposit, "security_deposit"))

        if self.monthly_rent <= 0:
            raise ValidationError("Monthly rent must be greater than 0", "monthly_rent")
        if not isinstance(self.payment_due_day, int) or not 1 <= self.payment_due_day <= 31:
            raise ValidationError("Payment due day must be between 1 and 31", "payment_due_day")
        if self.security_deposit < 0:
            raise ValidationError("Security deposit cannot be negative", "security_deposit")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthly_rent": str(self.monthly_rent),
            "payment_due_day": self.payment_due_day,
            "security_deposit": str(self.security_deposit),
            "utilities_included": self.utilities_included,
            "cleaning_service_included": self.cleaning_service_included,
            "internet_included": self.internet_included,
            "additional_terms": self.additional_terms,
            "renewal_terms": self.renewal_terms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractTerms":
        return cls(
            monthly_rent=data["monthly_rent"],
            payment_due_day=int(data["payment_due_day"]),
            security_deposit=data.get("security_deposit") or Decimal("0"),
            utilities_included=bool(data.get("utilities_included", False)),
            cleaning_service_included=bool(data.get("cleaning_service_included", False)),
            internet_included=bool(data.get("internet_included", False)),
            additional_terms=data.get("additional_terms"),
            renewal_terms=data.get("renewal_terms"),
        )
