"""
PaymentStatus Value Object

Lifecycle state and category of a rent payment.
"""

from enum import Enum

from exceptions import ValidationError


class PaymentStatus(str, Enum):
    """
    Payment lifecycle.

    PENDING -> PAID (proof submitted) -> VALIDATED | REJECTED
    PENDING -> OVERDUE (due date passed) -> PAID
    """

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    VALIDATED = "validated"
    REJECTED = "rejected"

    def is_terminal(self) -> bool:
        """Check if proof, amount and due date are frozen."""
        return self in {PaymentStatus.VALIDATED, PaymentStatus.REJECTED}

    def is_settled(self) -> bool:
        """Check if the payment counts as money received."""
        return self in {PaymentStatus.PAID, PaymentStatus.VALIDATED}

    @classmethod
    def from_string(cls, value: str) -> "PaymentStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid payment status: {value}", "status")


class PaymentType(str, Enum):
    """What a payment is for."""

    RENT = "rent"
    CLEANING_FEE = "cleaning_fee"
    DEPOSIT = "deposit"
    UTILITIES = "utilities"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: str) -> "PaymentType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid payment type: {value}", "type")
