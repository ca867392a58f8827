"""
Payment Entity

A single charge owed by a user for an apartment, tracked from billing
through proof submission to validation.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from domain.value_objects.entity_metadata import EntityMetadata
from domain.value_objects.money import to_money
from domain.value_objects.payment_status import PaymentStatus, PaymentType
from domain.value_objects.phone_number import PhoneNumber
from exceptions import (
    BusinessRuleViolationError,
    InvalidPaymentAmountError,
    PaymentProofRequiredError,
    ValidationError,
)
from utils.date_helpers import days_until, ensure_utc, parse_datetime, resolve_now, to_iso, whole_days_between
from utils.uuid_helper import generate_payment_id
from utils.validation import normalize_unit_code, require_text

logger = logging.getLogger(__name__)


class Payment:
    """
    Payment aggregate root.

    Lifecycle:
        PENDING --submit_proof--> PAID --validate--> VALIDATED
                                       --reject----> REJECTED
        PENDING --mark_overdue--> OVERDUE --submit_proof--> PAID

    VALIDATED and REJECTED freeze proof, amount and due date.
    """

    def __init__(
        self,
        payment_id: str,
        apartment_unit_code: str,
        user_phone_number,
        amount,
        due_date: date | datetime,
        contract_id: str,
        status: PaymentStatus = PaymentStatus.PENDING,
        type: PaymentType = PaymentType.RENT,
        description: Optional[str] = None,
        payment_date: Optional[date | datetime] = None,
        proof_document_key: Optional[str] = None,
        validated_by: Optional[str] = None,
        validated_at: Optional[datetime] = None,
        rejection_reason: Optional[str] = None,
        metadata: Optional[EntityMetadata] = None,
    ):
        self._payment_id = require_text(payment_id, "payment_id")
        self._apartment_unit_code = normalize_unit_code(apartment_unit_code)
        self._user_phone_number = PhoneNumber.create(user_phone_number)
        self._amount = self._validate_amount(amount)
        self._due_date = ensure_utc(due_date)
        self._contract_id = require_text(contract_id, "contract_id")
        self._status = PaymentStatus.from_string(status)
        self._type = PaymentType.from_string(type)
        self._description = description
        self._payment_date = ensure_utc(payment_date) if payment_date else None
        self._proof_document_key = proof_document_key or None
        self._validated_by = validated_by
        self._validated_at = ensure_utc(validated_at) if validated_at else None
        self._rejection_reason = rejection_reason
        self._metadata = metadata or EntityMetadata.create()

    @classmethod
    def create(
        cls,
        apartment_unit_code: str,
        user_phone_number,
        amount,
        due_date: date | datetime,
        contract_id: str,
        payment_id: Optional[str] = None,
        type: PaymentType = PaymentType.RENT,
        description: Optional[str] = None,
        created_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Payment":
        """Bill a new PENDING payment."""
        return cls(
            payment_id=payment_id or generate_payment_id(apartment_unit_code),
            apartment_unit_code=apartment_unit_code,
            user_phone_number=user_phone_number,
            amount=amount,
            due_date=due_date,
            contract_id=contract_id,
            type=type,
            description=description,
            metadata=EntityMetadata.create(created_by, now),
        )

    @staticmethod
    def _validate_amount(value) -> Decimal:
        amount = to_money(value, "amount")
        if amount <= 0:
            raise InvalidPaymentAmountError(value)
        return amount

    # Properties

    @property
    def payment_id(self) -> str:
        return self._payment_id

    @property
    def apartment_unit_code(self) -> str:
        return self._apartment_unit_code

    @property
    def user_phone_number(self) -> PhoneNumber:
        return self._user_phone_number

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def due_date(self) -> datetime:
        return self._due_date

    @property
    def contract_id(self) -> str:
        return self._contract_id

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def type(self) -> PaymentType:
        return self._type

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def payment_date(self) -> Optional[datetime]:
        return self._payment_date

    @property
    def proof_document_key(self) -> Optional[str]:
        return self._proof_document_key

    @property
    def validated_by(self) -> Optional[str]:
        return self._validated_by

    @property
    def validated_at(self) -> Optional[datetime]:
        return self._validated_at

    @property
    def rejection_reason(self) -> Optional[str]:
        return self._rejection_reason

    @property
    def metadata(self) -> EntityMetadata:
        return self._metadata

    # Business methods

    def _touch(self, updated_by: Optional[str], now: Optional[datetime] = None) -> None:
        self._metadata = self._metadata.update(updated_by, now)

    def _ensure_not_validated(self, action: str) -> None:
        if self._status is PaymentStatus.VALIDATED:
            raise BusinessRuleViolationError(
                f"Cannot {action} of validated payment",
                rule="validated_payment_immutable",
            )
        if self._status is PaymentStatus.REJECTED:
            raise BusinessRuleViolationError(
                f"Cannot {action} of rejected payment",
                rule="rejected_payment_immutable",
            )

    def submit_proof(
        self,
        proof_document_key: str,
        payment_date: date | datetime,
        updated_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Attach a proof of payment and move the payment to PAID.

        Accepted from PENDING and OVERDUE, and from PAID to replace a proof
        that has not been reviewed yet.

        Raises:
            BusinessRuleViolationError: If the payment is VALIDATED or REJECTED
            ValidationError: If the key is empty or the payment date is in the future
        """
        if self._status is PaymentStatus.VALIDATED:
            raise BusinessRuleViolationError(
                "Cannot submit proof for already validated payment",
                rule="validated_payment_immutable",
            )
        if self._status is PaymentStatus.REJECTED:
            raise BusinessRuleViolationError(
                "Cannot submit proof for rejected payment",
                rule="rejected_payment_immutable",
            )

        key = require_text(proof_document_key, "proof_document_key")
        current = resolve_now(now)
        paid_on = ensure_utc(payment_date)
        if paid_on > current:
            raise ValidationError("Payment date cannot be in the future", "payment_date")

        self._proof_document_key = key
        self._payment_date = paid_on
        self._status = PaymentStatus.PAID
        self._touch(updated_by, now)
        logger.info(f"Proof submitted for payment {self._payment_id}")

    def validate(self, validated_by: str, now: Optional[datetime] = None) -> None:
        """
        Approve a submitted proof.

        Raises:
            BusinessRuleViolationError: If the payment is not PAID
            PaymentProofRequiredError: If no proof is attached
        """
        if self._status is not PaymentStatus.PAID:
            raise BusinessRuleViolationError(
                "Only paid payments can be validated",
                rule="validate_requires_paid",
            )
        if not self.has_proof():
            raise PaymentProofRequiredError(self._payment_id)

        self._status = PaymentStatus.VALIDATED
        self._validated_by = validated_by
        self._validated_at = resolve_now(now)
        self._touch(validated_by, now)
        logger.info(f"Payment {self._payment_id} validated by {validated_by}")

    def reject(
        self,
        validated_by: str,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Refuse a submitted proof.

        Raises:
            BusinessRuleViolationError: If the payment is not PAID
        """
        if self._status is not PaymentStatus.PAID:
            raise BusinessRuleViolationError(
                "Only paid payments can be rejected",
                rule="reject_requires_paid",
            )

        self._status = PaymentStatus.REJECTED
        self._validated_by = validated_by
        self._validated_at = resolve_now(now)
        self._rejection_reason = reason
        self._touch(validated_by, now)
        logger.info(f"Payment {self._payment_id} rejected by {validated_by}")

    def mark_overdue(self, updated_by: Optional[str] = None, now: Optional[datetime] = None) -> None:
        """
        Flag a PENDING payment whose due date has passed.

        Raises:
            BusinessRuleViolationError: If not PENDING or the due date has not passed
        """
        if self._status is not PaymentStatus.PENDING:
            raise BusinessRuleViolationError(
                "Only pending payments can be marked as overdue",
                rule="overdue_requires_pending",
            )
        current = resolve_now(now)
        if self._due_date >= current:
            raise BusinessRuleViolationError(
                "Cannot mark payment as overdue before due date",
                rule="overdue_requires_past_due_date",
            )

        self._status = PaymentStatus.OVERDUE
        self._touch(updated_by, now)

    def update_amount(self, new_amount, updated_by: Optional[str] = None) -> None:
        """
        Raises:
            BusinessRuleViolationError: If the payment is VALIDATED or REJECTED
            InvalidPaymentAmountError: If the amount is not positive
        """
        self._ensure_not_validated("update amount")
        self._amount = self._validate_amount(new_amount)
        self._touch(updated_by)

    def update_due_date(
        self,
        new_due_date: date | datetime,
        updated_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Move the due date and re-evaluate overdue state.

        An OVERDUE payment moved to a future date returns to PENDING; a PENDING
        payment moved into the past becomes OVERDUE.
        """
        self._ensure_not_validated("update due date")
        current = resolve_now(now)
        due = ensure_utc(new_due_date)

        self._due_date = due
        if self._status is PaymentStatus.OVERDUE and due >= current:
            self._status = PaymentStatus.PENDING
        elif self._status is PaymentStatus.PENDING and due < current:
            self._status = PaymentStatus.OVERDUE
        self._touch(updated_by, now)

    def update_description(self, description: Optional[str], updated_by: Optional[str] = None) -> None:
        self._description = description.strip() if description else None
        self._touch(updated_by)

    # Queries

    def is_pending(self) -> bool:
        return self._status is PaymentStatus.PENDING

    def is_paid(self) -> bool:
        return self._status is PaymentStatus.PAID

    def is_overdue(self) -> bool:
        return self._status is PaymentStatus.OVERDUE

    def is_validated(self) -> bool:
        return self._status is PaymentStatus.VALIDATED

    def is_rejected(self) -> bool:
        return self._status is PaymentStatus.REJECTED

    def has_proof(self) -> bool:
        return bool(self._proof_document_key)

    def is_past_due(self, now: Optional[datetime] = None) -> bool:
        """PENDING with a due date in the past, the definition used by summaries."""
        return self._status is PaymentStatus.PENDING and self._due_date < resolve_now(now)

    def get_days_overdue(self, now: Optional[datetime] = None) -> int:
        """Whole days past due while still unpaid, 0 otherwise."""
        if self._status not in {PaymentStatus.PENDING, PaymentStatus.OVERDUE}:
            return 0
        return max(0, whole_days_between(self._due_date, resolve_now(now)))

    def get_days_until_due(self, now: Optional[datetime] = None) -> int:
        return days_until(self._due_date, resolve_now(now))

    def get_payment_delay(self) -> Optional[int]:
        """Whole days between due date and payment date, None before proof."""
        if self._payment_date is None:
            return None
        return whole_days_between(self._due_date, self._payment_date)

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        return {
            "payment_id": self._payment_id,
            "apartment_unit_code": self._apartment_unit_code,
            "user_phone_number": self._user_phone_number.value,
            "amount": str(self._amount),
            "due_date": to_iso(self._due_date),
            "contract_id": self._contract_id,
            "status": self._status.value,
            "type": self._type.value,
            "description": self._description,
            "payment_date": to_iso(self._payment_date),
            "proof_document_key": self._proof_document_key,
            "validated_by": self._validated_by,
            "validated_at": to_iso(self._validated_at),
            "rejection_reason": self._rejection_reason,
            "metadata": self._metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Payment":
        return cls(
            payment_id=data["payment_id"],
            apartment_unit_code=data["apartment_unit_code"],
            user_phone_number=data["user_phone_number"],
            amount=data["amount"],
            due_date=parse_datetime(data["due_date"], "due_date"),
            contract_id=data["contract_id"],
            status=data.get("status") or PaymentStatus.PENDING,
            type=data.get("type") or PaymentType.RENT,
            description=data.get("description"),
            payment_date=parse_datetime(data.get("payment_date"), "payment_date"),
            proof_document_key=data.get("proof_document_key"),
            validated_by=data.get("validated_by"),
            validated_at=parse_datetime(data.get("validated_at"), "validated_at"),
            rejection_reason=data.get("rejection_reason"),
            metadata=EntityMetadata.from_dict(data.get("metadata")),
        )

    def __repr__(self) -> str:
        return f"<Payment {self._payment_id} {self._status.value} {self._amount}>"
