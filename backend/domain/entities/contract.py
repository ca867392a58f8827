"""
Contract Entity

Lease between an apartment and its primary tenant.
"""

import logging
import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from constants import SECONDS_PER_DAY
from domain.value_objects.contract_status import ContractStatus
from domain.value_objects.contract_terms import ContractTerms
from domain.value_objects.entity_metadata import EntityMetadata
from domain.value_objects.phone_number import PhoneNumber
from exceptions import BusinessRuleViolationError, InvalidContractDatesError, InvalidStatusTransitionError
from utils.date_helpers import days_until, ensure_utc, parse_datetime, resolve_now, to_iso
from utils.uuid_helper import generate_contract_id
from utils.validation import normalize_unit_code, require_text

logger = logging.getLogger(__name__)


class Contract:
    """
    Contract aggregate root.

    PENDING -> ACTIVE -> EXPIRED | TERMINATED. Nothing enforces a single
    ACTIVE contract per apartment; read models pick the first one found.
    """

    def __init__(
        self,
        contract_id: str,
        apartment_unit_code: str,
        tenant_phone_number,
        start_date: date | datetime,
        end_date: date | datetime,
        terms: ContractTerms,
        status: ContractStatus = ContractStatus.PENDING,
        termination_reason: Optional[str] = None,
        metadata: Optional[EntityMetadata] = None,
    ):
        self._contract_id = require_text(contract_id, "contract_id")
        self._apartment_unit_code = normalize_unit_code(apartment_unit_code)
        self._tenant_phone_number = PhoneNumber.create(tenant_phone_number)
        self._start_date = ensure_utc(start_date)
        self._end_date = ensure_utc(end_date)
        if self._end_date <= self._start_date:
            raise InvalidContractDatesError()
        self._terms = terms
        self._status = ContractStatus.from_string(status)
        self._termination_reason = termination_reason
        self._metadata = metadata or EntityMetadata.create()

    @classmethod
    def create(
        cls,
        apartment_unit_code: str,
        tenant_phone_number,
        start_date: date | datetime,
        end_date: date | datetime,
        terms: ContractTerms,
        contract_id: Optional[str] = None,
        created_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Contract":
        """Draft a new PENDING contract."""
        return cls(
            contract_id=contract_id or generate_contract_id(apartment_unit_code),
            apartment_unit_code=apartment_unit_code,
            tenant_phone_number=tenant_phone_number,
            start_date=start_date,
            end_date=end_date,
            terms=terms,
            metadata=EntityMetadata.create(created_by, now),
        )

    # Properties

    @property
    def contract_id(self) -> str:
        return self._contract_id

    @property
    def apartment_unit_code(self) -> str:
        return self._apartment_unit_code

    @property
    def tenant_phone_number(self) -> PhoneNumber:
        return self._tenant_phone_number

    @property
    def start_date(self) -> datetime:
        return self._start_date

    @property
    def end_date(self) -> datetime:
        return self._end_date

    @property
    def terms(self) -> ContractTerms:
        return self._terms

    @property
    def monthly_rent(self) -> Decimal:
        return self._terms.monthly_rent

    @property
    def status(self) -> ContractStatus:
        return self._status

    @property
    def termination_reason(self) -> Optional[str]:
        return self._termination_reason

    @property
    def metadata(self) -> EntityMetadata:
        return self._metadata

    # Business methods

    def _transition(self, target: ContractStatus, updated_by: Optional[str]) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidStatusTransitionError("Contract", self._status.value, target.value)
        previous = self._status
        self._status = target
        self._metadata = self._metadata.update(updated_by)
        logger.info(f"Contract {self._contract_id} status: {previous.value} -> {target.value}")

    def activate(self, updated_by: Optional[str] = None) -> None:
        self._transition(ContractStatus.ACTIVE, updated_by)

    def terminate(self, reason: Optional[str] = None, updated_by: Optional[str] = None) -> None:
        self._transition(ContractStatus.TERMINATED, updated_by)
        self._termination_reason = reason

    def expire(self, updated_by: Optional[str] = None) -> None:
        self._transition(ContractStatus.EXPIRED, updated_by)

    def extend(self, new_end_date: date | datetime, updated_by: Optional[str] = None) -> None:
        """
        Push the end date of an ACTIVE contract further out.

        Raises:
            BusinessRuleViolationError: If not ACTIVE
            InvalidContractDatesError: If the new date is not after the current one
        """
        if self._status is not ContractStatus.ACTIVE:
            raise BusinessRuleViolationError(
                "Only active contracts can be extended",
                rule="extend_requires_active",
            )
        new_end = ensure_utc(new_end_date)
        if new_end <= self._end_date:
            raise InvalidContractDatesError("New end date must be after current end date")
        self._end_date = new_end
        self._metadata = self._metadata.update(updated_by)

    def update_terms(self, terms: ContractTerms, updated_by: Optional[str] = None) -> None:
        if self._status.is_terminal():
            raise BusinessRuleViolationError(
                f"Cannot update terms of {self._status.value} contract",
                rule="terms_frozen_after_end",
            )
        self._terms = terms
        self._metadata = self._metadata.update(updated_by)

    # Queries

    def is_active(self) -> bool:
        return self._status is ContractStatus.ACTIVE

    def is_pending(self) -> bool:
        return self._status is ContractStatus.PENDING

    def is_terminated(self) -> bool:
        return self._status is ContractStatus.TERMINATED

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self._status is ContractStatus.EXPIRED or self.is_past_end_date(now)

    def is_past_end_date(self, now: Optional[datetime] = None) -> bool:
        return self._end_date < resolve_now(now)

    def get_days_remaining(self, now: Optional[datetime] = None) -> int:
        """Days left until the end date, 0 once it has passed."""
        return max(0, days_until(self._end_date, resolve_now(now)))

    def get_duration_in_months(self) -> int:
        """Length of the lease in 30-day months, rounded up."""
        days = math.ceil((self._end_date - self._start_date).total_seconds() / SECONDS_PER_DAY)
        return math.ceil(days / 30)

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_id": self._contract_id,
            "apartment_unit_code": self._apartment_unit_code,
            "tenant_phone_number": self._tenant_phone_number.value,
            "start_date": to_iso(self._start_date),
            "end_date": to_iso(self._end_date),
            "terms": self._terms.to_dict(),
            "status": self._status.value,
            "termination_reason": self._termination_reason,
            "metadata": self._metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contract":
        return cls(
            contract_id=data["contract_id"],
            apartment_unit_code=data["apartment_unit_code"],
            tenant_phone_number=data["tenant_phone_number"],
            start_date=parse_datetime(data["start_date"], "start_date"),
            end_date=parse_datetime(data["end_date"], "end_date"),
            terms=ContractTerms.from_dict(data["terms"]),
            status=data.get("status") or ContractStatus.PENDING,
            termination_reason=data.get("termination_reason"),
            metadata=EntityMetadata.from_dict(data.get("metadata")),
        )

    def __repr__(self) -> str:
        return f"<Contract {self._contract_id} status={self._status.value}>"
