"""
Entity Specifications

Concrete specifications used to slice entity collections.
"""

from datetime import datetime
from typing import Optional

from domain.entities import Contract, Payment, UserApartmentRelation
from domain.value_objects.contract_status import ContractStatus
from domain.value_objects.payment_status import PaymentStatus
from domain.value_objects.phone_number import PhoneNumber
from utils.date_helpers import resolve_now
from .specifications import Specification


class BelongsToApartmentSpec(Specification):
    """Payments, contracts or relations attached to one apartment."""

    def __init__(self, unit_code: str):
        self.unit_code = unit_code.strip().upper()

    def is_satisfied_by(self, candidate) -> bool:
        return candidate.apartment_unit_code == self.unit_code


class PaymentsByUserSpec(Specification[Payment]):
    def __init__(self, phone_number):
        self.phone_number = PhoneNumber.create(phone_number)

    def is_satisfied_by(self, payment: Payment) -> bool:
        return payment.user_phone_number == self.phone_number


class PaymentsByContractSpec(Specification[Payment]):
    def __init__(self, contract_id: str):
        self.contract_id = contract_id

    def is_satisfied_by(self, payment: Payment) -> bool:
        return payment.contract_id == self.contract_id


class PaymentsByStatusSpec(Specification[Payment]):
    """Payments in any of the given statuses."""

    def __init__(self, *statuses: PaymentStatus):
        self.statuses = frozenset(PaymentStatus.from_string(s) for s in statuses)

    def is_satisfied_by(self, payment: Payment) -> bool:
        return payment.status in self.statuses


class SettledPaymentSpec(PaymentsByStatusSpec):
    """PAID or VALIDATED: money that counts as revenue."""

    def __init__(self):
        super().__init__(PaymentStatus.PAID, PaymentStatus.VALIDATED)


class OverduePaymentSpec(Specification[Payment]):
    """PENDING payments whose due date is before ``now``."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = resolve_now(now)

    def is_satisfied_by(self, payment: Payment) -> bool:
        return payment.is_past_due(self.now)


class ContractsByStatusSpec(Specification[Contract]):
    def __init__(self, status: ContractStatus):
        self.status = ContractStatus.from_string(status)

    def is_satisfied_by(self, contract: Contract) -> bool:
        return contract.status is self.status


class RelationsByUserSpec(Specification[UserApartmentRelation]):
    def __init__(self, phone_number):
        self.phone_number = PhoneNumber.create(phone_number)

    def is_satisfied_by(self, relation: UserApartmentRelation) -> bool:
        return relation.user_phone_number == self.phone_number


class ActiveRelationSpec(Specification[UserApartmentRelation]):
    def is_satisfied_by(self, relation: UserApartmentRelation) -> bool:
        return relation.is_active
