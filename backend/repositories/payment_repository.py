"""
Payment repository backed by memory.
"""

from typing import List

from domain.entities import Payment
from exceptions import PaymentNotFoundError
from services.interfaces import IPaymentRepository
from .base_repository import InMemoryRepository
from .entity_specifications import BelongsToApartmentSpec, PaymentsByUserSpec


class PaymentRepository(InMemoryRepository[Payment], IPaymentRepository):
    """Payments keyed by payment id."""

    entity_name = "Payment"

    def key_of(self, payment: Payment) -> str:
        return payment.payment_id

    def not_found(self, key) -> PaymentNotFoundError:
        return PaymentNotFoundError(str(key))

    async def get_by_id(self, payment_id: str) -> Payment:
        return self.get(payment_id)

    async def list_by_apartment(self, unit_code: str) -> List[Payment]:
        return self.find(BelongsToApartmentSpec(unit_code))

    async def list_by_user(self, phone_number: str) -> List[Payment]:
        return self.find(PaymentsByUserSpec(phone_number))

    async def list_all(self) -> List[Payment]:
        return self.all()
