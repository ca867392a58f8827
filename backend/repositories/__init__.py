"""
Repository layer for data access abstraction.

In-memory implementations of the collection-fetch contracts in
``services.interfaces``, plus composable specifications for filtering
entity collections.
"""

from .apartment_repository import ApartmentRepository
from .base_repository import InMemoryRepository
from .contract_repository import ContractRepository
from .payment_repository import PaymentRepository
from .relation_repository import RelationRepository
from .user_repository import UserRepository

__all__ = [
    "ApartmentRepository",
    "ContractRepository",
    "InMemoryRepository",
    "PaymentRepository",
    "RelationRepository",
    "UserRepository",
]
