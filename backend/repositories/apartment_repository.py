"""
Apartment repository backed by memory.
"""

from typing import List

from domain.entities import Apartment
from exceptions import ApartmentNotFoundError
from services.interfaces import IApartmentRepository
from utils.validation import normalize_unit_code
from .base_repository import InMemoryRepository


class ApartmentRepository(InMemoryRepository[Apartment], IApartmentRepository):
    """Apartments keyed by unit code."""

    entity_name = "Apartment"

    def key_of(self, apartment: Apartment) -> str:
        return apartment.unit_code

    def not_found(self, key) -> ApartmentNotFoundError:
        return ApartmentNotFoundError(str(key))

    async def get_by_unit_code(self, unit_code: str) -> Apartment:
        return self.get(normalize_unit_code(unit_code))

    async def list_all(self) -> List[Apartment]:
        return self.all()
