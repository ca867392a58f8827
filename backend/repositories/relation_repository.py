"""
User-apartment relation repository backed by memory.
"""

from typing import List, Tuple

from domain.entities import UserApartmentRelation
from exceptions import RelationshipNotFoundError
from services.interfaces import IRelationRepository
from .base_repository import InMemoryRepository
from .entity_specifications import BelongsToApartmentSpec, RelationsByUserSpec


class RelationRepository(InMemoryRepository[UserApartmentRelation], IRelationRepository):
    """Relations keyed by (unit code, phone, role)."""

    entity_name = "UserApartmentRelation"

    def key_of(self, relation: UserApartmentRelation) -> Tuple[str, str, str]:
        return relation.key

    def not_found(self, key) -> RelationshipNotFoundError:
        unit_code, phone_number, _role = key
        return RelationshipNotFoundError(unit_code, phone_number)

    async def list_by_apartment(self, unit_code: str) -> List[UserApartmentRelation]:
        return self.find(BelongsToApartmentSpec(unit_code))

    async def list_by_user(self, phone_number: str) -> List[UserApartmentRelation]:
        return self.find(RelationsByUserSpec(phone_number))
