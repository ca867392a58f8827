"""
User repository backed by memory.
"""

from typing import Iterable, List

from domain.entities import User
from domain.value_objects.phone_number import PhoneNumber
from exceptions import UserNotFoundError
from services.interfaces import IUserRepository
from .base_repository import InMemoryRepository


class UserRepository(InMemoryRepository[User], IUserRepository):
    """Users keyed by E.164 phone number."""

    entity_name = "User"

    def key_of(self, user: User) -> str:
        return user.phone_number.value

    def not_found(self, key) -> UserNotFoundError:
        return UserNotFoundError(str(key))

    async def get_by_phone(self, phone_number: str) -> User:
        return self.get(PhoneNumber.create(phone_number).value)

    async def list_by_phones(self, phone_numbers: Iterable[str]) -> List[User]:
        users = []
        seen = set()
        for raw in phone_numbers:
            key = PhoneNumber.create(raw).value
            if key in seen or not self.exists(key):
                continue
            seen.add(key)
            users.append(self.get(key))
        return users
