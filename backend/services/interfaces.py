"""
Service Interfaces

Abstract base classes for the collection-fetch contracts the aggregation
services depend on, following the Dependency Inversion Principle.
Storage backends implement these; services receive them through their
constructors.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from domain.entities import Apartment, Contract, Payment, User, UserApartmentRelation


class IApartmentRepository(ABC):
    """Read access to apartments."""

    @abstractmethod
    async def get_by_unit_code(self, unit_code: str) -> Apartment:
        """
        Fetch one apartment.

        Raises:
            ApartmentNotFoundError: If no apartment has this unit code
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Apartment]:
        pass


class IPaymentRepository(ABC):
    """Read access to payments."""

    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Payment:
        """
        Raises:
            PaymentNotFoundError: If the id is unknown
        """
        pass

    @abstractmethod
    async def list_by_apartment(self, unit_code: str) -> List[Payment]:
        pass

    @abstractmethod
    async def list_by_user(self, phone_number: str) -> List[Payment]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Payment]:
        pass


class IContractRepository(ABC):
    """Read access to contracts."""

    @abstractmethod
    async def get_by_id(self, contract_id: str) -> Contract:
        """
        Raises:
            ContractNotFoundError: If the id is unknown
        """
        pass

    @abstractmethod
    async def list_by_apartment(self, unit_code: str) -> List[Contract]:
        pass


class IUserRepository(ABC):
    """Read access to users."""

    @abstractmethod
    async def get_by_phone(self, phone_number: str) -> User:
        """
        Raises:
            UserNotFoundError: If no user has this phone number
        """
        pass

    @abstractmethod
    async def list_by_phones(self, phone_numbers: Iterable[str]) -> List[User]:
        """Users for the given numbers; unknown numbers are skipped."""
        pass


class IRelationRepository(ABC):
    """Read access to user-apartment relations."""

    @abstractmethod
    async def list_by_apartment(self, unit_code: str) -> List[UserApartmentRelation]:
        pass

    @abstractmethod
    async def list_by_user(self, phone_number: str) -> List[UserApartmentRelation]:
        pass
