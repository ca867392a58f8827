"""
Contract repository backed by memory.
"""

from typing import List

from domain.entities import Contract
from exceptions import ContractNotFoundError
from services.interfaces import IContractRepository
from .base_repository import InMemoryRepository
from .entity_specifications import BelongsToApartmentSpec


class ContractRepository(InMemoryRepository[Contract], IContractRepository):
    """Contracts keyed by contract id."""

    entity_name = "Contract"

    def key_of(self, contract: Contract) -> str:
        return contract.contract_id

    def not_found(self, key) -> ContractNotFoundError:
        return ContractNotFoundError(str(key))

    async def get_by_id(self, contract_id: str) -> Contract:
        return self.get(contract_id)

    async def list_by_apartment(self, unit_code: str) -> List[Contract]:
        return self.find(BelongsToApartmentSpec(unit_code))
