"""
ContractStatus Value Object
"""

from enum import Enum

from exceptions import ValidationError


class ContractStatus(str, Enum):
    """Lease contract lifecycle: PENDING -> ACTIVE -> EXPIRED | TERMINATED."""

    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"
    TERMINATED = "terminated"

    def is_terminal(self) -> bool:
        """Check if the contract has ended."""
        return self in {ContractStatus.EXPIRED, ContractStatus.TERMINATED}

    def can_transition_to(self, new_status: "ContractStatus") -> bool:
        valid_transitions = {
            ContractStatus.PENDING: {ContractStatus.ACTIVE},
            ContractStatus.ACTIVE: {ContractStatus.EXPIRED, ContractStatus.TERMINATED},
            ContractStatus.EXPIRED: set(),
            ContractStatus.TERMINATED: set(),
        }
        return new_status in valid_transitions.get(self, set())

    @classmethod
    def from_string(cls, value: str) -> "ContractStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid contract status: {value}", "status")
