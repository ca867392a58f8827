"""
ApartmentStatus Value Object

Immutable representation of an apartment's occupancy state and rental mode.
"""

from enum import Enum
from typing import FrozenSet

from exceptions import ValidationError


class ApartmentStatus(str, Enum):
    """
    Occupancy state of an apartment.

    Transitions are restricted to an explicit allow-list; staying in the same
    state is not a transition.
    """

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    VACANT = "vacant"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"

    def allowed_transitions(self) -> FrozenSet["ApartmentStatus"]:
        """States reachable from this one."""
        return _APARTMENT_TRANSITIONS[self]

    def can_transition_to(self, new_status: "ApartmentStatus") -> bool:
        """
        Check if transition to new status is valid.

        Args:
            new_status: Target status

        Returns:
            True if transition is allowed
        """
        return new_status in self.allowed_transitions()

    def is_rentable(self) -> bool:
        """Check if a new tenant could move in."""
        return self in {ApartmentStatus.AVAILABLE, ApartmentStatus.VACANT}

    @classmethod
    def from_string(cls, value: str) -> "ApartmentStatus":
        """
        Create ApartmentStatus from string value.

        Raises:
            ValidationError: If value is not a valid status
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid apartment status: {value}", "status")


_APARTMENT_TRANSITIONS = {
    ApartmentStatus.AVAILABLE: frozenset({
        ApartmentStatus.OCCUPIED, ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE,
    }),
    ApartmentStatus.OCCUPIED: frozenset({
        ApartmentStatus.AVAILABLE, ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE,
    }),
    ApartmentStatus.VACANT: frozenset({
        ApartmentStatus.AVAILABLE, ApartmentStatus.OCCUPIED,
        ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE,
    }),
    ApartmentStatus.RESERVED: frozenset({
        ApartmentStatus.OCCUPIED, ApartmentStatus.AVAILABLE,
        ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE,
    }),
    ApartmentStatus.MAINTENANCE: frozenset({
        ApartmentStatus.AVAILABLE, ApartmentStatus.VACANT, ApartmentStatus.INACTIVE,
    }),
    ApartmentStatus.INACTIVE: frozenset({
        ApartmentStatus.AVAILABLE, ApartmentStatus.VACANT, ApartmentStatus.MAINTENANCE,
    }),
}


class RentalType(str, Enum):
    """How an apartment is offered."""

    LONG_TERM = "long_term"
    AIRBNB = "airbnb"
    BOTH = "both"

    def is_short_stay(self) -> bool:
        """Check if the apartment is listed on Airbnb."""
        return self in {RentalType.AIRBNB, RentalType.BOTH}

    @classmethod
    def from_string(cls, value: str) -> "RentalType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid rental type: {value}", "rental_type")
