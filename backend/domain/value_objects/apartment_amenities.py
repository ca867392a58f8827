"""
ApartmentAmenities Value Object
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional

from exceptions import ValidationError


@dataclass(frozen=True)
class ApartmentAmenities:
    """Boolean feature flags of an apartment. Field order is display order."""

    has_cleaning_service: bool = False
    water_included: bool = False
    electricity_included: bool = False
    has_wifi: bool = False
    has_air_conditioning: bool = False
    has_washing_machine: bool = False
    has_kitchen: bool = True
    has_furniture: bool = False
    has_parking: bool = False
    has_elevator: bool = False
    has_balcony: bool = False
    pet_friendly: bool = False

    def __post_init__(self):
        for f in fields(self):
            if not isinstance(getattr(self, f.name), bool):
                raise ValidationError(f"Amenity {f.name} must be a boolean", f.name)

    def enabled(self) -> List[str]:
        """Names of the flags that are set, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def with_changes(self, **changes: bool) -> "ApartmentAmenities":
        """
        Copy with some flags replaced.

        Raises:
            ValidationError: If a name is not a known amenity
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ValidationError(f"Unknown amenities: {', '.join(sorted(unknown))}", "amenities")
        return ApartmentAmenities(**{**asdict(self), **changes})

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ApartmentAmenities":
        """Unknown keys are ignored so older records still load."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in data.items() if k in known})
