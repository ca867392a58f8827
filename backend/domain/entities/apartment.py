"""
Apartment Entity

Rental unit identified by its unit code. Apartments are never deleted;
``deactivate`` moves them to INACTIVE.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from domain.value_objects.apartment_amenities import ApartmentAmenities
from domain.value_objects.apartment_status import ApartmentStatus, RentalType
from domain.value_objects.contact_info import ContactInfo
from domain.value_objects.entity_metadata import EntityMetadata
from domain.value_objects.money import to_money
from exceptions import (
    BusinessRuleViolationError,
    InvalidRentalAmountError,
    InvalidStatusTransitionError,
    ValidationError,
)
from utils.date_helpers import ensure_utc, parse_datetime, to_iso
from utils.validation import normalize_unit_code, require_text, validate_airbnb_link

logger = logging.getLogger(__name__)


class Apartment:
    """
    Apartment aggregate root.

    State is held in private attributes and exposed through read-only
    properties; every change goes through a guarded method that bumps the
    audit metadata.
    """

    def __init__(
        self,
        unit_code: str,
        unit_label: str,
        address: str,
        base_rent,
        cleaning_fee=Decimal("0"),
        status: ApartmentStatus = ApartmentStatus.AVAILABLE,
        rental_type: RentalType = RentalType.LONG_TERM,
        amenities: Optional[ApartmentAmenities] = None,
        images: Optional[List[str]] = None,
        airbnb_link: Optional[str] = None,
        is_available: bool = False,
        available_from: Optional[date | datetime] = None,
        contact_info: Optional[ContactInfo] = None,
        metadata: Optional[EntityMetadata] = None,
    ):
        self._unit_code = normalize_unit_code(unit_code)
        self._unit_label = require_text(unit_label, "unit_label")
        self._address = address.strip() if address else ""
        self._base_rent = self._validate_base_rent(base_rent)
        self._cleaning_fee = self._validate_cleaning_fee(cleaning_fee)
        self._status = ApartmentStatus.from_string(status)
        self._rental_type = RentalType.from_string(rental_type)
        self._amenities = amenities or ApartmentAmenities()
        self._images = list(images or [])
        self._airbnb_link = validate_airbnb_link(airbnb_link)
        if self._airbnb_link and not self._rental_type.is_short_stay():
            raise BusinessRuleViolationError(
                "Long-term apartments cannot have an Airbnb link",
                rule="airbnb_link_requires_short_stay",
            )
        self._is_available = bool(is_available)
        self._available_from = ensure_utc(available_from) if available_from else None
        self._contact_info = contact_info
        self._metadata = metadata or EntityMetadata.create()

    @classmethod
    def create(
        cls,
        unit_code: str,
        unit_label: str,
        address: str,
        base_rent,
        created_by: Optional[str] = None,
        now: Optional[datetime] = None,
        **kwargs,
    ) -> "Apartment":
        """Onboard a new apartment with fresh metadata."""
        apartment = cls(
            unit_code,
            unit_label,
            address,
            base_rent,
            metadata=EntityMetadata.create(created_by, now),
            **kwargs,
        )
        logger.debug(f"Created apartment {apartment.unit_code}")
        return apartment

    @staticmethod
    def _validate_base_rent(value) -> Decimal:
        amount = to_money(value, "base_rent")
        if amount <= 0:
            raise InvalidRentalAmountError(value, "base_rent")
        return amount

    @staticmethod
    def _validate_cleaning_fee(value) -> Decimal:
        amount = to_money(value if value is not None else 0, "cleaning_fee")
        if amount < 0:
            raise ValidationError(f"Cleaning fee cannot be negative, got: {value}", "cleaning_fee")
        return amount

    # Properties

    @property
    def unit_code(self) -> str:
        return self._unit_code

    @property
    def unit_label(self) -> str:
        return self._unit_label

    @property
    def address(self) -> str:
        return self._address

    @property
    def base_rent(self) -> Decimal:
        return self._base_rent

    @property
    def cleaning_fee(self) -> Decimal:
        return self._cleaning_fee

    @property
    def status(self) -> ApartmentStatus:
        return self._status

    @property
    def rental_type(self) -> RentalType:
        return self._rental_type

    @property
    def amenities(self) -> ApartmentAmenities:
        return self._amenities

    @property
    def images(self) -> List[str]:
        return list(self._images)

    @property
    def airbnb_link(self) -> Optional[str]:
        return self._airbnb_link

    @property
    def is_available(self) -> bool:
        return self._is_available

    @property
    def available_from(self) -> Optional[datetime]:
        return self._available_from

    @property
    def contact_info(self) -> Optional[ContactInfo]:
        return self._contact_info

    @property
    def metadata(self) -> EntityMetadata:
        return self._metadata

    # Business methods

    def _touch(self, updated_by: Optional[str]) -> None:
        self._metadata = self._metadata.update(updated_by)

    def change_status(self, new_status, updated_by: Optional[str] = None) -> None:
        """
        Move the apartment to another status.

        Raises:
            InvalidStatusTransitionError: If the pair is not in the allow-list
        """
        target = ApartmentStatus.from_string(new_status)
        if not self._status.can_transition_to(target):
            raise InvalidStatusTransitionError("Apartment", self._status.value, target.value)

        previous = self._status
        self._status = target
        if target is ApartmentStatus.AVAILABLE:
            self._is_available = True
        else:
            self._is_available = False
            self._available_from = None
        self._touch(updated_by)
        logger.info(f"Apartment {self._unit_code} status: {previous.value} -> {target.value}")

    def mark_as_occupied(self, updated_by: Optional[str] = None) -> None:
        self.change_status(ApartmentStatus.OCCUPIED, updated_by)

    def mark_as_available(
        self,
        available_from: Optional[date | datetime] = None,
        updated_by: Optional[str] = None,
    ) -> None:
        self.change_status(ApartmentStatus.AVAILABLE, updated_by)
        self._available_from = ensure_utc(available_from) if available_from else None

    def deactivate(self, updated_by: Optional[str] = None) -> None:
        """Soft-delete the apartment."""
        self.change_status(ApartmentStatus.INACTIVE, updated_by)

    def update_pricing(self, base_rent, cleaning_fee=None, updated_by: Optional[str] = None) -> None:
        """
        Change rent and, optionally, the cleaning fee.

        Raises:
            InvalidRentalAmountError: If base rent is not positive
            ValidationError: If the cleaning fee is negative
        """
        new_rent = self._validate_base_rent(base_rent)
        new_fee = self._validate_cleaning_fee(cleaning_fee) if cleaning_fee is not None else self._cleaning_fee
        self._base_rent = new_rent
        self._cleaning_fee = new_fee
        self._touch(updated_by)

    def update_rental_type(
        self,
        rental_type,
        airbnb_link: Optional[str] = None,
        updated_by: Optional[str] = None,
    ) -> None:
        """
        Change how the apartment is offered.

        Switching to LONG_TERM clears the Airbnb link; switching to a short-stay
        type keeps the current link unless a new one is given.
        """
        new_type = RentalType.from_string(rental_type)
        new_link = validate_airbnb_link(airbnb_link)
        if new_type.is_short_stay():
            self._airbnb_link = new_link or self._airbnb_link
        else:
            if new_link:
                raise BusinessRuleViolationError(
                    "Long-term apartments cannot have an Airbnb link",
                    rule="airbnb_link_requires_short_stay",
                )
            self._airbnb_link = None
        self._rental_type = new_type
        self._touch(updated_by)

    def update_amenities(self, updated_by: Optional[str] = None, **changes: bool) -> None:
        self._amenities = self._amenities.with_changes(**changes)
        self._touch(updated_by)

    def update_availability(
        self,
        is_available: bool,
        available_from: Optional[date | datetime] = None,
        updated_by: Optional[str] = None,
    ) -> None:
        """
        Set the listing availability flag.

        Raises:
            BusinessRuleViolationError: If an inactive apartment is listed
        """
        if is_available and self._status is ApartmentStatus.INACTIVE:
            raise BusinessRuleViolationError(
                f"Inactive apartment {self._unit_code} cannot be listed as available",
                rule="inactive_not_listable",
            )
        self._is_available = bool(is_available)
        self._available_from = ensure_utc(available_from) if is_available and available_from else None
        self._touch(updated_by)

    def add_image(self, image_key: str, updated_by: Optional[str] = None) -> None:
        key = require_text(image_key, "image_key")
        if key in self._images:
            raise BusinessRuleViolationError(
                f"Image {key} already attached to apartment {self._unit_code}",
                rule="unique_image",
            )
        self._images.append(key)
        self._touch(updated_by)

    def remove_image(self, image_key: str, updated_by: Optional[str] = None) -> None:
        if image_key not in self._images:
            raise BusinessRuleViolationError(
                f"Image {image_key} is not attached to apartment {self._unit_code}",
                rule="image_exists",
            )
        self._images.remove(image_key)
        self._touch(updated_by)

    def update_contact_info(self, contact_info: Optional[ContactInfo], updated_by: Optional[str] = None) -> None:
        self._contact_info = contact_info
        self._touch(updated_by)

    def is_airbnb_enabled(self) -> bool:
        return self._rental_type.is_short_stay()

    def is_long_term_enabled(self) -> bool:
        return self._rental_type in {RentalType.LONG_TERM, RentalType.BOTH}

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_code": self._unit_code,
            "unit_label": self._unit_label,
            "address": self._address,
            "base_rent": str(self._base_rent),
            "cleaning_fee": str(self._cleaning_fee),
            "status": self._status.value,
            "rental_type": self._rental_type.value,
            "amenities": self._amenities.to_dict(),
            "images": list(self._images),
            "airbnb_link": self._airbnb_link,
            "is_available": self._is_available,
            "available_from": to_iso(self._available_from),
            "contact_info": self._contact_info.to_dict() if self._contact_info else None,
            "metadata": self._metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Apartment":
        return cls(
            unit_code=data["unit_code"],
            unit_label=data["unit_label"],
            address=data.get("address", ""),
            base_rent=data["base_rent"],
            cleaning_fee=data.get("cleaning_fee") or Decimal("0"),
            status=data.get("status") or ApartmentStatus.AVAILABLE,
            rental_type=data.get("rental_type") or RentalType.LONG_TERM,
            amenities=ApartmentAmenities.from_dict(data.get("amenities")),
            images=data.get("images") or [],
            airbnb_link=data.get("airbnb_link"),
            is_available=data.get("is_available", False),
            available_from=parse_datetime(data.get("available_from"), "available_from"),
            contact_info=ContactInfo.from_dict(data.get("contact_info")),
            metadata=EntityMetadata.from_dict(data.get("metadata")),
        )

    def __repr__(self) -> str:
        return f"<Apartment {self._unit_code} status={self._status.value}>"
