from datetime import date, datetime, timezone
from decimal import Decimal
from itertools import product

import pytest

from domain.entities import Apartment
from domain.value_objects import ApartmentStatus, ContactInfo, RentalType
from exceptions import (
    BusinessRuleViolationError,
    InvalidAirbnbLinkError,
    InvalidRentalAmountError,
    InvalidStatusTransitionError,
    InvalidUnitCodeError,
    ValidationError,
)

ALLOWED = {
    ApartmentStatus.AVAILABLE: {ApartmentStatus.OCCUPIED, ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE},
    ApartmentStatus.OCCUPIED: {ApartmentStatus.AVAILABLE, ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE},
    ApartmentStatus.VACANT: {
        ApartmentStatus.AVAILABLE, ApartmentStatus.OCCUPIED, ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE,
    },
    ApartmentStatus.RESERVED: {
        ApartmentStatus.OCCUPIED, ApartmentStatus.AVAILABLE, ApartmentStatus.MAINTENANCE, ApartmentStatus.INACTIVE,
    },
    ApartmentStatus.MAINTENANCE: {ApartmentStatus.AVAILABLE, ApartmentStatus.VACANT, ApartmentStatus.INACTIVE},
    ApartmentStatus.INACTIVE: {ApartmentStatus.AVAILABLE, ApartmentStatus.VACANT, ApartmentStatus.MAINTENANCE},
}

ALL_PAIRS = list(product(ApartmentStatus, ApartmentStatus))


def apartment_in(status: ApartmentStatus) -> Apartment:
    return Apartment("APT001", "Unit 1", "Rua A, Centro, Recife", "1000", status=status)


@pytest.mark.parametrize("current,target", [(c, t) for c, t in ALL_PAIRS if t in ALLOWED[c]])
def test_allowed_transitions_succeed(current, target):
    apartment = apartment_in(current)
    apartment.change_status(target, "admin")
    assert apartment.status is target
    assert apartment.metadata.version == 2
    assert apartment.metadata.updated_by == "admin"


@pytest.mark.parametrize("current,target", [(c, t) for c, t in ALL_PAIRS if t not in ALLOWED[c]])
def test_other_transitions_rejected(current, target):
    apartment = apartment_in(current)
    with pytest.raises(InvalidStatusTransitionError) as exc:
        apartment.change_status(target)
    assert apartment.status is current
    assert apartment.metadata.version == 1
    assert exc.value.details["from"] == current.value
    assert exc.value.details["to"] == target.value


def test_transition_error_message():
    with pytest.raises(InvalidStatusTransitionError, match="Invalid apartment status transition from available to vacant"):
        apartment_in(ApartmentStatus.AVAILABLE).change_status("vacant")


class TestCreate:
    def test_normalizes_input(self, make_apartment, now):
        apartment = make_apartment(" apt-02 ", base_rent=1500.5, created_at=now)
        assert apartment.unit_code == "APT-02"
        assert apartment.base_rent == Decimal("1500.5")
        assert apartment.cleaning_fee == Decimal("0")
        assert apartment.status is ApartmentStatus.AVAILABLE
        assert apartment.rental_type is RentalType.LONG_TERM
        assert apartment.metadata.created_at == now
        assert apartment.metadata.created_by == "admin"

    @pytest.mark.parametrize("rent", [0, -10, "0.00"])
    def test_rent_must_be_positive(self, make_apartment, rent):
        with pytest.raises(InvalidRentalAmountError):
            make_apartment(base_rent=rent)

    def test_cleaning_fee_not_negative(self, make_apartment):
        with pytest.raises(ValidationError, match="Cleaning fee cannot be negative"):
            make_apartment(cleaning_fee=-1)

    def test_invalid_unit_code(self, make_apartment):
        with pytest.raises(InvalidUnitCodeError):
            make_apartment("APT 1")

    def test_invalid_airbnb_link(self, make_apartment):
        with pytest.raises(InvalidAirbnbLinkError):
            make_apartment(rental_type=RentalType.AIRBNB, airbnb_link="https://booking.com/x")

    def test_long_term_cannot_carry_airbnb_link(self):
        with pytest.raises(BusinessRuleViolationError, match="Long-term apartments cannot have an Airbnb link"):
            Apartment("APT002", "Two", "Rua B", Decimal("1000"), airbnb_link="https://www.airbnb.com/rooms/1")

    def test_stored_long_term_record_with_link_rejected(self):
        with pytest.raises(BusinessRuleViolationError):
            Apartment.from_dict({
                "unit_code": "apt9",
                "unit_label": "Nine",
                "base_rent": "900",
                "rental_type": "long_term",
                "airbnb_link": "https://airbnb.com/rooms/9",
            })

    def test_label_required(self, make_apartment):
        with pytest.raises(ValidationError):
            make_apartment(unit_label="  ")


class TestStatusHelpers:
    def test_occupied_clears_availability(self, make_apartment):
        apartment = make_apartment()
        apartment.update_availability(True, date(2024, 7, 1))
        apartment.mark_as_occupied("admin")
        assert apartment.status is ApartmentStatus.OCCUPIED
        assert not apartment.is_available
        assert apartment.available_from is None

    def test_mark_as_available_sets_date(self, make_apartment):
        apartment = make_apartment(status=ApartmentStatus.OCCUPIED)
        apartment.mark_as_available(date(2024, 8, 1))
        assert apartment.is_available
        assert apartment.available_from == datetime(2024, 8, 1, tzinfo=timezone.utc)

    def test_deactivate(self, make_apartment):
        apartment = make_apartment()
        apartment.deactivate("admin")
        assert apartment.status is ApartmentStatus.INACTIVE

    def test_deactivate_twice_rejected(self, make_apartment):
        apartment = make_apartment()
        apartment.deactivate()
        with pytest.raises(InvalidStatusTransitionError):
            apartment.deactivate()


class TestMutators:
    def test_update_pricing(self, make_apartment):
        apartment = make_apartment(cleaning_fee="150")
        apartment.update_pricing("2800", updated_by="admin")
        assert apartment.base_rent == Decimal("2800")
        assert apartment.cleaning_fee == Decimal("150")
        apartment.update_pricing("2900", "0")
        assert apartment.cleaning_fee == Decimal("0")
        assert apartment.metadata.version == 3

    def test_update_pricing_rejects_zero_rent(self, make_apartment):
        apartment = make_apartment()
        with pytest.raises(InvalidRentalAmountError):
            apartment.update_pricing(0)
        assert apartment.base_rent == Decimal("2500.00")
        assert apartment.metadata.version == 1

    def test_switch_to_airbnb_with_link(self, make_apartment):
        apartment = make_apartment()
        apartment.update_rental_type("airbnb", "https://www.airbnb.com/rooms/42")
        assert apartment.rental_type is RentalType.AIRBNB
        assert apartment.airbnb_link == "https://www.airbnb.com/rooms/42"
        assert apartment.is_airbnb_enabled()
        assert not apartment.is_long_term_enabled()

    def test_short_stay_keeps_existing_link(self, make_apartment):
        apartment = make_apartment(rental_type=RentalType.AIRBNB, airbnb_link="https://airbnb.com/rooms/1")
        apartment.update_rental_type(RentalType.BOTH)
        assert apartment.airbnb_link == "https://airbnb.com/rooms/1"
        assert apartment.is_airbnb_enabled() and apartment.is_long_term_enabled()

    def test_long_term_clears_link(self, make_apartment):
        apartment = make_apartment(rental_type=RentalType.BOTH, airbnb_link="https://airbnb.com/rooms/1")
        apartment.update_rental_type(RentalType.LONG_TERM)
        assert apartment.airbnb_link is None

    def test_long_term_with_link_rejected(self, make_apartment):
        apartment = make_apartment()
        with pytest.raises(BusinessRuleViolationError):
            apartment.update_rental_type(RentalType.LONG_TERM, "https://airbnb.com/rooms/1")

    def test_update_amenities(self, make_apartment):
        apartment = make_apartment()
        apartment.update_amenities(updated_by="ops", has_wifi=True, has_kitchen=False)
        assert apartment.amenities.enabled() == ["has_wifi"]
        assert apartment.metadata.updated_by == "ops"

    def test_update_amenities_unknown(self, make_apartment):
        with pytest.raises(ValidationError):
            make_apartment().update_amenities(has_pool=True)

    def test_update_availability(self, make_apartment):
        apartment = make_apartment(status=ApartmentStatus.OCCUPIED)
        apartment.update_availability(True, datetime(2024, 9, 1, 15, tzinfo=timezone.utc))
        assert apartment.is_available
        apartment.update_availability(False, datetime(2024, 9, 1, tzinfo=timezone.utc))
        assert not apartment.is_available
        assert apartment.available_from is None

    def test_inactive_cannot_be_listed(self, make_apartment):
        apartment = make_apartment(status=ApartmentStatus.INACTIVE)
        with pytest.raises(BusinessRuleViolationError):
            apartment.update_availability(True)

    def test_images(self, make_apartment):
        apartment = make_apartment()
        apartment.add_image("apartments/APT001/1.jpg")
        apartment.add_image("apartments/APT001/2.jpg")
        apartment.remove_image("apartments/APT001/1.jpg")
        assert apartment.images == ["apartments/APT001/2.jpg"]

    def test_duplicate_image_rejected(self, make_apartment):
        apartment = make_apartment(images=["a.jpg"])
        with pytest.raises(BusinessRuleViolationError):
            apartment.add_image("a.jpg")

    def test_missing_image_rejected(self, make_apartment):
        with pytest.raises(BusinessRuleViolationError):
            make_apartment().remove_image("nope.jpg")

    def test_images_property_is_a_copy(self, make_apartment):
        apartment = make_apartment(images=["a.jpg"])
        apartment.images.append("b.jpg")
        assert apartment.images == ["a.jpg"]

    def test_update_contact_info(self, make_apartment):
        apartment = make_apartment()
        apartment.update_contact_info(ContactInfo.create("11987654321", "whatsapp", "Ana"))
        assert apartment.contact_info.contact_name == "Ana"
        apartment.update_contact_info(None)
        assert apartment.contact_info is None


def test_round_trip(make_apartment):
    apartment = make_apartment(
        cleaning_fee="120.50",
        rental_type=RentalType.BOTH,
        airbnb_link="https://www.airbnb.com.br/rooms/7",
        images=["a.jpg", "b.jpg"],
        contact_info=ContactInfo.create("+5511912345678", "call", "Joao"),
    )
    apartment.update_amenities(has_wifi=True, has_balcony=True)
    apartment.update_availability(True, date(2024, 7, 1), updated_by="ops")

    data = apartment.to_dict()
    assert data["base_rent"] == "2500.00"
    assert data["metadata"]["version"] == 3
    assert Apartment.from_dict(data).to_dict() == data


def test_minimal_record_loads():
    apartment = Apartment.from_dict({"unit_code": "apt9", "unit_label": "Nine", "base_rent": "900"})
    assert apartment.unit_code == "APT9"
    assert apartment.status is ApartmentStatus.AVAILABLE
    assert apartment.amenities.has_kitchen
