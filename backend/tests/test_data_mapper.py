from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import ADMIN_PHONE, NOW, SECOND_PHONE, VALID_CPF, days_ago
from domain.value_objects import UserRole
from services.data_mapper import DataMapper, newest_first, pending, settled, sum_amounts


class TestPaymentStatus:
    def test_no_payments_dumps_only_status(self):
        summary = DataMapper.calculate_payment_status([], NOW)
        assert summary.model_dump(exclude_none=True) == {"status": "no_payments"}

    def test_single_overdue_payment(self, make_payment):
        payment = make_payment(due=days_ago(10))
        summary = DataMapper.calculate_payment_status([payment], NOW)
        assert summary.status == "overdue"
        assert summary.overdue_count == 1
        assert summary.total_pending_amount == Decimal("2500.00")
        assert summary.days_since_last_payment == 15

    def test_naive_now_is_read_as_utc(self, make_payment):
        payment = make_payment(due=days_ago(10).replace(tzinfo=None))
        summary = DataMapper.calculate_payment_status([payment], NOW.replace(tzinfo=None))
        assert summary.status == "overdue"
        assert summary.overdue_count == 1
        assert summary.days_since_last_payment == 15

    def test_pending_not_yet_due_is_current(self, make_payment):
        payment = make_payment(due=NOW + timedelta(days=5), created_at=days_ago(1))
        summary = DataMapper.calculate_payment_status([payment], NOW)
        assert summary.status == "current"
        assert summary.overdue_count is None
        assert summary.total_pending_amount == Decimal("2500.00")
        assert summary.days_since_last_payment == 1

    def test_settled_only_omits_optional_fields(self, make_payment):
        payment = make_payment(due=days_ago(10), paid_on=days_ago(7))
        summary = DataMapper.calculate_payment_status([payment], NOW)
        assert summary.model_dump(exclude_none=True) == {"status": "current", "days_since_last_payment": 7}

    def test_overdue_status_payments_are_not_counted(self, make_payment):
        payment = make_payment(due=days_ago(10))
        payment.mark_overdue(now=NOW)
        summary = DataMapper.calculate_payment_status([payment], NOW)
        assert summary.status == "current"
        assert summary.overdue_count is None

    def test_last_payment_is_most_recently_created(self, make_payment):
        older = make_payment(due=days_ago(40), paid_on=days_ago(2), created_at=days_ago(45))
        newer = make_payment(due=days_ago(10), paid_on=days_ago(9), created_at=days_ago(15))
        summary = DataMapper.calculate_payment_status([older, newer], NOW)
        assert summary.days_since_last_payment == 9


class TestUserPaymentSummary:
    def test_late_payment_delay(self, make_payment):
        summary = DataMapper.calculate_user_payment_summary([make_payment(due=days_ago(20), paid_on=days_ago(15))])
        assert summary.average_payment_delay == 5

    def test_early_payment_delay_is_zero(self, make_payment):
        summary = DataMapper.calculate_user_payment_summary([make_payment(due=days_ago(10), paid_on=days_ago(12))])
        assert summary.average_payment_delay == 0

    def test_totals(self, make_payment):
        payments = [
            make_payment(due=days_ago(20), paid_on=days_ago(15)),
            make_payment(due=days_ago(10), paid_on=days_ago(12), status="validated"),
            make_payment(amount="1000", due=days_ago(2)),
            make_payment(amount="700", due=days_ago(40), paid_on=days_ago(30), status="rejected"),
        ]
        summary = DataMapper.calculate_user_payment_summary(payments)
        assert summary.total_payments == 4
        assert summary.total_paid_amount == Decimal("5000")
        assert summary.total_pending_amount == Decimal("1000")
        assert summary.last_payment_date == days_ago(12)
        assert summary.average_payment_delay == 5

    def test_mean_is_floored(self, make_payment):
        payments = [
            make_payment(due=days_ago(20), paid_on=days_ago(17)),
            make_payment(due=days_ago(30), paid_on=days_ago(26)),
        ]
        assert DataMapper.calculate_user_payment_summary(payments).average_payment_delay == 3

    def test_empty(self):
        summary = DataMapper.calculate_user_payment_summary([])
        assert summary.total_payments == 0
        assert summary.total_paid_amount == Decimal("0")
        assert summary.last_payment_date is None


class TestTimeline:
    def test_events_newest_first(self, make_contract, make_payment, make_relation):
        contracts = [
            make_contract(start=days_ago(500), end=days_ago(135), status="terminated"),
            make_contract(start=days_ago(100), status="active"),
        ]
        payments = [
            make_payment(due=days_ago(10), paid_on=days_ago(5)),
            make_payment(due=days_ago(3)),
        ]
        removed = make_relation(phone=SECOND_PHONE, role=UserRole.EMERGENCY_CONTACT, created_at=days_ago(300))
        removed.deactivate("admin")
        relations = [make_relation(created_at=days_ago(100)), removed]

        events = DataMapper.create_timeline_events(contracts, payments, relations)

        assert [e.type for e in events].count("contract") == 3
        assert [e.type for e in events].count("payment") == 1
        assert [e.type for e in events].count("user_added") == 2
        assert [e.type for e in events].count("user_removed") == 1
        dates = [e.date for e in events]
        assert dates == sorted(dates, reverse=True)

    def test_ties_keep_emission_order(self, make_contract, make_relation):
        contract = make_contract(start=days_ago(100))
        relation = make_relation(created_at=days_ago(100))
        events = DataMapper.create_timeline_events([contract], [], [relation])
        assert [e.type for e in events] == ["contract", "user_added"]
        assert events[0].related_entity_id == contract.contract_id
        assert events[1].related_entity_id == relation.user_phone_number.value

    def test_reactivated_relation_has_no_removal_event(self, make_relation):
        relation = make_relation(created_at=days_ago(100))
        relation.deactivate("admin")
        relation.activate("admin")
        events = DataMapper.create_timeline_events([], [], [relation])
        assert [e.type for e in events] == ["user_added"]

    def test_terminated_contract_end_event(self, make_contract):
        contract = make_contract(start=days_ago(400), end=days_ago(35), status="terminated")
        events = DataMapper.create_timeline_events([contract], [], [])
        assert events[0].date == days_ago(35)
        assert events[0].details["termination_reason"] == "tenant moved out"
        assert events[1].date == days_ago(400)

    def test_empty(self):
        assert DataMapper.create_timeline_events([], [], []) == []


class TestApartmentStatistics:
    def test_durations(self, make_contract):
        contracts = [
            make_contract(start=days_ago(500), end=days_ago(135), status="terminated"),
            make_contract(start=days_ago(900), end=days_ago(540), status="expired"),
            make_contract(start=days_ago(100), status="active"),
            make_contract(start=days_ago(10)),
        ]
        stats = DataMapper.calculate_apartment_statistics(contracts, NOW)
        assert stats.total_contracts == 4
        assert stats.average_occupancy_duration == 362
        assert stats.current_occupancy_duration == 100

    def test_no_contracts(self):
        stats = DataMapper.calculate_apartment_statistics([], NOW)
        assert stats.model_dump() == {
            "total_contracts": 0,
            "average_occupancy_duration": 0,
            "current_occupancy_duration": None,
        }


class TestListing:
    @pytest.mark.parametrize("address,neighborhood,city", [
        ("Rua Augusta 100, Consolação, São Paulo", "Consolação", "São Paulo"),
        ("Rua A, Recife", "Rua A", "Recife"),
        ("Rua A", None, None),
        ("", None, None),
    ])
    def test_parse_location(self, address, neighborhood, city):
        location = DataMapper.parse_location(address)
        assert location.address == address
        assert location.neighborhood == neighborhood
        assert location.city == city

    def test_listing(self, make_apartment):
        apartment = make_apartment(cleaning_fee="150", images=["1.jpg"])
        apartment.update_amenities(pet_friendly=True, has_wifi=True)
        listing = DataMapper.map_apartment_listing(apartment)

        assert listing.features == ["Wi-Fi", "Kitchen", "Pet friendly"]
        assert listing.price_range.min == Decimal("2500.00")
        assert listing.price_range.max == Decimal("2650.00")
        assert listing.location.city == "São Paulo"
        assert listing.images == ["1.jpg"]
        assert listing.model_dump()["apartment"]["unit_code"] == "APT001"


class TestFlatProjections:
    def test_user_with_relation(self, make_user, make_relation):
        user = make_user(SECOND_PHONE, "Joao")
        relation = make_relation(phone=SECOND_PHONE, role=UserRole.SECONDARY_TENANT, relationship_type="spouse")
        view = DataMapper.map_user_with_relation(user, relation)
        assert view.user is user
        assert view.role == "secondary_tenant"
        assert view.relationship_type == "spouse"
        assert view.relationship_created_at == relation.metadata.created_at
        assert view.model_dump()["user"]["name"] == "Joao"

    def test_apartment_with_relation(self, make_apartment, make_relation):
        apartment = make_apartment()
        relation = make_relation(phone=ADMIN_PHONE, role=UserRole.ADMIN, is_active=False)
        view = DataMapper.map_apartment_with_relation(apartment, relation)
        assert view.apartment is apartment
        assert view.role == "admin"
        assert not view.is_active

    def test_payment_history(self, make_payment):
        item = DataMapper.map_payment_history(make_payment(due=days_ago(8)), NOW)
        assert item.days_overdue == 8
        assert item.status == "pending"
        assert not item.has_proof

    def test_user_profile(self, make_user):
        profile = DataMapper.map_user_profile(make_user(document=VALID_CPF))
        assert profile.formatted_phone_number == "+55 11 98765-4321"
        assert profile.document == "111.444.777-35"
        assert profile.document_type == "cpf"
        assert profile.status == "active"
        assert profile.is_active


class TestHelpers:
    def test_settled_and_pending(self, make_payment):
        paid = make_payment(paid_on=days_ago(1))
        open_ = make_payment()
        assert settled([paid, open_]) == [paid]
        assert pending([paid, open_]) == [open_]
        assert sum_amounts([paid, open_]) == Decimal("5000.00")
        assert sum_amounts([]) == Decimal("0")

    def test_newest_first_is_stable(self, make_payment):
        a = make_payment(created_at=days_ago(5))
        b = make_payment(created_at=days_ago(5))
        c = make_payment(created_at=days_ago(1))
        assert newest_first([a, b, c]) == [c, a, b]
