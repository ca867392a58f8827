import asyncio
from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import ADMIN_PHONE, NOW, SECOND_PHONE, TENANT_PHONE, days_ago
from exceptions import AggregationError
from services.payment_aggregation_service import PaymentAggregationService


@pytest.fixture
def service():
    return PaymentAggregationService()


class TestDetails:
    def test_payment_with_details(self, service, make_payment, make_apartment, make_user):
        payment = make_payment()
        details = asyncio.run(service.aggregate_payment_with_details(payment, make_apartment(), make_user()))
        data = details.model_dump()
        assert data["payment"]["payment_id"] == payment.payment_id
        assert data["apartment"]["unit_code"] == "APT001"
        assert data["user"]["phone_number"] == TENANT_PHONE
        assert data["contract"] is None

    def test_contract_with_details(self, service, make_contract, make_apartment, make_user, make_payment):
        contract = make_contract(contract_id="CONTRACT-APT001-0001", status="active")
        older = make_payment(due=days_ago(40), paid_on=days_ago(39))
        newer = make_payment(due=days_ago(10))
        unrelated = make_payment(contract_id="CONTRACT-APT001-0002", due=days_ago(2))

        details = asyncio.run(service.aggregate_contract_with_details(
            contract, make_apartment(), make_user(), [older, unrelated, newer], NOW
        ))

        assert details.payments == [newer, older]
        assert details.payment_summary.status == "overdue"
        assert details.payment_summary.overdue_count == 1

    def test_contract_failure_names_contract(self, service, make_apartment, make_user):
        with pytest.raises(AggregationError) as exc:
            asyncio.run(service.aggregate_contract_with_details(None, make_apartment(), make_user(), [], NOW))
        assert exc.value.context == "contract details for contract unknown"
        assert exc.value.message == "Failed to aggregate contract details for contract unknown"


class TestStatistics:
    def test_empty(self, service):
        stats = asyncio.run(service.aggregate_payment_statistics([], NOW))
        assert stats.total_payments == 0
        assert stats.total_revenue == Decimal("0")
        assert stats.payment_compliance_rate == 0.0

    def test_figures(self, service, make_payment):
        payments = [
            make_payment(due=days_ago(20), paid_on=days_ago(22)),
            make_payment(due=days_ago(10), paid_on=days_ago(5), status="validated"),
            make_payment(due=days_ago(3)),
            make_payment(due=NOW + timedelta(days=20)),
            make_payment(due=days_ago(30), paid_on=days_ago(1), status="rejected"),
        ]
        stats = asyncio.run(service.aggregate_payment_statistics(payments, NOW))

        assert stats.total_payments == 5
        assert stats.paid_payments == 2
        assert stats.pending_payments == 2
        assert stats.overdue_payments == 1
        assert stats.total_revenue == Decimal("5000.00")
        assert stats.average_payment_amount == Decimal("2500.00")
        assert stats.average_payment_delay == pytest.approx(2.5)
        assert stats.payment_compliance_rate == pytest.approx(50.0)


class TestBreakdowns:
    def test_by_apartment(self, service, make_apartment, make_payment):
        apartments = [make_apartment("APT003"), make_apartment("APT002"), make_apartment("APT001")]
        payments = [
            make_payment(due=days_ago(40), paid_on=days_ago(41)),
            make_payment(due=days_ago(10), paid_on=days_ago(8)),
            make_payment(due=days_ago(2)),
            make_payment(unit_code="APT002", amount="1500", due=days_ago(5), paid_on=days_ago(6), status="validated"),
        ]

        results = asyncio.run(service.aggregate_payments_by_apartment(payments, apartments))

        assert [r.apartment.unit_code for r in results] == ["APT001", "APT002", "APT003"]
        first, second, third = results
        assert first.total_revenue == Decimal("5000.00")
        assert first.average_monthly_revenue == Decimal("2500.00")
        assert first.payment_compliance_rate == pytest.approx(50.0)
        assert first.last_payment_date == days_ago(8)
        assert [p.due_date for p in first.payments] == [days_ago(2), days_ago(10), days_ago(40)]
        assert second.average_monthly_revenue == Decimal("1500")
        assert second.payment_compliance_rate == pytest.approx(100.0)
        assert third.total_revenue == Decimal("0")
        assert third.average_monthly_revenue == Decimal("0")
        assert third.last_payment_date is None

    def test_by_user(self, service, make_user, make_payment):
        users = [make_user(ADMIN_PHONE, "Ana"), make_user(SECOND_PHONE, "Joao"), make_user(TENANT_PHONE, "Maria")]
        payments = [
            make_payment(due=days_ago(40), paid_on=days_ago(41)),
            make_payment(due=days_ago(10), paid_on=days_ago(5)),
            make_payment(phone=SECOND_PHONE, amount="1500", due=days_ago(10), paid_on=days_ago(10)),
            make_payment(phone=SECOND_PHONE, amount="1000", due=days_ago(1)),
        ]

        results = asyncio.run(service.aggregate_payments_by_user(payments, users))

        assert [r.user.name for r in results] == ["Maria", "Joao", "Ana"]
        maria, joao, ana = results
        assert maria.total_paid == Decimal("5000.00")
        assert maria.average_payment_delay == 5
        assert maria.compliance_rate == pytest.approx(50.0)
        assert maria.last_payment_date == days_ago(5)
        assert joao.total_pending == Decimal("1000")
        assert joao.compliance_rate == pytest.approx(100.0)
        assert ana.payments == []
        assert ana.total_paid == Decimal("0")


class TestOverdue:
    def test_most_overdue_first(self, service, make_apartment, make_user, make_payment):
        apartments = [make_apartment("APT001"), make_apartment("APT002")]
        users = [make_user(TENANT_PHONE, "Maria"), make_user(SECOND_PHONE, "Joao")]
        payments = [
            make_payment(payment_id="P-10", due=days_ago(10)),
            make_payment(payment_id="P-30", unit_code="APT002", phone=SECOND_PHONE, due=days_ago(30)),
            make_payment(payment_id="P-FUTURE", due=NOW + timedelta(days=5)),
            make_payment(payment_id="P-PAID", due=days_ago(50), paid_on=days_ago(45)),
        ]

        results = asyncio.run(service.aggregate_overdue_payments(payments, apartments, users, NOW))

        assert [r.payment.payment_id for r in results] == ["P-30", "P-10"]
        assert results[0].apartment.unit_code == "APT002"
        assert results[0].user.name == "Joao"

    def test_missing_payer_fails(self, service, make_apartment, make_user, make_payment):
        payments = [make_payment(payment_id="P-ORPHAN", phone=ADMIN_PHONE, due=days_ago(3))]
        with pytest.raises(AggregationError, match="Missing related entities for payment P-ORPHAN") as exc:
            asyncio.run(service.aggregate_overdue_payments(payments, [make_apartment()], [make_user()], NOW))
        assert exc.value.context == "overdue payments"

    def test_missing_apartment_fails(self, service, make_user, make_payment):
        payments = [make_payment(due=days_ago(3))]
        with pytest.raises(AggregationError):
            asyncio.run(service.aggregate_overdue_payments(payments, [], [make_user()], NOW))

    def test_nothing_overdue(self, service, make_payment):
        payments = [make_payment(due=NOW + timedelta(days=1))]
        assert asyncio.run(service.aggregate_overdue_payments(payments, [], [], NOW)) == []
