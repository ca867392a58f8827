import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from domain.entities import Apartment, Contract, Payment, User, UserApartmentRelation
from domain.value_objects import ContractTerms, UserRole
from utils.logging_utils import clear_logging_context


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

TENANT_PHONE = "+5511987654321"
SECOND_PHONE = "+5511912345678"
ADMIN_PHONE = "+5521998765432"

VALID_CPF = "11144477735"
VALID_CNPJ = "11222333000181"


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


@pytest.fixture
def now():
    """Fixed clock shared by tests that evaluate time-dependent rules"""
    return NOW


@pytest.fixture(autouse=True)
def reset_logging_context():
    yield
    clear_logging_context()


@pytest.fixture(autouse=True)
def default_env(monkeypatch):
    """Start every test from the default configuration"""
    for key in (
        "RENTAL_DEFAULT_PHONE_REGION",
        "RENTAL_RECENT_PAYMENTS_LIMIT",
        "RENTAL_LOG_DIR",
        "RENTAL_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_apartment():
    def _make(unit_code="APT001", base_rent="2500.00", created_at=None, **kwargs):
        kwargs.setdefault("unit_label", f"Unit {unit_code}")
        kwargs.setdefault("address", "Rua Augusta 100, Consolação, São Paulo")
        return Apartment.create(
            unit_code,
            kwargs.pop("unit_label"),
            kwargs.pop("address"),
            base_rent,
            created_by="admin",
            now=created_at or days_ago(365),
            **kwargs,
        )
    return _make


@pytest.fixture
def make_user():
    def _make(phone=TENANT_PHONE, name="Maria Silva", created_at=None, **kwargs):
        return User.create(phone, name, created_by="admin", now=created_at or days_ago(200), **kwargs)
    return _make


@pytest.fixture
def make_terms():
    def _make(monthly_rent="2500.00", payment_due_day=5, **kwargs):
        return ContractTerms(monthly_rent=Decimal(monthly_rent), payment_due_day=payment_due_day, **kwargs)
    return _make


@pytest.fixture
def make_contract(make_terms):
    def _make(
        unit_code="APT001",
        tenant=TENANT_PHONE,
        start=None,
        end=None,
        contract_id=None,
        status=None,
        **terms,
    ):
        start = start or days_ago(100)
        end = end or start + timedelta(days=365)
        contract = Contract.create(
            unit_code,
            tenant,
            start,
            end,
            make_terms(**terms),
            contract_id=contract_id,
            created_by="admin",
            now=start,
        )
        if status in ("active", "terminated", "expired"):
            contract.activate("admin")
        if status == "terminated":
            contract.terminate("tenant moved out", "admin")
        elif status == "expired":
            contract.expire("admin")
        return contract
    return _make


@pytest.fixture
def make_payment():
    def _make(
        unit_code="APT001",
        phone=TENANT_PHONE,
        amount="2500.00",
        due=None,
        paid_on=None,
        created_at=None,
        contract_id="CONTRACT-APT001-0001",
        payment_id=None,
        status=None,
        **kwargs,
    ):
        due = due or days_ago(10)
        payment = Payment.create(
            unit_code,
            phone,
            amount,
            due,
            contract_id,
            payment_id=payment_id,
            created_by="system",
            now=created_at or due - timedelta(days=5),
            **kwargs,
        )
        if paid_on is not None:
            payment.submit_proof(f"proofs/{payment.payment_id}.pdf", paid_on, "tenant", now=NOW)
        if status == "validated":
            payment.validate("admin", now=NOW)
        elif status == "rejected":
            payment.reject("admin", "Illegible receipt", now=NOW)
        return payment
    return _make


@pytest.fixture
def make_relation():
    def _make(
        unit_code="APT001",
        phone=TENANT_PHONE,
        role=UserRole.PRIMARY_TENANT,
        relationship_type=None,
        created_at=None,
        **kwargs,
    ):
        return UserApartmentRelation.create(
            unit_code,
            phone,
            role,
            relationship_type=relationship_type,
            created_by="admin",
            now=created_at or days_ago(90),
            **kwargs,
        )
    return _make
