import pytest

from conftest import SECOND_PHONE, TENANT_PHONE, VALID_CNPJ, VALID_CPF
from domain.entities import User, UserApartmentRelation
from domain.value_objects import DocumentType, UserRole, UserStatus
from exceptions import BusinessRuleViolationError, InvalidStatusTransitionError, ValidationError


class TestUser:
    def test_create(self, make_user):
        user = make_user(document="111.444.777-35", email="maria@example.com")
        assert user.phone_number.value == TENANT_PHONE
        assert user.document.type is DocumentType.CPF
        assert user.status is UserStatus.ACTIVE
        assert user.is_active

    def test_without_document(self, make_user):
        assert make_user().document.type is DocumentType.NONE

    def test_invalid_email(self, make_user):
        with pytest.raises(ValidationError, match="Invalid email format"):
            make_user(email="not-an-email")

    def test_name_required(self, make_user):
        with pytest.raises(ValidationError):
            make_user(name="")

    def test_update_profile(self, make_user):
        user = make_user(email="old@example.com")
        user.update_profile(name="Maria Souza", updated_by="admin")
        assert user.name == "Maria Souza"
        assert user.email == "old@example.com"
        user.update_profile(email=None)
        assert user.email is None
        assert user.metadata.version == 3

    def test_update_document(self, make_user):
        user = make_user()
        user.update_document(VALID_CNPJ)
        assert user.document.type is DocumentType.CNPJ

    @pytest.mark.parametrize("action,status", [
        ("deactivate", UserStatus.INACTIVE),
        ("suspend", UserStatus.SUSPENDED),
    ])
    def test_status_changes(self, make_user, action, status):
        user = make_user()
        getattr(user, action)("admin")
        assert user.status is status
        assert not user.is_active
        user.activate()
        assert user.is_active

    @pytest.mark.parametrize("action", ["activate", "deactivate", "suspend"])
    def test_status_change_is_edge_triggered(self, make_user, action):
        user = make_user()
        if action != "activate":
            getattr(user, action)()
        with pytest.raises(InvalidStatusTransitionError, match="Invalid user status transition"):
            getattr(user, action)()

    def test_round_trip(self, make_user):
        user = make_user(document=VALID_CPF, email="maria@example.com")
        user.suspend("admin")
        data = user.to_dict()
        assert data["document"] == {"value": VALID_CPF, "type": "cpf", "formatted": "111.444.777-35"}
        assert User.from_dict(data).to_dict() == data

    def test_legacy_cpf_key(self):
        user = User.from_dict({"phone_number": TENANT_PHONE, "name": "Maria", "cpf": "111.444.777-35"})
        assert user.document.value == VALID_CPF


class TestRelation:
    def test_create(self, make_relation):
        relation = make_relation(unit_code="apt001")
        assert relation.key == ("APT001", TENANT_PHONE, "primary_tenant")
        assert relation.is_active
        assert relation.relationship_type is None

    def test_secondary_tenant_needs_relationship_type(self, make_relation):
        with pytest.raises(ValidationError, match="Relationship type is required for secondary tenants"):
            make_relation(phone=SECOND_PHONE, role=UserRole.SECONDARY_TENANT)

    def test_secondary_tenant(self, make_relation):
        relation = make_relation(phone=SECOND_PHONE, role="secondary_tenant", relationship_type=" spouse ")
        assert relation.relationship_type == "spouse"

    @pytest.mark.parametrize("role", list(UserRole))
    def test_empty_relationship_type_never_allowed(self, make_relation, role):
        with pytest.raises(ValidationError, match="Relationship type cannot be empty when provided"):
            make_relation(role=role, relationship_type="  ")

    def test_update_relationship_type_keeps_rule(self, make_relation):
        relation = make_relation(role=UserRole.SECONDARY_TENANT, relationship_type="spouse")
        relation.update_relationship_type("sibling")
        assert relation.relationship_type == "sibling"
        with pytest.raises(ValidationError):
            relation.update_relationship_type(None)
        assert relation.relationship_type == "sibling"

    def test_deactivate_and_activate(self, make_relation):
        relation = make_relation()
        relation.deactivate("admin")
        assert not relation.is_active
        with pytest.raises(BusinessRuleViolationError, match="Relationship is already inactive"):
            relation.deactivate()
        relation.activate()
        with pytest.raises(BusinessRuleViolationError, match="Relationship is already active"):
            relation.activate()
        assert relation.metadata.version == 3

    def test_round_trip(self, make_relation):
        relation = make_relation(role=UserRole.SECONDARY_TENANT, relationship_type="spouse", is_active=False)
        data = relation.to_dict()
        assert UserApartmentRelation.from_dict(data).to_dict() == data
