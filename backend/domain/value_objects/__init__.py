"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- PhoneNumber: E.164 phone number with formatting helpers
- TaxId: CPF/CNPJ document with check digit validation
- ApartmentStatus: Occupancy state with its transition allow-list
- EntityMetadata: Versioned audit trail
"""

from domain.value_objects.apartment_amenities import ApartmentAmenities
from domain.value_objects.apartment_status import ApartmentStatus, RentalType
from domain.value_objects.contact_info import ContactInfo, ContactMethod
from domain.value_objects.contract_status import ContractStatus
from domain.value_objects.contract_terms import ContractTerms
from domain.value_objects.entity_metadata import EntityMetadata
from domain.value_objects.money import to_money
from domain.value_objects.payment_status import PaymentStatus, PaymentType
from domain.value_objects.phone_number import PhoneNumber
from domain.value_objects.tax_id import DocumentType, TaxId
from domain.value_objects.user_role import UserRole
from domain.value_objects.user_status import UserStatus

__all__ = [
    "ApartmentAmenities",
    "ApartmentStatus",
    "ContactInfo",
    "ContactMethod",
    "ContractStatus",
    "ContractTerms",
    "DocumentType",
    "EntityMetadata",
    "PaymentStatus",
    "PaymentType",
    "PhoneNumber",
    "RentalType",
    "TaxId",
    "UserRole",
    "UserStatus",
    "to_money",
]
