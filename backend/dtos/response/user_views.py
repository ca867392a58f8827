"""
User Read Models
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.value_objects.payment_status import PaymentStatus, PaymentType
from domain.value_objects.tax_id import DocumentType
from domain.value_objects.user_status import UserStatus
from dtos.response.apartment_views import ApartmentWithRelation, UserWithRelation
from dtos.response.entity_fields import RelationField, UserField


class UserPaymentSummary(BaseModel):
    """Payment behaviour of one user. Delay is in whole days."""

    total_payments: int = 0
    total_paid_amount: Decimal = Decimal("0")
    total_pending_amount: Decimal = Decimal("0")
    last_payment_date: Optional[datetime] = None
    average_payment_delay: int = 0


class PaymentHistoryItem(BaseModel):
    payment_id: str
    apartment_unit_code: str
    amount: Decimal
    due_date: datetime
    payment_date: Optional[datetime] = None
    status: PaymentStatus
    type: PaymentType
    days_overdue: int = 0
    has_proof: bool = False

    class Config:
        use_enum_values = True


class UserProfile(BaseModel):
    phone_number: str = Field(description="E.164")
    formatted_phone_number: str
    name: str
    document: Optional[str] = Field(None, description="Formatted CPF/CNPJ")
    document_type: DocumentType
    email: Optional[str] = None
    status: UserStatus
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        use_enum_values = True


class UserDetails(BaseModel):
    """Everything shown on a user detail page."""

    user: UserField
    profile: UserProfile
    related_users: List[UserWithRelation] = Field(default_factory=list)
    apartments: List[ApartmentWithRelation] = Field(default_factory=list)
    payment_history: List[PaymentHistoryItem] = Field(default_factory=list)
    payment_summary: UserPaymentSummary
    relationships: List[RelationField] = Field(default_factory=list)

    class Config:
        arbitrary_types_allowed = True
