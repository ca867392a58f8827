"""
Apartment Read Models

Composite views built by the apartment aggregation service.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from constants import PaymentHealth, TimelineEventType
from domain.value_objects.user_role import UserRole
from dtos.response.entity_fields import ApartmentField, ContractField, PaymentField, UserField


class PaymentStatusSummary(BaseModel):
    """
    Payment health of a set of payments.

    Optional fields are left out entirely when they do not apply, so
    ``model_dump(exclude_none=True)`` of an empty summary is ``{"status": "no_payments"}``.
    """

    status: PaymentHealth = Field(description="current, overdue or no_payments")
    days_since_last_payment: Optional[int] = Field(None, description="Days since the latest payment")
    total_pending_amount: Optional[Decimal] = Field(None, description="Sum of PENDING amounts, when non-zero")
    overdue_count: Optional[int] = Field(None, description="PENDING payments past due, when non-zero")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class UserWithRelation(BaseModel):
    """A user together with the relation linking it to an apartment."""

    user: UserField
    role: UserRole
    relationship_type: Optional[str] = None
    is_active: bool
    relationship_created_at: datetime
    relationship_updated_at: datetime

    class Config:
        arbitrary_types_allowed = True
        use_enum_values = True


class ApartmentWithRelation(BaseModel):
    """An apartment together with the relation linking it to a user."""

    apartment: ApartmentField
    role: UserRole
    relationship_type: Optional[str] = None
    is_active: bool
    relationship_created_at: datetime
    relationship_updated_at: datetime

    class Config:
        arbitrary_types_allowed = True
        use_enum_values = True


class ApartmentWithPaymentInfo(BaseModel):
    """Row of the admin apartment listing."""

    apartment: ApartmentField
    last_payment: Optional[PaymentField] = None
    payment_status: PaymentStatusSummary
    total_payments: int
    total_paid_amount: Decimal
    total_pending_amount: Decimal

    class Config:
        arbitrary_types_allowed = True


class ApartmentDetails(BaseModel):
    """Everything shown on an apartment detail page."""

    apartment: ApartmentField
    users: List[UserWithRelation] = Field(default_factory=list)
    active_contract: Optional[ContractField] = None
    contract_history: List[ContractField] = Field(default_factory=list)
    recent_payments: List[PaymentField] = Field(default_factory=list)
    payment_summary: PaymentStatusSummary

    class Config:
        arbitrary_types_allowed = True


class TimelineEvent(BaseModel):
    date: datetime
    type: TimelineEventType
    description: str
    details: Dict[str, Any] = Field(default_factory=dict)
    related_entity_id: Optional[str] = None

    class Config:
        use_enum_values = True


class ContractStatistics(BaseModel):
    """Occupancy figures derived from an apartment's contracts (durations in days)."""

    total_contracts: int
    average_occupancy_duration: int
    current_occupancy_duration: Optional[int] = None


class ApartmentLogStatistics(ContractStatistics):
    total_payments: int
    total_revenue: Decimal


class ApartmentLog(BaseModel):
    """Historical view of an apartment."""

    apartment: ApartmentField
    contracts: List[ContractField] = Field(default_factory=list)
    payments: List[PaymentField] = Field(default_factory=list)
    timeline: List[TimelineEvent] = Field(default_factory=list)
    statistics: ApartmentLogStatistics

    class Config:
        arbitrary_types_allowed = True


class PriceRange(BaseModel):
    min: Decimal
    max: Decimal


class Location(BaseModel):
    address: str
    neighborhood: Optional[str] = None
    city: Optional[str] = None


class ApartmentListing(BaseModel):
    """Public listing card."""

    apartment: ApartmentField
    images: List[str] = Field(default_factory=list)
    is_available: bool
    available_from: Optional[datetime] = None
    airbnb_link: Optional[str] = None
    price_range: PriceRange
    features: List[str] = Field(default_factory=list)
    location: Location

    class Config:
        arbitrary_types_allowed = True


class PortfolioStatistics(BaseModel):
    """Dashboard figures across all apartments."""

    total_apartments: int
    occupied_apartments: int
    available_apartments: int
    maintenance_apartments: int
    occupancy_rate: float = Field(description="Occupied share in percent")
    average_rent: Decimal
    total_monthly_revenue: Decimal = Field(description="Settled payments due this month")
    airbnb_apartments: int
    long_term_apartments: int
