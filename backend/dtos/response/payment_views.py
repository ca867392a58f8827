"""
Payment Read Models
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from dtos.response.apartment_views import PaymentStatusSummary
from dtos.response.entity_fields import ApartmentField, ContractField, PaymentField, UserField


class PaymentWithDetails(BaseModel):
    payment: PaymentField
    apartment: ApartmentField
    user: UserField
    contract: Optional[ContractField] = None

    class Config:
        arbitrary_types_allowed = True


class ContractWithDetails(BaseModel):
    contract: ContractField
    apartment: ApartmentField
    tenant: UserField
    payments: List[PaymentField] = Field(default_factory=list, description="Due date descending")
    payment_summary: PaymentStatusSummary

    class Config:
        arbitrary_types_allowed = True


class PaymentStatistics(BaseModel):
    """Dashboard figures over a set of payments. Rates are percentages."""

    total_payments: int = 0
    paid_payments: int = 0
    pending_payments: int = 0
    overdue_payments: int = 0
    total_revenue: Decimal = Decimal("0")
    average_payment_amount: Decimal = Decimal("0")
    average_payment_delay: float = 0.0
    payment_compliance_rate: float = 0.0


class ApartmentPaymentBreakdown(BaseModel):
    apartment: ApartmentField
    payments: List[PaymentField] = Field(default_factory=list)
    total_revenue: Decimal
    average_monthly_revenue: Decimal
    payment_compliance_rate: float
    last_payment_date: Optional[datetime] = None

    class Config:
        arbitrary_types_allowed = True


class UserPaymentBreakdown(BaseModel):
    user: UserField
    payments: List[PaymentField] = Field(default_factory=list)
    total_paid: Decimal
    total_pending: Decimal
    average_payment_delay: int
    compliance_rate: float
    last_payment_date: Optional[datetime] = None

    class Config:
        arbitrary_types_allowed = True
