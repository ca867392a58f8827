"""
Response DTOs

Read models returned by the aggregation services. They carry no behaviour
and dump to plain data for whatever layer serializes them.
"""

from dtos.response.apartment_views import (
    ApartmentDetails,
    ApartmentListing,
    ApartmentLog,
    ApartmentLogStatistics,
    ApartmentWithPaymentInfo,
    ApartmentWithRelation,
    ContractStatistics,
    Location,
    PaymentStatusSummary,
    PortfolioStatistics,
    PriceRange,
    TimelineEvent,
    UserWithRelation,
)
from dtos.response.payment_views import (
    ApartmentPaymentBreakdown,
    ContractWithDetails,
    PaymentStatistics,
    PaymentWithDetails,
    UserPaymentBreakdown,
)
from dtos.response.user_views import PaymentHistoryItem, UserDetails, UserPaymentSummary, UserProfile

__all__ = [
    "ApartmentDetails",
    "ApartmentListing",
    "ApartmentLog",
    "ApartmentLogStatistics",
    "ApartmentPaymentBreakdown",
    "ApartmentWithPaymentInfo",
    "ApartmentWithRelation",
    "ContractStatistics",
    "ContractWithDetails",
    "Location",
    "PaymentHistoryItem",
    "PaymentStatistics",
    "PaymentStatusSummary",
    "PaymentWithDetails",
    "PortfolioStatistics",
    "PriceRange",
    "TimelineEvent",
    "UserDetails",
    "UserPaymentBreakdown",
    "UserPaymentSummary",
    "UserProfile",
    "UserWithRelation",
]
