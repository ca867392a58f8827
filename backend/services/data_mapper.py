"""
Data Mapper

Pure projections from entities to read models. Nothing here mutates its
inputs or performs I/O; every method that depends on the current time takes
an optional ``now`` so results are reproducible.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from constants import AMENITY_FEATURE_LABELS, PaymentHealth, TimelineEventType
from domain.entities import Apartment, Contract, Payment, User, UserApartmentRelation
from domain.value_objects.contract_status import ContractStatus
from domain.value_objects.payment_status import PaymentStatus
from dtos.response import (
    ApartmentListing,
    ApartmentWithRelation,
    ContractStatistics,
    Location,
    PaymentHistoryItem,
    PaymentStatusSummary,
    PriceRange,
    TimelineEvent,
    UserPaymentSummary,
    UserProfile,
    UserWithRelation,
)
from repositories.entity_specifications import ActiveRelationSpec, PaymentsByStatusSpec, SettledPaymentSpec
from utils.date_helpers import resolve_now, whole_days_between

logger = logging.getLogger(__name__)


def sum_amounts(payments: Iterable[Payment]) -> Decimal:
    return sum((p.amount for p in payments), Decimal("0"))


def settled(payments: Iterable[Payment]) -> List[Payment]:
    """PAID and VALIDATED payments, the ones that count as revenue."""
    return SettledPaymentSpec().filter(payments)


def pending(payments: Iterable[Payment]) -> List[Payment]:
    return PaymentsByStatusSpec(PaymentStatus.PENDING).filter(payments)


def newest_first(payments: Iterable[Payment]) -> List[Payment]:
    """Sort by creation time, most recent first (stable for ties)."""
    return sorted(payments, key=lambda p: p.metadata.created_at, reverse=True)


class DataMapper:
    """Stateless entity-to-read-model projections."""

    @staticmethod
    def map_user_with_relation(user: User, relation: UserApartmentRelation) -> UserWithRelation:
        return UserWithRelation(
            user=user,
            role=relation.role,
            relationship_type=relation.relationship_type,
            is_active=relation.is_active,
            relationship_created_at=relation.metadata.created_at,
            relationship_updated_at=relation.metadata.updated_at,
        )

    @staticmethod
    def map_apartment_with_relation(apartment: Apartment, relation: UserApartmentRelation) -> ApartmentWithRelation:
        return ApartmentWithRelation(
            apartment=apartment,
            role=relation.role,
            relationship_type=relation.relationship_type,
            is_active=relation.is_active,
            relationship_created_at=relation.metadata.created_at,
            relationship_updated_at=relation.metadata.updated_at,
        )

    @staticmethod
    def parse_location(address: str) -> Location:
        """
        Split a free-text address by comma.

        With two or more segments the last is the city and the one before it
        the neighborhood; otherwise neither is known.
        """
        parts = [part.strip() for part in address.split(",")]
        if len(parts) < 2:
            return Location(address=address)
        return Location(address=address, neighborhood=parts[-2], city=parts[-1])

    @staticmethod
    def map_apartment_listing(apartment: Apartment) -> ApartmentListing:
        """Public listing card: features, location and price range."""
        features = [
            AMENITY_FEATURE_LABELS[name]
            for name in apartment.amenities.enabled()
        ]
        return ApartmentListing(
            apartment=apartment,
            images=apartment.images,
            is_available=apartment.is_available,
            available_from=apartment.available_from,
            airbnb_link=apartment.airbnb_link,
            price_range=PriceRange(
                min=apartment.base_rent,
                max=apartment.base_rent + apartment.cleaning_fee,
            ),
            features=features,
            location=DataMapper.parse_location(apartment.address),
        )

    @staticmethod
    def calculate_payment_status(
        payments: Sequence[Payment],
        now: Optional[datetime] = None,
    ) -> PaymentStatusSummary:
        """
        Summarize payment health.

        Overdue means PENDING with a due date before ``now``. Days since last
        payment use the most recently created payment, dated by its payment
        date when present and its creation time otherwise.
        """
        if not payments:
            return PaymentStatusSummary(status=PaymentHealth.NO_PAYMENTS)

        now = resolve_now(now)
        last = newest_first(payments)[0]
        pending_payments = pending(payments)
        overdue_count = sum(1 for p in pending_payments if p.due_date < now)
        total_pending = sum_amounts(pending_payments)
        effective_date = last.payment_date or last.metadata.created_at

        return PaymentStatusSummary(
            status=PaymentHealth.OVERDUE if overdue_count else PaymentHealth.CURRENT,
            days_since_last_payment=whole_days_between(effective_date, now),
            total_pending_amount=total_pending if total_pending > 0 else None,
            overdue_count=overdue_count or None,
        )

    @staticmethod
    def create_timeline_events(
        contracts: Sequence[Contract],
        payments: Sequence[Payment],
        relations: Sequence[UserApartmentRelation],
    ) -> List[TimelineEvent]:
        """Build an apartment history, newest event first."""
        events: List[TimelineEvent] = []

        for contract in contracts:
            events.append(TimelineEvent(
                date=contract.start_date,
                type=TimelineEventType.CONTRACT,
                description=f"Contract started with {contract.tenant_phone_number.formatted}",
                details={
                    "contract_id": contract.contract_id,
                    "monthly_rent": contract.monthly_rent,
                    "end_date": contract.end_date,
                },
                related_entity_id=contract.contract_id,
            ))
            if contract.status in {ContractStatus.TERMINATED, ContractStatus.EXPIRED}:
                events.append(TimelineEvent(
                    date=contract.end_date,
                    type=TimelineEventType.CONTRACT,
                    description=f"Contract {contract.status.value} with {contract.tenant_phone_number.formatted}",
                    details={
                        "contract_id": contract.contract_id,
                        "status": contract.status.value,
                        "termination_reason": contract.termination_reason,
                    },
                    related_entity_id=contract.contract_id,
                ))

        for payment in payments:
            if payment.payment_date is None:
                continue
            events.append(TimelineEvent(
                date=payment.payment_date,
                type=TimelineEventType.PAYMENT,
                description=f"Payment received from {payment.user_phone_number.formatted}",
                details={
                    "payment_id": payment.payment_id,
                    "amount": payment.amount,
                    "status": payment.status.value,
                },
                related_entity_id=payment.payment_id,
            ))

        removed = ~ActiveRelationSpec()
        for relation in relations:
            phone = relation.user_phone_number
            details = {"role": relation.role.value, "relationship_type": relation.relationship_type}
            events.append(TimelineEvent(
                date=relation.metadata.created_at,
                type=TimelineEventType.USER_ADDED,
                description=f"User {phone.formatted} added as {relation.role.value}",
                details=details,
                related_entity_id=phone.value,
            ))
            if removed.is_satisfied_by(relation):
                events.append(TimelineEvent(
                    date=relation.metadata.updated_at,
                    type=TimelineEventType.USER_REMOVED,
                    description=f"User {phone.formatted} removed as {relation.role.value}",
                    details=dict(details),
                    related_entity_id=phone.value,
                ))

        # sorted() is stable, so ties keep emission order
        return sorted(events, key=lambda e: e.date, reverse=True)

    @staticmethod
    def calculate_apartment_statistics(
        contracts: Sequence[Contract],
        now: Optional[datetime] = None,
    ) -> ContractStatistics:
        """Occupancy durations in whole days."""
        now = resolve_now(now)
        completed = [c for c in contracts if c.status in {ContractStatus.TERMINATED, ContractStatus.EXPIRED}]
        durations = [whole_days_between(c.start_date, c.end_date) for c in completed]
        average = sum(durations) // len(durations) if durations else 0

        active = next((c for c in contracts if c.status is ContractStatus.ACTIVE), None)
        current = whole_days_between(active.start_date, now) if active else None

        return ContractStatistics(
            total_contracts=len(contracts),
            average_occupancy_duration=average,
            current_occupancy_duration=current,
        )

    @staticmethod
    def calculate_user_payment_summary(payments: Sequence[Payment]) -> UserPaymentSummary:
        """
        Totals and punctuality of one user's payments.

        The average delay only counts payments made strictly after their due
        date; early and on-time payments are left out of the mean.
        """
        if not payments:
            return UserPaymentSummary()

        paid = settled(payments)
        dated = [p for p in paid if p.payment_date is not None]
        last_payment_date = max((p.payment_date for p in dated), default=None)

        delays = [d for d in (p.get_payment_delay() for p in dated) if d > 0]
        average_delay = sum(delays) // len(delays) if delays else 0

        return UserPaymentSummary(
            total_payments=len(payments),
            total_paid_amount=sum_amounts(paid),
            total_pending_amount=sum_amounts(pending(payments)),
            last_payment_date=last_payment_date,
            average_payment_delay=average_delay,
        )

    @staticmethod
    def map_payment_history(payment: Payment, now: Optional[datetime] = None) -> PaymentHistoryItem:
        return PaymentHistoryItem(
            payment_id=payment.payment_id,
            apartment_unit_code=payment.apartment_unit_code,
            amount=payment.amount,
            due_date=payment.due_date,
            payment_date=payment.payment_date,
            status=payment.status,
            type=payment.type,
            days_overdue=payment.get_days_overdue(now),
            has_proof=payment.has_proof(),
        )

    @staticmethod
    def map_user_profile(user: User) -> UserProfile:
        return UserProfile(
            phone_number=user.phone_number.value,
            formatted_phone_number=user.phone_number.formatted,
            name=user.name,
            document=user.document.formatted,
            document_type=user.document.type,
            email=user.email,
            status=user.status,
            is_active=user.is_active,
            created_at=user.metadata.created_at,
            updated_at=user.metadata.updated_at,
        )
