"""
Payment Aggregation Service

Dashboard and reporting views over payments: per-payment and per-contract
details, portfolio statistics, and breakdowns by apartment and by user.
"""

import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from domain.entities import Apartment, Contract, Payment, User
from dtos.response import (
    ApartmentPaymentBreakdown,
    ContractWithDetails,
    PaymentStatistics,
    PaymentWithDetails,
    UserPaymentBreakdown,
)
from exceptions import AggregationError
from repositories.entity_specifications import (
    BelongsToApartmentSpec,
    OverduePaymentSpec,
    PaymentsByContractSpec,
    PaymentsByUserSpec,
)
from services.data_mapper import DataMapper, pending, settled, sum_amounts
from utils.date_helpers import resolve_now, whole_days_between
from utils.error_handlers import describe_contract, describe_payment, handle_aggregation_errors

logger = logging.getLogger(__name__)


def _for_payment(self, payment=None, *args, **kwargs) -> str:
    return describe_payment(payment)


def _for_contract(self, contract=None, *args, **kwargs) -> str:
    return describe_contract(contract)


def _compliance_rate(paid: Sequence[Payment]) -> float:
    """Percentage of settled payments made on or before their due date."""
    if not paid:
        return 0.0
    on_time = sum(1 for p in paid if p.payment_date is not None and p.payment_date <= p.due_date)
    return (on_time / len(paid)) * 100


def _by_due_date_desc(payments: Sequence[Payment]) -> List[Payment]:
    return sorted(payments, key=lambda p: p.due_date, reverse=True)


class PaymentAggregationService:
    """Builds payment read models from already-fetched collections."""

    @handle_aggregation_errors("payment details", _for_payment)
    async def aggregate_payment_with_details(
        self,
        payment: Payment,
        apartment: Apartment,
        user: User,
        contract: Optional[Contract] = None,
    ) -> PaymentWithDetails:
        return PaymentWithDetails(payment=payment, apartment=apartment, user=user, contract=contract)

    @handle_aggregation_errors("contract details", _for_contract)
    async def aggregate_contract_with_details(
        self,
        contract: Contract,
        apartment: Apartment,
        tenant: User,
        payments: Sequence[Payment],
        now: Optional[datetime] = None,
    ) -> ContractWithDetails:
        """Contract with its payments (due date descending) and their health."""
        contract_payments = PaymentsByContractSpec(contract.contract_id).filter(payments)
        return ContractWithDetails(
            contract=contract,
            apartment=apartment,
            tenant=tenant,
            payments=_by_due_date_desc(contract_payments),
            payment_summary=DataMapper.calculate_payment_status(contract_payments, now),
        )

    @handle_aggregation_errors("payment statistics")
    async def aggregate_payment_statistics(
        self,
        payments: Sequence[Payment],
        now: Optional[datetime] = None,
    ) -> PaymentStatistics:
        """
        Portfolio payment figures.

        Unlike the per-user summary, the average delay here counts every
        dated settled payment, with early payments contributing zero.
        """
        if not payments:
            return PaymentStatistics()

        now = resolve_now(now)
        paid = settled(payments)
        total_revenue = sum_amounts(paid)

        delays = [max(0, p.get_payment_delay()) for p in paid if p.payment_date is not None]

        return PaymentStatistics(
            total_payments=len(payments),
            paid_payments=len(paid),
            pending_payments=len(pending(payments)),
            overdue_payments=len(OverduePaymentSpec(now).filter(payments)),
            total_revenue=total_revenue,
            average_payment_amount=total_revenue / len(paid) if paid else Decimal("0"),
            average_payment_delay=sum(delays) / len(delays) if delays else 0.0,
            payment_compliance_rate=_compliance_rate(paid),
        )

    @handle_aggregation_errors("payments by apartment")
    async def aggregate_payments_by_apartment(
        self,
        payments: Sequence[Payment],
        apartments: Sequence[Apartment],
    ) -> List[ApartmentPaymentBreakdown]:
        """Revenue per apartment, highest first."""
        results = []
        for apartment in apartments:
            apartment_payments = BelongsToApartmentSpec(apartment.unit_code).filter(payments)
            paid = settled(apartment_payments)
            total_revenue = sum_amounts(paid)

            months = {
                ((p.payment_date or p.due_date).year, (p.payment_date or p.due_date).month)
                for p in paid
            }
            last_payment_date = max(
                (p.payment_date for p in paid if p.payment_date is not None),
                default=None,
            )

            results.append(ApartmentPaymentBreakdown(
                apartment=apartment,
                payments=_by_due_date_desc(apartment_payments),
                total_revenue=total_revenue,
                average_monthly_revenue=total_revenue / len(months) if months else Decimal("0"),
                payment_compliance_rate=_compliance_rate(paid),
                last_payment_date=last_payment_date,
            ))

        return sorted(results, key=lambda r: r.total_revenue, reverse=True)

    @handle_aggregation_errors("payments by user")
    async def aggregate_payments_by_user(
        self,
        payments: Sequence[Payment],
        users: Sequence[User],
    ) -> List[UserPaymentBreakdown]:
        """Payment behaviour per user, biggest payer first."""
        results = []
        for user in users:
            user_payments = PaymentsByUserSpec(user.phone_number).filter(payments)
            summary = DataMapper.calculate_user_payment_summary(user_payments)

            results.append(UserPaymentBreakdown(
                user=user,
                payments=_by_due_date_desc(user_payments),
                total_paid=summary.total_paid_amount,
                total_pending=summary.total_pending_amount,
                average_payment_delay=summary.average_payment_delay,
                compliance_rate=_compliance_rate(settled(user_payments)),
                last_payment_date=summary.last_payment_date,
            ))

        return sorted(results, key=lambda r: r.total_paid, reverse=True)

    @handle_aggregation_errors("overdue payments")
    async def aggregate_overdue_payments(
        self,
        payments: Sequence[Payment],
        apartments: Sequence[Apartment],
        users: Sequence[User],
        now: Optional[datetime] = None,
    ) -> List[PaymentWithDetails]:
        """
        Overdue PENDING payments with their apartment and payer, most overdue first.

        Raises:
            AggregationError: If a payment's apartment or payer is not in the inputs
        """
        now = resolve_now(now)
        apartments_by_code = {a.unit_code: a for a in apartments}
        users_by_phone = {u.phone_number.value: u for u in users}

        overdue = OverduePaymentSpec(now).filter(payments)
        for payment in overdue:
            if (payment.apartment_unit_code not in apartments_by_code
                    or payment.user_phone_number.value not in users_by_phone):
                raise AggregationError(
                    "overdue payments",
                    f"Missing related entities for payment {payment.payment_id}",
                )

        results = await asyncio.gather(*[
            self.aggregate_payment_with_details(
                payment,
                apartments_by_code[payment.apartment_unit_code],
                users_by_phone[payment.user_phone_number.value],
            )
            for payment in overdue
        ])
        logger.debug(f"Found {len(results)} overdue payments")
        return sorted(results, key=lambda r: whole_days_between(r.payment.due_date, now), reverse=True)
