"""
Apartment Aggregation Service

Joins apartments with their payments, contracts, users and relations into
the read models behind the admin listing, the apartment detail page, the
apartment history log and the public listing.

Aggregation methods receive already-fetched collections and never fetch.
The ``load_*`` methods are thin wrappers that fetch through the injected
repositories and then delegate.
"""

import asyncio
import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from config.app_config import get_recent_payments_limit
from domain.entities import Apartment, Contract, Payment, User, UserApartmentRelation
from domain.value_objects.apartment_status import ApartmentStatus
from domain.value_objects.contract_status import ContractStatus
from dtos.response import (
    ApartmentDetails,
    ApartmentListing,
    ApartmentLog,
    ApartmentLogStatistics,
    ApartmentWithPaymentInfo,
    PortfolioStatistics,
)
from exceptions import ConfigurationError
from repositories.entity_specifications import BelongsToApartmentSpec, ContractsByStatusSpec
from services.data_mapper import DataMapper, newest_first, pending, settled, sum_amounts
from services.interfaces import (
    IApartmentRepository,
    IContractRepository,
    IPaymentRepository,
    IRelationRepository,
    IUserRepository,
)
from utils.date_helpers import resolve_now
from utils.error_handlers import describe_apartment, handle_aggregation_errors
from utils.logging_utils import StructuredLogger, log_operation

logger = logging.getLogger(__name__)
structured_logger = StructuredLogger(__name__)

_CENT = Decimal("0.01")


def _for_apartment(self, apartment=None, *args, **kwargs) -> str:
    return describe_apartment(apartment)


class ApartmentAggregationService:
    """
    Builds apartment read models.

    Repositories are optional; they are only needed by the ``load_*`` methods.
    """

    def __init__(
        self,
        apartment_repository: Optional[IApartmentRepository] = None,
        payment_repository: Optional[IPaymentRepository] = None,
        contract_repository: Optional[IContractRepository] = None,
        user_repository: Optional[IUserRepository] = None,
        relation_repository: Optional[IRelationRepository] = None,
        recent_payments_limit: Optional[int] = None,
    ):
        self.apartment_repository = apartment_repository
        self.payment_repository = payment_repository
        self.contract_repository = contract_repository
        self.user_repository = user_repository
        self.relation_repository = relation_repository
        if recent_payments_limit is None:
            recent_payments_limit = get_recent_payments_limit()
        elif recent_payments_limit < 1:
            raise ConfigurationError(f"recent_payments_limit must be positive, got: {recent_payments_limit}")
        self.recent_payments_limit = recent_payments_limit

    # Pure aggregation

    @handle_aggregation_errors("apartment payment info", _for_apartment)
    async def aggregate_apartment_with_payment_info(
        self,
        apartment: Apartment,
        payments: Optional[Sequence[Payment]] = None,
        now: Optional[datetime] = None,
    ) -> ApartmentWithPaymentInfo:
        """Admin listing row: latest payment, payment health and totals."""
        apartment_payments = BelongsToApartmentSpec(apartment.unit_code).filter(payments or [])
        ordered = newest_first(apartment_payments)

        return ApartmentWithPaymentInfo(
            apartment=apartment,
            last_payment=ordered[0] if ordered else None,
            payment_status=DataMapper.calculate_payment_status(apartment_payments, now),
            total_payments=len(apartment_payments),
            total_paid_amount=sum_amounts(settled(apartment_payments)),
            total_pending_amount=sum_amounts(pending(apartment_payments)),
        )

    @handle_aggregation_errors("apartment details", _for_apartment)
    async def aggregate_apartment_details(
        self,
        apartment: Apartment,
        users: Sequence[User],
        relations: Sequence[UserApartmentRelation],
        contracts: Sequence[Contract],
        payments: Sequence[Payment],
        now: Optional[datetime] = None,
    ) -> ApartmentDetails:
        """
        Apartment detail page.

        Users without a relation to this apartment are dropped. The active
        contract is the first ACTIVE one in input order.
        """
        belongs = BelongsToApartmentSpec(apartment.unit_code)
        apartment_relations = belongs.filter(relations)
        apartment_contracts = belongs.filter(contracts)
        apartment_payments = belongs.filter(payments)

        users_with_relations = []
        for user in users:
            relation = next(
                (r for r in apartment_relations if r.user_phone_number == user.phone_number),
                None,
            )
            if relation is not None:
                users_with_relations.append(DataMapper.map_user_with_relation(user, relation))

        active_contracts = ContractsByStatusSpec(ContractStatus.ACTIVE).filter(apartment_contracts)
        if len(active_contracts) > 1:
            structured_logger.warning(
                f"Apartment {apartment.unit_code} has {len(active_contracts)} active contracts, "
                f"using {active_contracts[0].contract_id}",
                extra={
                    "unit_code": apartment.unit_code,
                    "contract_ids": [c.contract_id for c in active_contracts],
                },
            )

        return ApartmentDetails(
            apartment=apartment,
            users=users_with_relations,
            active_contract=active_contracts[0] if active_contracts else None,
            contract_history=sorted(apartment_contracts, key=lambda c: c.start_date, reverse=True),
            recent_payments=newest_first(apartment_payments)[: self.recent_payments_limit],
            payment_summary=DataMapper.calculate_payment_status(apartment_payments, now),
        )

    @handle_aggregation_errors("apartment log", _for_apartment)
    async def aggregate_apartment_log(
        self,
        apartment: Apartment,
        contracts: Sequence[Contract],
        payments: Sequence[Payment],
        relations: Sequence[UserApartmentRelation],
        now: Optional[datetime] = None,
    ) -> ApartmentLog:
        """Full history of an apartment with a timeline and statistics."""
        belongs = BelongsToApartmentSpec(apartment.unit_code)
        apartment_contracts = belongs.filter(contracts)
        apartment_payments = belongs.filter(payments)
        apartment_relations = belongs.filter(relations)

        timeline = DataMapper.create_timeline_events(
            apartment_contracts, apartment_payments, apartment_relations
        )
        contract_stats = DataMapper.calculate_apartment_statistics(apartment_contracts, now)

        return ApartmentLog(
            apartment=apartment,
            contracts=sorted(apartment_contracts, key=lambda c: c.start_date, reverse=True),
            payments=newest_first(apartment_payments),
            timeline=timeline,
            statistics=ApartmentLogStatistics(
                **contract_stats.model_dump(),
                total_payments=len(apartment_payments),
                total_revenue=sum_amounts(settled(apartment_payments)),
            ),
        )

    @handle_aggregation_errors("apartment listing", _for_apartment)
    async def aggregate_apartment_listing(self, apartment: Apartment) -> ApartmentListing:
        return DataMapper.map_apartment_listing(apartment)

    @handle_aggregation_errors("apartments with payment info")
    async def aggregate_apartments_with_payment_info(
        self,
        apartments: Sequence[Apartment],
        payments: Sequence[Payment],
        now: Optional[datetime] = None,
    ) -> List[ApartmentWithPaymentInfo]:
        """Admin listing, sorted by unit code ascending."""
        now = resolve_now(now)
        results = await asyncio.gather(*[
            self.aggregate_apartment_with_payment_info(apartment, payments, now)
            for apartment in apartments
        ])
        return sorted(results, key=lambda r: r.apartment.unit_code)

    @handle_aggregation_errors("apartment listings")
    async def aggregate_apartment_listings(self, apartments: Sequence[Apartment]) -> List[ApartmentListing]:
        """Public listing cards, sorted by unit code ascending."""
        results = await asyncio.gather(*[
            self.aggregate_apartment_listing(apartment) for apartment in apartments
        ])
        return sorted(results, key=lambda r: r.apartment.unit_code)

    @handle_aggregation_errors("apartment statistics")
    async def aggregate_apartment_statistics(
        self,
        apartments: Sequence[Apartment],
        payments: Sequence[Payment],
        now: Optional[datetime] = None,
    ) -> PortfolioStatistics:
        """
        Portfolio dashboard figures.

        Monthly revenue counts settled payments whose due date falls in the
        calendar month of ``now``.
        """
        now = resolve_now(now)
        total = len(apartments)

        def count(status: ApartmentStatus) -> int:
            return sum(1 for a in apartments if a.status is status)

        occupied = count(ApartmentStatus.OCCUPIED)
        total_rent = sum((a.base_rent for a in apartments), Decimal("0"))
        this_month = [
            p for p in settled(payments)
            if (p.due_date.year, p.due_date.month) == (now.year, now.month)
        ]

        return PortfolioStatistics(
            total_apartments=total,
            occupied_apartments=occupied,
            available_apartments=count(ApartmentStatus.AVAILABLE),
            maintenance_apartments=count(ApartmentStatus.MAINTENANCE),
            occupancy_rate=(occupied / total) * 100 if total else 0.0,
            average_rent=(total_rent / total).quantize(_CENT, ROUND_HALF_UP) if total else Decimal("0"),
            total_monthly_revenue=sum_amounts(this_month),
            airbnb_apartments=sum(1 for a in apartments if a.is_airbnb_enabled()),
            long_term_apartments=sum(1 for a in apartments if a.is_long_term_enabled()),
        )

    # Repository-backed loaders

    def _require(self, repository, name: str):
        if repository is None:
            raise ConfigurationError(
                f"ApartmentAggregationService needs a {name} repository for this operation",
                missing_keys=[name],
            )
        return repository

    @log_operation("load_apartment_details")
    async def load_apartment_details(self, unit_code: str, now: Optional[datetime] = None) -> ApartmentDetails:
        """
        Fetch everything an apartment detail page needs and aggregate it.

        Raises:
            ApartmentNotFoundError: If the unit code is unknown
        """
        apartment = await self._require(self.apartment_repository, "apartment").get_by_unit_code(unit_code)
        relations, contracts, payments = await asyncio.gather(
            self._require(self.relation_repository, "relation").list_by_apartment(apartment.unit_code),
            self._require(self.contract_repository, "contract").list_by_apartment(apartment.unit_code),
            self._require(self.payment_repository, "payment").list_by_apartment(apartment.unit_code),
        )
        users = await self._require(self.user_repository, "user").list_by_phones(
            r.user_phone_number.value for r in relations
        )
        return await self.aggregate_apartment_details(apartment, users, relations, contracts, payments, now)

    @log_operation("load_apartment_log")
    async def load_apartment_log(self, unit_code: str, now: Optional[datetime] = None) -> ApartmentLog:
        """
        Raises:
            ApartmentNotFoundError: If the unit code is unknown
        """
        apartment = await self._require(self.apartment_repository, "apartment").get_by_unit_code(unit_code)
        contracts, payments, relations = await asyncio.gather(
            self._require(self.contract_repository, "contract").list_by_apartment(apartment.unit_code),
            self._require(self.payment_repository, "payment").list_by_apartment(apartment.unit_code),
            self._require(self.relation_repository, "relation").list_by_apartment(apartment.unit_code),
        )
        return await self.aggregate_apartment_log(apartment, contracts, payments, relations, now)

    @log_operation("load_apartments_with_payment_info")
    async def load_apartments_with_payment_info(
        self, now: Optional[datetime] = None
    ) -> List[ApartmentWithPaymentInfo]:
        apartments, payments = await asyncio.gather(
            self._require(self.apartment_repository, "apartment").list_all(),
            self._require(self.payment_repository, "payment").list_all(),
        )
        logger.debug(f"Aggregating payment info for {len(apartments)} apartments")
        return await self.aggregate_apartments_with_payment_info(apartments, payments, now)
