"""
User Aggregation Service

Builds the user detail page and the list of people attached to an apartment.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from domain.entities import Apartment, Payment, User, UserApartmentRelation
from dtos.response import UserDetails, UserWithRelation
from repositories.entity_specifications import (
    BelongsToApartmentSpec,
    PaymentsByUserSpec,
    RelationsByUserSpec,
)
from services.data_mapper import DataMapper
from utils.error_handlers import describe_user, handle_aggregation_errors

logger = logging.getLogger(__name__)


def _for_user(self, user=None, *args, **kwargs) -> str:
    return describe_user(user)


def _for_unit(self, users=None, relations=None, unit_code=None, *args, **kwargs) -> str:
    return f"apartment {unit_code or 'unknown'}"


class UserAggregationService:
    """Builds user read models from already-fetched collections."""

    @handle_aggregation_errors("user details", _for_user)
    async def aggregate_user_details(
        self,
        user: User,
        related_users: Sequence[User],
        user_relations: Sequence[UserApartmentRelation],
        related_user_relations: Sequence[UserApartmentRelation],
        apartments: Sequence[Apartment],
        payments: Sequence[Payment],
        now: Optional[datetime] = None,
    ) -> UserDetails:
        """
        User detail page.

        ``related_users`` are people sharing at least one apartment with the
        user; each appears once per relation it has to one of those apartments.
        Relations pointing at apartments missing from ``apartments`` are skipped.
        """
        own_relations = RelationsByUserSpec(user.phone_number).filter(user_relations)
        apartments_by_code = {a.unit_code: a for a in apartments}

        user_apartments = [
            DataMapper.map_apartment_with_relation(apartments_by_code[r.apartment_unit_code], r)
            for r in own_relations
            if r.apartment_unit_code in apartments_by_code
        ]

        shared_codes = {r.apartment_unit_code for r in own_relations}
        users_by_phone = {u.phone_number.value: u for u in related_users}
        related = []
        for relation in related_user_relations:
            phone = relation.user_phone_number
            if relation.apartment_unit_code not in shared_codes or phone == user.phone_number:
                continue
            other = users_by_phone.get(phone.value)
            if other is not None:
                related.append(DataMapper.map_user_with_relation(other, relation))

        user_payments = sorted(
            PaymentsByUserSpec(user.phone_number).filter(payments),
            key=lambda p: p.due_date,
            reverse=True,
        )

        return UserDetails(
            user=user,
            profile=DataMapper.map_user_profile(user),
            related_users=related,
            apartments=user_apartments,
            payment_history=[DataMapper.map_payment_history(p, now) for p in user_payments],
            payment_summary=DataMapper.calculate_user_payment_summary(user_payments),
            relationships=own_relations,
        )

    @handle_aggregation_errors("apartment users", _for_unit)
    async def aggregate_users_for_apartment(
        self,
        users: Sequence[User],
        relations: Sequence[UserApartmentRelation],
        unit_code: str,
    ) -> List[UserWithRelation]:
        """
        People attached to an apartment, ordered by role (primary tenant
        first, ops last) and then by name.
        """
        users_by_phone = {u.phone_number.value: u for u in users}
        joined = []
        for relation in BelongsToApartmentSpec(unit_code).filter(relations):
            user = users_by_phone.get(relation.user_phone_number.value)
            if user is None:
                logger.debug(f"No user loaded for relation {relation.key}")
                continue
            joined.append((relation, user))

        joined.sort(key=lambda pair: (pair[0].role.priority, pair[1].name.lower()))
        return [DataMapper.map_user_with_relation(user, relation) for relation, user in joined]
