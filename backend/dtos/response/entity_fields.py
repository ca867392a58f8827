"""
Entity-typed fields for read models.

Read models hold the entities themselves; these annotations make
``model_dump()`` emit each entity through its ``to_dict()`` so dumps are
plain data.
"""

from typing import Annotated

from pydantic import PlainSerializer

from domain.entities import Apartment, Contract, Payment, User, UserApartmentRelation


def _entity_to_dict(entity) -> dict:
    return entity.to_dict()


ApartmentField = Annotated[Apartment, PlainSerializer(_entity_to_dict, return_type=dict)]
ContractField = Annotated[Contract, PlainSerializer(_entity_to_dict, return_type=dict)]
PaymentField = Annotated[Payment, PlainSerializer(_entity_to_dict, return_type=dict)]
UserField = Annotated[User, PlainSerializer(_entity_to_dict, return_type=dict)]
RelationField = Annotated[UserApartmentRelation, PlainSerializer(_entity_to_dict, return_type=dict)]
