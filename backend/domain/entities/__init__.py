"""
Domain Entities

Entities are business objects with identity and lifecycle.
They are mutable and have a unique identifier that persists through their lifetime.

- Apartment: rental unit, keyed by unit code
- Payment: charge owed for an apartment, keyed by payment id
- Contract: lease, keyed by contract id
- User: person, keyed by phone number
- UserApartmentRelation: user/apartment edge, keyed by (unit code, phone, role)
"""

from domain.entities.apartment import Apartment
from domain.entities.contract import Contract
from domain.entities.payment import Payment
from domain.entities.user import User
from domain.entities.user_apartment_relation import UserApartmentRelation

__all__ = ["Apartment", "Contract", "Payment", "User", "UserApartmentRelation"]
