"""
Application-wide constants.

This module centralizes the magic strings and numbers used by the mapper and
aggregation services to improve maintainability and reduce duplication.
"""
from enum import Enum


SECONDS_PER_DAY = 24 * 60 * 60

# Number of payments shown on an apartment detail page
DEFAULT_RECENT_PAYMENTS_LIMIT = 10

# ISO 3166 region used to parse phone numbers written without a country prefix
DEFAULT_PHONE_REGION = 'BR'


class PaymentHealth(str, Enum):
    """Overall payment situation of an apartment or contract."""

    CURRENT = 'current'
    OVERDUE = 'overdue'
    NO_PAYMENTS = 'no_payments'


class TimelineEventType(str, Enum):
    """Kinds of events shown on an apartment history timeline."""

    CONTRACT = 'contract'
    PAYMENT = 'payment'
    USER_ADDED = 'user_added'
    USER_REMOVED = 'user_removed'


# Listing feature labels, in the order they are shown on a listing card
AMENITY_FEATURE_LABELS = {
    'has_cleaning_service': 'Cleaning service',
    'water_included': 'Water included',
    'electricity_included': 'Electricity included',
    'has_wifi': 'Wi-Fi',
    'has_air_conditioning': 'Air conditioning',
    'has_washing_machine': 'Washing machine',
    'has_kitchen': 'Kitchen',
    'has_furniture': 'Furnished',
    'has_parking': 'Parking',
    'has_elevator': 'Elevator',
    'has_balcony': 'Balcony',
    'pet_friendly': 'Pet friendly',
}
