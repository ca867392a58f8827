"""
Runtime Configuration

Environment-driven settings for the rental core.

Variables:
- RENTAL_DEFAULT_PHONE_REGION: region used to parse local phone numbers (default BR)
- RENTAL_RECENT_PAYMENTS_LIMIT: payments shown on apartment details (default 10)
- RENTAL_LOG_DIR: directory for rotating log files
- RENTAL_LOG_LEVEL: root log level (default INFO)
"""
import os
import logging
from pathlib import Path

import phonenumbers

from constants import DEFAULT_PHONE_REGION, DEFAULT_RECENT_PAYMENTS_LIMIT
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def get_default_phone_region() -> str:
    """
    Region code used when a phone number has no international prefix.

    Returns:
        Upper-case ISO 3166 region code

    Raises:
        ConfigurationError: If the region is unknown to the phone number metadata
    """
    region = os.environ.get('RENTAL_DEFAULT_PHONE_REGION', DEFAULT_PHONE_REGION).strip().upper()
    if region not in phonenumbers.SUPPORTED_REGIONS:
        raise ConfigurationError(
            f"Unsupported phone region: {region}",
            missing_keys=['RENTAL_DEFAULT_PHONE_REGION'],
        )
    return region


def get_recent_payments_limit() -> int:
    """
    Number of payments listed on an apartment detail page.

    Raises:
        ConfigurationError: If the value is not a positive integer
    """
    raw = os.environ.get('RENTAL_RECENT_PAYMENTS_LIMIT')
    if raw is None or raw.strip() == '':
        return DEFAULT_RECENT_PAYMENTS_LIMIT

    try:
        limit = int(raw)
    except ValueError:
        raise ConfigurationError(f"RENTAL_RECENT_PAYMENTS_LIMIT must be a number, got: {raw}")

    if limit < 1:
        raise ConfigurationError(f"RENTAL_RECENT_PAYMENTS_LIMIT must be positive, got: {limit}")
    return limit


def get_log_dir() -> Path:
    """Directory for rotating log files."""
    configured = os.environ.get('RENTAL_LOG_DIR')
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".rental-core" / "logs"


def get_log_level() -> int:
    """
    Root log level.

    Raises:
        ConfigurationError: If the level name is unknown
    """
    name = os.environ.get('RENTAL_LOG_LEVEL', 'INFO').strip().upper()
    if name not in _LOG_LEVELS:
        raise ConfigurationError(f"Invalid log level: {name}", missing_keys=['RENTAL_LOG_LEVEL'])
    return getattr(logging, name)
