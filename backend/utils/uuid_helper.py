"""
Identifier generation helpers.

Provides consistent identifier generation across all entities.
"""
import uuid

from utils.date_helpers import utc_now


def generate_payment_id(unit_code: str) -> str:
    """
    Generate a payment identifier scoped to an apartment.

    Format: ``PAY-<UNIT>-<epoch seconds>-<6 hex chars>``, e.g.
    ``PAY-APT001-1707955200-3F9A1C``.
    """
    stamp = int(utc_now().timestamp())
    suffix = uuid.uuid4().hex[:6].upper()
    return f"PAY-{unit_code.strip().upper()}-{stamp}-{suffix}"


def generate_contract_id(unit_code: str) -> str:
    """Generate a contract identifier scoped to an apartment."""
    suffix = uuid.uuid4().hex[:8].upper()
    return f"CONTRACT-{unit_code.strip().upper()}-{suffix}"
