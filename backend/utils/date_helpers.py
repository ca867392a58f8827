"""
Date helpers shared by entities and the data mapper.

All domain timestamps are timezone-aware UTC datetimes.
"""
import math
from datetime import date, datetime, timezone
from typing import Optional

from constants import SECONDS_PER_DAY
from exceptions import ValidationError


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """The given moment normalized to aware UTC, or the current time."""
    return ensure_utc(now) if now is not None else utc_now()


def ensure_utc(value: date | datetime) -> datetime:
    """
    Normalize a date or datetime to an aware UTC datetime.

    Naive datetimes are assumed to already be in UTC and plain dates map to
    midnight UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    raise ValidationError(f"Expected a date or datetime, got {type(value).__name__}")


def parse_datetime(value, field: str = "date") -> Optional[datetime]:
    """
    Parse a stored ISO-8601 value back into an aware UTC datetime.

    Accepts None, datetime/date instances and ISO strings (a trailing ``Z`` is
    understood as UTC).
    """
    if value is None or value == "":
        return None
    if isinstance(value, (datetime, date)):
        return ensure_utc(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            raise ValidationError(f"Invalid date format: {value}", field)
    raise ValidationError(f"Invalid date value: {value!r}", field)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize an aware datetime to ISO-8601, passing None through."""
    if value is None:
        return None
    return ensure_utc(value).isoformat()


def whole_days_between(start: datetime, end: datetime) -> int:
    """Number of whole days from start to end, floored (negative when end < start)."""
    seconds = (ensure_utc(end) - ensure_utc(start)).total_seconds()
    return math.floor(seconds / SECONDS_PER_DAY)


def days_until(target: datetime, now: datetime) -> int:
    """Days left until target, rounded up (negative once target has passed)."""
    seconds = (ensure_utc(target) - ensure_utc(now)).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)
