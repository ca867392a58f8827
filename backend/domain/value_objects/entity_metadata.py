"""
EntityMetadata Value Object

Audit trail carried by every entity.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from exceptions import ValidationError
from utils.date_helpers import ensure_utc, parse_datetime, resolve_now, to_iso, utc_now


@dataclass(frozen=True)
class EntityMetadata:
    """
    Immutable audit information.

    Each successful mutation replaces the entity's metadata with ``update()``,
    which bumps ``version`` and stamps ``updated_at``/``updated_by``.
    """

    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    version: int = 1

    def __post_init__(self):
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))
        object.__setattr__(self, "updated_at", ensure_utc(self.updated_at))
        if self.version < 1:
            raise ValidationError(f"Metadata version must be at least 1, got: {self.version}", "version")

    @classmethod
    def create(cls, created_by: Optional[str] = None, now: Optional[datetime] = None) -> "EntityMetadata":
        stamp = resolve_now(now)
        return cls(created_at=stamp, updated_at=stamp, created_by=created_by)

    def update(self, updated_by: Optional[str] = None, now: Optional[datetime] = None) -> "EntityMetadata":
        """Return the next revision of this metadata."""
        return EntityMetadata(
            created_at=self.created_at,
            updated_at=resolve_now(now),
            created_by=self.created_by,
            updated_by=updated_by,
            version=self.version + 1,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EntityMetadata":
        data = data or {}
        now = utc_now()
        return cls(
            created_at=parse_datetime(data.get("created_at"), "created_at") or now,
            updated_at=parse_datetime(data.get("updated_at"), "updated_at") or now,
            created_by=data.get("created_by"),
            updated_by=data.get("updated_by"),
            version=int(data.get("version") or 1),
        )
