"""Resource domain models.

These are pure domain objects with no ORM or persistence concerns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .audit import AuditRecord
from .gid import new_gid


def _validate_time_zone(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"unknown time zone {value!r}") from exc
    return value


class Resource(BaseModel):
    """A named resource pinned to an optional IANA time zone.

    gid is the global identifier (see gid.py) used for lookups, bulk
    updates and deletes.  created_by / updated_by record the actor of the
    first and the latest change.
    """

    model_config = ConfigDict(frozen=True)

    gid: str = Field(default_factory=new_gid)
    name: str = Field(min_length=1)
    time_zone: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    created_by: AuditRecord
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_by: AuditRecord

    @field_validator("time_zone")
    @classmethod
    def check_time_zone(cls, value: str | None) -> str | None:
        return _validate_time_zone(value)


class CreateResourceRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    time_zone: str | None = None
    created_by: AuditRecord

    @field_validator("time_zone")
    @classmethod
    def check_time_zone(cls, value: str | None) -> str | None:
        return _validate_time_zone(value)


class UpdateResourceRequest(BaseModel):
    """Partial update; only fields explicitly set are written."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    time_zone: str | None = None
    updated_by: AuditRecord

    @field_validator("time_zone")
    @classmethod
    def check_time_zone(cls, value: str | None) -> str | None:
        return _validate_time_zone(value)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str | None:
        # Omit the field to leave the name unchanged; the column is NOT NULL.
        if value is None:
            raise ValueError("name must not be null")
        return value
