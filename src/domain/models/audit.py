"""Audit records: who created or last changed an entity."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SystemAuditRecord(BaseModel):
    """A change made by an automated process, identified by name."""

    model_config = ConfigDict(frozen=True)

    type: Literal["SYSTEM"] = "SYSTEM"
    system: str


class UserAuditRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["USER"] = "USER"
    gid: str
    email: str | None = None


AuditRecord = Annotated[
    Union[SystemAuditRecord, UserAuditRecord],
    Field(discriminator="type"),
]
