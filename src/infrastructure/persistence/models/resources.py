"""Resource ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class Resource(Base):
    """Named resource with an optional IANA time zone.

    created_by / updated_by hold the audit record as JSONB
    ({"type": "SYSTEM", "system": ...} or {"type": "USER", "gid": ..., "email": ...}).
    """

    __tablename__ = "resources"
    __table_args__ = (UniqueConstraint("name", name="uq_resources_name"),)

    gid: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    time_zone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    created_by: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_by: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
