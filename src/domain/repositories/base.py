"""Generic repository base interface.

Repository[T] is the root abstraction for all data-access interfaces in this
domain layer.  Concrete implementations live in src/infrastructure/persistence/
and are wired at the application boundary via dependency injection.

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / SQLAlchemy async).
  - T is the domain model type (never an ORM row or DTO).
  - get_many() takes a compiled GetManyRequest; filtering, sorting and paging
    are translated to SQL by the implementation, never by callers.
  - update_many() writes a whole batch of differing rows in one statement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from src.domain.models.audit import AuditRecord
from src.domain.models.request import GetManyRequest
from src.domain.models.updates import RowUpdate

T = TypeVar("T")


@dataclass(frozen=True)
class PaginatedItems(Generic[T]):
    """One page of entities plus the total matching the filters (ignoring paging)."""

    items: list[T] = field(default_factory=list)
    items_total: int = 0


class Repository(ABC, Generic[T]):
    """Abstract CRUD interface for a domain entity keyed by gid."""

    @abstractmethod
    async def get_many(self, request: GetManyRequest) -> PaginatedItems[T]:
        """Return the page of entities selected by the request."""

    @abstractmethod
    async def create_one(self, entity: T) -> T:
        """Persist a new entity and return it."""

    @abstractmethod
    async def update_many(
        self,
        updates: Sequence[RowUpdate],
        updated_by: AuditRecord,
        updated_at: datetime | None = None,
    ) -> None:
        """Apply partial updates to several rows; a no-op batch writes nothing."""

    @abstractmethod
    async def delete_many(self, gids: Sequence[str]) -> None:
        """Remove the entities with the given gids; unknown gids are ignored."""
