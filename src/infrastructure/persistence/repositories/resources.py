"""SQLAlchemy implementation of ResourceRepository."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.audit import AuditRecord
from src.domain.models.request import GetManyRequest
from src.domain.models.resources import Resource as DomainResource
from src.domain.models.updates import RowUpdate
from src.domain.repositories.base import PaginatedItems
from src.domain.repositories.resources import ResourceRepository
from src.infrastructure.persistence.errors import map_database_error
from src.infrastructure.persistence.models.resources import Resource as OrmResource
from src.infrastructure.persistence.query import PaginatedQuery, build_bulk_update

logger = logging.getLogger(__name__)


class SqlResourceRepository(ResourceRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._query = PaginatedQuery(OrmResource, self._to_domain)

    @staticmethod
    def _to_domain(row: RowMapping) -> DomainResource:
        return DomainResource(
            gid=row["gid"],
            name=row["name"],
            time_zone=row["time_zone"],
            created_at=row["created_at"],
            created_by=row["created_by"],
            updated_at=row["updated_at"],
            updated_by=row["updated_by"],
        )

    @staticmethod
    def _to_row(entity: DomainResource) -> OrmResource:
        return OrmResource(
            gid=entity.gid,
            name=entity.name,
            time_zone=entity.time_zone,
            created_at=entity.created_at,
            created_by=entity.created_by.model_dump(mode="json"),
            updated_at=entity.updated_at,
            updated_by=entity.updated_by.model_dump(mode="json"),
        )

    async def get_many(self, request: GetManyRequest) -> PaginatedItems[DomainResource]:
        try:
            return await self._query.execute(self._session, request)
        except DBAPIError as exc:
            logger.warning("resources: get_many failed: %s", exc.orig)
            raise map_database_error(exc) from exc

    async def create_one(self, entity: DomainResource) -> DomainResource:
        self._session.add(self._to_row(entity))
        try:
            await self._session.flush()
        except DBAPIError as exc:
            logger.warning("resources: create_one %s failed: %s", entity.gid, exc.orig)
            raise map_database_error(exc) from exc
        return entity

    async def update_many(
        self,
        updates: Sequence[RowUpdate],
        updated_by: AuditRecord,
        updated_at: datetime | None = None,
    ) -> None:
        statement = build_bulk_update(
            OrmResource.__tablename__,
            updates,
            updated_at=updated_at,
            updated_by=updated_by,
        )
        if statement is None:
            logger.debug("resources: update batch carried no changes")
            return
        try:
            await self._session.execute(statement.to_text())
        except DBAPIError as exc:
            logger.warning(
                "resources: update of %d row(s) failed: %s", len(statement.row_ids), exc.orig
            )
            raise map_database_error(exc) from exc

    async def delete_many(self, gids: Sequence[str]) -> None:
        if not gids:
            return
        stmt = delete(OrmResource).where(OrmResource.gid.in_(list(gids)))
        try:
            await self._session.execute(stmt)
        except DBAPIError as exc:
            logger.warning("resources: delete of %d row(s) failed: %s", len(gids), exc.orig)
            raise map_database_error(exc) from exc
