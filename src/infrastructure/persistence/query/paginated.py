"""Run a GetManyRequest against one table and return a page plus the total."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import Table, func, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.request import GetManyRequest
from src.domain.repositories.base import PaginatedItems

from .conditions import QueryConditions, build_query_conditions

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOTAL_LABEL = "items_total"


class PaginatedQuery(Generic[T]):
    """Paged SELECT with ``count(*) OVER ()`` so one round-trip yields the total.

    An empty page only has no total to read when it lies past the end (or
    page size is zero); a separate COUNT is issued in that case.
    """

    def __init__(self, table: Any, to_domain: Callable[[RowMapping], T]) -> None:
        self._table: Table = getattr(table, "__table__", table)
        self._to_domain = to_domain

    def conditions(self, request: GetManyRequest) -> QueryConditions:
        return build_query_conditions(request, self._table.c)

    def select_statement(self, conditions: QueryConditions):
        stmt = select(*self._table.c, func.count().over().label(TOTAL_LABEL))
        if conditions.where is not None:
            stmt = stmt.where(conditions.where)
        return stmt.order_by(*conditions.order_by).limit(conditions.limit).offset(conditions.offset)

    def count_statement(self, conditions: QueryConditions):
        stmt = select(func.count()).select_from(self._table)
        if conditions.where is not None:
            stmt = stmt.where(conditions.where)
        return stmt

    async def execute(self, session: AsyncSession, request: GetManyRequest) -> PaginatedItems[T]:
        conditions = self.conditions(request)
        result = await session.execute(self.select_statement(conditions))
        rows = result.mappings().all()

        if rows:
            items_total = rows[0][TOTAL_LABEL]
        elif conditions.offset > 0 or conditions.limit == 0:
            count = await session.execute(self.count_statement(conditions))
            items_total = count.scalar_one()
        else:
            items_total = 0

        logger.debug(
            "%s: fetched %d of %d row(s)", self._table.name, len(rows), items_total
        )
        return PaginatedItems(items=[self._to_domain(row) for row in rows], items_total=items_total)
