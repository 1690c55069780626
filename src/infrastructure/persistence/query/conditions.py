"""GetManyRequest → SQLAlchemy WHERE / ORDER BY / LIMIT / OFFSET.

Filter fields and sort fields without a matching column are skipped, so a
request compiled against a wider field schema can still run against a
narrower table.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from src.domain.models.enums import Operator, SortDirection
from src.domain.models.request import GetManyRequest

logger = logging.getLogger(__name__)


class ColumnLookup(Protocol):
    """Anything that resolves a field name to a column: ``Table.c`` or a dict."""

    def get(self, key: str, default: Any = None) -> Any: ...


def _in(column: ColumnElement, values: Iterable[Any]) -> ColumnElement[bool]:
    values = list(values)
    present = [v for v in values if v is not None]
    if len(present) == len(values):
        return column.in_(present)
    if not present:
        return column.is_(None)
    return or_(column.in_(present), column.is_(None))


def _not_in(column: ColumnElement, values: Iterable[Any]) -> ColumnElement[bool]:
    values = list(values)
    present = [v for v in values if v is not None]
    if len(present) == len(values):
        return column.not_in(present)
    if not present:
        return column.is_not(None)
    return and_(column.not_in(present), column.is_not(None))


PREDICATES: dict[Operator, Callable[[ColumnElement, Any], ColumnElement[bool]]] = {
    Operator.EQ: lambda column, value: column.is_(None) if value is None else column == value,
    Operator.NEQ: lambda column, value: column.is_not(None) if value is None else column != value,
    Operator.GT: lambda column, value: column > value,
    Operator.GTE: lambda column, value: column >= value,
    Operator.LT: lambda column, value: column < value,
    Operator.LTE: lambda column, value: column <= value,
    Operator.IN: _in,
    Operator.NIN: _not_in,
    Operator.SEARCH: lambda column, value: column.ilike(f"%{value}%"),
}


@dataclass(frozen=True)
class QueryConditions:
    """Query-layer description of one list query.

    predicates are ANDed; an empty list means no WHERE clause at all.
    """

    predicates: list[ColumnElement[bool]] = field(default_factory=list)
    order_by: list[ColumnElement] = field(default_factory=list)
    limit: int = 0
    offset: int = 0

    @property
    def where(self) -> ColumnElement[bool] | None:
        if not self.predicates:
            return None
        return and_(*self.predicates)


def build_query_conditions(request: GetManyRequest, columns: ColumnLookup) -> QueryConditions:
    predicates: list[ColumnElement[bool]] = []
    for name, operations in request.filters.items():
        if not operations:
            continue
        column = columns.get(name)
        if column is None:
            logger.debug("ignoring filter on unknown column %r", name)
            continue
        for operator, value in operations.items():
            predicate = PREDICATES.get(operator)
            if predicate is not None:
                predicates.append(predicate(column, value))

    order_by: list[ColumnElement] = []
    for sort in request.sorting:
        column = columns.get(sort.field)
        if column is None:
            logger.debug("ignoring sort on unknown column %r", sort.field)
            continue
        order_by.append(column.asc() if sort.direction == SortDirection.ASC else column.desc())

    pagination = request.pagination
    return QueryConditions(
        predicates=predicates,
        order_by=order_by,
        limit=pagination.page_size,
        offset=pagination.offset,
    )
