"""One UPDATE statement for a batch of rows with differing changes.

Each changed column gets ``CASE "<id>" WHEN <id1> THEN <v1> ... ELSE "<column>" END``
so rows that do not touch the column keep their current value.  The batch
is written in a single round-trip; there is no row ceiling, callers that
may send very large batches should chunk them first.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from src.domain.models.updates import UNSET, RowUpdate

logger = logging.getLogger(__name__)

ID_COLUMN = "gid"
UPDATED_AT_COLUMN = "updated_at"
UPDATED_BY_COLUMN = "updated_by"


@dataclass(frozen=True)
class BulkUpdateStatement:
    """SQL text with ``:name`` placeholders plus the values to bind."""

    sql: str
    params: dict[str, Any]
    row_ids: tuple[Any, ...]
    columns: tuple[str, ...]

    def to_text(self) -> TextClause:
        return text(self.sql).bindparams(**self.params)


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


class _Placeholders:
    """Allocates ``:p0``, ``:p1`` ... and records the bound values."""

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    def bind(self, value: Any) -> str:
        name = f"p{len(self.values)}"
        self.values[name] = value
        return f":{name}"


def _format_value(value: Any, placeholders: _Placeholders) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, datetime):
        # Bound as ISO-8601 text; the cast lets the server compare it with the column type.
        return f"CAST(CAST({placeholders.bind(value.isoformat())} AS TEXT) AS TIMESTAMPTZ)"
    if isinstance(value, BaseModel):
        return placeholders.bind(value.model_dump_json())
    if isinstance(value, (dict, list, tuple)):
        return placeholders.bind(json.dumps(value, separators=(",", ":"), default=_json_default))
    return placeholders.bind(value)


def _has_changes(row: RowUpdate, id_column: str) -> bool:
    return any(key != id_column and value is not UNSET for key, value in row.items())


def build_bulk_update(
    table_name: str,
    updates: Sequence[RowUpdate],
    updated_at: datetime | None = None,
    updated_by: Any = None,
    id_column: str = ID_COLUMN,
) -> BulkUpdateStatement | None:
    """Build the batched UPDATE, or None when no row carries a change.

    Args:
        table_name: Target table (quoted as an identifier).
        updates: Rows as ``{id_column: <id>, column: value, ...}``; UNSET
            values are skipped, None writes NULL.
        updated_at: Shared as-of timestamp for every surviving row; defaults
            to now (UTC) at call time.
        updated_by: Audit record written to every surviving row when given.
        id_column: Row identifier used for CASE matching and the WHERE clause.

    Raises:
        ValueError: a row has no value for id_column.
    """
    for row in updates:
        if id_column not in row:
            raise ValueError(f"Update row is missing its {id_column!r} identifier")

    rows = [row for row in updates if _has_changes(row, id_column)]
    if len(rows) < len(updates):
        logger.debug("dropping %d update row(s) without changes", len(updates) - len(rows))
    if not rows:
        return None

    shared: dict[str, Any] = {UPDATED_AT_COLUMN: updated_at or datetime.now(timezone.utc)}
    if updated_by is not None:
        shared[UPDATED_BY_COLUMN] = updated_by

    columns = {
        key for row in rows for key, value in row.items() if key != id_column and value is not UNSET
    }
    columns.update(shared)

    placeholders = _Placeholders()
    id_placeholders: dict[Any, str] = {}
    shared_fragments: dict[str, str] = {}

    def id_placeholder(row_id: Any) -> str:
        if row_id not in id_placeholders:
            id_placeholders[row_id] = placeholders.bind(row_id)
        return id_placeholders[row_id]

    quoted_id = quote_identifier(id_column)
    set_clauses: list[str] = []
    for column in sorted(columns):
        whens: list[str] = []
        for row in rows:
            if column in shared:
                if column not in shared_fragments:
                    shared_fragments[column] = _format_value(shared[column], placeholders)
                fragment = shared_fragments[column]
            else:
                value = row.get(column, UNSET)
                if value is UNSET:
                    continue
                fragment = _format_value(value, placeholders)
            whens.append(f"WHEN {id_placeholder(row[id_column])} THEN {fragment}")

        quoted = quote_identifier(column)
        set_clauses.append(f"{quoted} = CASE {quoted_id} {' '.join(whens)} ELSE {quoted} END")

    row_ids = tuple(sorted({row[id_column] for row in rows}))
    sql = (
        f"UPDATE {quote_identifier(table_name)} "
        f"SET {', '.join(set_clauses)} "
        f"WHERE {quoted_id} IN ({', '.join(id_placeholder(row_id) for row_id in row_ids)})"
    )
    return BulkUpdateStatement(
        sql=sql,
        params=placeholders.values,
        row_ids=row_ids,
        columns=tuple(sorted(columns)),
    )
