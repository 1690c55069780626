"""SQL synthesis for list queries and bulk updates."""

from .bulk_update import BulkUpdateStatement, build_bulk_update, quote_identifier
from .conditions import PREDICATES, QueryConditions, build_query_conditions
from .paginated import PaginatedQuery

__all__ = [
    "BulkUpdateStatement",
    "build_bulk_update",
    "quote_identifier",
    "PREDICATES",
    "QueryConditions",
    "build_query_conditions",
    "PaginatedQuery",
]
