"""Sort compiler: ``sort=name,-age`` → ordered list of SortField."""

from __future__ import annotations

import logging
from collections.abc import Collection

from src.domain.errors import UnsupportedSortFieldError
from src.domain.models.enums import SortDirection
from src.domain.models.request import SortField

from .params import QueryParams

logger = logging.getLogger(__name__)

SORT_PARAM = "sort"
DESCENDING_PREFIX = "-"
VALUE_JOINER = ","


def compile_sorting(params: QueryParams, sortable_fields: Collection[str]) -> list[SortField] | None:
    """Parse every ``sort`` parameter into SortFields.

    Repeated ``sort`` parameters are concatenated before splitting on commas.
    A field named more than once keeps its last direction and moves to the
    position of its last occurrence.  Returns None when the query has no
    ``sort`` key or nothing is sortable.

    Raises:
        UnsupportedSortFieldError: a token names a field outside sortable_fields.
    """
    if not params.has(SORT_PARAM):
        return None
    if not sortable_fields:
        return None

    allowed = frozenset(sortable_fields)
    tokens = [
        token.strip()
        for token in VALUE_JOINER.join(params.get_all(SORT_PARAM)).split(VALUE_JOINER)
        if token.strip()
    ]

    ordered: dict[str, SortDirection] = {}
    for token in tokens:
        direction = SortDirection.ASC
        field = token
        if token.startswith(DESCENDING_PREFIX):
            direction = SortDirection.DESC
            field = token[len(DESCENDING_PREFIX):]

        if field not in allowed:
            logger.debug("unsupported sort field %r", field)
            raise UnsupportedSortFieldError(field)

        # Re-insert so the field takes the position of its last occurrence.
        ordered.pop(field, None)
        ordered[field] = direction

    return [SortField(field=field, direction=direction) for field, direction in ordered.items()]

