"""Assemble a GetManyRequest from raw query parameters."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime

from src.domain.models.enums import Operator
from src.domain.models.fields import FieldSchema
from src.domain.models.request import GetManyRequest, Pagination

from .filters import compile_filters
from .pagination import compile_pagination, to_domain_pagination
from .params import QueryParams
from .sorting import compile_sorting


def compile_get_many_request(
    params: QueryParams | str,
    field_schema: FieldSchema,
    sortable_fields: Collection[str],
) -> GetManyRequest:
    """Compile filters, sorting and pagination in one pass.

    Accepts either parsed QueryParams or a raw query string.  Pagination
    defaults are applied here, so the result always carries a page.
    """
    if isinstance(params, str):
        params = QueryParams.parse(params)

    return GetManyRequest(
        filters=compile_filters(params, field_schema),
        pagination=to_domain_pagination(compile_pagination(params)),
        sorting=compile_sorting(params, sortable_fields) or [],
    )


def get_one_request(field: str, value: str | int | float | bool | datetime) -> GetManyRequest:
    """Single-row lookup expressed as a one-item page filtered by equality."""
    return GetManyRequest(
        filters={field: {Operator.EQ: value}},
        pagination=Pagination(page=1, page_size=1),
    )
