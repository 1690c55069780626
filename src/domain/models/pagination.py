"""Paginated list response."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    has_more: bool
    items_total: int = Field(ge=0)
    page: int = Field(ge=0)
    page_size: int = Field(ge=0)
    pages_total: int = Field(ge=0)
    items: list[T]


def to_paginated_response(
    items: list[T],
    items_total: int,
    page: int,
    page_size: int,
) -> PaginatedResponse[T]:
    """Wrap one page of items with its totals.

    A page size of zero yields no pages and never "has more".
    """
    return PaginatedResponse(
        has_more=items_total > page_size * page if page_size else False,
        items_total=items_total,
        page=page,
        page_size=page_size,
        pages_total=math.ceil(items_total / page_size) if page_size else 0,
        items=items,
    )
