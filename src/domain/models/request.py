"""Get-many request models.

PaginationParams is the URL-facing shape (both keys optional, as sent);
Pagination is the domain shape with defaults and bounds applied.
GetManyRequest is the normalized request handed to the query layer.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import Operator, SortDirection

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100

FilterMap = dict[str, dict[Operator, Any]]


class SortField(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASC


class PaginationParams(BaseModel):
    """Pagination exactly as supplied in the query string."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int | None = Field(default=None, ge=0)
    page_size: int | None = Field(default=None, ge=0, alias="pageSize")


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=0, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return max((self.page - 1) * self.page_size, 0)


class GetManyRequest(BaseModel):
    """Filters, pagination and sorting for one list query."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    filters: FilterMap = Field(default_factory=dict)
    pagination: Pagination = Field(default_factory=Pagination)
    sorting: list[SortField] = Field(default_factory=list)
