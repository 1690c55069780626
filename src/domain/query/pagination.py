"""Pagination compiler: ``page`` / ``pageSize`` query parameters."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from src.domain.errors import RequestValidationError, ValidationIssue
from src.domain.models.request import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    Pagination,
    PaginationParams,
)

from .params import QueryParams

logger = logging.getLogger(__name__)

PAGE_PARAM = "page"
PAGE_SIZE_PARAM = "pageSize"


def compile_pagination(params: QueryParams) -> PaginationParams | None:
    """Return the pagination the caller asked for, or None if they asked for none.

    Only the first value of each key is read.

    Raises:
        RequestValidationError: a value is not a non-negative integer.
    """
    if not (params.has(PAGE_PARAM) or params.has(PAGE_SIZE_PARAM)):
        return None

    raw = {
        PAGE_PARAM: params.get(PAGE_PARAM),
        PAGE_SIZE_PARAM: params.get(PAGE_SIZE_PARAM),
    }
    try:
        return PaginationParams.model_validate({k: v for k, v in raw.items() if v is not None})
    except ValidationError as exc:
        issues = [
            ValidationIssue(tuple(error["loc"]), error["msg"].lower()) for error in exc.errors()
        ]
        logger.debug("pagination rejected: %s", raw)
        raise RequestValidationError(issues) from exc


def to_domain_pagination(params: PaginationParams | None) -> Pagination:
    """Apply defaults, then clamp page to >= 1 and page size to <= MAX_PAGE_SIZE."""
    page = DEFAULT_PAGE if params is None or params.page is None else params.page
    page_size = DEFAULT_PAGE_SIZE if params is None or params.page_size is None else params.page_size
    return Pagination(page=max(page, 1), page_size=min(page_size, MAX_PAGE_SIZE))
