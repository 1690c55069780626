"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .audit import AuditRecord, SystemAuditRecord, UserAuditRecord
from .enums import FieldKind, Operator, SortDirection
from .fields import FieldSchema, FieldSpec
from .gid import GID_DELIMITER, GID_PREFIX, is_gid, new_gid
from .pagination import PaginatedResponse, to_paginated_response
from .request import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    FilterMap,
    GetManyRequest,
    Pagination,
    PaginationParams,
    SortField,
)
from .resources import CreateResourceRequest, Resource, UpdateResourceRequest
from .updates import UNSET, RowUpdate

__all__ = [
    # audit
    "AuditRecord",
    "SystemAuditRecord",
    "UserAuditRecord",
    # enums
    "FieldKind",
    "Operator",
    "SortDirection",
    # fields
    "FieldSchema",
    "FieldSpec",
    # gid
    "GID_DELIMITER",
    "GID_PREFIX",
    "is_gid",
    "new_gid",
    # pagination
    "PaginatedResponse",
    "to_paginated_response",
    # request
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "FilterMap",
    "GetManyRequest",
    "Pagination",
    "PaginationParams",
    "SortField",
    # resources
    "CreateResourceRequest",
    "Resource",
    "UpdateResourceRequest",
    # updates
    "UNSET",
    "RowUpdate",
]
