"""Translate driver errors into domain errors by PostgreSQL SQLSTATE."""

from __future__ import annotations

from sqlalchemy.exc import DBAPIError

from src.domain.errors import (
    AppError,
    DomainConstraintViolationError,
    DomainValidationError,
)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NOT_NULL_VIOLATION = "23502"
DATATYPE_MISMATCH = "42804"

DATABASE_ERROR_MESSAGES = {
    CHECK_VIOLATION: "Check constraint violation",
    DATATYPE_MISMATCH: "Data type mismatch",
    FOREIGN_KEY_VIOLATION: "Foreign key violation",
    NOT_NULL_VIOLATION: "Not null violation",
    UNIQUE_VIOLATION: "Unique constraint violation",
}


def database_error_code(exc: DBAPIError) -> str | None:
    """SQLSTATE of the underlying driver error (asyncpg exposes it as sqlstate)."""
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def database_error_detail(exc: DBAPIError) -> str:
    orig = exc.orig
    for source in (orig, getattr(orig, "__cause__", None)):
        detail = getattr(source, "detail", None)
        if detail:
            return str(detail)
    return DATABASE_ERROR_MESSAGES.get(database_error_code(exc) or "", str(orig))


def map_database_error(exc: DBAPIError) -> AppError:
    """Domain error for a failed statement; callers raise it ``from exc``."""
    code = database_error_code(exc)
    detail = database_error_detail(exc)

    if code == UNIQUE_VIOLATION:
        return DomainConstraintViolationError(detail, "unique")
    if code == FOREIGN_KEY_VIOLATION:
        return DomainConstraintViolationError(detail, "foreign_key")
    if code == CHECK_VIOLATION:
        return DomainValidationError(detail, constraint="check")
    if code == NOT_NULL_VIOLATION:
        return DomainValidationError(detail, constraint="not_null")
    if code == DATATYPE_MISMATCH:
        return DomainValidationError(detail, constraint="data_type")
    return DomainConstraintViolationError(detail, "unknown")
