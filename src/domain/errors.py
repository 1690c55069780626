"""Error taxonomy shared by the query compilers, services and repositories.

Every error carries a stable machine-readable ``code`` and the HTTP status an
outer transport layer should answer with.  Nothing in this package builds
responses; callers translate errors at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus


class AppError(Exception):
    """Base class for all errors raised by this service."""

    def __init__(
        self,
        name: str,
        message: str,
        code: str = "UNHANDLED_EXCEPTION",
        http_status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(message)
        self.name = name
        self.message = message
        self.code = code
        self.http_status_code = int(http_status_code)

    def __str__(self) -> str:
        cause = f" / cause: {self.__cause__}" if self.__cause__ is not None else ""
        return f"[{self.name}] {self.message}{cause}"


# --- Query compilation (client input) ---

class UnsupportedOperatorError(AppError):
    def __init__(self, operator: str) -> None:
        super().__init__(
            "UnsupportedOperatorError",
            f"Unsupported operator: {operator}",
            "API_UNSUPPORTED_FILTER_OPERATOR",
            HTTPStatus.BAD_REQUEST,
        )
        self.operator = operator


class UnsupportedFieldError(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(
            "UnsupportedFieldError",
            f"Unsupported field: {field}",
            "API_UNSUPPORTED_FILTER_FIELD",
            HTTPStatus.BAD_REQUEST,
        )
        self.field = field


class UnsupportedFieldOperatorError(AppError):
    def __init__(self, field: str, operator: str) -> None:
        super().__init__(
            "UnsupportedFieldOperatorError",
            f'Unsupported operator "{operator}" for field "{field}"',
            "API_UNSUPPORTED_FILTER_FIELD_OPERATOR",
            HTTPStatus.BAD_REQUEST,
        )
        self.field = field
        self.operator = operator


class UnsupportedMultipleValueOperatorError(AppError):
    def __init__(self, operator: str) -> None:
        super().__init__(
            "UnsupportedMultipleValueOperatorError",
            f'The "{operator}" does not support multiple values',
            "API_UNSUPPORTED_FILTER_MULTIPLE_VALUE_OPERATOR",
            HTTPStatus.BAD_REQUEST,
        )
        self.operator = operator


class UnsupportedSortFieldError(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(
            "UnsupportedSortFieldError",
            f'The sorting by the field "{field}" is not supported',
            "API_UNSUPPORTED_SORT_FIELD",
            HTTPStatus.BAD_REQUEST,
        )
        self.field = field


@dataclass(frozen=True)
class ValidationIssue:
    """One final-shape mismatch, located by its path in the request."""

    path: tuple[str | int, ...]
    message: str

    def __str__(self) -> str:
        return f"{'.'.join(str(p) for p in self.path)} {self.message}"


class RequestValidationError(AppError):
    """The compiled request does not satisfy its field schema.

    All issues are collected before raising so the caller can report every
    problem in one response.
    """

    def __init__(self, issues: list[ValidationIssue] | tuple[ValidationIssue, ...]) -> None:
        self.issues = tuple(issues)
        super().__init__(
            "RequestValidationError",
            "Invalid request: " + " / ".join(str(i) for i in self.issues),
            "API_REQUEST_VALIDATION_ERROR",
            HTTPStatus.BAD_REQUEST,
        )


# --- Domain ---

class DomainNotFoundError(AppError):
    def __init__(self, message: str, resource: str = "entity", identifier: str = "") -> None:
        super().__init__("DomainNotFoundError", message, "DOMAIN_NOT_FOUND", HTTPStatus.NOT_FOUND)
        self.resource = resource
        self.identifier = identifier


class DomainValidationError(AppError):
    def __init__(self, message: str, field: str = "unknown", constraint: str = "invalid") -> None:
        super().__init__(
            "DomainValidationError", message, "DOMAIN_VALIDATION_ERROR", HTTPStatus.BAD_REQUEST
        )
        self.field = field
        self.constraint = constraint


class DomainConstraintViolationError(AppError):
    def __init__(self, message: str, constraint: str = "unknown") -> None:
        super().__init__(
            "DomainConstraintViolationError",
            message,
            "DOMAIN_CONSTRAINT_VIOLATION",
            HTTPStatus.CONFLICT,
        )
        self.constraint = constraint
