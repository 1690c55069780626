"""Domain enumerations for the query-translation engine.

All string-valued enums use str mixin so they serialize cleanly to JSON
and compare equal to their plain string values.
"""

from enum import Enum


class Operator(str, Enum):
    """Filter operators accepted as the ``field:operator`` query key suffix."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NIN = "nin"
    SEARCH = "search"

    @property
    def is_single_value(self) -> bool:
        """Range comparisons and search hold one scalar, never a list."""
        return self in _SINGLE_VALUE_OPERATORS


_SINGLE_VALUE_OPERATORS = frozenset(
    {Operator.GT, Operator.GTE, Operator.LT, Operator.LTE, Operator.SEARCH}
)


class FieldKind(str, Enum):
    """Base type of a filterable field.

    Closed set: every operation that depends on a field's type (legal
    operators, coercion, ordering, validation) dispatches on this value.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ENUM = "enum"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
