"""Filter compiler: ``field[:operator]=value`` query parameters → FilterMap.

Pipeline per raw key (in URL order):
    _parse_key    → (field, operator), rejecting unknown operators/fields
    _normalize    → comma-split (except search), strip, drop empties, "null" → None
    coerce        → field-kind conversion (see fields.py)
    _dedupe       → first occurrence wins
    _unify        → eq/in and neq/nin share one destination each

The accumulated map is then checked by validate_filters, which reports every
type mismatch at once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from src.domain.errors import (
    RequestValidationError,
    UnsupportedFieldError,
    UnsupportedFieldOperatorError,
    UnsupportedMultipleValueOperatorError,
    UnsupportedOperatorError,
    ValidationIssue,
)
from src.domain.models.enums import Operator
from src.domain.models.fields import FieldSchema, FieldSpec
from src.domain.models.request import FilterMap

from .fields import coerce, matches, operators_for, sort_values
from .params import QueryParams

logger = logging.getLogger(__name__)

RESERVED_PARAMS = frozenset({"page", "pageSize", "sort"})
OPERATOR_DELIMITER = ":"
VALUE_DELIMITER = ","
NULL_LITERAL = "null"

_MISSING = object()


def compile_filters(params: QueryParams, field_schema: FieldSchema) -> FilterMap:
    """Compile every non-reserved query parameter into a validated FilterMap.

    Raises:
        UnsupportedOperatorError: the key suffix is not an Operator.
        UnsupportedFieldError: the field is not in field_schema.
        UnsupportedFieldOperatorError: the operator is illegal for the field kind.
        UnsupportedMultipleValueOperatorError: a range operator or search got
            more than one distinct value.
        RequestValidationError: a value does not have the field's type.
    """
    groups: dict[str, list[str]] = {}
    for key, value in params:
        if key in RESERVED_PARAMS:
            continue
        groups.setdefault(key, []).append(value)

    filters: FilterMap = {}
    for raw_key, raw_values in groups.items():
        field, operator = _parse_key(raw_key, field_schema)
        spec = field_schema[field]
        values = _dedupe(coerce(token, spec) for token in _normalize(raw_values, operator))
        entry = filters.setdefault(field, {})

        if operator in (Operator.EQ, Operator.IN):
            _unify(entry, Operator.EQ, Operator.IN, values, spec)
        elif operator in (Operator.NEQ, Operator.NIN):
            _unify(entry, Operator.NEQ, Operator.NIN, values, spec)
        else:
            if len(values) > 1:
                logger.debug("rejecting %d values for single-value operator %s", len(values), raw_key)
                raise UnsupportedMultipleValueOperatorError(operator.value)
            if values:
                entry[operator] = values[0]

    compiled = {field: entry for field, entry in filters.items() if entry}
    validate_filters(compiled, field_schema)
    return compiled


def _parse_key(raw_key: str, field_schema: FieldSchema) -> tuple[str, Operator]:
    parts = raw_key.split(OPERATOR_DELIMITER)
    field = parts[0].strip()
    operator_raw = parts[1] if len(parts) > 1 else Operator.EQ.value

    try:
        operator = Operator(operator_raw)
    except ValueError:
        logger.debug("unsupported filter operator %r in key %r", operator_raw, raw_key)
        raise UnsupportedOperatorError(operator_raw) from None

    spec = field_schema.get(field)
    if spec is None:
        logger.debug("unsupported filter field %r", field)
        raise UnsupportedFieldError(field)

    if operator not in operators_for(spec):
        logger.debug("operator %s not legal for %s field %r", operator.value, spec.kind.value, field)
        raise UnsupportedFieldOperatorError(field, operator.value)

    return field, operator


def _normalize(raw_values: list[str], operator: Operator) -> list[str | None]:
    if operator is Operator.SEARCH:
        tokens: Iterable[str] = raw_values
    else:
        tokens = (token for raw in raw_values for token in raw.split(VALUE_DELIMITER))

    normalized: list[str | None] = []
    for token in tokens:
        # Only the exact, untrimmed token is the null literal.
        if token == NULL_LITERAL:
            normalized.append(None)
            continue
        token = token.strip()
        if token:
            normalized.append(token)
    return normalized


def _dedupe(values: Iterable[Any]) -> list[Any]:
    return list(dict.fromkeys(values))


def _unify(
    entry: dict[Operator, Any],
    eq_op: Operator,
    in_op: Operator,
    values: list[Any],
    spec: FieldSpec,
) -> None:
    """Merge new values into the (eq_op | in_op) destination of one field.

    Values from earlier keys for the same field are folded in first; the
    result collapses to eq_op when exactly one distinct value remains.
    """
    previous = list(entry.pop(in_op, []))
    previous_eq = entry.pop(eq_op, _MISSING)
    if previous_eq is not _MISSING:
        previous.append(previous_eq)

    merged = sort_values(_dedupe([*previous, *values]), spec)
    if len(merged) > 1:
        entry[in_op] = merged
    elif merged:
        entry[eq_op] = merged[0]


# --- Validation ---

def find_filter_issues(filters: FilterMap, field_schema: FieldSchema) -> list[ValidationIssue]:
    """Check a FilterMap against its field schema and return every mismatch."""
    issues: list[ValidationIssue] = []

    for field, entry in filters.items():
        spec = field_schema.get(field)
        if spec is None:
            issues.append(ValidationIssue((field,), "is not a filterable field"))
            continue
        if not isinstance(entry, dict):
            issues.append(ValidationIssue((field,), "expected an object of operators"))
            continue

        for op_raw, value in entry.items():
            try:
                operator = Operator(op_raw)
            except ValueError:
                issues.append(ValidationIssue((field, str(op_raw)), "is not a supported operator"))
                continue
            path = (field, operator.value)

            if operator not in operators_for(spec):
                issues.append(ValidationIssue(path, f"is not allowed for {spec.kind.value} fields"))
            elif operator in (Operator.IN, Operator.NIN):
                if not isinstance(value, list):
                    issues.append(ValidationIssue(path, "expected a list"))
                    continue
                for index, item in enumerate(value):
                    issues.extend(_scalar_issues((*path, index), item, spec, spec.nullable))
            elif operator is Operator.SEARCH:
                if not isinstance(value, str) or not value:
                    issues.append(ValidationIssue(path, "expected a non-empty string"))
            elif operator in (Operator.EQ, Operator.NEQ):
                issues.extend(_scalar_issues(path, value, spec, spec.nullable))
            else:
                issues.extend(_scalar_issues(path, value, spec, False))

    return issues


def _scalar_issues(
    path: tuple[str | int, ...],
    value: Any,
    spec: FieldSpec,
    allow_null: bool,
) -> list[ValidationIssue]:
    if value is None:
        return [] if allow_null else [ValidationIssue(path, "must not be null")]
    if matches(value, spec):
        return []
    if spec.choices and isinstance(value, str):
        return [ValidationIssue(path, f"expected one of {', '.join(spec.choices)}, received {value!r}")]
    return [ValidationIssue(path, f"expected {spec.kind.value}, received {value!r}")]


def validate_filters(filters: FilterMap, field_schema: FieldSchema) -> None:
    """Raise RequestValidationError when the FilterMap has any issue."""
    issues = find_filter_issues(filters, field_schema)
    if issues:
        logger.debug("filter validation failed with %d issue(s)", len(issues))
        raise RequestValidationError(issues)
