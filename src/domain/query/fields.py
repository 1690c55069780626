"""Field-kind rules: legal operators, coercion, ordering and type checks.

Every operation that depends on a field's declared type goes through the
_RULES dispatch table, keyed by FieldKind.  Coercion never raises: a raw
string that cannot be converted is passed through unchanged so validation
can reject it later with the field and operator in the error path.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from src.domain.models.enums import FieldKind, Operator
from src.domain.models.fields import FieldSpec

_EQUALITY = frozenset({Operator.EQ, Operator.IN, Operator.NEQ, Operator.NIN})
_RANGE = frozenset({Operator.GT, Operator.GTE, Operator.LT, Operator.LTE})

_YEAR = re.compile(r"\d{4}")
_YEAR_MONTH = re.compile(r"\d{4}-\d{2}")


def _coerce_string(raw: Any) -> Any:
    return str(raw).strip()


def _coerce_number(raw: Any) -> Any:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw
    text = str(raw).strip()
    if not text or "_" in text:
        return raw
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return raw
    return raw if math.isnan(number) else number


def _coerce_boolean(raw: Any) -> Any:
    if isinstance(raw, bool):
        return raw
    return raw == "true"


def _coerce_date(raw: Any) -> Any:
    if isinstance(raw, datetime):
        parsed = raw
    else:
        text = str(raw).strip()
        if _YEAR.fullmatch(text):
            text += "-01-01"
        elif _YEAR_MONTH.fullmatch(text):
            text += "-01"
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return raw
    # Date-only and naive values are read as UTC.
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not (isinstance(value, float) and math.isnan(value))
    )


@dataclass(frozen=True)
class _KindRules:
    operators: frozenset[Operator]
    coerce: Callable[[Any], Any]
    is_valid: Callable[[Any, FieldSpec], bool]
    order_key: Callable[[Any], Any]


_RULES: dict[FieldKind, _KindRules] = {
    FieldKind.STRING: _KindRules(
        operators=_EQUALITY | {Operator.SEARCH},
        coerce=_coerce_string,
        is_valid=lambda value, _spec: isinstance(value, str),
        order_key=lambda value: (value.casefold(), value),
    ),
    FieldKind.NUMBER: _KindRules(
        operators=_EQUALITY | _RANGE,
        coerce=_coerce_number,
        is_valid=lambda value, _spec: _is_number(value),
        order_key=lambda value: value,
    ),
    FieldKind.DATE: _KindRules(
        operators=_EQUALITY | _RANGE,
        coerce=_coerce_date,
        is_valid=lambda value, _spec: isinstance(value, datetime),
        order_key=lambda value: value,
    ),
    FieldKind.BOOLEAN: _KindRules(
        operators=_EQUALITY,
        coerce=_coerce_boolean,
        is_valid=lambda value, _spec: isinstance(value, bool),
        order_key=lambda value: int(value),
    ),
    FieldKind.ENUM: _KindRules(
        operators=_EQUALITY,
        coerce=_coerce_string,
        is_valid=lambda value, spec: isinstance(value, str)
        and (not spec.choices or value in spec.choices),
        order_key=lambda value: (value.casefold(), value),
    ),
}

_FALLBACK = _KindRules(
    operators=_EQUALITY,
    coerce=lambda raw: raw,
    is_valid=lambda _value, _spec: True,
    order_key=lambda value: str(value),
)


def _rules(spec: FieldSpec) -> _KindRules:
    return _RULES.get(spec.kind, _FALLBACK)


def operators_for(spec: FieldSpec) -> frozenset[Operator]:
    """Operators a filter on this field may use."""
    return _rules(spec).operators


def coerce(raw: Any, spec: FieldSpec) -> Any:
    """Convert one raw query token to the field's Python type.

    None (the ``null`` literal) passes through whatever the kind; whether it
    is acceptable is decided by validation.
    """
    if raw is None:
        return None
    return _rules(spec).coerce(raw)


def matches(value: Any, spec: FieldSpec) -> bool:
    """True when a non-null value has the field's type."""
    return _rules(spec).is_valid(value, spec)


def sort_values(values: Iterable[Any], spec: FieldSpec) -> list[Any]:
    """Stable, type-aware ordering for multi-value filters.

    Well-typed values come first in natural order, then values that failed
    coercion (by their string form), then None.
    """
    rules = _rules(spec)

    def key(value: Any) -> tuple:
        if value is None:
            return (2,)
        if rules.is_valid(value, spec):
            return (0, rules.order_key(value))
        return (1, str(value))

    return sorted(values, key=key)
