"""Tests for src/domain/query/filters.py."""

from datetime import datetime, timezone

import pytest

from src.domain.errors import (
    RequestValidationError,
    UnsupportedFieldError,
    UnsupportedFieldOperatorError,
    UnsupportedMultipleValueOperatorError,
    UnsupportedOperatorError,
)
from src.domain.models.enums import FieldKind, Operator
from src.domain.models.fields import FieldSpec
from src.domain.query.filters import compile_filters, find_filter_issues
from src.domain.query.params import QueryParams

SCHEMA = {
    "name": FieldSpec(FieldKind.STRING),
    "nickname": FieldSpec(FieldKind.STRING, nullable=True),
    "age": FieldSpec(FieldKind.NUMBER),
    "score": FieldSpec(FieldKind.NUMBER, nullable=True),
    "active": FieldSpec(FieldKind.BOOLEAN),
    "created_at": FieldSpec(FieldKind.DATE),
    "status": FieldSpec(FieldKind.ENUM, choices=("active", "archived")),
}


def _compile(query: str):
    return compile_filters(QueryParams.parse(query), SCHEMA)


# --- basics ---

def test_no_params_yields_empty_map():
    assert _compile("") == {}


def test_reserved_params_are_not_filters():
    assert _compile("page=2&pageSize=10&sort=-name") == {}


def test_key_without_operator_means_eq():
    assert _compile("name=bob") == {"name": {Operator.EQ: "bob"}}


def test_values_are_trimmed():
    assert _compile("name=%20bob%20") == {"name": {Operator.EQ: "bob"}}


def test_empty_value_drops_the_filter():
    assert _compile("name=") == {}


def test_boolean_is_coerced():
    assert _compile("active=true") == {"active": {Operator.EQ: True}}


def test_date_is_coerced():
    assert _compile("created_at:gte=2024-01-01") == {
        "created_at": {Operator.GTE: datetime(2024, 1, 1, tzinfo=timezone.utc)}
    }


# --- eq / in unification ---

def test_comma_list_becomes_sorted_in():
    assert _compile("age:in=3,1,2") == {"age": {Operator.IN: [1, 2, 3]}}


def test_duplicate_values_collapse_to_eq():
    assert _compile("age=1,1") == {"age": {Operator.EQ: 1}}


def test_single_value_in_collapses_to_eq():
    assert _compile("age:in=5") == {"age": {Operator.EQ: 5}}


def test_eq_then_in_merge_into_one_in():
    assert _compile("age=1&age:in=2") == {"age": {Operator.IN: [1, 2]}}


def test_repeated_eq_key_accumulates():
    assert _compile("age=2&age=1") == {"age": {Operator.IN: [1, 2]}}


def test_eq_and_in_never_coexist():
    entry = _compile("age:in=4,5&age=6")["age"]
    assert Operator.EQ not in entry
    assert entry[Operator.IN] == [4, 5, 6]


def test_neq_and_nin_unify():
    assert _compile("age:nin=1&age:neq=2") == {"age": {Operator.NIN: [1, 2]}}


def test_positive_and_negative_destinations_are_separate():
    assert _compile("age:in=1&age:nin=2") == {"age": {Operator.EQ: 1, Operator.NEQ: 2}}


def test_string_in_sorted_case_insensitively():
    assert _compile("name:in=b,A,c") == {"name": {Operator.IN: ["A", "b", "c"]}}


# --- single-value operators ---

def test_search_does_not_split_on_commas():
    assert _compile("name:search=a,b") == {"name": {Operator.SEARCH: "a,b"}}


def test_repeated_search_is_rejected():
    with pytest.raises(UnsupportedMultipleValueOperatorError) as exc_info:
        _compile("name:search=a&name:search=b")
    assert exc_info.value.operator == "search"


def test_range_with_two_values_is_rejected():
    with pytest.raises(UnsupportedMultipleValueOperatorError):
        _compile("age:gt=1,2")


def test_range_with_duplicate_values_is_accepted():
    assert _compile("age:gt=1,1") == {"age": {Operator.GT: 1}}


def test_range_never_holds_a_list():
    entry = _compile("age:gte=1&age:lt=9")["age"]
    assert entry == {Operator.GTE: 1, Operator.LT: 9}


# --- null literal ---

def test_null_on_nullable_field():
    assert _compile("nickname=null") == {"nickname": {Operator.EQ: None}}


def test_null_inside_in_list_sorts_last():
    assert _compile("nickname:in=null,bob") == {"nickname": {Operator.IN: ["bob", None]}}


def test_null_on_non_nullable_field_is_rejected():
    with pytest.raises(RequestValidationError) as exc_info:
        _compile("name=null")
    assert [str(issue) for issue in exc_info.value.issues] == ["name.eq must not be null"]


def test_null_with_range_operator_is_rejected_even_when_nullable():
    with pytest.raises(RequestValidationError):
        _compile("score:gt=null")


def test_null_search_is_rejected():
    with pytest.raises(RequestValidationError):
        _compile("nickname:search=null")


# --- key errors ---

def test_unknown_operator():
    with pytest.raises(UnsupportedOperatorError) as exc_info:
        _compile("age:foo=1")
    assert str(exc_info.value) == "[UnsupportedOperatorError] Unsupported operator: foo"


def test_unknown_field():
    with pytest.raises(UnsupportedFieldError) as exc_info:
        _compile("height=1")
    assert exc_info.value.field == "height"


def test_operator_not_legal_for_kind():
    with pytest.raises(UnsupportedFieldOperatorError) as exc_info:
        _compile("name:gt=a")
    assert exc_info.value.message == 'Unsupported operator "gt" for field "name"'


def test_search_not_legal_for_number():
    with pytest.raises(UnsupportedFieldOperatorError):
        _compile("age:search=1")


def test_operator_checked_before_field():
    with pytest.raises(UnsupportedOperatorError):
        _compile("height:foo=1")


# --- type validation ---

def test_uncoercible_number_reports_path():
    with pytest.raises(RequestValidationError) as exc_info:
        _compile("age=abc")
    (issue,) = exc_info.value.issues
    assert issue.path == ("age", "eq")
    assert "expected number" in issue.message


def test_enum_outside_choices_is_rejected():
    with pytest.raises(RequestValidationError) as exc_info:
        _compile("status=deleted")
    assert "expected one of active, archived" in str(exc_info.value)


def test_all_issues_reported_together():
    with pytest.raises(RequestValidationError) as exc_info:
        _compile("age=abc&status=deleted&created_at:lt=yesterday")
    assert len(exc_info.value.issues) == 3


def test_bad_item_in_list_is_located_by_index():
    with pytest.raises(RequestValidationError) as exc_info:
        _compile("age:in=1,x")
    assert exc_info.value.issues[0].path == ("age", "in", 1)


def test_kitchen_sink():
    filters = _compile(
        "name:search=al&age:gte=18&age:lt=65&status:in=archived,active"
        "&active=false&nickname:nin=null,zed&page=1&sort=name"
    )
    assert filters == {
        "name": {Operator.SEARCH: "al"},
        "age": {Operator.GTE: 18, Operator.LT: 65},
        "status": {Operator.IN: ["active", "archived"]},
        "active": {Operator.EQ: False},
        "nickname": {Operator.NIN: ["zed", None]},
    }


# --- find_filter_issues on hand-built maps ---

def test_find_filter_issues_accepts_valid_map():
    assert find_filter_issues({"age": {Operator.IN: [1, 2]}}, SCHEMA) == []


def test_find_filter_issues_requires_list_for_in():
    issues = find_filter_issues({"age": {Operator.IN: 1}}, SCHEMA)
    assert [i.message for i in issues] == ["expected a list"]


def test_find_filter_issues_flags_unknown_field():
    issues = find_filter_issues({"height": {Operator.EQ: 1}}, SCHEMA)
    assert issues[0].path == ("height",)


# --- repeated keys ---

def test_repeated_duplicate_eq_is_idempotent():
    assert _compile("name=b&name=a&name=b") == {"name": {Operator.IN: ["a", "b"]}}


def test_neq_and_nin_list_unify_sorted():
    assert _compile("name:neq=c&name:nin=b,a") == {"name": {Operator.NIN: ["a", "b", "c"]}}


def test_repeated_range_key_with_distinct_values_is_rejected():
    with pytest.raises(UnsupportedMultipleValueOperatorError) as exc_info:
        _compile("age:gt=1&age:gt=2")
    assert exc_info.value.operator == "gt"


# --- type-aware ordering for dates and booleans ---

JAN_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
JAN_2 = datetime(2024, 1, 2, tzinfo=timezone.utc)


def test_date_in_sorted_chronologically():
    assert _compile("created_at:in=2024-01-02,2024-01-01") == {
        "created_at": {Operator.IN: [JAN_1, JAN_2]}
    }


def test_repeated_date_eq_becomes_sorted_in():
    assert _compile("created_at=2024-01-02&created_at=2024-01-01") == {
        "created_at": {Operator.IN: [JAN_1, JAN_2]}
    }


def test_date_neq_and_nin_unify_sorted():
    assert _compile("created_at:neq=2024-01-02&created_at:nin=2024-01-01") == {
        "created_at": {Operator.NIN: [JAN_1, JAN_2]}
    }


def test_boolean_in_sorted_false_first():
    assert _compile("active:in=true,false") == {"active": {Operator.IN: [False, True]}}


def test_boolean_nin_sorted_false_first():
    assert _compile("active:nin=true,false") == {"active": {Operator.NIN: [False, True]}}


# --- token handling ---

def test_year_only_date_is_accepted():
    assert _compile("created_at:gte=2024") == {"created_at": {Operator.GTE: JAN_1}}


def test_padded_null_is_a_plain_string():
    assert _compile("nickname=%20null") == {"nickname": {Operator.EQ: "null"}}
