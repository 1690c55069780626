"""Tests for src/infrastructure/persistence/query/conditions.py.

Predicates are compiled with the PostgreSQL dialect and literal binds; no
database connection is required.
"""

from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text
from sqlalchemy.dialects import postgresql

from src.domain.models.enums import Operator, SortDirection
from src.domain.models.request import GetManyRequest, Pagination, SortField
from src.infrastructure.persistence.query.conditions import build_query_conditions

PEOPLE = Table(
    "people",
    MetaData(),
    Column("name", Text),
    Column("nickname", Text),
    Column("age", Integer),
    Column("created_at", DateTime(timezone=True)),
)


def _sql(expr) -> str:
    return str(expr.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))


def _conditions(filters=None, sorting=None, pagination=None):
    request = GetManyRequest(
        filters=filters or {},
        sorting=sorting or [],
        pagination=pagination or Pagination(),
    )
    return build_query_conditions(request, PEOPLE.c)


def _single(filters) -> str:
    (predicate,) = _conditions(filters).predicates
    return _sql(predicate)


# --- predicates ---

def test_eq():
    assert _single({"age": {Operator.EQ: 5}}) == "people.age = 5"


def test_eq_null_is_is_null():
    assert _single({"nickname": {Operator.EQ: None}}) == "people.nickname IS NULL"


def test_neq_null_is_is_not_null():
    assert _single({"nickname": {Operator.NEQ: None}}) == "people.nickname IS NOT NULL"


def test_neq():
    assert _single({"age": {Operator.NEQ: 5}}) == "people.age != 5"


def test_range_operators():
    predicates = _conditions(
        {"age": {Operator.GT: 1, Operator.GTE: 2, Operator.LT: 9, Operator.LTE: 8}}
    ).predicates
    assert [_sql(p) for p in predicates] == [
        "people.age > 1",
        "people.age >= 2",
        "people.age < 9",
        "people.age <= 8",
    ]


def test_in():
    assert "people.age IN (1, 2)" in _single({"age": {Operator.IN: [1, 2]}})


def test_nin():
    assert "people.age NOT IN (1, 2)" in _single({"age": {Operator.NIN: [1, 2]}})


def test_in_with_null_member_adds_is_null():
    sql = _single({"nickname": {Operator.IN: ["bob", None]}})
    assert "people.nickname IN ('bob')" in sql
    assert " OR people.nickname IS NULL" in sql


def test_nin_with_null_member_adds_is_not_null():
    sql = _single({"nickname": {Operator.NIN: ["bob", None]}})
    assert "NOT IN ('bob')" in sql
    assert " AND people.nickname IS NOT NULL" in sql


def test_search_is_case_insensitive_substring():
    (predicate,) = _conditions({"name": {Operator.SEARCH: "al"}}).predicates
    compiled = predicate.compile(dialect=postgresql.dialect())
    assert "people.name ILIKE" in str(compiled)
    assert list(compiled.params.values()) == ["%al%"]


# --- composition ---

def test_no_filters_means_no_where():
    conditions = _conditions()
    assert conditions.predicates == []
    assert conditions.where is None


def test_predicates_are_anded():
    where = _conditions(
        {"age": {Operator.GTE: 18}, "nickname": {Operator.EQ: None}}
    ).where
    assert _sql(where) == "people.age >= 18 AND people.nickname IS NULL"


def test_unknown_filter_column_is_ignored():
    conditions = _conditions({"height": {Operator.EQ: 1}, "age": {Operator.EQ: 2}})
    assert [_sql(p) for p in conditions.predicates] == ["people.age = 2"]


def test_dict_lookup_is_accepted():
    request = GetManyRequest(filters={"years": {Operator.EQ: 3}})
    conditions = build_query_conditions(request, {"years": PEOPLE.c.age})
    assert _sql(conditions.where) == "people.age = 3"


# --- ordering and paging ---

def test_order_by_follows_input_order():
    conditions = _conditions(
        sorting=[
            SortField(field="age", direction=SortDirection.DESC),
            SortField(field="name"),
        ]
    )
    assert [_sql(o) for o in conditions.order_by] == ["people.age DESC", "people.name ASC"]


def test_unknown_sort_column_is_dropped():
    conditions = _conditions(sorting=[SortField(field="height"), SortField(field="name")])
    assert [_sql(o) for o in conditions.order_by] == ["people.name ASC"]


def test_limit_and_offset():
    conditions = _conditions(pagination=Pagination(page=3, page_size=10))
    assert (conditions.limit, conditions.offset) == (10, 20)


def test_first_page_has_zero_offset():
    assert _conditions(pagination=Pagination(page=1, page_size=50)).offset == 0


def test_field_outside_columns_is_dropped_even_if_compiled():
    from src.domain.models.enums import FieldKind
    from src.domain.models.fields import FieldSpec
    from src.domain.query.request import compile_get_many_request

    schema = {"age": FieldSpec(FieldKind.NUMBER), "mood": FieldSpec(FieldKind.STRING)}
    request = compile_get_many_request("age=3&mood=calm", schema, ())
    conditions = build_query_conditions(request, PEOPLE.c)
    assert [_sql(p) for p in conditions.predicates] == ["people.age = 3"]
