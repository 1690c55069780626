"""Tests for src/domain/models/pagination.py."""

from src.domain.models.pagination import to_paginated_response


def test_has_more_when_items_beyond_page():
    response = to_paginated_response(["a", "b"], items_total=5, page=1, page_size=2)
    assert response.has_more is True
    assert response.pages_total == 3


def test_last_page_has_no_more():
    response = to_paginated_response(["e"], items_total=5, page=3, page_size=2)
    assert response.has_more is False


def test_exact_fit_has_no_more():
    response = to_paginated_response(["a", "b"], items_total=2, page=1, page_size=2)
    assert response.has_more is False
    assert response.pages_total == 1


def test_zero_page_size_has_no_pages():
    response = to_paginated_response([], items_total=7, page=1, page_size=0)
    assert response.pages_total == 0
    assert response.has_more is False


def test_fields_are_carried_through():
    response = to_paginated_response([1], items_total=1, page=1, page_size=1)
    assert response.items == [1]
    assert response.items_total == 1
