"""Query-translation engine: raw query parameters → validated GetManyRequest.

Everything here is synchronous and stateless; the functions may be called
concurrently from any number of request handlers.
"""

from .fields import coerce, matches, operators_for, sort_values
from .filters import compile_filters, find_filter_issues, validate_filters
from .pagination import compile_pagination, to_domain_pagination
from .params import QueryParams
from .request import compile_get_many_request, get_one_request
from .sorting import compile_sorting

__all__ = [
    "QueryParams",
    "operators_for",
    "coerce",
    "matches",
    "sort_values",
    "compile_filters",
    "find_filter_issues",
    "validate_filters",
    "compile_sorting",
    "compile_pagination",
    "to_domain_pagination",
    "compile_get_many_request",
    "get_one_request",
]
