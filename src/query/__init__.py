"""
Query package for the Pet Store query service.

Filter translation, sort validation, pagination rules and the paginated list
query that ties them together.
"""

from src.query.filters import (
    FilterQuery,
    FilterSpec,
    NumericValue,
    Operator,
    TextValue,
    coerce_value,
    compose_filter,
    parse_filter_params,
    translate_operator_set,
)
from src.query.list_query import list_with_counts
from src.query.pagination import MAX_LIMIT, PageRequest, effective_limit
from src.query.sorting import SortDirection, SortSpec, parse_sort

__all__ = [
    # Filters
    "FilterQuery",
    "FilterSpec",
    "NumericValue",
    "Operator",
    "TextValue",
    "coerce_value",
    "compose_filter",
    "parse_filter_params",
    "translate_operator_set",
    # Sorting
    "SortDirection",
    "SortSpec",
    "parse_sort",
    # Pagination
    "MAX_LIMIT",
    "PageRequest",
    "effective_limit",
    # List query
    "list_with_counts",
]
