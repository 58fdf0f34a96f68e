"""Order selection and sorting"""

from .engine import (
    DEFAULT_DIRECTIONS, SORT_KEYS, Fulfillment, OrderFilters, SortDirection, SortState,
    available_statuses, search_haystack, select_and_sort, sort_by,
)

__all__ = [
    'DEFAULT_DIRECTIONS', 'SORT_KEYS', 'Fulfillment', 'OrderFilters', 'SortDirection',
    'SortState', 'available_statuses', 'search_haystack', 'select_and_sort', 'sort_by',
]
