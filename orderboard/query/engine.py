"""Filtering, search and sorting of normalized orders"""
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List

from orderboard.config import STATUS_ALL
from orderboard.models import NormalizedOrder
from orderboard.utils import natural_key


class Fulfillment(str, Enum):
    ALL = 'all'
    DELIVERY = 'delivery'
    PICKUP = 'pickup'


class SortDirection(str, Enum):
    ASC = 'asc'
    DESC = 'desc'

    def flipped(self) -> 'SortDirection':
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class OrderFilters:
    """Filter criteria; every criterion left at its default lets all orders through"""
    status: str = STATUS_ALL
    fulfillment: Fulfillment = Fulfillment.ALL
    search: str = ''


def matches_status(order: NormalizedOrder, status: str) -> bool:
    return status == STATUS_ALL or order.status == status


def matches_fulfillment(order: NormalizedOrder, fulfillment: Fulfillment) -> bool:
    fulfillment = Fulfillment(fulfillment)
    if fulfillment is Fulfillment.ALL:
        return True
    if fulfillment is Fulfillment.PICKUP:
        return order.is_pickup
    return not order.is_pickup


def search_haystack(order: NormalizedOrder) -> str:
    """Lowercased text that free-text search runs against"""
    return ' '.join([
        str(order.id),
        order.customer_name,
        order.recipient_name,
        order.recipient_phone,
        order.delivery_date_label,
        order.delivery_address,
        order.customer_phone,
        order.notes,
        order.observation,
    ]).lower()


def matches_search(order: NormalizedOrder, query: str) -> bool:
    query = (query or '').strip().lower()
    if not query:
        return True
    return query in search_haystack(order)


def select_and_sort(orders: Iterable[NormalizedOrder], filters: OrderFilters = None) -> List[NormalizedOrder]:
    """Apply all filters and sort by effective timestamp, oldest first.

    Orders sharing an effective timestamp are ordered by id.
    """
    if filters is None:
        filters = OrderFilters()

    selected = [
        order for order in orders
        if matches_status(order, filters.status)
        and matches_fulfillment(order, filters.fulfillment)
        and matches_search(order, filters.search)
    ]
    return sorted(selected, key=lambda order: (order.effective_timestamp, order.id))


def _numeric(value: float) -> float:
    # NaN totals sort below every real amount
    return float('-inf') if math.isnan(value) else value


SORT_KEYS: Dict[str, Callable[[NormalizedOrder], Any]] = {
    'id': lambda order: order.id,
    'customer': lambda order: natural_key(order.customer_name),
    'reservation': lambda order: (order.effective_timestamp, natural_key(order.delivery_slot)),
    'logistics': lambda order: (int(order.is_pickup), natural_key(order.recipient_name)),
    'message': lambda order: natural_key(order.message),
    'status': lambda order: natural_key(order.status),
    'total': lambda order: _numeric(order.total),
}

DEFAULT_DIRECTIONS: Dict[str, SortDirection] = {
    key: SortDirection.DESC if key in ('id', 'total') else SortDirection.ASC
    for key in SORT_KEYS
}


def sort_by(orders: Iterable[NormalizedOrder], key: str,
            direction: SortDirection = SortDirection.ASC) -> List[NormalizedOrder]:
    """Sort orders for the table view; equal orders keep their input order"""
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key!r}")
    descending = SortDirection(direction) is SortDirection.DESC
    return sorted(orders, key=SORT_KEYS[key], reverse=descending)


@dataclass(frozen=True)
class SortState:
    """Current table sort. Selecting the active key again flips its direction."""
    key: str = 'reservation'
    direction: SortDirection = SortDirection.ASC

    def select(self, key: str) -> 'SortState':
        if key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {key!r}")
        if key == self.key:
            return replace(self, direction=SortDirection(self.direction).flipped())
        return SortState(key=key, direction=DEFAULT_DIRECTIONS[key])

    def apply(self, orders: Iterable[NormalizedOrder]) -> List[NormalizedOrder]:
        return sort_by(orders, self.key, self.direction)


def available_statuses(orders: Iterable[NormalizedOrder]) -> List[str]:
    """Distinct statuses in order of first appearance"""
    seen: List[str] = []
    for order in orders:
        if order.status not in seen:
            seen.append(order.status)
    return seen
