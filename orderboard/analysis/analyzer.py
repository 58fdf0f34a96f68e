"""Order aggregation"""
from dataclasses import dataclass
from typing import Dict, Iterable, List

from orderboard.models import NormalizedOrder
from orderboard.utils import to_iso_day


@dataclass(frozen=True)
class Metrics:
    """Totals over a set of orders.

    Orders whose total could not be parsed are counted but left out of the
    amounts; ``invalid_total_count`` says how many there were.
    """
    order_count: int = 0
    total_amount: float = 0.0
    delivery_count: int = 0
    delivery_amount: float = 0.0
    pickup_count: int = 0
    pickup_amount: float = 0.0
    invalid_total_count: int = 0

    @property
    def average_ticket(self) -> float:
        return self.total_amount / self.order_count if self.order_count > 0 else 0.0


class MetricsCalculator:
    """Calculates metrics from normalized orders"""

    @staticmethod
    def summarize(orders: Iterable[NormalizedOrder]) -> Metrics:
        """Count and sum orders, split by fulfillment type"""
        order_count = 0
        total_amount = 0.0
        delivery_count = 0
        delivery_amount = 0.0
        pickup_count = 0
        pickup_amount = 0.0
        invalid_total_count = 0

        for order in orders:
            amount = order.total
            if not order.has_valid_total:
                invalid_total_count += 1
                amount = 0.0

            order_count += 1
            total_amount += amount
            if order.is_pickup:
                pickup_count += 1
                pickup_amount += amount
            else:
                delivery_count += 1
                delivery_amount += amount

        return Metrics(
            order_count=order_count,
            total_amount=total_amount,
            delivery_count=delivery_count,
            delivery_amount=delivery_amount,
            pickup_count=pickup_count,
            pickup_amount=pickup_amount,
            invalid_total_count=invalid_total_count,
        )


class OrderAnalyzer:
    """Groups orders for the calendar and status views"""

    @staticmethod
    def group_by_day(orders: Iterable[NormalizedOrder]) -> Dict[str, List[NormalizedOrder]]:
        """Orders with a delivery date, keyed by YYYY-MM-DD in input order"""
        grouped: Dict[str, List[NormalizedOrder]] = {}
        for order in orders:
            if order.delivery_date is None:
                continue
            day = to_iso_day(order.delivery_date)
            if day not in grouped:
                grouped[day] = []
            grouped[day].append(order)
        return grouped

    @staticmethod
    def count_by_status(orders: Iterable[NormalizedOrder]) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for order in orders:
            counts[order.status] = counts.get(order.status, 0) + 1
        return counts
