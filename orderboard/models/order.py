"""Order models"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from orderboard.models.metadata import MetadataList


class OrderStatus(str, Enum):
    """Order status codes known to the dashboard"""
    PROCESSING = 'processing'
    COMPLETED = 'completed'
    PENDING = 'pending'
    CANCELLED = 'cancelled'
    ON_HOLD = 'on_hold'
    REFUNDED = 'refunded'
    FAILED = 'failed'

    @classmethod
    def is_known(cls, status: str) -> bool:
        return status in cls._value2member_map_


class RawOrder:
    """An order as received from the order API"""

    def __init__(self, data: Dict[str, Any]):
        self.order_id: int = int(data['id'])
        self.status: str = str(data.get('status') or '')
        self.total: Any = data.get('total')
        self.date_created: str = data.get('date_created') or ''
        self.billing: Dict[str, Any] = data.get('billing') or {}
        self.shipping: Dict[str, Any] = data.get('shipping') or {}
        self.line_items: List[Dict[str, Any]] = data.get('line_items') or []
        self.shipping_lines: List[Dict[str, Any]] = data.get('shipping_lines') or []
        self.metadata = MetadataList(data.get('meta_data') or [])

    @property
    def shipping_method(self) -> str:
        """Label of the first shipping line, '' when there is none"""
        if not self.shipping_lines:
            return ''
        return str(self.shipping_lines[0].get('method_title') or '')

    def __repr__(self) -> str:
        return f"RawOrder({self.order_id}, {self.status}, {self.date_created})"


@dataclass(frozen=True)
class NormalizedOrder:
    """An order after field extraction and placeholder resolution"""
    id: int
    status: str
    customer_name: str
    customer_phone: str
    customer_email: str
    recipient_name: str
    recipient_phone: str
    is_pickup: bool
    delivery_address: str
    delivery_type: str
    delivery_date_label: str
    delivery_date: Optional[date]
    delivery_slot: str
    total: float
    notes: str
    observation: str
    created_at: Optional[datetime]
    items: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def effective_date(self) -> Optional[datetime]:
        """Delivery date at local midnight, else the creation timestamp"""
        if self.delivery_date is not None:
            return datetime.combine(self.delivery_date, time())
        return self.created_at

    @property
    def effective_timestamp(self) -> float:
        """POSIX seconds of the effective date; -inf when neither date is known"""
        moment = self.effective_date
        if moment is None:
            return float('-inf')
        try:
            return moment.timestamp()
        except (OverflowError, ValueError, OSError):
            # Years the platform clock cannot represent
            return float('-inf') if moment.year < 1970 else float('inf')

    @property
    def message(self) -> str:
        return f"{self.notes} {self.observation}".strip()

    @property
    def has_valid_total(self) -> bool:
        return math.isfinite(self.total)

    def __repr__(self) -> str:
        return f"NormalizedOrder({self.id}, {self.status}, {self.delivery_date_label})"
