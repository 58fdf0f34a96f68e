"""Mapping of raw API orders into normalized orders"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from orderboard.config import (
    NO_DATE, NO_DELIVERY_TYPE, NO_EMAIL, NO_NAME, NO_PHONE, NO_RECIPIENT,
    NO_SLOT, PICKUP_KEYWORDS,
)
from orderboard.models import NormalizedOrder, RawOrder
from orderboard.utils import parse_amount, parse_local_date, parse_timestamp


@dataclass(frozen=True)
class FieldPolicy:
    """Where a text field comes from and what replaces it when empty.

    Fields with ``meta_keys`` are read from order metadata, trying the keys
    in order. Other fields are read with ``source``. A ``placeholder`` of
    None leaves the field as an empty string.
    """
    meta_keys: Tuple[str, ...] = ()
    source: Optional[Callable[[RawOrder], str]] = None
    placeholder: Optional[str] = None

    def resolve(self, raw: RawOrder) -> str:
        if self.meta_keys:
            value = raw.metadata.lookup(self.meta_keys)
        else:
            value = self.source(raw)
        if not value and self.placeholder is not None:
            return self.placeholder
        return value


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ''


def _full_name(contact: Dict[str, Any]) -> str:
    parts = [_text(contact.get('first_name')), _text(contact.get('last_name'))]
    return ' '.join(part for part in parts if part).strip()


FIELD_POLICIES: Dict[str, FieldPolicy] = {
    'delivery_date_label': FieldPolicy(
        meta_keys=('Fecha de envío o retiro', '_orddd_lite_timestamp'),
        placeholder=NO_DATE,
    ),
    'delivery_slot': FieldPolicy(
        meta_keys=('Horario de entrega', '_orddd_time_slot'),
        placeholder=NO_SLOT,
    ),
    'notes': FieldPolicy(meta_keys=('shipping_mensaje', '_shipping_mensaje')),
    'observation': FieldPolicy(meta_keys=('shipping_observaciones', '_shipping_observaciones')),
    'recipient_phone': FieldPolicy(
        meta_keys=('shipping_telefono', '_shipping_telefono'),
        placeholder=NO_PHONE,
    ),
    'customer_name': FieldPolicy(
        source=lambda raw: _full_name(raw.billing),
        placeholder=NO_NAME,
    ),
    'customer_phone': FieldPolicy(
        source=lambda raw: _text(raw.billing.get('phone')),
        placeholder=NO_PHONE,
    ),
    'customer_email': FieldPolicy(
        source=lambda raw: _text(raw.billing.get('email')),
        placeholder=NO_EMAIL,
    ),
    'recipient_name': FieldPolicy(
        source=lambda raw: _full_name(raw.shipping),
        placeholder=NO_RECIPIENT,
    ),
    'delivery_type': FieldPolicy(
        source=lambda raw: raw.shipping_method.strip(),
        placeholder=NO_DELIVERY_TYPE,
    ),
    # Views pick their own wording for a missing address
    'delivery_address': FieldPolicy(source=lambda raw: _text(raw.shipping.get('address_1'))),
}


def is_pickup_method(label: str) -> bool:
    """Whether a shipping method label describes an in-store pickup"""
    lowered = (label or '').lower()
    return any(keyword in lowered for keyword in PICKUP_KEYWORDS)


def format_line_item(item: Dict[str, Any]) -> str:
    quantity = item.get('quantity')
    if isinstance(quantity, float) and quantity.is_integer():
        quantity = int(quantity)
    return f"{quantity} x {item.get('name', '')}"


def normalize(raw: Union[RawOrder, Dict[str, Any]]) -> NormalizedOrder:
    """Build the normalized view of a single raw order.

    Malformed sub-fields never abort the record: an unreadable delivery date
    becomes None, an unreadable total becomes NaN and missing text falls
    back to the placeholder from ``FIELD_POLICIES``.
    """
    if not isinstance(raw, RawOrder):
        raw = RawOrder(raw)

    fields = {name: policy.resolve(raw) for name, policy in FIELD_POLICIES.items()}
    delivery_type = fields.pop('delivery_type')

    return NormalizedOrder(
        id=raw.order_id,
        status=raw.status,
        is_pickup=is_pickup_method(raw.shipping_method),
        delivery_type=delivery_type,
        delivery_date=parse_local_date(fields['delivery_date_label']),
        total=parse_amount(raw.total),
        created_at=parse_timestamp(raw.date_created),
        items=tuple(format_line_item(item) for item in raw.line_items),
        **fields,
    )


def normalize_all(raws: Iterable[Union[RawOrder, Dict[str, Any]]]) -> List[NormalizedOrder]:
    """Normalize a batch of raw orders, keeping their order"""
    return [normalize(raw) for raw in raws]
