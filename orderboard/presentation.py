"""Display helpers shared by the dashboard and the console output"""
import math
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from orderboard.models import NormalizedOrder, OrderStatus
from orderboard.utils import to_iso_day

STATUS_LABELS: Dict[str, str] = {
    'processing': 'En proceso',
    'completed': 'Completado',
    'pending': 'Pendiente',
    'cancelled': 'Cancelado',
    'on_hold': 'En espera',
    'refunded': 'Reembolsado',
    'failed': 'Fallido',
}

STATUS_COLORS: Dict[str, str] = {
    'processing': 'orange',
    'completed': 'green',
    'pending': 'gray',
    'cancelled': 'red',
    'on_hold': 'orange',
    'refunded': 'blue',
    'failed': 'red',
}

WEEKDAY_LABELS = ['Lun', 'Mar', 'Mié', 'Jue', 'Vie', 'Sáb', 'Dom']

MONTH_TITLES = [
    'enero', 'febrero', 'marzo', 'abril', 'mayo', 'junio', 'julio',
    'agosto', 'septiembre', 'octubre', 'noviembre', 'diciembre',
]

PICKUP_ADDRESS = 'No aplica (retiro en local).'
NO_ADDRESS = 'Sin dirección de envío registrada.'
NO_NOTES = 'Sin mensaje'
NO_OBSERVATION = 'Sin observaciones'


def status_label(status: str) -> str:
    """Spanish label for a status code; unknown codes are shown as is"""
    if OrderStatus.is_known(status):
        return STATUS_LABELS[status]
    return status


def format_clp(value: float) -> str:
    """Format an amount as Chilean pesos, e.g. $12.345"""
    if value is None or math.isnan(value):
        return '-'
    if math.isinf(value):
        return '-'
    rounded = int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    digits = f"{abs(rounded):,}".replace(',', '.')
    return f"-${digits}" if rounded < 0 else f"${digits}"


def logistics_label(is_pickup: bool) -> str:
    return 'Retiro' if is_pickup else 'Envío'


def address_text(order: NormalizedOrder) -> str:
    if order.is_pickup:
        return PICKUP_ADDRESS
    return order.delivery_address or NO_ADDRESS


def notes_text(order: NormalizedOrder) -> str:
    return order.notes or NO_NOTES


def observation_text(order: NormalizedOrder) -> str:
    return order.observation or NO_OBSERVATION


def order_card_rows(order: NormalizedOrder) -> List[Tuple[str, str]]:
    """Label/value pairs shown on an order card"""
    rows = [
        ('Fecha', order.delivery_date_label),
        ('Horario', order.delivery_slot),
        ('Recibe', order.recipient_name),
        ('Tel. envío', order.recipient_phone),
        ('Método', order.delivery_type),
        ('Logística', logistics_label(order.is_pickup)),
        ('Total', format_clp(order.total)),
    ]
    if not order.is_pickup:
        rows.append(('Dirección', address_text(order)))
    return rows


TABLE_COLUMNS = [
    'Pedido', 'Productos', 'Cliente', 'Teléfono cliente', 'Fecha', 'Horario',
    'Logística', 'Recibe', 'Teléfono', 'Dirección', 'Mensaje', 'Observaciones',
    'Estado', 'Total',
]


def orders_to_frame(orders: Iterable[NormalizedOrder]) -> pd.DataFrame:
    """One row per order, in the given order, for the table view"""
    rows = []
    for order in orders:
        rows.append({
            'Pedido': f"#{order.id}",
            'Productos': ', '.join(order.items[:2]),
            'Cliente': order.customer_name,
            'Teléfono cliente': order.customer_phone,
            'Fecha': order.delivery_date_label,
            'Horario': order.delivery_slot,
            'Logística': logistics_label(order.is_pickup),
            'Recibe': order.recipient_name,
            'Teléfono': order.recipient_phone,
            'Dirección': '' if order.is_pickup else address_text(order),
            'Mensaje': notes_text(order),
            'Observaciones': observation_text(order),
            'Estado': status_label(order.status),
            'Total': format_clp(order.total),
        })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


# ---- Calendar ----

def month_start(day: date) -> date:
    return date(day.year, day.month, 1)


def shift_month(month: date, delta: int) -> date:
    """First day of the month ``delta`` months away"""
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_title(month: date) -> str:
    return f"{MONTH_TITLES[month.month - 1]} de {month.year}"


def build_calendar_days(month: date) -> List[date]:
    """Monday-first grid of whole weeks covering the month"""
    first = month_start(month)
    last = shift_month(first, 1) - timedelta(days=1)

    days = [first - timedelta(days=offset) for offset in range(first.weekday(), 0, -1)]
    days.extend(first + timedelta(days=offset) for offset in range(last.day))
    while len(days) % 7 != 0:
        days.append(days[-1] + timedelta(days=1))
    return days


def initial_month(orders: Iterable[NormalizedOrder], today: date) -> date:
    """Month of the first order with a delivery date, else the current month"""
    for order in orders:
        if order.delivery_date is not None:
            return month_start(order.delivery_date)
    return month_start(today)


def default_selected_day(grouped: Dict[str, List[NormalizedOrder]], today: date) -> str:
    """Today if it has orders, else the first day that does, else today"""
    key = to_iso_day(today)
    if key in grouped:
        return key
    return next(iter(grouped), key)


def day_order_count(grouped: Dict[str, List[NormalizedOrder]], day: date) -> int:
    return len(grouped.get(to_iso_day(day), []))


def selected_orders(grouped: Dict[str, List[NormalizedOrder]], day_key: Optional[str]) -> List[NormalizedOrder]:
    if not day_key:
        return []
    return grouped.get(day_key, [])
