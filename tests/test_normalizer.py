"""Tests for order normalization"""
import math
from datetime import date, datetime

import pytest

from conftest import build_raw_order
from orderboard.models import OrderStatus, RawOrder
from orderboard.normalization import FIELD_POLICIES, is_pickup_method, normalize, normalize_all


def test_fully_populated_order_round_trips(raw_order):
    order = normalize(raw_order)

    assert order.id == 1042
    assert order.status == "processing"
    assert order.customer_name == "Juan Pérez"
    assert order.customer_phone == "+56911112222"
    assert order.customer_email == "juan@example.com"
    assert order.recipient_name == "María González"
    assert order.recipient_phone == "+56933334444"
    assert order.is_pickup is False
    assert order.delivery_type == "Despacho a domicilio"
    assert order.delivery_address == "Av. Providencia 1234"
    assert order.delivery_date_label == "15 enero, 2024"
    assert order.delivery_date == date(2024, 1, 15)
    assert order.delivery_slot == "10:00 - 13:00"
    assert order.total == 25990.0
    assert order.notes == "Feliz cumpleaños"
    assert order.observation == "Tocar timbre"
    assert order.created_at == datetime(2024, 1, 10, 9, 15)
    assert order.items == ("2 x Ramo de rosas", "1 x Tarjeta")


def test_accepts_raw_order_instances(raw_order):
    assert normalize(RawOrder(raw_order)) == normalize(raw_order)


def test_normalize_is_deterministic(raw_order):
    assert normalize(raw_order) == normalize(raw_order)


def test_normalized_order_is_immutable(raw_order):
    order = normalize(raw_order)
    with pytest.raises(AttributeError):
        order.status = "completed"


def test_empty_contacts_and_metadata_use_placeholders():
    order = normalize(build_raw_order(
        billing={"first_name": "  ", "last_name": "", "phone": "", "email": ""},
        shipping={},
        shipping_lines=[],
        meta_data=[],
    ))

    assert order.customer_name == "Sin nombre"
    assert order.customer_phone == "Sin teléfono"
    assert order.customer_email == "Sin email"
    assert order.recipient_name == "Sin destinatario"
    assert order.recipient_phone == "Sin teléfono"
    assert order.delivery_date_label == "Sin fecha"
    assert order.delivery_slot == "Sin horario"
    assert order.delivery_type == "No definido"
    assert order.is_pickup is False


def test_fields_without_placeholder_stay_empty():
    order = normalize(build_raw_order(shipping={}, meta_data=[]))

    assert order.delivery_address == ""
    assert order.notes == ""
    assert order.observation == ""
    assert order.delivery_date is None


def test_missing_blocks_are_tolerated():
    order = normalize({"id": 7, "status": "pending", "total": "100", "date_created": "2024-01-01T00:00:00"})

    assert order.id == 7
    assert order.items == ()
    assert order.customer_name == "Sin nombre"


def test_name_with_only_last_name():
    order = normalize(build_raw_order(
        billing={"first_name": "", "last_name": "Soto", "phone": "1", "email": "a@b.c"},
    ))
    assert order.customer_name == "Soto"


def test_fallback_metadata_keys_are_used():
    order = normalize(build_raw_order(meta_data=[
        {"key": "_orddd_lite_timestamp", "value": "2 marzo 2024"},
        {"key": "_orddd_time_slot", "value": "15:00 - 18:00"},
        {"key": "_shipping_mensaje", "value": "Con cariño"},
        {"key": "_shipping_observaciones", "value": "Dejar en conserjería"},
        {"key": "_shipping_telefono", "value": "+56955556666"},
    ]))

    assert order.delivery_date_label == "2 marzo 2024"
    assert order.delivery_date == date(2024, 3, 2)
    assert order.delivery_slot == "15:00 - 18:00"
    assert order.notes == "Con cariño"
    assert order.observation == "Dejar en conserjería"
    assert order.recipient_phone == "+56955556666"


def test_primary_metadata_key_wins_even_when_listed_later():
    order = normalize(build_raw_order(meta_data=[
        {"key": "_shipping_telefono", "value": "fallback"},
        {"key": "shipping_telefono", "value": "primary"},
    ]))
    assert order.recipient_phone == "primary"


def test_unparseable_delivery_label_keeps_label():
    order = normalize(build_raw_order(meta_data=[
        {"key": "Fecha de envío o retiro", "value": "mañana temprano"},
    ]))
    assert order.delivery_date_label == "mañana temprano"
    assert order.delivery_date is None


def test_malformed_total_becomes_nan():
    order = normalize(build_raw_order(total="no-total"))
    assert math.isnan(order.total)
    assert order.has_valid_total is False


def test_malformed_created_at_does_not_raise():
    order = normalize(build_raw_order(date_created="not a date", meta_data=[]))
    assert order.created_at is None
    assert order.effective_timestamp == float("-inf")


@pytest.mark.parametrize("label, expected", [
    ("Retiro en tienda", True),
    ("RETIRO EN LOCAL", True),
    ("Store pickup", True),
    ("Local Pickup", True),
    ("Despacho a domicilio", False),
    ("Envío express", False),
    ("", False),
])
def test_pickup_detection(label, expected):
    assert is_pickup_method(label) is expected


def test_pickup_uses_first_shipping_line_only():
    order = normalize(build_raw_order(shipping_lines=[
        {"method_title": "Despacho a domicilio"},
        {"method_title": "Retiro en tienda"},
    ]))
    assert order.is_pickup is False


def test_pickup_order_from_raw():
    order = normalize(build_raw_order(shipping_lines=[{"method_title": "Retiro en tienda"}]))
    assert order.is_pickup is True
    assert order.delivery_type == "Retiro en tienda"


def test_derived_properties(raw_order):
    order = normalize(raw_order)
    assert order.effective_date == datetime(2024, 1, 15)
    assert order.message == "Feliz cumpleaños Tocar timbre"


def test_effective_date_falls_back_to_creation():
    order = normalize(build_raw_order(meta_data=[]))
    assert order.effective_date == datetime(2024, 1, 10, 9, 15)


def test_normalize_all_keeps_order():
    raws = [build_raw_order(id=3), build_raw_order(id=1), build_raw_order(id=2)]
    assert [order.id for order in normalize_all(raws)] == [3, 1, 2]


def test_policy_table_lists_fields_without_placeholder():
    without_placeholder = {name for name, policy in FIELD_POLICIES.items() if policy.placeholder is None}
    assert without_placeholder == {"delivery_address", "notes", "observation"}


def test_overflowing_total_is_not_valid():
    order = normalize(build_raw_order(total="1e999"))
    assert math.isnan(order.total)
    assert order.has_valid_total is False


def test_unknown_status_passes_through():
    order = normalize(build_raw_order(status="wc-preparing"))
    assert order.status == "wc-preparing"
    assert not OrderStatus.is_known(order.status)
    assert OrderStatus.is_known(normalize(build_raw_order(status="on_hold")).status)
