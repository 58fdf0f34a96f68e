"""Shared fixtures for the order dashboard tests"""
import copy

import pytest

from orderboard.normalization import normalize


FULL_ORDER = {
    "id": 1042,
    "status": "processing",
    "total": "25990.00",
    "currency": "CLP",
    "date_created": "2024-01-10T09:15:00",
    "date_paid": "2024-01-10T09:16:00",
    "billing": {
        "first_name": "Juan",
        "last_name": "Pérez",
        "phone": "+56911112222",
        "email": "juan@example.com",
    },
    "shipping": {
        "first_name": "María",
        "last_name": "González",
        "address_1": "Av. Providencia 1234",
    },
    "line_items": [
        {"id": 1, "name": "Ramo de rosas", "quantity": 2},
        {"id": 2, "name": "Tarjeta", "quantity": 1},
    ],
    "shipping_lines": [
        {"method_title": "Despacho a domicilio", "total": "3990"},
    ],
    "meta_data": [
        {"key": "Fecha de envío o retiro", "value": "15 enero, 2024"},
        {"key": "Horario de entrega", "value": "10:00 - 13:00"},
        {"key": "shipping_mensaje", "value": "Feliz cumpleaños"},
        {"key": "shipping_observaciones", "value": "Tocar timbre"},
        {"key": "shipping_telefono", "value": "+56933334444"},
    ],
}


def build_raw_order(**overrides):
    """Copy of FULL_ORDER with top-level fields replaced"""
    order = copy.deepcopy(FULL_ORDER)
    order.update(overrides)
    return order


def build_order(**overrides):
    """Normalized order built from FULL_ORDER with top-level fields replaced"""
    return normalize(build_raw_order(**overrides))


@pytest.fixture
def raw_order():
    return build_raw_order()


@pytest.fixture
def sample_orders():
    """A small mixed batch of pickup and delivery orders"""
    pickup_line = [{"method_title": "Retiro en tienda", "total": "0"}]
    return [
        build_order(
            id=1, status="completed", total="10000",
            billing={"first_name": "Juan", "last_name": "Soto", "phone": "111", "email": ""},
            shipping_lines=pickup_line,
            meta_data=[{"key": "Fecha de envío o retiro", "value": "20 enero 2024"}],
        ),
        build_order(
            id=2, status="completed", total="20000",
            billing={"first_name": "Ana", "last_name": "Rojas", "phone": "222", "email": ""},
            meta_data=[{"key": "Fecha de envío o retiro", "value": "12 enero 2024"}],
        ),
        build_order(
            id=3, status="processing", total="30000",
            billing={"first_name": "Juana", "last_name": "Díaz", "phone": "333", "email": ""},
            shipping_lines=pickup_line,
            meta_data=[{"key": "Fecha de envío o retiro", "value": "15 enero 2024"}],
        ),
        build_order(
            id=4, status="pending", total="5000",
            billing={"first_name": "Pedro", "last_name": "Juanes", "phone": "444", "email": ""},
            date_created="2024-01-05T08:00:00",
            meta_data=[],
        ),
    ]
