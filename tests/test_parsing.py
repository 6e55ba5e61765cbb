from __future__ import annotations

import json

import pytest

from vehicle_selection.engine import get_all_evaluations
from vehicle_selection.models import Coordinate, OrderInput
from vehicle_selection.parsing import parse_point, to_bool, to_float
from vehicle_selection.utils import normalize_order


def test_client_form_payload() -> None:
    payload = {
        "orderType": "scheduled",
        "priority": "high",
        "package": {
            "category": "electronics",
            "dimensions": {"length": "40", "width": "30", "height": "", "unit": "cm"},
            "weight": {"value": "1500", "unit": "g"},
            "isFragile": True,
            "requiresSpecialHandling": False,
        },
        "pickup": {"address": "12 Marina", "coordinates": {"lat": 6.455, "lng": 3.384}},
        "dropoff": {"address": "Yaba", "coordinates": {"lat": 6.509, "lng": 3.371}},
    }
    order = OrderInput.from_dict(payload)

    assert order.order_type == "scheduled"
    assert order.priority == "high"
    assert order.pickup == Coordinate(6.455, 3.384)
    assert order.package.is_fragile is True

    norm = normalize_order(order)
    assert norm.weight_kg == pytest.approx(1.5)
    # Blank height zeroes every dimension
    assert norm.dimensions_cm.as_tuple() == (0.0, 0.0, 0.0)
    assert norm.distance_km > 0


def test_stored_order_geojson_is_lng_first() -> None:
    payload = {
        "location": {
            "pickUp": {"coordinates": {"type": "Point", "coordinates": [3.384, 6.455]}},
            "dropOff": {"coordinates": {"type": "Point", "coordinates": [3.371, 6.509]}},
        },
        "package": {"weight": {"value": 3, "unit": "kg"}},
    }
    order = OrderInput.from_dict(payload)

    assert order.pickup == Coordinate(lat=6.455, lng=3.384)
    assert order.dropoff == Coordinate(lat=6.509, lng=3.371)


def test_unfilled_form_coordinates_count_as_missing() -> None:
    order = OrderInput.from_dict({
        "pickup": {"coordinates": {"lat": None, "lng": None}},
        "dropoff": {"coordinates": {"lat": None, "lng": None}},
    })
    assert order.pickup is None
    assert order.dropoff is None
    assert normalize_order(order).distance_km == 0.0


def test_malformed_geojson_degrades_to_zero_distance() -> None:
    order = OrderInput.from_dict({
        "location": {
            "pickUp": {"coordinates": {"coordinates": [3.384]}},
            "dropOff": {"coordinates": {"coordinates": [3.371, 6.509]}},
        },
    })
    assert normalize_order(order).distance_km == 0.0


def test_defaults_for_empty_payload() -> None:
    order = OrderInput.from_dict({"priority": "", "orderType": None})
    assert order.priority == "normal"
    assert order.order_type == "instant"
    assert order.package.weight is None


def test_snake_case_keys_accepted() -> None:
    order = OrderInput.from_dict({
        "order_type": "scheduled",
        "package": {"is_fragile": "true", "requires_special_handling": "yes", "weight": 4},
    })
    assert order.order_type == "scheduled"
    assert order.package.is_fragile is True
    assert order.package.requires_special_handling is True
    assert normalize_order(order).weight_kg == 4.0


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None), ("", None), ("  ", None), ("2.5", 2.5), (3, 3.0), ("abc", None), (True, None),
        ("nan", None), ("inf", None), ("-Infinity", None), (float("nan"), None), (float("inf"), None),
    ],
)
def test_to_float(value, expected) -> None:
    assert to_float(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("true", True), ("False", False), ("1", True), ("", False), (1, True), (None, False)],
)
def test_to_bool(value, expected) -> None:
    assert to_bool(value) is expected


def test_parse_point_passes_pairs_through() -> None:
    assert parse_point((6.4, 3.3)) == (6.4, 3.3)
    assert parse_point({"lat": 6.4, "lng": 3.3}) == Coordinate(6.4, 3.3)
    assert parse_point({}) is None


@pytest.mark.parametrize(
    "raw",
    [
        '{"package": {"weight": {"value": "nan"}}}',
        '{"package": {"weight": {"value": "inf", "unit": "g"}}}',
        '{"package": {"weight": {"value": NaN}}}',
        '{"package": {"weight": {"value": -Infinity}}}',
    ],
)
def test_non_finite_weight_treated_as_missing(profiles, raw) -> None:
    order = OrderInput.from_dict(json.loads(raw))

    assert order.package.weight.value is None
    assert normalize_order(order).weight_kg == 0.0

    summary = get_all_evaluations(profiles, order)
    baseline = get_all_evaluations(profiles, OrderInput())
    assert summary.to_dict() == baseline.to_dict()
