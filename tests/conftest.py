from __future__ import annotations

import math
from typing import Optional, Tuple

import pytest

from vehicle_selection import config
from vehicle_selection.models import (
    Coordinate,
    Dimensions,
    NormalizedOrder,
    OrderInput,
    PackageDimensions,
    PackageInfo,
    PackageWeight,
)
from vehicle_selection.profiles import DEFAULT_PROFILES

# Lagos Island, used as the pickup for generated routes
ORIGIN = Coordinate(lat=6.4550, lng=3.3841)


def route_of(distance_km: float) -> Tuple[Coordinate, Coordinate]:
    """Pickup/dropoff pair exactly distance_km apart along a meridian."""
    delta_deg = math.degrees(distance_km / config.EARTH_RADIUS_KM)
    return ORIGIN, Coordinate(lat=ORIGIN.lat + delta_deg, lng=ORIGIN.lng)


def make_order(
    distance_km: Optional[float] = None,
    weight_kg: Optional[float] = None,
    dims_cm: Optional[Tuple[float, float, float]] = None,
    category: Optional[str] = None,
    fragile: bool = False,
    special: bool = False,
    priority: str = "normal",
    order_type: str = "instant",
) -> OrderInput:
    pickup, dropoff = route_of(distance_km) if distance_km is not None else (None, None)
    return OrderInput(
        pickup=pickup,
        dropoff=dropoff,
        package=PackageInfo(
            weight=PackageWeight(value=weight_kg, unit="kg") if weight_kg is not None else None,
            dimensions=PackageDimensions(*dims_cm, unit="cm") if dims_cm else None,
            category=category,
            is_fragile=fragile,
            requires_special_handling=special,
        ),
        priority=priority,
        order_type=order_type,
    )


def normalized(
    distance_km: float = 0.0,
    weight_kg: float = 0.0,
    dims_cm: Tuple[float, float, float] = (0.0, 0.0, 0.0),
    category: Optional[str] = None,
    fragile: bool = False,
    special: bool = False,
    priority: str = "normal",
    order_type: str = "instant",
) -> NormalizedOrder:
    return NormalizedOrder(
        distance_km=distance_km,
        weight_kg=weight_kg,
        dimensions_cm=Dimensions(*dims_cm),
        category=category,
        is_fragile=fragile,
        requires_special_handling=special,
        priority=priority,
        order_type=order_type,
    )


@pytest.fixture
def profiles():
    return DEFAULT_PROFILES


@pytest.fixture
def scenario_a_order() -> OrderInput:
    """5 km document run: the everyday small-parcel order."""
    return make_order(
        distance_km=5.0,
        weight_kg=2.0,
        dims_cm=(20, 15, 10),
        category="document",
    )
