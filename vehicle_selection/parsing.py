# vehicle-selection-engine/vehicle_selection/parsing.py
"""
Order payload parsing.

Turns the order documents produced by the mobile client and stored by the
backend into OrderInput objects. Parsing never raises: unreadable values
become missing values, which the engine then treats as "no information".

Accepted point shapes:
- {"lat": 6.52, "lng": 3.37}
- {"coordinates": {"lat": 6.52, "lng": 3.37}}         (order form)
- {"coordinates": {"coordinates": [3.37, 6.52]}}      (GeoJSON, lng first)
- location.pickUp / location.dropOff holding any of the above (stored order)
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Mapping, Optional

from . import config
from .models import (
    Coordinate,
    OrderInput,
    PackageDimensions,
    PackageInfo,
    PackageWeight,
)

_TRUE_STRINGS = {"true", "1", "yes", "y"}


def to_float(value: Any) -> Optional[float]:
    """Coerce form input to float; blanks and garbage become None. NaN and infinity count as garbage."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present, non-None value among keys."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def parse_point(raw: Any) -> Any:
    """
    Extract a Coordinate from one of the accepted point shapes.

    Returns a Coordinate, None when the point is absent or blank, or the
    raw value when it cannot be interpreted (so distance falls back to 0).
    """
    if raw is None:
        return None
    if isinstance(raw, Coordinate):
        return raw

    if isinstance(raw, Mapping):
        if "lat" in raw or "lng" in raw:
            lat, lng = to_float(raw.get("lat")), to_float(raw.get("lng"))
            if lat is None and lng is None:
                return None
            if lat is None or lng is None:
                return raw
            return Coordinate(lat=lat, lng=lng)

        inner = raw.get("coordinates")
        if isinstance(inner, (list, tuple)):
            # GeoJSON order is [lng, lat]
            if len(inner) != 2:
                return inner
            lng, lat = to_float(inner[0]), to_float(inner[1])
            if lat is None or lng is None:
                return inner
            return Coordinate(lat=lat, lng=lng)
        if inner is not None:
            return parse_point(inner)
        return None

    # (lat, lng) pairs pass through; utils.to_lat_lng validates them
    return raw


def parse_package(data: Optional[Mapping[str, Any]]) -> PackageInfo:
    if not data:
        return PackageInfo()

    weight = None
    raw_weight = data.get("weight")
    if isinstance(raw_weight, Mapping):
        weight = PackageWeight(
            value=to_float(raw_weight.get("value")),
            unit=raw_weight.get("unit") or "kg",
        )
    elif raw_weight is not None:
        weight = PackageWeight(value=to_float(raw_weight))

    dimensions = None
    raw_dims = data.get("dimensions")
    if isinstance(raw_dims, Mapping):
        dimensions = PackageDimensions(
            length=to_float(raw_dims.get("length")),
            width=to_float(raw_dims.get("width")),
            height=to_float(raw_dims.get("height")),
            unit=raw_dims.get("unit") or "cm",
        )

    category = data.get("category")
    return PackageInfo(
        weight=weight,
        dimensions=dimensions,
        category=category if isinstance(category, str) and category else None,
        is_fragile=to_bool(_pick(data, "isFragile", "is_fragile")),
        requires_special_handling=to_bool(
            _pick(data, "requiresSpecialHandling", "requires_special_handling")
        ),
    )


def order_from_dict(data: Mapping[str, Any]) -> OrderInput:
    """
    Build an OrderInput from an order payload.

    Both camelCase (client) and snake_case keys are accepted. Empty
    priority/order type strings fall back to the configured defaults.
    """
    location = data.get("location") or {}
    pickup = _pick(data, "pickup", "pickUp", "pickup_coordinate", "pickupCoordinate")
    dropoff = _pick(data, "dropoff", "dropOff", "dropoff_coordinate", "dropoffCoordinate")
    if pickup is None and isinstance(location, Mapping):
        pickup = _pick(location, "pickUp", "pickup")
    if dropoff is None and isinstance(location, Mapping):
        dropoff = _pick(location, "dropOff", "dropoff")

    package = data.get("package")
    return OrderInput(
        pickup=parse_point(pickup),
        dropoff=parse_point(dropoff),
        package=parse_package(package if isinstance(package, Mapping) else None),
        priority=data.get("priority") or config.DEFAULT_PRIORITY,
        order_type=_pick(data, "orderType", "order_type") or config.DEFAULT_ORDER_TYPE,
    )
