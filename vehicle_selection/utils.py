# vehicle-selection-engine/vehicle_selection/utils.py
"""
Utility functions for the Vehicle Selection Engine.

Provides the geographic distance calculation and the unit normalization
applied to raw order values before the evaluators see them.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Mapping, Optional, Sequence, Tuple

from . import config
from .models import (
    Coordinate,
    Dimensions,
    NormalizedOrder,
    OrderInput,
    PackageDimensions,
    PackageWeight,
)

logger = logging.getLogger(__name__)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1: Latitude of point 1 in decimal degrees
        lon1: Longitude of point 1 in decimal degrees
        lat2: Latitude of point 2 in decimal degrees
        lon2: Longitude of point 2 in decimal degrees

    Returns:
        Distance in kilometers between the two points

    Example:
        >>> haversine_distance(6.5244, 3.3792, 6.4550, 3.3841)
        7.73  # Lagos mainland to island, ~7.7 km
    """
    lon1, lat1, lon2, lat2 = map(math.radians, [lon1, lat1, lon2, lat2])

    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = math.sin(dlat / 2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2)**2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return config.EARTH_RADIUS_KM * c


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def to_lat_lng(point: Any) -> Optional[Tuple[float, float]]:
    """
    Coerce a point into a (lat, lng) tuple.

    Accepts a Coordinate, a mapping with 'lat'/'lng' keys, or a two-item
    (lat, lng) sequence. Anything else, including pairs with non-numeric
    components, yields None.
    """
    if point is None:
        return None

    if isinstance(point, Coordinate):
        pair: Sequence[Any] = (point.lat, point.lng)
    elif isinstance(point, Mapping):
        pair = (point.get("lat"), point.get("lng"))
    elif isinstance(point, (list, tuple)):
        pair = point
    else:
        return None

    if len(pair) != 2 or not all(_is_number(v) for v in pair):
        return None
    return (float(pair[0]), float(pair[1]))


def order_distance_km(pickup: Any, dropoff: Any) -> float:
    """
    Distance between pickup and dropoff, or 0.0 if either point is unusable.

    A missing or malformed coordinate means "no distance information", so the
    order is not penalized on distance rather than rejected.
    """
    start = to_lat_lng(pickup)
    end = to_lat_lng(dropoff)
    if start is None or end is None:
        if pickup is not None or dropoff is not None:
            logger.debug(f"Unusable coordinates (pickup={pickup!r}, dropoff={dropoff!r}), distance set to 0")
        return 0.0
    return haversine_distance(start[0], start[1], end[0], end[1])


def normalize_weight_kg(weight: Optional[PackageWeight]) -> float:
    """
    Convert a package weight to kilograms.

    Grams are divided by 1000; any other unit is taken as kilograms.
    A missing, zero, non-numeric or non-finite value gives 0.0.
    """
    if weight is None or not _is_number(weight.value) or not weight.value:
        return 0.0
    if weight.unit == "g":
        return weight.value / config.GRAMS_PER_KG
    return float(weight.value)


def normalize_dimensions_cm(dimensions: Optional[PackageDimensions]) -> Dimensions:
    """
    Convert package dimensions to centimetres.

    Inches are multiplied by 2.54; any other unit is taken as centimetres.
    If length, width or height is missing, zero, non-numeric or non-finite
    all three become 0.
    """
    if dimensions is None:
        return Dimensions(0.0, 0.0, 0.0)
    sides = (dimensions.length, dimensions.width, dimensions.height)
    if not all(_is_number(side) and side for side in sides):
        return Dimensions(0.0, 0.0, 0.0)

    multiplier = config.CM_PER_INCH if dimensions.unit == "inch" else 1.0
    return Dimensions(
        length=dimensions.length * multiplier,
        width=dimensions.width * multiplier,
        height=dimensions.height * multiplier,
    )


def normalize_order(order: OrderInput) -> NormalizedOrder:
    """Reduce an OrderInput to the values the criterion evaluators read."""
    package = order.package
    normalized = NormalizedOrder(
        distance_km=order_distance_km(order.pickup, order.dropoff),
        weight_kg=normalize_weight_kg(package.weight if package else None),
        dimensions_cm=normalize_dimensions_cm(package.dimensions if package else None),
        category=(package.category or None) if package else None,
        is_fragile=bool(package and package.is_fragile),
        requires_special_handling=bool(package and package.requires_special_handling),
        priority=order.priority or config.DEFAULT_PRIORITY,
        order_type=order.order_type or config.DEFAULT_ORDER_TYPE,
    )
    logger.debug(
        f"Normalized order: {normalized.distance_km:.2f}km, {normalized.weight_kg}kg, "
        f"{normalized.dimensions_cm}, priority={normalized.priority}, type={normalized.order_type}"
    )
    return normalized


def format_time_duration(minutes: Optional[float]) -> str:
    """
    Format a duration in minutes as a human-readable string.

    Returns "N/A" for None (vehicle cannot serve the order type).
    """
    if minutes is None:
        return "N/A"
    if minutes < 60:
        return f"{minutes:.0f}m"
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    return f"{hours}h {mins}m"
