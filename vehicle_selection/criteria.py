# vehicle-selection-engine/vehicle_selection/criteria.py
"""
Per-criterion evaluators.

Each evaluator is a pure function of (profile, normalized order) returning a
CriterionResult. A DISABLED result is a hard fail that excludes the vehicle
regardless of the other criteria; an ALLOWED result carries a 0-100 score
that feeds the composite.

Hard-fail comparisons are strict: a value equal to the vehicle's maximum is
still allowed.
"""

from __future__ import annotations

from typing import Callable, Tuple

from . import config
from .models import CriterionResult, EvaluationStatus, NormalizedOrder, VehicleProfile

Evaluator = Callable[[VehicleProfile, NormalizedOrder], CriterionResult]


def _allowed(reason: str, score: float) -> CriterionResult:
    return CriterionResult(EvaluationStatus.ALLOWED, reason, score)


def _disabled(reason: str) -> CriterionResult:
    return CriterionResult(EvaluationStatus.DISABLED, reason, 0.0)


def _ratio(value: float, maximum: float) -> float:
    """value / maximum, treating a zero capacity as unused."""
    if maximum <= 0:
        return 0.0
    return value / maximum


def evaluate_distance(profile: VehicleProfile, order: NormalizedOrder) -> CriterionResult:
    max_distance = profile.capabilities.max_distance_km
    if order.distance_km > max_distance:
        return _disabled(f"Distance {order.distance_km:.1f}km exceeds maximum {max_distance:g}km")

    score = max(0.0, 100 - _ratio(order.distance_km, max_distance) * config.DISTANCE_PENALTY)
    return _allowed(f"Distance: {order.distance_km:.1f}km", score)


def evaluate_weight(profile: VehicleProfile, order: NormalizedOrder) -> CriterionResult:
    max_weight = profile.capabilities.max_weight_kg
    if order.weight_kg > max_weight:
        return _disabled(f"Weight {order.weight_kg:g}kg exceeds maximum {max_weight:g}kg")

    score = max(0.0, 100 - _ratio(order.weight_kg, max_weight) * config.WEIGHT_PENALTY)
    return _allowed(f"Weight: {order.weight_kg:g}kg", score)


def evaluate_dimensions(profile: VehicleProfile, order: NormalizedOrder) -> CriterionResult:
    dims = order.dimensions_cm
    limit = profile.capabilities.max_dimensions_cm

    if dims.length > limit.length or dims.width > limit.width or dims.height > limit.height:
        return _disabled(f"Dimensions exceed limits ({dims} vs {limit})")

    # The tightest axis decides how full the cargo space is
    utilization = max(
        _ratio(dims.length, limit.length),
        _ratio(dims.width, limit.width),
        _ratio(dims.height, limit.height),
    )
    score = max(0.0, 100 - utilization * config.DIMENSION_PENALTY)
    return _allowed(f"Dimensions: {dims}", score)


def evaluate_category(profile: VehicleProfile, order: NormalizedOrder) -> CriterionResult:
    """Category never disables a vehicle; an unlisted category only costs score."""
    category = order.category
    if not category:
        return _allowed("No category specified", config.CATEGORY_MISSING_SCORE)
    if category in profile.suitable_for:
        return _allowed(f"Perfect for {category} deliveries", config.CATEGORY_MATCH_SCORE)
    return _allowed(f"Can handle {category} deliveries", config.CATEGORY_OTHER_SCORE)


def evaluate_priority(profile: VehicleProfile, order: NormalizedOrder) -> CriterionResult:
    if order.priority not in profile.priority_support:
        return _disabled(f"Does not support {order.priority} priority orders")
    if not profile.supports_order_type(order.order_type):
        return _disabled(f"Does not support {order.order_type} orders")
    return _allowed(
        f"Supports {order.priority} priority {order.order_type} orders",
        config.PRIORITY_SUPPORTED_SCORE,
    )


def evaluate_fragile(profile: VehicleProfile, order: NormalizedOrder) -> CriterionResult:
    if not order.is_fragile:
        return _allowed("Not fragile", config.NOT_FRAGILE_SCORE)

    level = profile.restrictions.fragile_handling
    if level == "limited":
        return _allowed("Limited fragile handling capability", config.FRAGILE_SCORES["limited"])
    if level == "good":
        return _allowed("Good fragile handling", config.FRAGILE_SCORES["good"])
    return _allowed("Excellent fragile handling", config.FRAGILE_SCORES["excellent"])


def evaluate_special_handling(profile: VehicleProfile, order: NormalizedOrder) -> CriterionResult:
    if not order.requires_special_handling:
        return _allowed("No special handling needed", config.NO_SPECIAL_HANDLING_SCORE)
    if not profile.restrictions.special_handling:
        return _disabled("Cannot provide special handling")
    return _allowed("Can provide special handling", config.SPECIAL_HANDLING_SCORE)


# Evaluation order matters: the first hard fail supplies the vehicle's reason.
CRITERIA: Tuple[Tuple[str, Evaluator], ...] = (
    ("distance", evaluate_distance),
    ("weight", evaluate_weight),
    ("dimensions", evaluate_dimensions),
    ("category", evaluate_category),
    ("priority", evaluate_priority),
    ("fragile", evaluate_fragile),
    ("specialHandling", evaluate_special_handling),
)
