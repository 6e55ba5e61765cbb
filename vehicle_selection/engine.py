# vehicle-selection-engine/vehicle_selection/engine.py
"""
Vehicle Selection Engine.

Scores every vehicle type in a profile table against one order and sorts
them into three tiers:

1. **Recommended**: No criterion hard-failed and the composite score is >= 85.
2. **Allowed**: No criterion hard-failed and the composite score is 60-85.
3. **Disabled**: A criterion hard-failed (first failure supplies the reason),
   or the composite score is below 60 ("Overall compatibility too low").

The composite score is the unweighted mean of the seven criterion scores.
Cost and time estimates are attached to every result, disabled or not.

Everything here is a pure function of its arguments. The profile table is
read-only, so evaluations may run concurrently without locking.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional

from . import config
from .criteria import CRITERIA
from .models import (
    EvaluationResult,
    EvaluationStatus,
    EvaluationSummary,
    NormalizedOrder,
    OrderInput,
    VehicleProfile,
)
from .profiles import DEFAULT_PROFILES, ProfileTable
from .utils import normalize_order

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


# =============================================================================
# ESTIMATES
# =============================================================================

def estimate_cost(profile: VehicleProfile, order: NormalizedOrder) -> int:
    """
    Estimate the delivery price for a vehicle.

    cost = (base + km * per_km + kg * per_kg + urgent surcharge) * cost_multiplier

    Args:
        profile: The vehicle profile
        order: The normalized order

    Returns:
        Price in whole currency units (never negative)
    """
    surcharge = config.URGENT_SURCHARGE if order.priority == config.URGENT_PRIORITY else 0.0
    subtotal = (
        config.BASE_COST
        + order.distance_km * config.COST_PER_KM
        + order.weight_kg * config.COST_PER_KG
        + surcharge
    )
    return max(0, _round_half_up(subtotal * profile.capabilities.cost_multiplier))


def estimate_time(profile: VehicleProfile, order: NormalizedOrder) -> Optional[int]:
    """
    Estimate delivery time in minutes.

    Travel time at the vehicle's speed plus a handling buffer, clamped to the
    vehicle's window for the order type. Returns None when the vehicle has
    no window for the order type, independently of the priority criterion.
    """
    window = profile.time_windows.get(order.order_type)
    if window is None:
        return None

    speed = profile.capabilities.speed_kmh
    base_time = (order.distance_km / speed) * 60 if speed > 0 else float(window.max_minutes)
    total = max(window.min_minutes, min(window.max_minutes, base_time + config.HANDLING_BUFFER_MINS))
    return _round_half_up(total)


# =============================================================================
# EVALUATION
# =============================================================================

def _status_for_score(score: float) -> EvaluationStatus:
    if score >= config.RECOMMENDED_THRESHOLD:
        return EvaluationStatus.RECOMMENDED
    if score >= config.ALLOWED_THRESHOLD:
        return EvaluationStatus.ALLOWED
    return EvaluationStatus.DISABLED


def evaluate_profile(profile: VehicleProfile, order: NormalizedOrder) -> EvaluationResult:
    """
    Evaluate one profile against an already-normalized order.

    Hard fails short-circuit the composite: the vehicle is disabled with the
    reason of the first failing criterion and its score stays 0.
    """
    details = {name: evaluator(profile, order) for name, evaluator in CRITERIA}
    result = EvaluationResult(
        status=EvaluationStatus.ALLOWED,
        details=details,
        estimated_cost=estimate_cost(profile, order),
        estimated_time=estimate_time(profile, order),
    )

    failed = next((detail for detail in details.values() if detail.is_disabled), None)
    if failed is not None:
        result.status = EvaluationStatus.DISABLED
        result.reason = failed.reason
        return result

    scores = [detail.score for detail in details.values()]
    result.score = sum(scores) / len(scores)
    result.status = _status_for_score(result.score)
    if result.status is EvaluationStatus.DISABLED:
        result.reason = config.LOW_COMPATIBILITY_REASON
    return result


def _unknown_vehicle(vehicle_type: str) -> EvaluationResult:
    logger.warning(f"Evaluation requested for unknown vehicle type '{vehicle_type}'")
    return EvaluationResult(status=EvaluationStatus.DISABLED, reason=config.UNKNOWN_VEHICLE_REASON)


def evaluate_vehicle(
    profiles: ProfileTable,
    order: OrderInput,
    vehicle_type: str
) -> EvaluationResult:
    """
    Evaluate a single vehicle type for an order.

    Args:
        profiles: Profile table (vehicle type -> VehicleProfile)
        order: The order to evaluate
        vehicle_type: Key into the profile table

    Returns:
        The vehicle's EvaluationResult. An unknown vehicle type yields a
        disabled result with reason "Unknown vehicle type" instead of raising.
    """
    profile = profiles.get(vehicle_type)
    if profile is None:
        return _unknown_vehicle(vehicle_type)

    result = evaluate_profile(profile, normalize_order(order))
    logger.debug(f"{vehicle_type}: {result.status.value} ({result.score:.1f}) {result.reason}")
    return result


def rank_vehicle_types(evaluations: Dict[str, EvaluationResult]) -> List[str]:
    """
    Order vehicle types by tier, then by descending score.

    The sort is stable, so ties keep the profile table's order.
    """
    return sorted(
        evaluations,
        key=lambda vehicle_type: (
            evaluations[vehicle_type].status.rank,
            -evaluations[vehicle_type].score,
        ),
    )


def get_all_evaluations(profiles: ProfileTable, order: OrderInput) -> EvaluationSummary:
    """
    Evaluate every vehicle type in the table for an order.

    Args:
        profiles: Profile table (vehicle type -> VehicleProfile)
        order: The order to evaluate

    Returns:
        EvaluationSummary with per-type results, the ranked type list and
        the recommended / allowed / disabled buckets in ranked order.
    """
    normalized = normalize_order(order)
    evaluations: Dict[str, EvaluationResult] = {}
    for vehicle_type, profile in profiles.items():
        evaluations[vehicle_type] = evaluate_profile(profile, normalized)

    sorted_types = rank_vehicle_types(evaluations)

    def bucket(status: EvaluationStatus) -> List[str]:
        return [t for t in sorted_types if evaluations[t].status is status]

    summary = EvaluationSummary(
        evaluations=evaluations,
        sorted_types=sorted_types,
        recommended=bucket(EvaluationStatus.RECOMMENDED),
        allowed=bucket(EvaluationStatus.ALLOWED),
        disabled=bucket(EvaluationStatus.DISABLED),
    )
    logger.debug(
        f"Evaluated {len(evaluations)} vehicles: recommended={summary.recommended}, "
        f"allowed={summary.allowed}, disabled={summary.disabled}"
    )
    return summary


def recommend_vehicle(summary: EvaluationSummary) -> Optional[str]:
    """Best vehicle for the order: top recommended, else top allowed, else None."""
    if summary.recommended:
        return summary.recommended[0]
    if summary.allowed:
        return summary.allowed[0]
    return None


class VehicleSelectionEngine:
    """
    Convenience wrapper binding a profile table to the evaluation functions.

    The table is injected once (built-in defaults when omitted) and never
    modified, so a single engine can be shared across threads.

    Attributes:
        profiles: Read-only profile table used for every evaluation
    """

    def __init__(self, profiles: Optional[ProfileTable] = None):
        self.profiles: ProfileTable = profiles if profiles is not None else DEFAULT_PROFILES

    @property
    def vehicle_types(self) -> List[str]:
        return list(self.profiles.keys())

    def evaluate(self, order: OrderInput, vehicle_type: str) -> EvaluationResult:
        return evaluate_vehicle(self.profiles, order, vehicle_type)

    def evaluate_all(self, order: OrderInput) -> EvaluationSummary:
        return get_all_evaluations(self.profiles, order)

    def recommend(self, order: OrderInput) -> Optional[str]:
        return recommend_vehicle(self.evaluate_all(order))

    def __repr__(self) -> str:
        return f"VehicleSelectionEngine(vehicles={self.vehicle_types})"
