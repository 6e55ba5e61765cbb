# vehicle-selection-engine/vehicle_selection/models.py
"""
Core domain models for the Vehicle Selection Engine.

This module defines the data structures shared by the engine:
- VehicleProfile: Static capability/restriction record for one vehicle class
- OrderInput: The order attributes a caller supplies for one evaluation
- NormalizedOrder: OrderInput reduced to kilometres, kilograms and centimetres
- CriterionResult / EvaluationResult: Per-criterion and per-vehicle outcomes
- EvaluationSummary: All vehicles evaluated, ranked and bucketed by status
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from . import config


class EvaluationStatus(Enum):
    """Outcome tiers for a vehicle (and for each individual criterion)."""
    RECOMMENDED = "recommended"  # Composite score >= 85
    ALLOWED = "allowed"          # Passing criterion, or composite 60-85
    DISABLED = "disabled"        # Hard fail, or composite below 60

    @property
    def rank(self) -> int:
        """Sort rank used when ordering vehicles (recommended first)."""
        return config.STATUS_RANK[self.value]


# =============================================================================
# VEHICLE PROFILES (static reference data)
# =============================================================================

@dataclass(frozen=True)
class Dimensions:
    """Length, width and height in centimetres."""
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def as_tuple(self) -> tuple:
        return (self.length, self.width, self.height)

    def __str__(self) -> str:
        return f"{self.length:g}×{self.width:g}×{self.height:g}cm"


@dataclass(frozen=True)
class TimeWindow:
    """Delivery time bounds, in minutes, for one order type."""
    min_minutes: int
    max_minutes: int


@dataclass(frozen=True)
class Capabilities:
    """
    Physical capabilities of a vehicle class.

    Attributes:
        max_weight_kg: Heaviest package the vehicle may carry
        max_distance_km: Longest pickup-to-dropoff trip it may serve
        max_dimensions_cm: Cargo space limits per axis
        speed_kmh: Average speed used for the time estimate
        cost_multiplier: Factor applied to the base price (>= 0)
        weather_dependent: Whether service degrades in bad weather
        traffic_advantage: Whether the vehicle can filter through traffic
    """
    max_weight_kg: float
    max_distance_km: float
    max_dimensions_cm: Dimensions
    speed_kmh: float
    cost_multiplier: float
    weather_dependent: bool = False
    traffic_advantage: bool = False


@dataclass(frozen=True)
class Restrictions:
    """Handling restrictions of a vehicle class."""
    fragile_handling: str  # 'limited', 'good' or 'excellent'
    special_handling: bool
    security_level: str    # 'basic', 'standard' or 'high'
    storage_type: FrozenSet[str] = frozenset()


@dataclass(frozen=True, eq=False)
class VehicleProfile:
    """
    Static capability record for one vehicle type.

    Profiles are built once when the table is loaded and shared by every
    evaluation. The keys of time_windows are the order types the vehicle
    can serve at all.
    """
    name: str
    description: str
    capabilities: Capabilities
    restrictions: Restrictions
    suitable_for: FrozenSet[str]
    priority_support: FrozenSet[str]
    time_windows: Mapping[str, TimeWindow]
    icon: str = ""
    emoji: str = ""

    def supports_order_type(self, order_type: str) -> bool:
        return order_type in self.time_windows

    def __repr__(self) -> str:
        return f"VehicleProfile({self.name})"


# =============================================================================
# ORDER INPUT
# =============================================================================

@dataclass
class Coordinate:
    """A WGS84 point in decimal degrees."""
    lat: float
    lng: float

    def as_tuple(self) -> tuple:
        return (self.lat, self.lng)


@dataclass
class PackageWeight:
    """Raw package weight as entered; unit is 'kg' or 'g'."""
    value: Optional[float] = None
    unit: str = "kg"


@dataclass
class PackageDimensions:
    """Raw package dimensions as entered; unit is 'cm' or 'inch'."""
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    unit: str = "cm"


@dataclass
class PackageInfo:
    """Package attributes relevant to vehicle selection."""
    weight: Optional[PackageWeight] = None
    dimensions: Optional[PackageDimensions] = None
    category: Optional[str] = None
    is_fragile: bool = False
    requires_special_handling: bool = False


@dataclass
class OrderInput:
    """
    Order attributes supplied by the caller for one evaluation.

    Attributes:
        pickup: Pickup point; a Coordinate, a (lat, lng) pair, or None
        dropoff: Dropoff point; same forms as pickup
        package: Package attributes
        priority: Priority level (e.g. 'normal', 'high', 'urgent')
        order_type: Delivery mode (e.g. 'instant', 'scheduled')

    Missing values never make an order invalid: the engine degrades each
    one to a neutral default. Use OrderInput.from_dict (see parsing.py) to
    build one from an application payload.
    """
    pickup: Optional[Any] = None
    dropoff: Optional[Any] = None
    package: PackageInfo = field(default_factory=PackageInfo)
    priority: str = config.DEFAULT_PRIORITY
    order_type: str = config.DEFAULT_ORDER_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrderInput":
        """Build an OrderInput from an order payload (camelCase or snake_case)."""
        from .parsing import order_from_dict
        return order_from_dict(data)


@dataclass(frozen=True)
class NormalizedOrder:
    """
    An order reduced to the values the evaluators read.

    All quantities are already in kilometres, kilograms and centimetres,
    and priority/order_type have their defaults applied.
    """
    distance_km: float
    weight_kg: float
    dimensions_cm: Dimensions
    category: Optional[str]
    is_fragile: bool
    requires_special_handling: bool
    priority: str
    order_type: str


# =============================================================================
# EVALUATION RESULTS
# =============================================================================

@dataclass(frozen=True)
class CriterionResult:
    """Outcome of a single criterion for a single vehicle."""
    status: EvaluationStatus
    reason: str
    score: float

    @property
    def is_disabled(self) -> bool:
        return self.status is EvaluationStatus.DISABLED

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value, "reason": self.reason, "score": self.score}


@dataclass
class EvaluationResult:
    """
    Evaluation of one vehicle type against one order.

    Attributes:
        status: Overall tier for the vehicle
        reason: Explanation; set when the vehicle is disabled
        score: Composite 0-100 score (0 when a criterion hard-failed)
        details: Per-criterion results keyed by criterion name
        estimated_cost: Price in whole currency units, computed even when disabled
        estimated_time: Minutes, or None if the vehicle cannot serve the order type
    """
    status: EvaluationStatus
    reason: str = ""
    score: float = 0.0
    details: Dict[str, CriterionResult] = field(default_factory=dict)
    estimated_cost: int = 0
    estimated_time: Optional[int] = None

    @property
    def hard_failed(self) -> bool:
        """True when a criterion (or an unknown type) disabled the vehicle outright."""
        if not self.details:
            return self.status is EvaluationStatus.DISABLED
        return any(detail.is_disabled for detail in self.details.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for JSON output."""
        return {
            "status": self.status.value,
            "reason": self.reason,
            "score": self.score,
            "details": {name: detail.to_dict() for name, detail in self.details.items()},
            "estimatedCost": self.estimated_cost,
            "estimatedTime": self.estimated_time,
        }

    def __repr__(self) -> str:
        return f"EvaluationResult({self.status.value}, score={self.score:.1f})"


@dataclass
class EvaluationSummary:
    """
    Evaluations for every vehicle type in a profile table.

    sorted_types is every vehicle type ordered recommended, allowed, then
    disabled, with higher scores first inside each tier. The three bucket
    lists keep that order.
    """
    evaluations: Dict[str, EvaluationResult]
    sorted_types: List[str]
    recommended: List[str]
    allowed: List[str]
    disabled: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "evaluations": {t: r.to_dict() for t, r in self.evaluations.items()},
            "sortedTypes": list(self.sorted_types),
            "recommended": list(self.recommended),
            "allowed": list(self.allowed),
            "disabled": list(self.disabled),
        }
