# vehicle-selection-engine/vehicle_selection/config.py
"""
Configuration parameters for the Vehicle Selection Engine.

This module centralizes all tunable parameters, making it easy to:
- Adjust the scoring curve of each criterion
- Change the recommendation thresholds
- Re-price the cost estimate

All parameters are documented with their purpose and typical value ranges.
The vehicle profile table itself lives in profiles.py.
"""

from typing import Dict, Final, Tuple

# =============================================================================
# GEOGRAPHY AND UNITS
# =============================================================================

EARTH_RADIUS_KM: Final[float] = 6371.0
"""Mean Earth radius used by the haversine formula."""

GRAMS_PER_KG: Final[float] = 1000.0
"""Divisor applied to weights given in grams."""

CM_PER_INCH: Final[float] = 2.54
"""Multiplier applied to dimensions given in inches."""

# =============================================================================
# ORDER DEFAULTS
# =============================================================================
# Applied when the order payload leaves a field out.

DEFAULT_PRIORITY: Final[str] = "normal"
"""Priority assumed when the order does not carry one."""

DEFAULT_ORDER_TYPE: Final[str] = "instant"
"""Order type assumed when the order does not carry one."""

URGENT_PRIORITY: Final[str] = "urgent"
"""Priority level that triggers the urgent surcharge."""

# =============================================================================
# STATUS THRESHOLDS
# =============================================================================

RECOMMENDED_THRESHOLD: float = 85.0
"""Composite score at or above which a vehicle is recommended."""

ALLOWED_THRESHOLD: float = 60.0
"""
Composite score at or above which a vehicle is allowed.
Below this the vehicle is disabled with LOW_COMPATIBILITY_REASON.
"""

LOW_COMPATIBILITY_REASON: Final[str] = "Overall compatibility too low"
UNKNOWN_VEHICLE_REASON: Final[str] = "Unknown vehicle type"

STATUS_RANK: Final[Dict[str, int]] = {
    "recommended": 0,
    "allowed": 1,
    "disabled": 2,
}
"""Sort order of statuses when ranking vehicles (lower comes first)."""

# =============================================================================
# CRITERION SCORING
# =============================================================================
# Each soft criterion scores 0-100. Penalties are the slope applied to the
# utilization ratio (actual / maximum) of the matching capability.

DISTANCE_PENALTY: float = 50.0
"""Score lost when the trip uses the full distance range (0-100)."""

WEIGHT_PENALTY: float = 30.0
"""Score lost when the package uses the full weight capacity (0-100)."""

DIMENSION_PENALTY: float = 20.0
"""Score lost when the package fills the tightest cargo dimension (0-100)."""

CATEGORY_MATCH_SCORE: float = 100.0
CATEGORY_MISSING_SCORE: float = 70.0
CATEGORY_OTHER_SCORE: float = 60.0

PRIORITY_SUPPORTED_SCORE: float = 90.0

FRAGILE_SCORES: Final[Dict[str, float]] = {
    "limited": 40.0,
    "good": 80.0,
    "excellent": 100.0,
}
"""Fragile sub-score by the vehicle's fragile handling level."""

NOT_FRAGILE_SCORE: float = 100.0

SPECIAL_HANDLING_SCORE: float = 90.0
"""Sub-score when special handling is required and the vehicle provides it."""

NO_SPECIAL_HANDLING_SCORE: float = 100.0

# =============================================================================
# COST AND TIME ESTIMATES
# =============================================================================
# cost = (BASE + km * PER_KM + kg * PER_KG + urgent surcharge) * multiplier

BASE_COST: float = 1000.0
"""Flat base cost in local currency units (NGN)."""

COST_PER_KM: float = 50.0
COST_PER_KG: float = 20.0

URGENT_SURCHARGE: float = 500.0
"""Added before the vehicle multiplier for urgent priority orders."""

HANDLING_BUFFER_MINS: float = 10.0
"""Pickup/handover time added to pure travel time before clamping."""

# =============================================================================
# PROFILE TABLE
# =============================================================================

PROFILES_PATH_ENV: Final[str] = "VEHICLE_PROFILES_PATH"
"""
Environment variable naming a JSON profile file.
When unset, the built-in table from profiles.py is used.
"""

FRAGILE_HANDLING_LEVELS: Final[Tuple[str, ...]] = ("limited", "good", "excellent")
SECURITY_LEVELS: Final[Tuple[str, ...]] = ("basic", "standard", "high")
