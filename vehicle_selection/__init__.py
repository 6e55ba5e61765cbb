# vehicle-selection-engine/vehicle_selection/__init__.py

from .models import (
    Coordinate,
    CriterionResult,
    Dimensions,
    EvaluationResult,
    EvaluationStatus,
    EvaluationSummary,
    NormalizedOrder,
    OrderInput,
    PackageDimensions,
    PackageInfo,
    PackageWeight,
    VehicleProfile,
)
from .profiles import (
    DEFAULT_PROFILES,
    ProfileConfigError,
    get_profile_table,
    load_profiles,
    profiles_from_dict,
)
from .engine import (
    VehicleSelectionEngine,
    evaluate_vehicle,
    get_all_evaluations,
    recommend_vehicle,
)
from .utils import haversine_distance, normalize_order

__version__ = "1.0.0"

__all__ = [
    # Models
    "Coordinate",
    "CriterionResult",
    "Dimensions",
    "EvaluationResult",
    "EvaluationStatus",
    "EvaluationSummary",
    "NormalizedOrder",
    "OrderInput",
    "PackageDimensions",
    "PackageInfo",
    "PackageWeight",
    "VehicleProfile",
    # Profiles
    "DEFAULT_PROFILES",
    "ProfileConfigError",
    "get_profile_table",
    "load_profiles",
    "profiles_from_dict",
    # Core
    "VehicleSelectionEngine",
    # Functions
    "evaluate_vehicle",
    "get_all_evaluations",
    "recommend_vehicle",
    "haversine_distance",
    "normalize_order",
]
