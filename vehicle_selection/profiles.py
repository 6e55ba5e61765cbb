# vehicle-selection-engine/vehicle_selection/profiles.py
"""
Vehicle profile table.

The table maps a vehicle type identifier to its VehicleProfile. It is
configuration data: the built-in DEFAULT_PROFILES cover the six vehicle
classes the app offers, and operators can supply a JSON file with the same
shape (see load_profiles). Tables are returned as read-only mappings and are
never mutated after loading, so one table can be shared by every caller.

JSON shape (one entry per vehicle type, camelCase like the client payloads):

    {
      "bicycle": {
        "name": "Bicycle",
        "description": "...",
        "capabilities": {"maxWeight": 15, "maxDistance": 10,
                         "maxDimensions": {"length": 50, "width": 40, "height": 30},
                         "speedKmh": 15, "costMultiplier": 0.6,
                         "weatherDependent": true, "trafficAdvantage": true},
        "restrictions": {"fragileHandling": "limited", "specialHandling": false,
                         "securityLevel": "basic", "storageType": ["open_basket"]},
        "suitableFor": ["document", "food"],
        "prioritySupport": ["instant", "normal"],
        "timeWindows": {"instant": {"min": 15, "max": 45}}
      }
    }
"""

from __future__ import annotations

import json
import logging
import math
import os
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from . import config
from .models import Capabilities, Dimensions, Restrictions, TimeWindow, VehicleProfile

logger = logging.getLogger(__name__)

ProfileTable = Mapping[str, VehicleProfile]


class ProfileConfigError(ValueError):
    """Raised when a profile table cannot be loaded or is invalid."""
    pass


def _windows(**windows: tuple) -> Mapping[str, TimeWindow]:
    return MappingProxyType({k: TimeWindow(lo, hi) for k, (lo, hi) in windows.items()})


# =============================================================================
# BUILT-IN PROFILES
# =============================================================================
# Time windows are (min, max) minutes per order type.

_DEFAULTS: Dict[str, VehicleProfile] = {
    "bicycle": VehicleProfile(
        name="Bicycle",
        icon="bicycle",
        emoji="🚲",
        description="Eco-friendly, best for short distances",
        capabilities=Capabilities(
            max_weight_kg=15,
            max_distance_km=10,
            max_dimensions_cm=Dimensions(50, 40, 30),
            speed_kmh=15,
            cost_multiplier=0.6,
            weather_dependent=True,
            traffic_advantage=True,
        ),
        restrictions=Restrictions(
            fragile_handling="limited",
            special_handling=False,
            security_level="basic",
            storage_type=frozenset({"open_basket", "insulated_bag"}),
        ),
        suitable_for=frozenset({"document", "food", "medicine", "small_parcel"}),
        priority_support=frozenset({"instant", "normal"}),
        time_windows=_windows(instant=(15, 45), scheduled=(30, 60)),
    ),
    "motorcycle": VehicleProfile(
        name="Motorcycle",
        icon="bicycle",
        emoji="🏍️",
        description="Fast and flexible for most deliveries",
        capabilities=Capabilities(
            max_weight_kg=50,
            max_distance_km=50,
            max_dimensions_cm=Dimensions(80, 60, 50),
            speed_kmh=35,
            cost_multiplier=1.0,
            weather_dependent=True,
            traffic_advantage=True,
        ),
        restrictions=Restrictions(
            fragile_handling="good",
            special_handling=True,
            security_level="standard",
            storage_type=frozenset({"delivery_box", "insulated_bag", "secure_compartment"}),
        ),
        suitable_for=frozenset({
            "document", "parcel", "food", "electronics",
            "clothing", "medicine", "books", "gifts",
        }),
        priority_support=frozenset({"instant", "normal", "high"}),
        time_windows=_windows(instant=(10, 30), scheduled=(15, 45)),
    ),
    "tricycle": VehicleProfile(
        name="Tricycle",
        icon="bicycle",
        emoji="🛺",
        description="Stable transport for medium loads",
        capabilities=Capabilities(
            max_weight_kg=100,
            max_distance_km=30,
            max_dimensions_cm=Dimensions(120, 80, 80),
            speed_kmh=25,
            cost_multiplier=1.3,
            weather_dependent=False,
            traffic_advantage=True,
        ),
        restrictions=Restrictions(
            fragile_handling="excellent",
            special_handling=True,
            security_level="standard",
            storage_type=frozenset({"enclosed_cargo", "climate_controlled"}),
        ),
        suitable_for=frozenset({
            "parcel", "food", "electronics", "clothing",
            "furniture", "books", "gifts", "others",
        }),
        priority_support=frozenset({"instant", "normal", "high"}),
        time_windows=_windows(instant=(15, 40), scheduled=(20, 60)),
    ),
    "car": VehicleProfile(
        name="Car",
        icon="car",
        emoji="🚗",
        description="Secure and comfortable for valuable items",
        capabilities=Capabilities(
            max_weight_kg=200,
            max_distance_km=100,
            max_dimensions_cm=Dimensions(150, 100, 100),
            speed_kmh=40,
            cost_multiplier=1.8,
            weather_dependent=False,
            traffic_advantage=False,
        ),
        restrictions=Restrictions(
            fragile_handling="excellent",
            special_handling=True,
            security_level="high",
            storage_type=frozenset({"enclosed_trunk", "climate_controlled", "secure_compartment"}),
        ),
        suitable_for=frozenset({
            "parcel", "electronics", "clothing", "furniture",
            "jewelry", "gifts", "books", "others",
        }),
        priority_support=frozenset({"normal", "high", "urgent"}),
        time_windows=_windows(instant=(20, 50), scheduled=(30, 90)),
    ),
    "van": VehicleProfile(
        name="Van",
        icon="car",
        emoji="🚐",
        description="Large capacity for bulk deliveries",
        capabilities=Capabilities(
            max_weight_kg=500,
            max_distance_km=150,
            max_dimensions_cm=Dimensions(200, 150, 150),
            speed_kmh=35,
            cost_multiplier=2.5,
            weather_dependent=False,
            traffic_advantage=False,
        ),
        restrictions=Restrictions(
            fragile_handling="excellent",
            special_handling=True,
            security_level="high",
            storage_type=frozenset({"large_cargo_area", "climate_controlled", "secure_compartment"}),
        ),
        suitable_for=frozenset({"furniture", "electronics", "clothing", "others", "parcel"}),
        priority_support=frozenset({"scheduled", "normal", "high"}),
        time_windows=_windows(scheduled=(45, 120)),
    ),
    "truck": VehicleProfile(
        name="Truck",
        icon="car",
        emoji="🚛",
        description="Heavy duty for large furniture & appliances",
        capabilities=Capabilities(
            max_weight_kg=2000,
            max_distance_km=200,
            max_dimensions_cm=Dimensions(300, 200, 200),
            speed_kmh=30,
            cost_multiplier=4.0,
            weather_dependent=False,
            traffic_advantage=False,
        ),
        restrictions=Restrictions(
            fragile_handling="excellent",
            special_handling=True,
            security_level="high",
            storage_type=frozenset({"large_cargo_area", "hydraulic_lift"}),
        ),
        suitable_for=frozenset({"furniture", "others"}),
        priority_support=frozenset({"scheduled"}),
        time_windows=_windows(scheduled=(60, 180)),
    ),
}

DEFAULT_PROFILES: ProfileTable = MappingProxyType(_DEFAULTS)
"""The built-in six-vehicle table. Read-only."""


# =============================================================================
# LOADING
# =============================================================================

def _require(data: Mapping[str, Any], key: str, vehicle_type: str) -> Any:
    if key not in data or data[key] is None:
        raise ProfileConfigError(f"Profile '{vehicle_type}' is missing required field '{key}'")
    return data[key]


def _section(data: Mapping[str, Any], key: str, vehicle_type: str) -> Mapping[str, Any]:
    value = _require(data, key, vehicle_type)
    if not isinstance(value, Mapping):
        raise ProfileConfigError(f"Profile '{vehicle_type}' field '{key}' must be an object, got {value!r}")
    return value


def _names(data: Mapping[str, Any], key: str, vehicle_type: str) -> frozenset:
    value = data.get(key)
    if value is None:
        return frozenset()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ProfileConfigError(f"Profile '{vehicle_type}' field '{key}' must be a list of names, got {value!r}")
    if not all(isinstance(item, str) for item in value):
        raise ProfileConfigError(f"Profile '{vehicle_type}' field '{key}' must contain only strings")
    return frozenset(value)


def _number(data: Mapping[str, Any], key: str, vehicle_type: str) -> float:
    value = _require(data, key, vehicle_type)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ProfileConfigError(f"Profile '{vehicle_type}' field '{key}' must be a finite number, got {value!r}")
    if value < 0:
        raise ProfileConfigError(f"Profile '{vehicle_type}' field '{key}' must be >= 0, got {value!r}")
    return float(value)


def profile_from_dict(vehicle_type: str, data: Mapping[str, Any]) -> VehicleProfile:
    """
    Build one VehicleProfile from its JSON representation.

    Raises:
        ProfileConfigError: If a required field is missing or invalid
    """
    if not isinstance(data, Mapping):
        raise ProfileConfigError(f"Profile '{vehicle_type}' must be an object")

    caps = _section(data, "capabilities", vehicle_type)
    dims = _section(caps, "maxDimensions", vehicle_type)
    restrictions = _section(data, "restrictions", vehicle_type)

    fragile = _require(restrictions, "fragileHandling", vehicle_type)
    if fragile not in config.FRAGILE_HANDLING_LEVELS:
        raise ProfileConfigError(
            f"Profile '{vehicle_type}' has invalid fragileHandling {fragile!r}; "
            f"expected one of {', '.join(config.FRAGILE_HANDLING_LEVELS)}"
        )
    security = restrictions.get("securityLevel", "basic")
    if security not in config.SECURITY_LEVELS:
        raise ProfileConfigError(
            f"Profile '{vehicle_type}' has invalid securityLevel {security!r}; "
            f"expected one of {', '.join(config.SECURITY_LEVELS)}"
        )

    windows: Dict[str, TimeWindow] = {}
    raw_windows = data.get("timeWindows") or {}
    if not isinstance(raw_windows, Mapping):
        raise ProfileConfigError(f"Profile '{vehicle_type}' field 'timeWindows' must be an object, got {raw_windows!r}")
    for order_type, window in raw_windows.items():
        try:
            lo, hi = int(window["min"]), int(window["max"])
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise ProfileConfigError(f"Profile '{vehicle_type}' has invalid time window '{order_type}': {e}")
        if lo > hi:
            raise ProfileConfigError(f"Profile '{vehicle_type}' time window '{order_type}' has min > max")
        windows[order_type] = TimeWindow(lo, hi)

    return VehicleProfile(
        name=data.get("name") or vehicle_type.title(),
        description=data.get("description", ""),
        icon=data.get("icon", ""),
        emoji=data.get("emoji", ""),
        capabilities=Capabilities(
            max_weight_kg=_number(caps, "maxWeight", vehicle_type),
            max_distance_km=_number(caps, "maxDistance", vehicle_type),
            max_dimensions_cm=Dimensions(
                length=_number(dims, "length", vehicle_type),
                width=_number(dims, "width", vehicle_type),
                height=_number(dims, "height", vehicle_type),
            ),
            speed_kmh=_number(caps, "speedKmh", vehicle_type),
            cost_multiplier=_number(caps, "costMultiplier", vehicle_type),
            weather_dependent=bool(caps.get("weatherDependent", False)),
            traffic_advantage=bool(caps.get("trafficAdvantage", False)),
        ),
        restrictions=Restrictions(
            fragile_handling=fragile,
            special_handling=bool(restrictions.get("specialHandling", False)),
            security_level=security,
            storage_type=_names(restrictions, "storageType", vehicle_type),
        ),
        suitable_for=_names(data, "suitableFor", vehicle_type),
        priority_support=_names(data, "prioritySupport", vehicle_type),
        time_windows=MappingProxyType(windows),
    )


def profiles_from_dict(data: Mapping[str, Any]) -> ProfileTable:
    """Build a read-only profile table from a mapping of type -> profile JSON."""
    if not isinstance(data, Mapping) or not data:
        raise ProfileConfigError("Profile table must be a non-empty object keyed by vehicle type")
    table = {vehicle_type: profile_from_dict(vehicle_type, entry) for vehicle_type, entry in data.items()}
    return MappingProxyType(table)


def load_profiles(path: str) -> ProfileTable:
    """
    Load a profile table from a JSON file.

    Args:
        path: Path to the JSON profile file

    Returns:
        Read-only mapping of vehicle type to VehicleProfile

    Raises:
        ProfileConfigError: If the file is missing, unparsable or invalid
    """
    if not os.path.exists(path):
        raise ProfileConfigError(f"Profile file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ProfileConfigError(f"Invalid JSON in profile file {path}: {e}")

    table = profiles_from_dict(data)
    logger.info(f"Loaded {len(table)} vehicle profiles from {path}")
    return table


def get_profile_table(path: Optional[str] = None) -> ProfileTable:
    """
    Resolve the profile table to use.

    An explicit path wins, then the VEHICLE_PROFILES_PATH environment
    variable, then the built-in DEFAULT_PROFILES.
    """
    path = path or os.environ.get(config.PROFILES_PATH_ENV, "").strip() or None
    if path is None:
        return DEFAULT_PROFILES
    return load_profiles(path)


def profile_to_dict(profile: VehicleProfile) -> Dict[str, Any]:
    """Serialize a profile to the JSON shape accepted by profile_from_dict."""
    caps = profile.capabilities
    restrictions = profile.restrictions
    return {
        "name": profile.name,
        "description": profile.description,
        "icon": profile.icon,
        "emoji": profile.emoji,
        "capabilities": {
            "maxWeight": caps.max_weight_kg,
            "maxDistance": caps.max_distance_km,
            "maxDimensions": {
                "length": caps.max_dimensions_cm.length,
                "width": caps.max_dimensions_cm.width,
                "height": caps.max_dimensions_cm.height,
            },
            "speedKmh": caps.speed_kmh,
            "costMultiplier": caps.cost_multiplier,
            "weatherDependent": caps.weather_dependent,
            "trafficAdvantage": caps.traffic_advantage,
        },
        "restrictions": {
            "fragileHandling": restrictions.fragile_handling,
            "specialHandling": restrictions.special_handling,
            "securityLevel": restrictions.security_level,
            "storageType": sorted(restrictions.storage_type),
        },
        "suitableFor": sorted(profile.suitable_for),
        "prioritySupport": sorted(profile.priority_support),
        "timeWindows": {
            order_type: {"min": w.min_minutes, "max": w.max_minutes}
            for order_type, w in profile.time_windows.items()
        },
    }
