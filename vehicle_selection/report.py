# vehicle-selection-engine/vehicle_selection/report.py
"""
Tabular reporting and batch evaluation.

Builds pandas DataFrames from evaluation summaries for display and CSV
export, and runs the engine over a CSV of orders.
"""

from __future__ import annotations

import logging
import math
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from . import config
from .engine import get_all_evaluations, recommend_vehicle
from .models import (
    Coordinate,
    EvaluationSummary,
    OrderInput,
    PackageDimensions,
    PackageInfo,
    PackageWeight,
)
from .parsing import to_bool, to_float
from .profiles import ProfileTable
from .utils import format_time_duration

logger = logging.getLogger(__name__)

ORDER_CSV_COLUMNS: List[str] = [
    "order_id",
    "pickup_lat",
    "pickup_lng",
    "dropoff_lat",
    "dropoff_lng",
    "weight_value",
    "weight_unit",
    "length",
    "width",
    "height",
    "dimension_unit",
    "category",
    "is_fragile",
    "requires_special_handling",
    "priority",
    "order_type",
]
"""Columns read from an orders CSV. Only order_id is mandatory."""


def summary_to_frame(summary: EvaluationSummary) -> pd.DataFrame:
    """
    One row per vehicle in ranked order.

    Columns: rank, vehicle, status, score, cost, time_min, eta, reason, and
    one "<criterion>_score" column per criterion.
    """
    rows: List[Dict[str, Any]] = []
    for rank, vehicle_type in enumerate(summary.sorted_types, start=1):
        result = summary.evaluations[vehicle_type]
        row: Dict[str, Any] = {
            "rank": rank,
            "vehicle": vehicle_type,
            "status": result.status.value,
            "score": round(result.score, 2),
            "cost": result.estimated_cost,
            "time_min": result.estimated_time,
            "eta": format_time_duration(result.estimated_time),
            "reason": result.reason,
        }
        for name, detail in result.details.items():
            row[f"{name}_score"] = round(detail.score, 2)
        rows.append(row)
    return pd.DataFrame(rows)


def _cell(row: Dict[str, Any], key: str) -> Any:
    """Cell value with pandas NaN mapped to None."""
    value = row.get(key)
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _text(row: Dict[str, Any], key: str) -> Optional[str]:
    value = _cell(row, key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _point(row: Dict[str, Any], prefix: str) -> Optional[Coordinate]:
    lat = to_float(_cell(row, f"{prefix}_lat"))
    lng = to_float(_cell(row, f"{prefix}_lng"))
    if lat is None or lng is None:
        return None
    return Coordinate(lat=lat, lng=lng)


def order_from_row(row: Dict[str, Any]) -> OrderInput:
    """Build an OrderInput from one flat CSV row; blanks become missing values."""
    package = PackageInfo(
        weight=PackageWeight(
            value=to_float(_cell(row, "weight_value")),
            unit=_text(row, "weight_unit") or "kg",
        ),
        dimensions=PackageDimensions(
            length=to_float(_cell(row, "length")),
            width=to_float(_cell(row, "width")),
            height=to_float(_cell(row, "height")),
            unit=_text(row, "dimension_unit") or "cm",
        ),
        category=_text(row, "category"),
        is_fragile=to_bool(_cell(row, "is_fragile")),
        requires_special_handling=to_bool(_cell(row, "requires_special_handling")),
    )
    return OrderInput(
        pickup=_point(row, "pickup"),
        dropoff=_point(row, "dropoff"),
        package=package,
        priority=_text(row, "priority") or config.DEFAULT_PRIORITY,
        order_type=_text(row, "order_type") or config.DEFAULT_ORDER_TYPE,
    )


def load_orders_csv(path: str) -> List[Tuple[str, OrderInput]]:
    """
    Load orders from a CSV file.

    Args:
        path: Path to the orders CSV (see ORDER_CSV_COLUMNS)

    Returns:
        List of (order_id, OrderInput) pairs in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the order_id column is missing
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Order file not found: {path}")

    df = pd.read_csv(path, dtype={"order_id": str})
    if "order_id" not in df.columns:
        raise ValueError(f"Invalid order data in {path}: missing 'order_id' column")

    unknown = set(df.columns) - set(ORDER_CSV_COLUMNS)
    if unknown:
        logger.debug(f"Ignoring unknown order columns: {sorted(unknown)}")

    orders = [(str(row["order_id"]), order_from_row(row)) for row in df.to_dict(orient="records")]
    logger.info(f"Loaded {len(orders)} orders from {path}")
    return orders


def batch_evaluate(
    profiles: ProfileTable,
    orders: Iterable[Tuple[str, OrderInput]]
) -> pd.DataFrame:
    """
    Evaluate many orders against every vehicle.

    Returns:
        Long-format DataFrame, one row per (order, vehicle), with the
        vehicle's rank and a best_vehicle column repeated on each order row.
    """
    frames: List[pd.DataFrame] = []
    for order_id, order in orders:
        summary = get_all_evaluations(profiles, order)
        frame = summary_to_frame(summary)
        frame.insert(0, "order_id", order_id)
        frame["best_vehicle"] = recommend_vehicle(summary)
        frames.append(frame)

    if not frames:
        return pd.DataFrame(columns=["order_id", "rank", "vehicle", "status", "score", "best_vehicle"])
    return pd.concat(frames, ignore_index=True)


def best_vehicle_counts(results: pd.DataFrame) -> pd.Series:
    """How often each vehicle was the best choice across a batch."""
    per_order = results.drop_duplicates("order_id")["best_vehicle"]
    return per_order.fillna("none").value_counts()
