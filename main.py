#!/usr/bin/env python3
# vehicle-selection-engine/main.py
"""
Command-Line Interface for the Vehicle Selection Engine.

Evaluates orders against the vehicle profile table and prints which vehicles
are recommended, allowed or disabled, with cost and time estimates.

Usage:
    python main.py --order order.json                 # Evaluate a JSON order
    python main.py --pickup 6.52,3.37 --dropoff 6.45,3.38 --weight 2 --category document
    python main.py --orders-csv orders.csv --output results.csv   # Batch mode
    python main.py --list-vehicles                    # Show the profile table
    python main.py --profiles fleet.json --order order.json       # Custom table

Exit Codes:
    0: Success
    1: Input or configuration loading error
    2: Evaluation error
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional, Sequence

from vehicle_selection import config
from vehicle_selection.engine import get_all_evaluations, recommend_vehicle
from vehicle_selection.models import (
    Coordinate,
    EvaluationSummary,
    OrderInput,
    PackageDimensions,
    PackageInfo,
    PackageWeight,
)
from vehicle_selection.profiles import (
    ProfileConfigError,
    ProfileTable,
    get_profile_table,
    profile_to_dict,
)
from vehicle_selection.report import (
    batch_evaluate,
    best_vehicle_counts,
    load_orders_csv,
    summary_to_frame,
)

logger = logging.getLogger(__name__)


def print_header() -> None:
    """Print the CLI header."""
    print("\n" + "=" * 60)
    print("  VEHICLE SELECTION ENGINE")
    print("  Recommended / Allowed / Disabled vehicles per order")
    print("=" * 60 + "\n")


def print_results_table(summary: EvaluationSummary, profiles: ProfileTable) -> None:
    """
    Print a ranked table of vehicle evaluations.

    Args:
        summary: Evaluations for every vehicle type
        profiles: Profile table (for display names)
    """
    frame = summary_to_frame(summary)

    print(f"| {'#':>2} | {'Vehicle':<12} | {'Status':<11} | {'Score':>6} | {'Cost':>7} | {'ETA':>7} | Reason")
    print("|" + "-" * 4 + "|" + "-" * 14 + "|" + "-" * 13 + "|" + "-" * 8 + "|" + "-" * 9 + "|" + "-" * 9 + "|" + "-" * 30)
    for row in frame.to_dict(orient="records"):
        profile = profiles[row["vehicle"]]
        name = f"{profile.emoji} {profile.name}".strip()
        status = row["status"].upper() if row["status"] == "recommended" else row["status"]
        print(
            f"| {row['rank']:>2} | {name:<12} | {status:<11} | {row['score']:>6.1f} | "
            f"{row['cost']:>7} | {row['eta']:>7} | {row['reason']}"
        )

    best = recommend_vehicle(summary)
    print("\n" + "=" * 60)
    if best is None:
        print("  No vehicle can serve this order")
    else:
        print(f"  Best choice: {profiles[best].name} ({summary.evaluations[best].estimated_cost} NGN)")
    print("=" * 60 + "\n")


def _parse_pair(value: Optional[str], label: str) -> Optional[Coordinate]:
    if not value:
        return None
    try:
        lat, lng = (float(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"{label} must be LAT,LNG (got '{value}')")
    return Coordinate(lat=lat, lng=lng)


def _parse_dims(value: Optional[str], unit: str) -> Optional[PackageDimensions]:
    if not value:
        return None
    try:
        length, width, height = (float(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"--dims must be LxWxH (got '{value}')")
    return PackageDimensions(length=length, width=width, height=height, unit=unit)


def order_from_args(args: argparse.Namespace) -> OrderInput:
    """Build an order from the inline CLI flags."""
    return OrderInput(
        pickup=_parse_pair(args.pickup, "--pickup"),
        dropoff=_parse_pair(args.dropoff, "--dropoff"),
        package=PackageInfo(
            weight=PackageWeight(value=args.weight, unit=args.weight_unit) if args.weight is not None else None,
            dimensions=_parse_dims(args.dims, args.dim_unit),
            category=args.category,
            is_fragile=args.fragile,
            requires_special_handling=args.special,
        ),
        priority=args.priority,
        order_type=args.order_type,
    )


def load_order_safe(path: str) -> Optional[OrderInput]:
    """
    Load a JSON order with graceful error handling.

    Returns:
        The parsed order, or None if the file is missing or not JSON
    """
    if not os.path.exists(path):
        print(f"ERROR: Order file not found: {path}")
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"ERROR: Failed to parse order file: {e}")
        return None
    if not isinstance(data, dict):
        print(f"ERROR: Order file must contain a JSON object: {path}")
        return None
    return OrderInput.from_dict(data)


def list_vehicles(profiles: ProfileTable) -> None:
    print("\nVehicle Profiles:")
    print("-" * 72)
    for vehicle_type, profile in profiles.items():
        caps = profile.capabilities
        windows = ", ".join(sorted(profile.time_windows)) or "none"
        print(
            f"  {vehicle_type:12} {caps.max_weight_kg:>7g}kg {caps.max_distance_km:>5g}km "
            f"x{caps.cost_multiplier:<4g} [{windows}] - {profile.description}"
        )


def run_batch(profiles: ProfileTable, orders_csv: str, output: Optional[str]) -> int:
    try:
        orders = load_orders_csv(orders_csv)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: Failed to load orders: {e}")
        return 1

    print(f"Loaded {len(orders)} orders from '{orders_csv}'")
    results = batch_evaluate(profiles, orders)

    print("\nBest vehicle per order:")
    print("-" * 40)
    for vehicle, count in best_vehicle_counts(results).items():
        print(f"  {vehicle:12} {count:>5}")

    if output:
        results.to_csv(output, index=False)
        print(f"\nWrote {len(results)} rows to {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle Selection Engine CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --order order.json                      # Evaluate one JSON order
  python main.py --weight 300 --pickup 6.5,3.3 --dropoff 6.8,3.4 --order-type scheduled
  python main.py --orders-csv orders.csv --output out.csv  # Batch mode
  python main.py --list-vehicles                         # Show profile table
        """
    )

    source = parser.add_argument_group("order source")
    source.add_argument("--order", type=str, help="JSON order file (client or stored payload)")
    source.add_argument("--orders-csv", type=str, help="CSV of orders to evaluate in batch")
    source.add_argument("--output", "-o", type=str, help="Write batch results to this CSV")

    inline = parser.add_argument_group("inline order")
    inline.add_argument("--pickup", type=str, help="Pickup as LAT,LNG")
    inline.add_argument("--dropoff", type=str, help="Dropoff as LAT,LNG")
    inline.add_argument("--weight", type=float, help="Package weight value")
    inline.add_argument("--weight-unit", choices=["kg", "g"], default="kg")
    inline.add_argument("--dims", type=str, help="Package dimensions as LxWxH")
    inline.add_argument("--dim-unit", choices=["cm", "inch"], default="cm")
    inline.add_argument("--category", type=str, help="Package category (e.g. document, food)")
    inline.add_argument("--fragile", action="store_true", help="Package is fragile")
    inline.add_argument("--special", action="store_true", help="Package requires special handling")
    inline.add_argument("--priority", type=str, default=config.DEFAULT_PRIORITY)
    inline.add_argument("--order-type", type=str, default=config.DEFAULT_ORDER_TYPE)

    parser.add_argument(
        "--profiles",
        type=str,
        help=f"JSON profile table (default: ${config.PROFILES_PATH_ENV} or built-in)"
    )
    parser.add_argument("--list-vehicles", action="store_true", help="List vehicle profiles and exit")
    parser.add_argument("--dump-profiles", action="store_true", help="Print the profile table as JSON and exit")
    parser.add_argument("--json", action="store_true", help="Print evaluation as JSON instead of a table")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        profiles = get_profile_table(args.profiles)
    except ProfileConfigError as e:
        print(f"ERROR: {e}")
        return 1

    if args.list_vehicles:
        list_vehicles(profiles)
        return 0

    if args.dump_profiles:
        print(json.dumps({t: profile_to_dict(p) for t, p in profiles.items()}, indent=2, ensure_ascii=False))
        return 0

    if args.orders_csv:
        return run_batch(profiles, args.orders_csv, args.output)

    if args.order:
        order = load_order_safe(args.order)
        if order is None:
            return 1
    else:
        try:
            order = order_from_args(args)
        except argparse.ArgumentTypeError as e:
            print(f"ERROR: {e}")
            return 1

    try:
        summary = get_all_evaluations(profiles, order)
    except Exception as e:
        logger.exception("Evaluation failed")
        print(f"ERROR: Evaluation failed: {e}")
        return 2

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
        return 0

    print_header()
    print_results_table(summary, profiles)
    return 0


if __name__ == "__main__":
    sys.exit(main())
