from __future__ import annotations

import pandas as pd

from vehicle_selection.engine import get_all_evaluations
from vehicle_selection.report import (
    batch_evaluate,
    best_vehicle_counts,
    load_orders_csv,
    summary_to_frame,
)

ORDERS_CSV = """order_id,pickup_lat,pickup_lng,dropoff_lat,dropoff_lng,weight_value,weight_unit,length,width,height,dimension_unit,category,is_fragile,requires_special_handling,priority,order_type
A1,6.4550,3.3841,6.4650,3.3841,2,kg,20,15,10,cm,document,false,false,normal,instant
B2,6.4550,3.3841,6.8150,3.3841,300,kg,,,,,furniture,false,false,normal,scheduled
C3,,,,,500,g,8,6,4,inch,food,true,false,,
"""


def test_summary_frame_in_ranked_order(profiles, scenario_a_order) -> None:
    summary = get_all_evaluations(profiles, scenario_a_order)
    frame = summary_to_frame(summary)

    assert list(frame["vehicle"]) == summary.sorted_types
    assert list(frame["rank"]) == [1, 2, 3, 4, 5, 6]
    assert {"status", "score", "cost", "eta", "reason", "distance_score", "specialHandling_score"} <= set(frame.columns)
    assert frame.loc[0, "status"] == "recommended"
    assert frame.loc[0, "cost"] == 1290


def test_load_orders_csv(tmp_path) -> None:
    path = tmp_path / "orders.csv"
    path.write_text(ORDERS_CSV, encoding="utf-8")

    orders = dict(load_orders_csv(str(path)))

    assert list(orders) == ["A1", "B2", "C3"]
    assert orders["A1"].package.category == "document"
    assert orders["B2"].package.dimensions.length is None
    assert orders["C3"].pickup is None
    assert orders["C3"].package.is_fragile is True
    assert orders["C3"].priority == "normal"
    assert orders["C3"].order_type == "instant"


def test_batch_evaluate(tmp_path, profiles) -> None:
    path = tmp_path / "orders.csv"
    path.write_text(ORDERS_CSV, encoding="utf-8")

    results = batch_evaluate(profiles, load_orders_csv(str(path)))

    assert len(results) == 3 * len(profiles)
    best = results.drop_duplicates("order_id").set_index("order_id")["best_vehicle"]
    assert best["A1"] == "motorcycle"
    assert best["B2"] == "van"

    counts = best_vehicle_counts(results)
    assert counts.sum() == 3


def test_batch_evaluate_empty(profiles) -> None:
    results = batch_evaluate(profiles, [])
    assert isinstance(results, pd.DataFrame)
    assert results.empty
