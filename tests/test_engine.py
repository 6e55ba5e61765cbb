from __future__ import annotations

import threading

import pytest

from vehicle_selection import config
from vehicle_selection.engine import (
    VehicleSelectionEngine,
    estimate_cost,
    estimate_time,
    evaluate_profile,
    evaluate_vehicle,
    get_all_evaluations,
    recommend_vehicle,
)
from vehicle_selection.models import EvaluationStatus, OrderInput
from vehicle_selection.profiles import DEFAULT_PROFILES

from .conftest import make_order, normalized


def test_unknown_vehicle_type_is_disabled_not_raised(profiles) -> None:
    result = evaluate_vehicle(profiles, make_order(), "hovercraft")

    assert result.status is EvaluationStatus.DISABLED
    assert result.reason == "Unknown vehicle type"
    assert result.score == 0.0
    assert result.details == {}
    assert result.estimated_time is None
    assert result.hard_failed


def test_empty_order_never_raises(profiles) -> None:
    summary = get_all_evaluations(profiles, OrderInput())
    assert set(summary.evaluations) == set(profiles)


def test_first_hard_fail_supplies_reason(profiles) -> None:
    # Bicycle fails distance, weight and special handling; distance comes first
    order = make_order(distance_km=40, weight_kg=300, special=True)
    result = evaluate_vehicle(profiles, order, "bicycle")

    assert result.status is EvaluationStatus.DISABLED
    assert result.reason.startswith("Distance 40.0km exceeds maximum")
    assert result.details["weight"].is_disabled
    assert result.details["specialHandling"].is_disabled
    assert result.score == 0.0


def test_composite_is_mean_of_seven_scores(profiles, scenario_a_order) -> None:
    result = evaluate_vehicle(profiles, scenario_a_order, "motorcycle")

    assert len(result.details) == 7
    expected = sum(d.score for d in result.details.values()) / 7
    assert result.score == pytest.approx(expected)
    assert result.score == pytest.approx(678.8 / 7, abs=1e-6)
    assert result.status is EvaluationStatus.RECOMMENDED
    assert result.reason == ""


def test_low_composite_score_soft_disables(monkeypatch, profiles) -> None:
    monkeypatch.setattr(config, "RECOMMENDED_THRESHOLD", 99.5)
    monkeypatch.setattr(config, "ALLOWED_THRESHOLD", 99.0)

    result = evaluate_vehicle(profiles, make_order(category="document"), "bicycle")

    assert result.status is EvaluationStatus.DISABLED
    assert result.reason == "Overall compatibility too low"
    assert not result.hard_failed
    assert result.score > 0


def test_limited_fragile_handling_alone_keeps_bicycle_recommended() -> None:
    profile = DEFAULT_PROFILES["bicycle"]
    # dist 100, weight 100, dims 100, category 70, priority 90, fragile 40, special 100
    order = normalized(fragile=True)
    result = evaluate_profile(profile, order)
    assert result.score == pytest.approx(600 / 7)
    assert result.status is EvaluationStatus.RECOMMENDED


def test_cost_formula() -> None:
    order = normalized(distance_km=5.0, weight_kg=2.0)
    assert estimate_cost(DEFAULT_PROFILES["motorcycle"], order) == 1290
    assert estimate_cost(DEFAULT_PROFILES["bicycle"], order) == 774
    assert estimate_cost(DEFAULT_PROFILES["truck"], order) == 5160


def test_urgent_priority_adds_surcharge_before_multiplier() -> None:
    order = normalized(priority="urgent")
    assert estimate_cost(DEFAULT_PROFILES["car"], order) == 2700


def test_cost_is_computed_even_when_disabled(profiles) -> None:
    order = make_order(distance_km=40, weight_kg=300, order_type="scheduled")
    result = evaluate_vehicle(profiles, order, "bicycle")

    assert result.status is EvaluationStatus.DISABLED
    # (1000 + 40*50 + 300*20) * 0.6
    assert result.estimated_cost == 5400


@pytest.mark.parametrize(
    "vehicle, distance_km, order_type, expected",
    [
        ("motorcycle", 5.0, "instant", 19),   # 8.57 + 10
        ("motorcycle", 0.0, "instant", 10),   # clamped to min 10
        ("bicycle", 0.0, "instant", 15),      # clamped to min 15
        ("bicycle", 10.0, "instant", 45),     # 40 + 10, clamped to max 45
        ("truck", 40.0, "scheduled", 90),
        ("van", 40.0, "scheduled", 79),
    ],
)
def test_time_estimate(vehicle, distance_km, order_type, expected) -> None:
    order = normalized(distance_km=distance_km, order_type=order_type)
    assert estimate_time(DEFAULT_PROFILES[vehicle], order) == expected


def test_time_is_none_without_window_for_order_type() -> None:
    assert estimate_time(DEFAULT_PROFILES["van"], normalized(order_type="instant")) is None
    assert estimate_time(DEFAULT_PROFILES["car"], normalized(order_type="overnight")) is None


def test_priority_pass_and_missing_time_are_independent(profiles) -> None:
    # Known surface area: the time estimate consults time_windows on its own.
    # A vehicle that fails on priority can still carry a time estimate.
    order = make_order(priority="urgent", order_type="instant")
    result = evaluate_vehicle(profiles, order, "motorcycle")

    assert result.status is EvaluationStatus.DISABLED
    assert result.details["priority"].is_disabled
    assert result.estimated_time == 10


def test_idempotent(profiles, scenario_a_order) -> None:
    first = evaluate_vehicle(profiles, scenario_a_order, "car")
    second = evaluate_vehicle(profiles, scenario_a_order, "car")
    assert first.to_dict() == second.to_dict()

    assert (
        get_all_evaluations(profiles, scenario_a_order).to_dict()
        == get_all_evaluations(profiles, scenario_a_order).to_dict()
    )


def test_scores_and_costs_in_range_for_every_vehicle(profiles) -> None:
    orders = [
        OrderInput(),
        make_order(distance_km=5, weight_kg=2, dims_cm=(20, 15, 10), category="document"),
        make_order(distance_km=120, weight_kg=450, dims_cm=(190, 140, 140), fragile=True,
                   special=True, priority="high", order_type="scheduled"),
        make_order(distance_km=250, weight_kg=5000, priority="urgent"),
    ]
    for order in orders:
        for vehicle_type in profiles:
            result = evaluate_vehicle(profiles, order, vehicle_type)
            assert 0.0 <= result.score <= 100.0
            assert isinstance(result.estimated_cost, int)
            assert result.estimated_cost >= 0


def test_sorted_types_grouped_by_status_then_score(profiles, scenario_a_order) -> None:
    summary = get_all_evaluations(profiles, scenario_a_order)

    assert sorted(summary.sorted_types) == sorted(profiles)
    keys = [
        (summary.evaluations[t].status.rank, -summary.evaluations[t].score)
        for t in summary.sorted_types
    ]
    assert keys == sorted(keys)
    assert summary.sorted_types == summary.recommended + summary.allowed + summary.disabled


def test_scenario_a_ranking(profiles, scenario_a_order) -> None:
    summary = get_all_evaluations(profiles, scenario_a_order)

    assert summary.recommended == ["motorcycle", "bicycle", "car", "tricycle"]
    assert summary.allowed == []
    # Equal scores keep table order
    assert summary.disabled == ["van", "truck"]


def test_recommend_vehicle(profiles, scenario_a_order) -> None:
    assert recommend_vehicle(get_all_evaluations(profiles, scenario_a_order)) == "motorcycle"

    impossible = make_order(weight_kg=10000)
    assert recommend_vehicle(get_all_evaluations(profiles, impossible)) is None


def test_engine_wraps_injected_table(scenario_a_order) -> None:
    table = {"motorcycle": DEFAULT_PROFILES["motorcycle"]}
    engine = VehicleSelectionEngine(table)

    summary = engine.evaluate_all(scenario_a_order)
    assert summary.sorted_types == ["motorcycle"]
    assert engine.recommend(scenario_a_order) == "motorcycle"
    assert engine.evaluate(scenario_a_order, "car").reason == "Unknown vehicle type"


def test_engine_defaults_to_builtin_table() -> None:
    assert VehicleSelectionEngine().vehicle_types == list(DEFAULT_PROFILES)


def test_concurrent_evaluations_match_serial(profiles, scenario_a_order) -> None:
    expected = get_all_evaluations(profiles, scenario_a_order).to_dict()
    results = []

    def worker() -> None:
        results.append(get_all_evaluations(profiles, scenario_a_order).to_dict())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r == expected for r in results)
