from __future__ import annotations

import logging

import pytest

from workload.engine import distribute_workload, optimize_workload_distribution
from workload.models import AdminAllocation, HourBreakdown, Lecturer, ModuleAllocation, ModuleIteration


def _lecturer(lecturer_id: str, **overrides: object) -> Lecturer:
    payload: dict = {"id": lecturer_id, "fte": 1.0, "total_contract": 1650, "max_teaching_hours": 990}
    payload.update(overrides)
    return Lecturer(**payload)


def _iteration(iteration_id: str, teaching: float, marking: float = 0) -> ModuleIteration:
    return ModuleIteration(
        id=iteration_id,
        module_id=f"mod-{iteration_id}",
        semester="autumn",
        hours=HourBreakdown(teaching=teaching, marking=marking),
    )


def test_one_result_per_lecturer_in_input_order() -> None:
    lecturers = [_lecturer("b"), _lecturer("a"), _lecturer("c", fte=0.5, total_contract=825, max_teaching_hours=495)]

    results = distribute_workload(lecturers, [_iteration("it-1", 100)])
    assert [item.lecturer_id for item in results] == ["b", "a", "c"]

    idle = distribute_workload(lecturers, [])
    assert [item.lecturer_id for item in idle] == ["b", "a", "c"]
    assert all(item.assigned_iteration_ids == () and item.total_hours == 0 for item in idle)
    assert distribute_workload([], [_iteration("it-1", 100)]) == []


def test_largest_iteration_first_to_highest_remaining_capacity() -> None:
    lecturers = [_lecturer("l1"), _lecturer("l2")]
    iterations = [_iteration("small", 100), _iteration("large", 300), _iteration("medium", 200)]

    results = distribute_workload(lecturers, iterations)

    assert results[0].assigned_iteration_ids == ("large",)
    assert results[1].assigned_iteration_ids == ("medium", "small")
    assert results[1].breakdown.teaching == 300
    assert results[1].remaining_capacity == 1350
    assert results[1].starting_capacity == 1650


def test_teaching_availability_fit_is_preferred() -> None:
    no_teaching_left = _lecturer("l1", max_teaching_hours=300, allocated_teaching_hours=300)
    fresh = _lecturer("l2", fte=0.5, total_contract=825, max_teaching_hours=495)
    assert no_teaching_left.capacity > fresh.capacity

    teaching = distribute_workload([no_teaching_left, fresh], [_iteration("lecture", 300)])
    assert teaching[1].assigned_iteration_ids == ("lecture",)

    marking_only = distribute_workload([no_teaching_left, fresh], [_iteration("marking", 0, marking=200)])
    assert marking_only[0].assigned_iteration_ids == ("marking",)


def test_capacity_is_respected_when_a_fit_exists() -> None:
    busy = _lecturer("busy", allocated_teaching_hours=900, allocated_admin_hours=600)
    part_time = _lecturer("part", fte=0.5, total_contract=825, max_teaching_hours=495)

    results = distribute_workload([busy, part_time], [_iteration("it-1", 300, marking=100)])
    assert results[0].assigned_iteration_ids == ()
    assert results[1].assigned_iteration_ids == ("it-1",)
    assert results[1].total_hours <= results[1].starting_capacity


def test_overflow_goes_to_highest_remaining_capacity(caplog: pytest.LogCaptureFixture) -> None:
    lecturers = [
        _lecturer("a", fte=0.5, total_contract=825, max_teaching_hours=495),
        _lecturer("b", fte=0.4, total_contract=660, max_teaching_hours=396),
    ]

    with caplog.at_level(logging.WARNING, logger="workload.engine.distribution"):
        optimization = optimize_workload_distribution(lecturers, [_iteration("huge", 900, marking=100)])

    result = optimization.distribution[0]
    assert result.assigned_iteration_ids == ("huge",)
    assert result.remaining_capacity == 0
    assert result.status == "overloaded"
    assert not result.is_balanced
    assert "Assigned hours exceed remaining capacity" in result.recommendations
    assert optimization.suggestions[0].priority == "low"
    assert "exceeds every remaining capacity" in caplog.text


def test_tight_pool_is_repacked_instead_of_overflowing(caplog: pytest.LogCaptureFixture) -> None:
    lecturers = [
        _lecturer("a", fte=0.1, total_contract=10, max_teaching_hours=10),
        _lecturer("b", fte=0.1, total_contract=6, max_teaching_hours=6),
    ]
    iterations = [_iteration("it-6", 6), _iteration("it-5a", 5), _iteration("it-5b", 5)]

    with caplog.at_level(logging.WARNING, logger="workload.engine.distribution"):
        optimization = optimize_workload_distribution(lecturers, iterations)

    a, b = optimization.distribution
    assert a.assigned_iteration_ids == ("it-5a", "it-5b")
    assert b.assigned_iteration_ids == ("it-6",)
    assert (a.remaining_capacity, b.remaining_capacity) == (0, 0)
    assert all(item.priority == "high" for item in optimization.suggestions)
    assert "exceeds every remaining capacity" not in caplog.text


def test_existing_allocations_replace_stored_figures() -> None:
    lecturer = _lecturer("l1", allocated_teaching_hours=900)

    stored = distribute_workload([lecturer], [])
    assert stored[0].starting_capacity == 750

    supplied = distribute_workload([lecturer], [], existing_allocations=[])
    assert supplied[0].starting_capacity == 1650

    history = [ModuleAllocation(id="al", module_iteration_id="x", lecturer_id="l1", hours=HourBreakdown(teaching=200))]
    from_history = distribute_workload([lecturer], [], existing_allocations=history)
    assert from_history[0].starting_capacity == 1450

    admin = [AdminAllocation(id="ad", lecturer_id="l1", hours=600)]
    with_admin = distribute_workload([lecturer], [], existing_allocations=history, admin_allocations=admin)
    assert with_admin[0].starting_capacity == 850
    admin_only = distribute_workload([lecturer], [], admin_allocations=admin)
    assert admin_only[0].starting_capacity == 1050


def test_optimization_summary_figures() -> None:
    lecturers = [_lecturer("l1"), _lecturer("l2")]
    iterations = [_iteration("it-1", 300), _iteration("it-2", 200), _iteration("it-3", 100)]

    optimization = optimize_workload_distribution(lecturers, iterations)

    assert [(item.module_iteration_id, item.lecturer_id) for item in optimization.suggestions] == [
        ("it-1", "l1"),
        ("it-2", "l2"),
        ("it-3", "l2"),
    ]
    assert all(item.priority == "high" for item in optimization.suggestions)
    assert optimization.total_utilization == pytest.approx(600 / 3300 * 100)
    assert optimization.balance_score == pytest.approx(1.0)
    assert optimization.as_dict()["suggestions"][0]["hours"]["teaching"] == 300


def test_suggestion_priority_medium_for_loaded_lecturer() -> None:
    loaded = _lecturer("l1", allocated_teaching_hours=900, allocated_admin_hours=420)
    optimization = optimize_workload_distribution([loaded], [_iteration("it-1", 50, marking=50)])
    assert optimization.suggestions[0].priority == "medium"


def test_distribution_result_status_and_recommendations() -> None:
    idle = distribute_workload([_lecturer("l1")], [_iteration("it-1", 100)])[0]
    assert idle.status == "available"
    assert not idle.is_balanced
    assert idle.recommendations == ("Available for additional teaching responsibilities",)
    assert idle.as_dict()["assigned_iteration_ids"] == ["it-1"]

    busy_lecturer = _lecturer("l2", allocated_teaching_hours=600, allocated_admin_hours=700)
    busy = distribute_workload([busy_lecturer], [_iteration("it-1", 200)])[0]
    assert busy.status == "near-capacity"
    assert busy.is_balanced
    assert busy.recommendations == ()
