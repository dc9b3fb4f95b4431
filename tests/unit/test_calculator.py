from __future__ import annotations

import pytest

from workload.calculator import (
    admin_availability,
    calculate_fte,
    calculate_hours_per_credit,
    calculate_lecturer_fte,
    calculate_recommended_hours,
    calculate_total_workload_hours,
    calculate_utilization,
    calculate_workload_breakdown,
    capacity,
    get_utilization_status,
    round_half_up,
    teaching_availability,
    total_allocated,
    utilization_ratio,
)
from workload.exceptions import DivisionError, InvalidArgument
from workload.models import AdminAllocation, HourBreakdown, Lecturer, ModuleAllocation


def _lecturer(**overrides: object) -> Lecturer:
    payload: dict = {"id": "lec-1", "fte": 1.0, "total_contract": 1650, "max_teaching_hours": 990}
    payload.update(overrides)
    return Lecturer(**payload)


def _allocation(idx: int, **hours: float) -> ModuleAllocation:
    return ModuleAllocation(id=f"a{idx}", module_iteration_id=f"it{idx}", lecturer_id="lec-1", hours=HourBreakdown(**hours))


def test_hour_primitives_floor_at_zero() -> None:
    assert total_allocated(800, 200) == 1000
    assert total_allocated(800, 200, 100, 50) == 1150
    assert total_allocated(-10, 5) == -5
    assert capacity(1650, 1000) == 650
    assert capacity(1650, 2000) == 0
    assert teaching_availability(990, 1200) == 0
    assert teaching_availability(990, 400) == 590
    assert admin_availability(660, 700) == 0


@pytest.mark.parametrize(
    ("contract", "expected"),
    [(1650, 1.0), (825, 0.5), (3300, 2.0), (0, 0.0), (-165, -0.1)],
)
def test_calculate_fte_is_plain_division(contract: float, expected: float) -> None:
    assert calculate_fte(contract, 1650) == pytest.approx(expected)


@pytest.mark.parametrize("standard", [0, -1650])
def test_calculate_fte_rejects_non_positive_standard(standard: float) -> None:
    with pytest.raises(DivisionError):
        calculate_fte(1650, standard)
    with pytest.raises(ZeroDivisionError):
        calculate_fte(1650, standard)


def test_utilization_rounds_half_up_and_handles_empty_contract() -> None:
    assert utilization_ratio(1500, 1650) == pytest.approx(90.909, abs=1e-3)
    assert calculate_utilization(1500, 1650) == 91
    assert calculate_utilization(1000, 1650) == 61
    assert calculate_utilization(1, 200) == 1  # 0.5 rounds up
    assert calculate_utilization(500, 0) == 0
    assert calculate_utilization(500, -10) == 0
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2


@pytest.mark.parametrize(
    ("utilization", "status"),
    [
        (101, "overloaded"),
        (100, "near-capacity"),
        (90, "near-capacity"),
        (89, "good"),
        (70, "good"),
        (69, "available"),
        (0, "available"),
    ],
)
def test_utilization_status_bands(utilization: float, status: str) -> None:
    assert get_utilization_status(utilization) == status


def test_hours_per_credit() -> None:
    assert calculate_hours_per_credit(15, 45, 15) == 4.0
    with pytest.raises(InvalidArgument):
        calculate_hours_per_credit(0, 45, 15)
    with pytest.raises(ValueError):
        calculate_hours_per_credit(-5, 45, 15)


def test_workload_breakdown_rounds_each_category_independently() -> None:
    breakdown = calculate_workload_breakdown(500, 300, 200, 0, 1650)
    assert breakdown == {"teaching": 30, "admin": 18, "research": 12, "other": 0, "available": 39}
    assert sum(breakdown.values()) == 99
    assert calculate_workload_breakdown(100, 0, 0, 0, 0) == {
        "teaching": 0,
        "admin": 0,
        "research": 0,
        "other": 0,
        "available": 0,
    }


@pytest.mark.parametrize(
    ("family", "expected"),
    [
        ("Research Academic", (1650, 495, 330, 660, 165)),
        ("Teaching Academic", (1650, 990, 495, 165, 0)),
        ("Academic Practitioner", (1650, 1320, 330, 0, 0)),
        ("Unknown Family", (1650, 990, 495, 165, 0)),
        (None, (1650, 990, 495, 165, 0)),
    ],
)
def test_recommended_hours_per_family(family: str | None, expected: tuple[int, ...]) -> None:
    result = calculate_recommended_hours(1.0, family)
    assert (
        result["total_contract"],
        result["max_teaching"],
        result["max_admin"],
        result["recommended_research"],
        result["recommended_other"],
    ) == expected


def test_recommended_hours_rounds_contract() -> None:
    assert calculate_recommended_hours(0.5, "Teaching Academic")["total_contract"] == 825
    assert calculate_recommended_hours(0.3, "Teaching Academic")["total_contract"] == 495


def test_total_workload_hours_sums_every_category() -> None:
    totals = calculate_total_workload_hours(
        [_allocation(1, teaching=100, marking=20, cpd=5), _allocation(2, teaching=50, leadership=10)],
        [AdminAllocation(id="ad1", lecturer_id="lec-1", hours=40)],
    )
    assert (totals.teaching, totals.marking, totals.cpd, totals.leadership, totals.admin) == (150, 20, 5, 10, 40)
    assert totals.total == 225


def test_lecturer_fte_uses_supplied_allocations_only() -> None:
    lecturer = _lecturer(allocated_teaching_hours=500)
    result = calculate_lecturer_fte(
        lecturer,
        [_allocation(1, teaching=800)],
        [AdminAllocation(id="ad1", lecturer_id="lec-1", hours=200)],
    )
    assert result.total_hours == 1000
    assert result.fte == pytest.approx(1000 / 1650)
    assert result.capacity == 650
    assert result.utilization == pytest.approx(60.606, abs=1e-3)
    assert result.as_dict()["breakdown"]["admin"] == 200
