from __future__ import annotations

from workload.models import AdminAllocation, HourBreakdown, Lecturer, Module, ModuleAllocation
from workload.policy import WorkloadPolicy
from workload.validation import (
    validate_hour_breakdown,
    validate_lecturer_workload,
    validate_module,
    validate_module_allocation,
)


def _lecturer(**overrides: object) -> Lecturer:
    payload: dict = {"id": "lec-1", "fte": 1.0, "total_contract": 1650, "max_teaching_hours": 990}
    payload.update(overrides)
    return Lecturer(**payload)


def _allocation(idx: int = 1, **hours: float) -> ModuleAllocation:
    return ModuleAllocation(
        id=f"a{idx}",
        module_iteration_id=f"it{idx}",
        lecturer_id="lec-1",
        hours=HourBreakdown(**hours),
    )


def _admin(hours: float, category: str = "admin") -> AdminAllocation:
    return AdminAllocation(id=f"ad-{hours}", lecturer_id="lec-1", hours=hours, category=category)


def test_end_to_end_available_lecturer_is_valid_without_warnings() -> None:
    lecturer = _lecturer()
    result = validate_lecturer_workload(lecturer, [_allocation(teaching=800, marking=0)], [_admin(200)])

    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []
    assert "Consider additional teaching or administrative responsibilities" in result.recommendations
    assert "Increase CPD allocation to meet minimum requirements" in result.recommendations


def test_teaching_over_lecturer_maximum_is_an_error() -> None:
    result = validate_lecturer_workload(_lecturer(), [_allocation(1, teaching=600), _allocation(2, teaching=400)])
    assert not result.is_valid
    assert any("Teaching hours" in err for err in result.errors)
    assert "Teaching hours (1000) exceed maximum teaching hours (990)" in result.errors


def test_admin_marking_and_leadership_ceilings() -> None:
    result = validate_lecturer_workload(
        _lecturer(),
        [_allocation(1, teaching=100, marking=400, leadership=500)],
        [_admin(700)],
    )
    assert "Administrative hours (700) exceed maximum of 40% of contract (660)" in result.errors
    assert "Marking hours (400) exceed maximum of 20% of contract (330)" in result.errors
    assert "Leadership hours (500) exceed maximum of 30% of contract (495)" in result.errors


def test_total_over_contract_and_critical_overload() -> None:
    result = validate_lecturer_workload(
        _lecturer(max_teaching_hours=1650),
        [_allocation(1, teaching=1200, marking=300, cpd=50, leadership=100)],
        [_admin(300)],
    )
    assert "Total allocated hours (1950) exceed contract hours (1650)" in result.errors
    assert any(err.startswith("Critical overload:") for err in result.errors)
    assert any(w.startswith("High utilization:") for w in result.warnings)


def test_high_utilization_is_a_warning_not_an_error() -> None:
    result = validate_lecturer_workload(
        _lecturer(),
        [_allocation(1, teaching=980, marking=300, cpd=50, leadership=200)],
        [_admin(70)],
    )
    assert result.is_valid
    assert result.warnings == ["High utilization: 96.97% utilization exceeds 95%"]
    assert "Consider redistributing workload or reducing teaching commitments" in result.recommendations


def test_policy_overrides_thresholds() -> None:
    strict = WorkloadPolicy(high_utilization_threshold=0.5, min_cpd_hours=0)
    result = validate_lecturer_workload(_lecturer(), [_allocation(teaching=900)], policy=strict)
    assert result.is_valid
    assert len(result.warnings) == 1
    assert "Increase CPD allocation to meet minimum requirements" not in result.recommendations


def test_module_allocation_against_capacity() -> None:
    lecturer = _lecturer(allocated_teaching_hours=900, allocated_admin_hours=650)
    assert lecturer.capacity == 100

    over = validate_module_allocation(_allocation(teaching=60, marking=60), lecturer)
    assert not over.is_valid
    assert any("exceed lecturer capacity" in err for err in over.errors)

    within = validate_module_allocation(_allocation(teaching=40, marking=40), lecturer)
    assert within.is_valid


def test_module_allocation_checks_teaching_availability() -> None:
    lecturer = _lecturer(allocated_teaching_hours=950)
    result = validate_module_allocation(_allocation(teaching=60), lecturer)
    assert result.errors == ["Teaching hours (60) exceed teaching availability (40)"]


def test_module_allocation_projected_utilization_warning() -> None:
    lecturer = _lecturer()
    existing = [_allocation(1, teaching=900, marking=330), _allocation(2, leadership=300)]
    result = validate_module_allocation(_allocation(3, teaching=50), lecturer, existing_allocations=existing)
    assert result.is_valid
    assert result.warnings == ["Allocation would result in 95.76% utilization"]

    no_history = validate_module_allocation(_allocation(3, teaching=50), lecturer, existing_allocations=[])
    assert no_history.warnings == []


def test_module_structural_checks() -> None:
    good = Module(id="m1", code="CS401", title="Algorithms", credits=15, level=4, default_teaching_hours=45)
    assert validate_module(good).is_valid

    bad = Module(id="m2", code=" ", title="", credits=5, level=8, default_teaching_hours=0, default_marking_hours=-1)
    result = validate_module(bad)
    assert not result.is_valid
    assert result.errors == [
        "Credits (5) below minimum of 10",
        "Academic level (8) exceeds maximum of 7",
        "Default teaching hours must be greater than 0",
        "Default marking hours cannot be negative",
        "Module code is required",
        "Module title is required",
    ]


def test_hour_breakdown_warnings() -> None:
    fine = validate_hour_breakdown(900, 400, 100, 100, 1650)
    assert fine.is_valid
    assert fine.warnings == []

    heavy = validate_hour_breakdown(1100, 700, 0, 0, 1650)
    assert heavy.errors == ["Total allocated hours (1800) exceed contract hours (1650)"]
    assert heavy.warnings == [
        "High utilization: 109%",
        "Teaching ratio (67%) exceeds recommended 60%",
        "Administrative ratio (42%) exceeds recommended 40%",
    ]

    negative = validate_hour_breakdown(-1, 0, 0, 0, 1650)
    assert "Teaching hours cannot be negative" in negative.errors
