"""Department workload metrics."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from statistics import mean, pstdev
from typing import Any

from workload.calculator import (
    calculate_fte,
    capacity,
    calculate_total_workload_hours,
    calculate_utilization,
    get_utilization_status,
    utilization_ratio,
)
from workload.models import AdminAllocation, Lecturer, ModuleAllocation
from workload.policy import DEFAULT_WORKLOAD_POLICY, WorkloadPolicy


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def compute_balance_score(utilizations: Sequence[float]) -> float:
    """Return 1 - coefficient of variation, clamped into [0,1].

    A perfectly even spread scores 1.0; an empty or all-idle pool is treated as
    even.
    """
    values = [float(v) for v in utilizations]
    if not values:
        return 1.0
    avg = mean(values)
    if avg <= 0:
        return 1.0
    cv = pstdev(values) / avg
    return _clamp01(1.0 - min(1.0, cv))


def group_by_lecturer(
    module_allocations: Iterable[ModuleAllocation],
    admin_allocations: Iterable[AdminAllocation] = (),
) -> tuple[dict[str, list[ModuleAllocation]], dict[str, list[AdminAllocation]]]:
    modules_by: dict[str, list[ModuleAllocation]] = defaultdict(list)
    for allocation in module_allocations:
        modules_by[allocation.lecturer_id].append(allocation)
    admin_by: dict[str, list[AdminAllocation]] = defaultdict(list)
    for admin_allocation in admin_allocations:
        admin_by[admin_allocation.lecturer_id].append(admin_allocation)
    return modules_by, admin_by


def collect_department_metrics(
    lecturers: Sequence[Lecturer],
    module_allocations: Iterable[ModuleAllocation] = (),
    admin_allocations: Iterable[AdminAllocation] = (),
    policy: WorkloadPolicy | None = None,
) -> dict[str, Any]:
    """Headline figures for a department: FTE, hours, utilization and status counts."""
    p = policy or DEFAULT_WORKLOAD_POLICY
    modules_by, admin_by = group_by_lecturer(module_allocations, admin_allocations)

    total_contract = 0.0
    total_allocated = 0.0
    remaining_capacity = 0.0
    utilizations: list[float] = []
    statuses: Counter[str] = Counter()

    for lecturer in lecturers:
        totals = calculate_total_workload_hours(modules_by.get(lecturer.id, []), admin_by.get(lecturer.id, []))
        total_contract += lecturer.total_contract
        total_allocated += totals.total
        remaining_capacity += capacity(lecturer.total_contract, totals.total)
        utilization = utilization_ratio(totals.total, lecturer.total_contract)
        utilizations.append(utilization)
        statuses[get_utilization_status(calculate_utilization(totals.total, lecturer.total_contract))] += 1

    return {
        "headcount": len(lecturers),
        "total_fte": sum(lecturer.fte for lecturer in lecturers),
        "contracted_fte": calculate_fte(total_contract, p.standard_fte_hours),
        "total_contract_hours": total_contract,
        "total_allocated_hours": total_allocated,
        "remaining_capacity_hours": remaining_capacity,
        "average_utilization": mean(utilizations) if utilizations else 0.0,
        "department_utilization": utilization_ratio(total_allocated, total_contract),
        "balance_score": compute_balance_score(utilizations),
        "status_counts": {
            "overloaded": statuses["overloaded"],
            "near-capacity": statuses["near-capacity"],
            "good": statuses["good"],
            "available": statuses["available"],
        },
    }
