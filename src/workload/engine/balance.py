"""Department-wide balance classification."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from statistics import mean, pvariance
from typing import Any

from workload.calculator import (
    AVAILABLE,
    OVERLOADED,
    calculate_total_workload_hours,
    calculate_utilization,
    get_utilization_status,
    round_half_up,
    utilization_ratio,
)
from workload.metrics import compute_balance_score, group_by_lecturer
from workload.models import AdminAllocation, Lecturer, ModuleAllocation
from workload.policy import DEFAULT_WORKLOAD_POLICY, WorkloadPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DepartmentBalance:
    average_utilization: float
    utilization_variance: float
    balance_score: float
    overloaded_count: int
    underloaded_count: int
    balanced_count: int
    recommendations: tuple[str, ...] = ()
    lecturer_utilization: dict[str, float] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "average_utilization": self.average_utilization,
            "utilization_variance": self.utilization_variance,
            "balance_score": self.balance_score,
            "overloaded_count": self.overloaded_count,
            "underloaded_count": self.underloaded_count,
            "balanced_count": self.balanced_count,
            "recommendations": list(self.recommendations),
            "lecturer_utilization": dict(self.lecturer_utilization),
        }


def _recommendations(overloaded: int, underloaded: int, score: float, policy: WorkloadPolicy) -> list[str]:
    out: list[str] = []
    if overloaded and underloaded:
        out.append(
            f"Move work from {overloaded} overloaded lecturer(s) to {underloaded} lecturer(s) with spare capacity"
        )
    elif overloaded:
        out.append(f"{overloaded} lecturer(s) overloaded; department needs additional staffing")
    elif underloaded:
        out.append(f"{underloaded} lecturer(s) below {round_half_up(policy.underload_threshold * 100)}% utilization")
    if score < 0.8:
        out.append("Utilization is unevenly spread across the department")
    return out


def calculate_department_balance(
    lecturers: Sequence[Lecturer],
    allocations: Iterable[ModuleAllocation],
    admin_allocations: Iterable[AdminAllocation] = (),
    policy: WorkloadPolicy | None = None,
) -> DepartmentBalance:
    """Classify every lecturer by utilization status and aggregate the counts.

    ``overloaded`` lecturers count as overloaded, ``available`` as underloaded,
    and ``good``/``near-capacity`` as balanced.
    """
    p = policy or DEFAULT_WORKLOAD_POLICY
    modules_by, admin_by = group_by_lecturer(allocations, admin_allocations)

    overloaded = underloaded = balanced = 0
    per_lecturer: dict[str, float] = {}
    values: list[float] = []
    for lecturer in lecturers:
        totals = calculate_total_workload_hours(modules_by.get(lecturer.id, []), admin_by.get(lecturer.id, []))
        utilization = utilization_ratio(totals.total, lecturer.total_contract)
        per_lecturer[lecturer.id] = utilization
        values.append(utilization)
        status = get_utilization_status(calculate_utilization(totals.total, lecturer.total_contract))
        if status == OVERLOADED:
            overloaded += 1
        elif status == AVAILABLE:
            underloaded += 1
        else:
            balanced += 1

    score = compute_balance_score(values)
    balance = DepartmentBalance(
        average_utilization=mean(values) if values else 0.0,
        utilization_variance=pvariance(values) if values else 0.0,
        balance_score=score,
        overloaded_count=overloaded,
        underloaded_count=underloaded,
        balanced_count=balanced,
        recommendations=tuple(_recommendations(overloaded, underloaded, score, p)),
        lecturer_utilization=per_lecturer,
    )
    logger.info(
        "department balance: overloaded=%d underloaded=%d balanced=%d score=%.3f",
        overloaded,
        underloaded,
        balanced,
        score,
    )
    return balance
