"""Aggregate hours across allocations and derive a lecturer's FTE picture."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .fte import STANDARD_FTE_HOURS, calculate_fte, utilization_ratio
from .hours import capacity

if TYPE_CHECKING:
    from workload.models import AdminAllocation, Lecturer, ModuleAllocation


@dataclass(frozen=True, slots=True)
class WorkloadTotals:
    teaching: float = 0
    marking: float = 0
    cpd: float = 0
    leadership: float = 0
    admin: float = 0

    @property
    def total(self) -> float:
        return self.teaching + self.marking + self.cpd + self.leadership + self.admin

    def as_dict(self) -> dict[str, float]:
        return {
            "teaching": self.teaching,
            "marking": self.marking,
            "cpd": self.cpd,
            "leadership": self.leadership,
            "admin": self.admin,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class LecturerFTEResult:
    fte: float
    total_hours: float
    breakdown: WorkloadTotals
    utilization: float
    capacity: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "fte": self.fte,
            "total_hours": self.total_hours,
            "breakdown": self.breakdown.as_dict(),
            "utilization": self.utilization,
            "capacity": self.capacity,
        }


def calculate_total_workload_hours(
    module_allocations: Iterable["ModuleAllocation"],
    admin_allocations: Iterable["AdminAllocation"] = (),
) -> WorkloadTotals:
    teaching = marking = cpd = leadership = admin = 0
    for allocation in module_allocations:
        teaching += allocation.hours.teaching
        marking += allocation.hours.marking
        cpd += allocation.hours.cpd
        leadership += allocation.hours.leadership
    for admin_allocation in admin_allocations:
        admin += admin_allocation.hours
    return WorkloadTotals(
        teaching=teaching,
        marking=marking,
        cpd=cpd,
        leadership=leadership,
        admin=admin,
    )


def calculate_lecturer_fte(
    lecturer: "Lecturer",
    module_allocations: Iterable["ModuleAllocation"],
    admin_allocations: Iterable["AdminAllocation"] = (),
    *,
    standard_fte_hours: float = STANDARD_FTE_HOURS,
) -> LecturerFTEResult:
    """Summarize the supplied allocations against the lecturer's contract.

    Only the allocations passed in are counted; the lecturer's stored
    ``allocated_*`` figures are not added on top.
    """
    totals = calculate_total_workload_hours(module_allocations, admin_allocations)
    return LecturerFTEResult(
        fte=calculate_fte(totals.total, standard_fte_hours),
        total_hours=totals.total,
        breakdown=totals,
        utilization=utilization_ratio(totals.total, lecturer.total_contract),
        capacity=capacity(lecturer.total_contract, totals.total),
    )
