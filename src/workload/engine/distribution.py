"""Deterministic distribution of module iterations across a lecturer pool.

Iterations are placed largest-first. Each goes to the lecturer with the most
remaining capacity among, in order of preference:
1) lecturers whose remaining capacity and teaching availability both fit it,
2) lecturers whose remaining capacity fits it,
3) everyone (overflow; the placement is flagged).
Before falling back to overflow, a bounded backtracking search over the same
order looks for a placement that keeps every lecturer within capacity.
Ties resolve by input order, so identical inputs give identical outputs.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from workload.calculator import (
    calculate_total_workload_hours,
    calculate_utilization,
    capacity,
    get_utilization_status,
    teaching_availability,
    utilization_ratio,
)
from workload.metrics import compute_balance_score
from workload.models import AdminAllocation, HourBreakdown, Lecturer, ModuleAllocation, ModuleIteration
from workload.policy import DEFAULT_WORKLOAD_POLICY, WorkloadPolicy

from .scoring import Priority, iteration_order_key, lecturer_preference_key, suggestion_priority

logger = logging.getLogger(__name__)

SEARCH_BUDGET = 20_000


@dataclass(frozen=True, slots=True)
class DistributionResult:
    lecturer_id: str
    assigned_iteration_ids: tuple[str, ...]
    total_hours: float
    breakdown: HourBreakdown
    starting_capacity: float
    remaining_capacity: float
    utilization: float
    status: str
    is_balanced: bool
    recommendations: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "lecturer_id": self.lecturer_id,
            "assigned_iteration_ids": list(self.assigned_iteration_ids),
            "total_hours": self.total_hours,
            "breakdown": self.breakdown.as_dict(),
            "starting_capacity": self.starting_capacity,
            "remaining_capacity": self.remaining_capacity,
            "utilization": self.utilization,
            "status": self.status,
            "is_balanced": self.is_balanced,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True, slots=True)
class AllocationSuggestion:
    lecturer_id: str
    module_iteration_id: str
    hours: HourBreakdown
    priority: Priority

    def as_dict(self) -> dict[str, Any]:
        return {
            "lecturer_id": self.lecturer_id,
            "module_iteration_id": self.module_iteration_id,
            "hours": self.hours.as_dict(),
            "priority": self.priority,
        }


@dataclass(frozen=True, slots=True)
class OptimizationResult:
    suggestions: tuple[AllocationSuggestion, ...]
    total_utilization: float
    balance_score: float
    distribution: tuple[DistributionResult, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "suggestions": [item.as_dict() for item in self.suggestions],
            "total_utilization": self.total_utilization,
            "balance_score": self.balance_score,
            "distribution": [item.as_dict() for item in self.distribution],
        }


@dataclass(slots=True)
class _LecturerLoad:
    lecturer: Lecturer
    index: int
    committed_hours: float
    starting_capacity: float
    teaching_left: float
    assigned: list[ModuleIteration] = field(default_factory=list)
    breakdown: HourBreakdown = field(default_factory=HourBreakdown)

    @property
    def assigned_hours(self) -> float:
        return self.breakdown.total

    @property
    def remaining_capacity(self) -> float:
        return self.starting_capacity - self.assigned_hours

    @property
    def utilization(self) -> float:
        return utilization_ratio(self.committed_hours + self.assigned_hours, self.lecturer.total_contract)


def _initial_loads(
    lecturers: Sequence[Lecturer],
    existing_allocations: Sequence[ModuleAllocation] | None,
    admin_allocations: Sequence[AdminAllocation] | None,
) -> list[_LecturerLoad]:
    supplied = existing_allocations is not None or admin_allocations is not None
    modules_by_lecturer: dict[str, list[ModuleAllocation]] = defaultdict(list)
    for allocation in existing_allocations or ():
        modules_by_lecturer[allocation.lecturer_id].append(allocation)
    admin_by_lecturer: dict[str, list[AdminAllocation]] = defaultdict(list)
    for admin_allocation in admin_allocations or ():
        admin_by_lecturer[admin_allocation.lecturer_id].append(admin_allocation)

    loads: list[_LecturerLoad] = []
    for index, lecturer in enumerate(lecturers):
        if not supplied:
            committed = lecturer.total_allocated
            teaching_committed = lecturer.allocated_teaching_hours
        else:
            totals = calculate_total_workload_hours(
                modules_by_lecturer.get(lecturer.id, []), admin_by_lecturer.get(lecturer.id, [])
            )
            committed = totals.total
            teaching_committed = totals.teaching
        loads.append(
            _LecturerLoad(
                lecturer=lecturer,
                index=index,
                committed_hours=committed,
                starting_capacity=capacity(lecturer.total_contract, committed),
                teaching_left=teaching_availability(lecturer.max_teaching_hours, teaching_committed),
            )
        )
    return loads


def _fitting_tiers(loads: list[_LecturerLoad], hours: HourBreakdown) -> tuple[list[_LecturerLoad], list[_LecturerLoad]]:
    fits = [load for load in loads if load.remaining_capacity >= hours.total]
    teaching_fits = [load for load in fits if load.teaching_left - load.breakdown.teaching >= hours.teaching]
    return teaching_fits, fits


def _by_preference(loads: list[_LecturerLoad]) -> list[_LecturerLoad]:
    return sorted(loads, key=lambda x: lecturer_preference_key(x.remaining_capacity, x.index))


def _pick_lecturer(loads: list[_LecturerLoad], iteration: ModuleIteration) -> tuple[_LecturerLoad, bool]:
    for tier in _fitting_tiers(loads, iteration.hours):
        if tier:
            return _by_preference(tier)[0], False
    return _by_preference(loads)[0], True


def _candidates(loads: list[_LecturerLoad], iteration: ModuleIteration, hours_left: float) -> list[_LecturerLoad]:
    """Lecturers that can take ``iteration`` without exceeding capacity, most preferred first.

    Lecturers in the same position (remaining capacity and teaching left) are
    interchangeable for feasibility, so only the first of each is kept.
    """
    if sum(max(0.0, load.remaining_capacity) for load in loads) < hours_left - 1e-9:
        return []
    teaching_fits, fits = _fitting_tiers(loads, iteration.hours)
    preferred = {load.index for load in teaching_fits}
    ordered = _by_preference(teaching_fits) + [load for load in _by_preference(fits) if load.index not in preferred]
    seen: set[tuple[float, float]] = set()
    out: list[_LecturerLoad] = []
    for load in ordered:
        position = (load.remaining_capacity, load.teaching_left - load.breakdown.teaching)
        if position not in seen:
            seen.add(position)
            out.append(load)
    return out


def _feasible_plan(
    loads: list[_LecturerLoad],
    iterations: list[ModuleIteration],
    budget: int = SEARCH_BUDGET,
) -> list[int] | None:
    """Backtracking search for a placement that keeps every lecturer within capacity.

    Candidates are tried in placement preference order, so when the greedy
    placement already fits it is the first plan found. Returns the lecturer
    index for each iteration, or None when no plan exists or the budget runs out.
    Mutates ``loads``.
    """
    if not iterations:
        return []
    hours_left = [0.0] * (len(iterations) + 1)
    for position in range(len(iterations) - 1, -1, -1):
        hours_left[position] = hours_left[position + 1] + iterations[position].hours.total

    plan: list[_LecturerLoad] = []
    saved: list[HourBreakdown] = []
    pending = [iter(_candidates(loads, iterations[0], hours_left[0]))]
    steps = 0
    while pending:
        position = len(pending) - 1
        load = next(pending[-1], None)
        if load is None:
            pending.pop()
            if plan:
                undone = plan.pop()
                undone.assigned.pop()
                undone.breakdown = saved.pop()
            continue

        steps += 1
        if steps > budget:
            logger.warning("placement search stopped after %d steps without a plan", budget)
            return None
        iteration = iterations[position]
        saved.append(load.breakdown)
        load.assigned.append(iteration)
        load.breakdown = load.breakdown + iteration.hours
        plan.append(load)
        if len(plan) == len(iterations):
            return [item.index for item in plan]
        pending.append(iter(_candidates(loads, iterations[position + 1], hours_left[position + 1])))
    return None


def _assign(
    lecturers: Sequence[Lecturer],
    module_iterations: Sequence[ModuleIteration],
    existing_allocations: Sequence[ModuleAllocation] | None,
    admin_allocations: Sequence[AdminAllocation] | None,
    policy: WorkloadPolicy,
) -> tuple[list[_LecturerLoad], list[AllocationSuggestion]]:
    suggestions: list[AllocationSuggestion] = []
    if not lecturers:
        if module_iterations:
            logger.warning("no lecturers supplied; %d iterations left unassigned", len(module_iterations))
        return [], suggestions

    ordered = [
        iteration
        for _, iteration in sorted(enumerate(module_iterations), key=lambda pair: iteration_order_key(pair[1], pair[0]))
    ]
    plan = _feasible_plan(_initial_loads(lecturers, existing_allocations, admin_allocations), ordered)
    if plan is None:
        logger.info("no placement fits every capacity; falling back to greedy placement")

    loads = _initial_loads(lecturers, existing_allocations, admin_allocations)
    for position, iteration in enumerate(ordered):
        if plan is None:
            chosen, overflow = _pick_lecturer(loads, iteration)
        else:
            chosen, overflow = loads[plan[position]], False
        utilization_before = chosen.utilization
        chosen.assigned.append(iteration)
        chosen.breakdown = chosen.breakdown + iteration.hours
        suggestions.append(
            AllocationSuggestion(
                lecturer_id=chosen.lecturer.id,
                module_iteration_id=iteration.id,
                hours=iteration.hours,
                priority=suggestion_priority(utilization_before, overflow=overflow, policy=policy),
            )
        )
        if overflow:
            logger.warning(
                "iteration %s (%s h) exceeds every remaining capacity; placed on %s",
                iteration.id,
                iteration.hours.total,
                chosen.lecturer.id,
            )
        else:
            logger.debug("iteration %s -> lecturer %s", iteration.id, chosen.lecturer.id)

    return loads, suggestions


def _recommendations(load: _LecturerLoad, policy: WorkloadPolicy) -> tuple[str, ...]:
    out: list[str] = []
    ratio = load.utilization / 100
    if ratio > policy.high_utilization_threshold:
        out.append("Consider reducing workload to prevent overload")
    elif ratio < policy.underload_threshold:
        out.append("Available for additional teaching responsibilities")
    if load.remaining_capacity < 0:
        out.append("Assigned hours exceed remaining capacity")
    return tuple(out)


def _to_result(load: _LecturerLoad, policy: WorkloadPolicy) -> DistributionResult:
    ratio = load.utilization / 100
    committed = load.committed_hours + load.assigned_hours
    return DistributionResult(
        lecturer_id=load.lecturer.id,
        assigned_iteration_ids=tuple(item.id for item in load.assigned),
        total_hours=load.assigned_hours,
        breakdown=load.breakdown,
        starting_capacity=load.starting_capacity,
        remaining_capacity=capacity(load.starting_capacity, load.assigned_hours),
        utilization=load.utilization,
        status=get_utilization_status(calculate_utilization(committed, load.lecturer.total_contract)),
        is_balanced=policy.underload_threshold <= ratio <= policy.high_utilization_threshold,
        recommendations=_recommendations(load, policy),
    )


def distribute_workload(
    lecturers: Sequence[Lecturer],
    module_iterations: Sequence[ModuleIteration],
    existing_allocations: Sequence[ModuleAllocation] | None = None,
    policy: WorkloadPolicy | None = None,
    admin_allocations: Sequence[AdminAllocation] | None = None,
) -> list[DistributionResult]:
    """Assign every iteration and return exactly one result per lecturer, in input order.

    Committed hours come from ``existing_allocations`` plus ``admin_allocations``
    when either is given, otherwise from each lecturer's stored allocated hours.
    """
    p = policy or DEFAULT_WORKLOAD_POLICY
    loads, _ = _assign(lecturers, module_iterations, existing_allocations, admin_allocations, p)
    return [_to_result(load, p) for load in loads]


def optimize_workload_distribution(
    lecturers: Sequence[Lecturer],
    module_iterations: Sequence[ModuleIteration],
    existing_allocations: Sequence[ModuleAllocation] | None = None,
    policy: WorkloadPolicy | None = None,
    admin_allocations: Sequence[AdminAllocation] | None = None,
) -> OptimizationResult:
    """Distribution plus department-level figures.

    - total_utilization: assigned hours as a percentage of the pool's starting capacity
    - balance_score: 1 - coefficient of variation of per-lecturer utilization
    """
    p = policy or DEFAULT_WORKLOAD_POLICY
    loads, suggestions = _assign(lecturers, module_iterations, existing_allocations, admin_allocations, p)

    assigned_total = sum(load.assigned_hours for load in loads)
    capacity_total = sum(load.starting_capacity for load in loads)
    result = OptimizationResult(
        suggestions=tuple(suggestions),
        total_utilization=utilization_ratio(assigned_total, capacity_total),
        balance_score=compute_balance_score([load.utilization for load in loads]),
        distribution=tuple(_to_result(load, p) for load in loads),
    )
    logger.info(
        "distributed %d iterations over %d lecturers: utilization=%.1f%% balance=%.3f",
        len(suggestions),
        len(loads),
        result.total_utilization,
        result.balance_score,
    )
    return result
