"""Workload policy rules for lecturers, allocations and modules.

Policy violations are returned as ``WorkloadValidationResult`` entries and
never raised. Errors mark the result invalid; warnings and recommendations
are advisory only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from workload.calculator import (
    calculate_lecturer_fte,
    calculate_total_workload_hours,
    calculate_utilization,
    utilization_ratio,
)
from workload.models import AdminAllocation, Lecturer, Module, ModuleAllocation
from workload.policy import DEFAULT_WORKLOAD_POLICY, WorkloadPolicy

from .errors import WorkloadValidationResult

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _pct(ratio: float) -> str:
    return _fmt(ratio * 100)


def validate_lecturer_workload(
    lecturer: Lecturer,
    module_allocations: Iterable[ModuleAllocation],
    admin_allocations: Iterable[AdminAllocation] = (),
    policy: WorkloadPolicy | None = None,
) -> WorkloadValidationResult:
    """Check a lecturer's allocation set against the workload policy.

    Rules:
    - teaching hours <= lecturer.max_teaching_hours
    - admin hours <= max_admin_ratio * contract
    - marking / leadership hours <= their ratio * contract
    - total hours <= contract, and a critical-overload error above 110%
    - warning above the high-utilization threshold
    """
    p = policy or DEFAULT_WORKLOAD_POLICY
    result = WorkloadValidationResult()

    fte_result = calculate_lecturer_fte(
        lecturer,
        module_allocations,
        admin_allocations,
        standard_fte_hours=p.standard_fte_hours,
    )
    totals = fte_result.breakdown
    contract = lecturer.total_contract
    utilization = fte_result.utilization / 100

    if totals.teaching > lecturer.max_teaching_hours:
        result.errors.append(
            f"Teaching hours ({_fmt(totals.teaching)}) exceed maximum teaching hours "
            f"({_fmt(lecturer.max_teaching_hours)})"
        )

    admin_ceiling = contract * p.max_admin_ratio
    if totals.admin > admin_ceiling:
        result.errors.append(
            f"Administrative hours ({_fmt(totals.admin)}) exceed maximum of "
            f"{_pct(p.max_admin_ratio)}% of contract ({_fmt(admin_ceiling)})"
        )

    marking_ceiling = contract * p.max_marking_ratio
    if totals.marking > marking_ceiling:
        result.errors.append(
            f"Marking hours ({_fmt(totals.marking)}) exceed maximum of "
            f"{_pct(p.max_marking_ratio)}% of contract ({_fmt(marking_ceiling)})"
        )

    leadership_ceiling = contract * p.max_leadership_ratio
    if totals.leadership > leadership_ceiling:
        result.errors.append(
            f"Leadership hours ({_fmt(totals.leadership)}) exceed maximum of "
            f"{_pct(p.max_leadership_ratio)}% of contract ({_fmt(leadership_ceiling)})"
        )

    if totals.total > contract:
        result.errors.append(
            f"Total allocated hours ({_fmt(totals.total)}) exceed contract hours ({_fmt(contract)})"
        )
    if utilization > p.critical_overload_threshold:
        result.errors.append(
            f"Critical overload: {_fmt(fte_result.utilization)}% utilization exceeds "
            f"{_pct(p.critical_overload_threshold)}%"
        )

    if utilization > p.high_utilization_threshold:
        result.warnings.append(
            f"High utilization: {_fmt(fte_result.utilization)}% utilization exceeds "
            f"{_pct(p.high_utilization_threshold)}%"
        )
        result.recommendations.append("Consider redistributing workload or reducing teaching commitments")
    elif utilization < p.underload_threshold:
        result.recommendations.append("Consider additional teaching or administrative responsibilities")

    if totals.cpd < p.min_cpd_hours:
        result.recommendations.append("Increase CPD allocation to meet minimum requirements")

    logger.debug(
        "lecturer %s: total=%s utilization=%.1f%% errors=%d warnings=%d",
        lecturer.id,
        totals.total,
        fte_result.utilization,
        len(result.errors),
        len(result.warnings),
    )
    return result


def validate_module_allocation(
    allocation: ModuleAllocation,
    lecturer: Lecturer,
    existing_allocations: Sequence[ModuleAllocation] | None = None,
    policy: WorkloadPolicy | None = None,
) -> WorkloadValidationResult:
    """Check a single allocation against the lecturer's remaining capacity.

    The projected utilization starts from ``existing_allocations`` when given,
    otherwise from the lecturer's stored allocated hours.
    """
    p = policy or DEFAULT_WORKLOAD_POLICY
    result = WorkloadValidationResult()
    allocation_hours = allocation.hours.total

    if allocation_hours > lecturer.capacity:
        result.errors.append(
            f"Allocation hours ({_fmt(allocation_hours)}) exceed lecturer capacity ({_fmt(lecturer.capacity)})"
        )

    if allocation.hours.teaching > lecturer.teaching_availability:
        result.errors.append(
            f"Teaching hours ({_fmt(allocation.hours.teaching)}) exceed teaching availability "
            f"({_fmt(lecturer.teaching_availability)})"
        )

    if existing_allocations is None:
        baseline = lecturer.total_allocated
    else:
        baseline = calculate_total_workload_hours(existing_allocations).total
    projected = utilization_ratio(baseline + allocation_hours, lecturer.total_contract)
    if projected / 100 > p.high_utilization_threshold:
        result.warnings.append(f"Allocation would result in {_fmt(projected)}% utilization")

    return result


def validate_module(module: Module, policy: WorkloadPolicy | None = None) -> WorkloadValidationResult:
    p = policy or DEFAULT_WORKLOAD_POLICY
    result = WorkloadValidationResult()

    if module.credits < p.min_credits:
        result.errors.append(f"Credits ({_fmt(module.credits)}) below minimum of {_fmt(p.min_credits)}")
    if module.credits > p.max_credits:
        result.errors.append(f"Credits ({_fmt(module.credits)}) exceed maximum of {_fmt(p.max_credits)}")
    if module.level < p.min_level:
        result.errors.append(f"Academic level ({module.level}) below minimum of {p.min_level}")
    if module.level > p.max_level:
        result.errors.append(f"Academic level ({module.level}) exceeds maximum of {p.max_level}")
    if module.default_teaching_hours <= 0:
        result.errors.append("Default teaching hours must be greater than 0")
    if module.default_marking_hours < 0:
        result.errors.append("Default marking hours cannot be negative")
    if not module.code.strip():
        result.errors.append("Module code is required")
    if not module.title.strip():
        result.errors.append("Module title is required")

    return result


def validate_hour_breakdown(
    teaching: float,
    admin: float,
    research: float,
    other: float,
    total_contract: float,
    policy: WorkloadPolicy | None = None,
) -> WorkloadValidationResult:
    """Category-level check of a lecturer profile's hour split."""
    p = policy or DEFAULT_WORKLOAD_POLICY
    result = WorkloadValidationResult()

    for label, value in (
        ("Teaching", teaching),
        ("Administrative", admin),
        ("Research", research),
        ("Other", other),
    ):
        if value < 0:
            result.errors.append(f"{label} hours cannot be negative")

    total = teaching + admin + research + other
    if total > total_contract:
        result.errors.append(
            f"Total allocated hours ({_fmt(total)}) exceed contract hours ({_fmt(total_contract)})"
        )

    utilization = calculate_utilization(total, total_contract)
    if utilization > p.high_utilization_threshold * 100:
        result.warnings.append(f"High utilization: {utilization}%")
    elif utilization < p.underload_threshold * 100:
        result.warnings.append(f"Low utilization: {utilization}%")

    if total_contract > 0:
        teaching_share = teaching / total_contract
        if teaching_share > p.max_teaching_ratio:
            result.warnings.append(
                f"Teaching ratio ({calculate_utilization(teaching, total_contract)}%) exceeds "
                f"recommended {_pct(p.max_teaching_ratio)}%"
            )
        admin_share = admin / total_contract
        if admin_share > p.max_admin_ratio:
            result.warnings.append(
                f"Administrative ratio ({calculate_utilization(admin, total_contract)}%) exceeds "
                f"recommended {_pct(p.max_admin_ratio)}%"
            )

    return result
