"""Ordering keys and priorities for workload assignment."""

from __future__ import annotations

from typing import Literal

from workload.models import ModuleIteration
from workload.policy import WorkloadPolicy

Priority = Literal["high", "medium", "low"]


def iteration_order_key(iteration: ModuleIteration, index: int) -> tuple[float, int]:
    """Largest demand first, then input order."""
    return (-iteration.hours.total, index)


def lecturer_preference_key(remaining_capacity: float, index: int) -> tuple[float, int]:
    """Highest remaining capacity first, then input order."""
    return (-remaining_capacity, index)


def suggestion_priority(utilization_before: float, *, overflow: bool, policy: WorkloadPolicy) -> Priority:
    """Priority of a suggested allocation.

    Order:
    1) overflow placements (nobody had room) are low
    2) lecturers under the underload threshold are high
    3) everything else is medium
    """
    if overflow:
        return "low"
    if utilization_before / 100 < policy.underload_threshold:
        return "high"
    return "medium"
