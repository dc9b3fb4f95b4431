"""Hour arithmetic, FTE and utilization calculator."""

from .fte import (
    AVAILABLE,
    GOOD,
    NEAR_CAPACITY,
    OVERLOADED,
    STANDARD_FTE_HOURS,
    calculate_fte,
    calculate_hours_per_credit,
    calculate_recommended_hours,
    calculate_utilization,
    calculate_workload_breakdown,
    get_utilization_status,
    utilization_ratio,
)
from .hours import admin_availability, capacity, round_half_up, teaching_availability, total_allocated
from .totals import LecturerFTEResult, WorkloadTotals, calculate_lecturer_fte, calculate_total_workload_hours

__all__ = [
    "AVAILABLE",
    "GOOD",
    "LecturerFTEResult",
    "NEAR_CAPACITY",
    "OVERLOADED",
    "STANDARD_FTE_HOURS",
    "WorkloadTotals",
    "admin_availability",
    "calculate_fte",
    "calculate_hours_per_credit",
    "calculate_lecturer_fte",
    "calculate_recommended_hours",
    "calculate_total_workload_hours",
    "calculate_utilization",
    "calculate_workload_breakdown",
    "capacity",
    "get_utilization_status",
    "round_half_up",
    "teaching_availability",
    "total_allocated",
    "utilization_ratio",
]
