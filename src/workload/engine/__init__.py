"""Distribution engine."""

from .balance import DepartmentBalance, calculate_department_balance
from .distribution import (
    AllocationSuggestion,
    DistributionResult,
    OptimizationResult,
    distribute_workload,
    optimize_workload_distribution,
)
from .scoring import iteration_order_key, lecturer_preference_key, suggestion_priority

__all__ = [
    "AllocationSuggestion",
    "DepartmentBalance",
    "DistributionResult",
    "OptimizationResult",
    "calculate_department_balance",
    "distribute_workload",
    "iteration_order_key",
    "lecturer_preference_key",
    "optimize_workload_distribution",
    "suggestion_priority",
]
