"""Workload policy thresholds."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_POLICY: dict[str, Any] = {
    "standard_fte_hours": 1650,
    "max_teaching_ratio": 0.6,
    "max_marking_ratio": 0.2,
    "max_leadership_ratio": 0.3,
    "max_admin_ratio": 0.4,
    "min_cpd_hours": 40,
    "high_utilization_threshold": 0.95,
    "underload_threshold": 0.7,
    "critical_overload_threshold": 1.1,
    "min_credits": 10,
    "max_credits": 60,
    "min_level": 4,
    "max_level": 7,
}

RATIO_KEYS = (
    "max_teaching_ratio",
    "max_marking_ratio",
    "max_leadership_ratio",
    "max_admin_ratio",
    "high_utilization_threshold",
    "underload_threshold",
)


@dataclass(frozen=True, slots=True)
class WorkloadPolicy:
    """Ratios are fractions of a lecturer's total contract."""

    standard_fte_hours: float = DEFAULT_POLICY["standard_fte_hours"]
    max_teaching_ratio: float = DEFAULT_POLICY["max_teaching_ratio"]
    max_marking_ratio: float = DEFAULT_POLICY["max_marking_ratio"]
    max_leadership_ratio: float = DEFAULT_POLICY["max_leadership_ratio"]
    max_admin_ratio: float = DEFAULT_POLICY["max_admin_ratio"]
    min_cpd_hours: float = DEFAULT_POLICY["min_cpd_hours"]
    high_utilization_threshold: float = DEFAULT_POLICY["high_utilization_threshold"]
    underload_threshold: float = DEFAULT_POLICY["underload_threshold"]
    critical_overload_threshold: float = DEFAULT_POLICY["critical_overload_threshold"]
    min_credits: float = DEFAULT_POLICY["min_credits"]
    max_credits: float = DEFAULT_POLICY["max_credits"]
    min_level: int = DEFAULT_POLICY["min_level"]
    max_level: int = DEFAULT_POLICY["max_level"]

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_WORKLOAD_POLICY = WorkloadPolicy()
