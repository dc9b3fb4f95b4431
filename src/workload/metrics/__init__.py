"""Department metrics."""

from .collector import collect_department_metrics, compute_balance_score, group_by_lecturer

__all__ = ["collect_department_metrics", "compute_balance_score", "group_by_lecturer"]
