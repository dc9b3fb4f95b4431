"""Resolve the effective workload policy from layered inputs."""

from __future__ import annotations

from typing import Any

from workload.policy import DEFAULT_POLICY, RATIO_KEYS, WorkloadPolicy
from workload.validation.errors import ValidationReport

_POSITIVE_KEYS = ("standard_fte_hours", "critical_overload_threshold", "max_credits")


def resolve_policy(source: Any, validation_report: ValidationReport) -> WorkloadPolicy:
    """Merge ``source`` over the defaults and return an engine-ready policy.

    Unknown keys and non-numeric values are reported as errors and ignored;
    ratios outside [0, 1] are clamped and reported as infos.
    """
    resolved = dict(DEFAULT_POLICY)
    if source is None:
        return WorkloadPolicy(**resolved)
    if not isinstance(source, dict):
        validation_report.add_error(
            code="INVALID_POLICY",
            message="policy must be an object",
            field_path="$.policy",
        )
        return WorkloadPolicy(**resolved)

    for key, value in source.items():
        path = f"$.policy.{key}"
        if key not in DEFAULT_POLICY:
            validation_report.add_error(
                code="INVALID_POLICY_KEY",
                message=f"Policy key {key!r} is not allowed",
                field_path=path,
                suggested_fix=f"Use one of: {', '.join(sorted(DEFAULT_POLICY))}",
            )
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            validation_report.add_error(
                code="INVALID_POLICY_VALUE",
                message=f"Policy value for {key!r} must be a number",
                field_path=path,
            )
            continue
        if key in _POSITIVE_KEYS and value <= 0:
            validation_report.add_error(
                code="INVALID_POLICY_VALUE",
                message=f"Policy value for {key!r} must be > 0",
                field_path=path,
            )
            continue
        resolved[key] = value

    for key in RATIO_KEYS:
        value = resolved[key]
        clamped = min(1.0, max(0.0, float(value)))
        if clamped != value:
            resolved[key] = clamped
            validation_report.add_info(
                code="INFO_CLAMP_POLICY_APPLIED",
                message=f"{key} was clamped into [0,1]",
                field_path=f"$.policy.{key}",
                extra={"applied_value": clamped},
            )

    if resolved["min_credits"] > resolved["max_credits"]:
        validation_report.add_error(
            code="INVALID_POLICY_VALUE",
            message="min_credits must be <= max_credits",
            field_path="$.policy.min_credits",
        )
        resolved["min_credits"] = DEFAULT_POLICY["min_credits"]
        resolved["max_credits"] = DEFAULT_POLICY["max_credits"]

    return WorkloadPolicy(**resolved)
