"""Build CLI reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from workload.validation import ValidationError, ValidationReport

SCHEMA_VERSION = "1.0.0"


def build_error_report(errors: list[ValidationError], code: str = "validation_error") -> dict[str, Any]:
    """Return a JSON-serializable error report."""
    return {
        "status": "error",
        "error": {
            "code": code,
            "count": len(errors),
            "details": [
                {"code": err.code, "message": err.message, "path": err.path}
                for err in errors
            ],
        },
    }


def build_error_report_with_validation(
    errors: list[ValidationError],
    validation_report: ValidationReport,
    code: str = "validation_error",
) -> dict[str, Any]:
    payload = build_error_report(errors, code=code)
    payload["validation_report"] = validation_report.as_dict()
    return payload


def build_success_report(
    command: str,
    result: dict[str, Any],
    metrics: dict[str, Any],
    validation_report: ValidationReport,
    *,
    effective_policy: dict[str, Any] | None = None,
    academic_year: str | None = None,
) -> dict[str, Any]:
    """Return a JSON-serializable success report."""
    generated_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    run_id = f"{command}-{generated_at.replace(':', '').replace('-', '').replace('T', '-').replace('Z', '')}"
    return {
        "status": "ok",
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "generated_at": generated_at,
        "command": command,
        "academic_year": academic_year,
        "result": result,
        "metrics": metrics,
        "effective_policy": effective_policy or {},
        "validation_report": validation_report.as_dict(),
    }
