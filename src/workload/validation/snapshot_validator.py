"""Cross-record validation rules for department snapshots."""

from __future__ import annotations

from typing import Any

from workload.calendar import is_valid_academic_year

from .errors import ValidationReport

_COLLECTIONS = ("lecturers", "modules", "module_iterations", "module_allocations", "admin_allocations")


def _record_id(record: dict[str, Any]) -> str | None:
    raw = record.get("id", record.get("_id"))
    if raw is None or raw == "":
        return None
    return str(raw)


def _records(payload: dict[str, Any], key: str, report: ValidationReport) -> list[tuple[int, dict[str, Any]]]:
    items = payload.get(key, [])
    if items is None:
        return []
    if not isinstance(items, list):
        report.add_error(
            code="INVALID_COLLECTION",
            message=f"{key} must be a list",
            field_path=f"$.{key}",
        )
        return []
    out: list[tuple[int, dict[str, Any]]] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            report.add_error(
                code="INVALID_RECORD",
                message=f"{key}[{idx}] must be an object",
                field_path=f"$.{key}[{idx}]",
            )
            continue
        out.append((idx, item))
    return out


def _collect_ids(
    key: str,
    records: list[tuple[int, dict[str, Any]]],
    report: ValidationReport,
) -> set[str]:
    seen: set[str] = set()
    for idx, record in records:
        record_id = _record_id(record)
        if record_id is None:
            report.add_error(
                code="MISSING_ID",
                message=f"{key}[{idx}] has no id",
                field_path=f"$.{key}[{idx}].id",
            )
            continue
        if record_id in seen:
            report.add_error(
                code="DUPLICATE_ID",
                message=f"Duplicate id in {key}: {record_id}",
                field_path=f"$.{key}[{idx}].id",
            )
        seen.add(record_id)
    return seen


def _check_reference(
    record: dict[str, Any],
    *,
    keys: tuple[str, ...],
    known: set[str],
    code: str,
    label: str,
    path: str,
    report: ValidationReport,
) -> None:
    value = next((record[k] for k in keys if record.get(k) is not None), None)
    if value is None:
        report.add_error(
            code="MISSING_REFERENCE",
            message=f"Missing {label} reference",
            field_path=f"{path}.{keys[0]}",
        )
    elif str(value) not in known:
        report.add_error(
            code=code,
            message=f"Unknown {label} reference: {value}",
            field_path=f"{path}.{keys[0]}",
        )


def validate_snapshot(payload: dict[str, Any]) -> ValidationReport:
    """Validate identifiers and cross references without short-circuiting.

    References that cannot be resolved are reported; they are never replaced
    with placeholder records.
    """
    report = ValidationReport()
    records = {key: _records(payload, key, report) for key in _COLLECTIONS}
    ids = {key: _collect_ids(key, records[key], report) for key in _COLLECTIONS}

    for idx, iteration in records["module_iterations"]:
        if "modules" in payload:
            _check_reference(
                iteration,
                keys=("module_id", "moduleId"),
                known=ids["modules"],
                code="UNKNOWN_MODULE_REFERENCE",
                label="module",
                path=f"$.module_iterations[{idx}]",
                report=report,
            )

    for idx, allocation in records["module_allocations"]:
        path = f"$.module_allocations[{idx}]"
        _check_reference(
            allocation,
            keys=("lecturer_id", "lecturerId"),
            known=ids["lecturers"],
            code="UNKNOWN_LECTURER_REFERENCE",
            label="lecturer",
            path=path,
            report=report,
        )
        _check_reference(
            allocation,
            keys=("module_iteration_id", "moduleIterationId"),
            known=ids["module_iterations"],
            code="UNKNOWN_ITERATION_REFERENCE",
            label="module iteration",
            path=path,
            report=report,
        )

    for idx, allocation in records["admin_allocations"]:
        _check_reference(
            allocation,
            keys=("lecturer_id", "lecturerId"),
            known=ids["lecturers"],
            code="UNKNOWN_LECTURER_REFERENCE",
            label="lecturer",
            path=f"$.admin_allocations[{idx}]",
            report=report,
        )

    year = payload.get("academic_year")
    if year is not None:
        if not is_valid_academic_year(year):
            report.add_error(
                code="INVALID_ACADEMIC_YEAR",
                message=f"Invalid academic year format: {year!r}",
                field_path="$.academic_year",
                suggested_fix="Use YYYY-YY with consecutive years, e.g. 2024-25.",
            )

    return report
