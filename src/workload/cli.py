"""CLI entrypoint for the workload engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from typing import Any

from workload.calculator import calculate_lecturer_fte
from workload.calendar import get_academic_year_info, get_current_academic_year
from workload.engine import calculate_department_balance, optimize_workload_distribution
from workload.io import read_json, write_json
from workload.metrics import collect_department_metrics
from workload.normalization import DepartmentSnapshot, load_snapshot, normalize_request
from workload.reporting import (
    build_error_report,
    build_error_report_with_validation,
    build_success_report,
)
from workload.validation import (
    ValidationError,
    ValidationReport,
    WorkloadError,
    validate_command_request,
    validate_lecturer_workload,
    validate_module,
    validate_snapshot,
)

logger = logging.getLogger(__name__)


def _run_validate(snapshot: DepartmentSnapshot) -> dict[str, Any]:
    lecturers: list[dict[str, Any]] = []
    for lecturer in snapshot.lecturers:
        module_allocations = snapshot.module_allocations_for(lecturer.id)
        admin_allocations = snapshot.admin_allocations_for(lecturer.id)
        fte = calculate_lecturer_fte(
            lecturer,
            module_allocations,
            admin_allocations,
            standard_fte_hours=snapshot.policy.standard_fte_hours,
        )
        check = validate_lecturer_workload(lecturer, module_allocations, admin_allocations, snapshot.policy)
        lecturers.append({"lecturer_id": lecturer.id, **fte.as_dict(), "validation": check.as_dict()})

    modules = [
        {"module_id": module.id, "code": module.code, "validation": validate_module(module, snapshot.policy).as_dict()}
        for module in snapshot.modules
    ]
    return {
        "all_valid": all(item["validation"]["is_valid"] for item in lecturers + modules),
        "lecturers": lecturers,
        "modules": modules,
    }


def _run_distribute(snapshot: DepartmentSnapshot) -> dict[str, Any]:
    # No allocation records at all: fall back to the lecturers' stored hours.
    supplied = bool(snapshot.module_allocations or snapshot.admin_allocations)
    return optimize_workload_distribution(
        snapshot.lecturers,
        snapshot.module_iterations,
        existing_allocations=snapshot.module_allocations if supplied else None,
        policy=snapshot.policy,
        admin_allocations=snapshot.admin_allocations if supplied else None,
    ).as_dict()


def _run_balance(snapshot: DepartmentSnapshot) -> dict[str, Any]:
    return calculate_department_balance(
        snapshot.lecturers,
        snapshot.module_allocations,
        snapshot.admin_allocations,
        policy=snapshot.policy,
    ).as_dict()


_COMMANDS: dict[str, Callable[[DepartmentSnapshot], dict[str, Any]]] = {
    "validate": _run_validate,
    "distribute": _run_distribute,
    "balance": _run_balance,
}


def run_snapshot_command(command: str, snapshot_path: str, output_path: str) -> int:
    validation_report = ValidationReport()

    try:
        payload = read_json(snapshot_path)
    except (OSError, ValueError) as exc:
        error = build_error_report(
            [ValidationError(code="invalid_request", message=str(exc), path="$.snapshot")],
            code="request_read_error",
        )
        write_json(output_path, error)
        return 2

    payload = normalize_request(payload)
    errors = validate_command_request(payload, command)
    if errors:
        write_json(output_path, build_error_report(errors))
        return 2

    validation_report.extend(validate_snapshot(payload))
    snapshot = load_snapshot(payload, validation_report)

    if validation_report.errors:
        logger.info("snapshot rejected with %d errors", len(validation_report.errors))
        write_json(
            output_path,
            build_error_report_with_validation(
                validation_report.as_errors(),
                validation_report=validation_report,
                code="validation_error",
            ),
        )
        return 2

    try:
        result = _COMMANDS[command](snapshot)
    except WorkloadError as exc:
        logger.error("%s failed: %s", command, exc)
        write_json(
            output_path,
            build_error_report_with_validation(
                [ValidationError(code=type(exc).__name__, message=str(exc), path="$")],
                validation_report=validation_report,
                code="computation_error",
            ),
        )
        return 2

    metrics = collect_department_metrics(
        snapshot.lecturers,
        snapshot.module_allocations,
        snapshot.admin_allocations,
        snapshot.policy,
    )
    write_json(
        output_path,
        build_success_report(
            command,
            result,
            metrics,
            validation_report,
            effective_policy=snapshot.policy.as_dict(),
            academic_year=snapshot.academic_year,
        ),
    )
    return 0


def run_year_command(code: str | None) -> int:
    try:
        info = get_current_academic_year() if code is None else get_academic_year_info(code)
    except WorkloadError as exc:
        report = build_error_report(
            [ValidationError(code="invalid_academic_year", message=str(exc), path="$.code")],
            code="validation_error",
        )
        sys.stdout.write(json.dumps(report, indent=2, sort_keys=True) + "\n")
        return 2
    sys.stdout.write(json.dumps(info.as_dict(), indent=2, sort_keys=True) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="workload", description="Academic workload engine CLI")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level written to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    helps = {
        "validate": "Validate every lecturer and module in a snapshot",
        "distribute": "Distribute module iterations across lecturers",
        "balance": "Report department workload balance",
    }
    for name, text in helps.items():
        sub = subparsers.add_parser(name, help=text)
        sub.add_argument("--snapshot", required=True, help="Path to department snapshot JSON")
        sub.add_argument("--output", required=True, help="Path to report JSON")

    year_parser = subparsers.add_parser("year", help="Print academic year information")
    year_parser.add_argument("--code", help="Academic year code, e.g. 2024-25 (default: current)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command in _COMMANDS:
        return run_snapshot_command(args.command, args.snapshot, args.output)
    if args.command == "year":
        return run_year_command(args.code)

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
