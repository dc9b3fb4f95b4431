from __future__ import annotations

import json
import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from workload.engine import calculate_department_balance, optimize_workload_distribution
from workload.metrics import collect_department_metrics
from workload.normalization import load_snapshot
from workload.validation import validate_snapshot

OUT_DIR = ROOT / "results" / "department_snapshot"
SNAPSHOT_OUT = OUT_DIR / "snapshot.json"
REPORT_OUT = OUT_DIR / "checks.json"

_FAMILIES = ("Teaching Academic", "Research Academic", "Academic Practitioner")
_SEMESTERS = ("autumn", "spring", "summer")


def build_department_snapshot(
    *,
    seed: int = 7,
    lecturer_count: int = 8,
    module_count: int = 12,
    academic_year: str = "2025-26",
) -> dict:
    """Return a plausible department snapshot as a JSON-ready payload."""
    rng = random.Random(seed)
    lecturers = []
    for idx in range(lecturer_count):
        fte = rng.choice((0.5, 0.8, 1.0, 1.0, 1.0))
        contract = round(1650 * fte)
        lecturers.append(
            {
                "id": f"lec-{idx + 1:02d}",
                "full_name": f"Lecturer {idx + 1}",
                "fte": fte,
                "total_contract": contract,
                "max_teaching_hours": round(contract * 0.6),
                "family": rng.choice(_FAMILIES),
            }
        )

    modules = []
    iterations = []
    for idx in range(module_count):
        credits = rng.choice((15, 15, 30, 30, 60))
        teaching = credits * rng.choice((3, 4, 5))
        marking = round(teaching * rng.choice((0.1, 0.2, 0.25)))
        module_id = f"mod-{idx + 1:02d}"
        modules.append(
            {
                "id": module_id,
                "code": f"CS{4 + idx % 4}{idx + 1:02d}",
                "title": f"Module {idx + 1}",
                "credits": credits,
                "level": 4 + idx % 4,
                "default_teaching_hours": teaching,
                "default_marking_hours": marking,
            }
        )
        iterations.append(
            {
                "id": f"it-{idx + 1:02d}",
                "module_id": module_id,
                "semester": _SEMESTERS[idx % 2],
                "academic_year": academic_year,
                "hours": {"teaching": teaching, "marking": marking, "cpd": 0, "leadership": 0},
            }
        )

    admin_allocations = [
        {
            "id": f"adm-{idx + 1:02d}",
            "lecturer_id": lecturer["id"],
            "hours": round(lecturer["total_contract"] * rng.choice((0.05, 0.1, 0.15))),
            "category": rng.choice(("admin", "leadership", "research")),
        }
        for idx, lecturer in enumerate(lecturers)
    ]

    return {
        "schema_version": "1.0",
        "academic_year": academic_year,
        "lecturers": lecturers,
        "modules": modules,
        "module_iterations": iterations,
        "module_allocations": [],
        "admin_allocations": admin_allocations,
    }


def evaluate_checks(optimization: dict, lecturer_ids: list[str], iteration_ids: list[str]) -> dict:
    distribution = optimization["distribution"]
    assigned = [item for result in distribution for item in result["assigned_iteration_ids"]]
    checks = {
        "one_result_per_lecturer": [item["lecturer_id"] for item in distribution] == lecturer_ids,
        "every_iteration_assigned_once": sorted(assigned) == sorted(iteration_ids),
        "balance_score_in_range": 0.0 <= optimization["balance_score"] <= 1.0,
        "no_overflow": all(item["priority"] != "low" for item in optimization["suggestions"]),
    }
    return {
        "checks": checks,
        "status": "pass" if all(checks.values()) else "fail",
    }


def run_snapshot(payload: dict) -> dict:
    report = validate_snapshot(payload)
    snapshot = load_snapshot(payload, report)
    if report.errors:
        return {"status": "fail", "validation_report": report.as_dict()}

    optimization = optimize_workload_distribution(
        snapshot.lecturers, snapshot.module_iterations, policy=snapshot.policy
    ).as_dict()
    balance = calculate_department_balance(
        snapshot.lecturers, snapshot.module_allocations, snapshot.admin_allocations, snapshot.policy
    ).as_dict()
    metrics = collect_department_metrics(
        snapshot.lecturers, snapshot.module_allocations, snapshot.admin_allocations, snapshot.policy
    )
    evaluation = evaluate_checks(
        optimization,
        [item.id for item in snapshot.lecturers],
        [item.id for item in snapshot.module_iterations],
    )
    return {
        "status": evaluation["status"],
        "checks": evaluation["checks"],
        "total_utilization": round(optimization["total_utilization"], 4),
        "balance_score": round(optimization["balance_score"], 4),
        "balance_before_distribution": balance,
        "metrics": metrics,
        "validation_report": report.as_dict(),
    }


def main() -> None:
    payload = build_department_snapshot()
    result = run_snapshot(payload)

    OUT_DIR.mkdir(parents=True, exist_ok=True)
    SNAPSHOT_OUT.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    REPORT_OUT.write_text(json.dumps(result, indent=2), encoding="utf-8")
    print(f"Wrote {SNAPSHOT_OUT}")
    print(f"Wrote {REPORT_OUT}")

    if result["status"] != "pass":
        raise SystemExit(1)


if __name__ == "__main__":
    main()
