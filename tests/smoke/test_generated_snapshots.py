from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

from workload.cli import run_snapshot_command

MODULE_PATH = Path(__file__).resolve().parents[2] / "scripts" / "generate_department_snapshot.py"
_SPEC = importlib.util.spec_from_file_location("generate_department_snapshot", MODULE_PATH)
assert _SPEC and _SPEC.loader
_generator = importlib.util.module_from_spec(_SPEC)
_SPEC.loader.exec_module(_generator)


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_generated_department_passes_checks(seed: int) -> None:
    payload = _generator.build_department_snapshot(seed=seed)
    result = _generator.run_snapshot(payload)
    assert result["status"] == "pass", result["checks"]
    assert result["validation_report"]["errors"] == []


@pytest.mark.parametrize("command", ["validate", "distribute", "balance"])
def test_cli_commands_on_generated_department(tmp_path: Path, command: str) -> None:
    snapshot = tmp_path / "snapshot.json"
    output = tmp_path / f"{command}.json"
    snapshot.write_text(json.dumps(_generator.build_department_snapshot(seed=11)), encoding="utf-8")

    assert run_snapshot_command(command, str(snapshot), str(output)) == 0
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["status"] == "ok"
    assert report["metrics"]["headcount"] == 8
