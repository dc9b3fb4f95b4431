"""Build typed department snapshots from JSON payloads."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from workload.exceptions import InvalidArgument
from workload.models import AdminAllocation, Lecturer, Module, ModuleAllocation, ModuleIteration
from workload.policy import DEFAULT_WORKLOAD_POLICY, WorkloadPolicy
from workload.validation.errors import ValidationReport

from .policy_resolver import resolve_policy

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class DepartmentSnapshot:
    """Fully loaded, immutable input to one engine run."""

    lecturers: tuple[Lecturer, ...] = ()
    modules: tuple[Module, ...] = ()
    module_iterations: tuple[ModuleIteration, ...] = ()
    module_allocations: tuple[ModuleAllocation, ...] = ()
    admin_allocations: tuple[AdminAllocation, ...] = ()
    policy: WorkloadPolicy = DEFAULT_WORKLOAD_POLICY
    academic_year: str | None = None
    _module_allocations_by_lecturer: dict[str, list[ModuleAllocation]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _admin_allocations_by_lecturer: dict[str, list[AdminAllocation]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_lecturer: dict[str, list[ModuleAllocation]] = defaultdict(list)
        for allocation in self.module_allocations:
            by_lecturer[allocation.lecturer_id].append(allocation)
        admin_by_lecturer: dict[str, list[AdminAllocation]] = defaultdict(list)
        for admin_allocation in self.admin_allocations:
            admin_by_lecturer[admin_allocation.lecturer_id].append(admin_allocation)
        self._module_allocations_by_lecturer.update(by_lecturer)
        self._admin_allocations_by_lecturer.update(admin_by_lecturer)

    def lecturer(self, lecturer_id: str) -> Lecturer | None:
        return next((item for item in self.lecturers if item.id == lecturer_id), None)

    def module_allocations_for(self, lecturer_id: str) -> list[ModuleAllocation]:
        return list(self._module_allocations_by_lecturer.get(lecturer_id, []))

    def admin_allocations_for(self, lecturer_id: str) -> list[AdminAllocation]:
        return list(self._admin_allocations_by_lecturer.get(lecturer_id, []))


def _load_collection(
    payload: dict[str, Any],
    key: str,
    factory: Callable[[dict[str, Any]], T],
    report: ValidationReport,
) -> tuple[T, ...]:
    items = payload.get(key) or []
    if not isinstance(items, list):
        return ()
    loaded: list[T] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            continue
        try:
            loaded.append(factory(item))
        except InvalidArgument as exc:
            report.add_error(
                code="INVALID_RECORD",
                message=str(exc),
                field_path=f"$.{key}[{idx}]",
            )
    return tuple(loaded)


def load_snapshot(payload: dict[str, Any], validation_report: ValidationReport) -> DepartmentSnapshot:
    """Convert raw records to typed records, reporting the ones that fail.

    Records rejected by their constructors are left out of the snapshot and
    recorded as ``INVALID_RECORD`` errors.
    """
    snapshot = DepartmentSnapshot(
        lecturers=_load_collection(payload, "lecturers", Lecturer.from_record, validation_report),
        modules=_load_collection(payload, "modules", Module.from_record, validation_report),
        module_iterations=_load_collection(
            payload, "module_iterations", ModuleIteration.from_record, validation_report
        ),
        module_allocations=_load_collection(
            payload, "module_allocations", ModuleAllocation.from_record, validation_report
        ),
        admin_allocations=_load_collection(
            payload, "admin_allocations", AdminAllocation.from_record, validation_report
        ),
        policy=resolve_policy(payload.get("policy"), validation_report),
        academic_year=payload.get("academic_year"),
    )
    logger.info(
        "loaded snapshot: %d lecturers, %d iterations, %d module allocations, %d admin allocations",
        len(snapshot.lecturers),
        len(snapshot.module_iterations),
        len(snapshot.module_allocations),
        len(snapshot.admin_allocations),
    )
    return snapshot
