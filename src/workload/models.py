"""Immutable snapshot records consumed by the workload engine.

Records validate their own structural invariants at construction and raise
``InvalidArgument``. Derived lecturer figures (total allocated, capacity,
availabilities) are always computed from the hour primitives, never stored.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from workload.calculator.hours import (
    admin_availability,
    capacity,
    teaching_availability,
    total_allocated,
)
from workload.exceptions import InvalidArgument

ADMIN_CATEGORIES = ("leadership", "research", "admin", "other")
LECTURER_STATUSES = ("active", "inactive")
MAX_FTE = 2.0
ADMIN_CEILING_RATIO = 0.4


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidArgument(f"{name} must be finite, got {value!r}")
    return value


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _required(record: Mapping[str, Any], *keys: str) -> Any:
    value = _pick(record, *keys)
    if value is None:
        raise InvalidArgument(f"Missing required field: {keys[0]}")
    return value


def _string_list(value: Any, name: str) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise InvalidArgument(f"{name} must be a list of strings, got {value!r}")
    return tuple(value)


@dataclass(frozen=True, slots=True)
class HourBreakdown:
    """Teaching/marking/CPD/leadership split of a module delivery."""

    teaching: float = 0
    marking: float = 0
    cpd: float = 0
    leadership: float = 0

    def __post_init__(self) -> None:
        for name in ("teaching", "marking", "cpd", "leadership"):
            _number(getattr(self, name), name)

    @property
    def total(self) -> float:
        return self.teaching + self.marking + self.cpd + self.leadership

    def __add__(self, other: "HourBreakdown") -> "HourBreakdown":
        if not isinstance(other, HourBreakdown):
            return NotImplemented
        return HourBreakdown(
            teaching=self.teaching + other.teaching,
            marking=self.marking + other.marking,
            cpd=self.cpd + other.cpd,
            leadership=self.leadership + other.leadership,
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "teaching": self.teaching,
            "marking": self.marking,
            "cpd": self.cpd,
            "leadership": self.leadership,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None) -> "HourBreakdown":
        record = record or {}
        if not isinstance(record, Mapping):
            raise InvalidArgument(f"hours must be an object, got {record!r}")
        return cls(
            teaching=record.get("teaching", 0) or 0,
            marking=record.get("marking", 0) or 0,
            cpd=record.get("cpd", 0) or 0,
            leadership=record.get("leadership", 0) or 0,
        )


@dataclass(frozen=True, slots=True)
class Lecturer:
    id: str
    fte: float
    total_contract: float
    max_teaching_hours: float
    full_name: str = ""
    allocated_teaching_hours: float = 0
    allocated_admin_hours: float = 0
    allocated_research_hours: float = 0
    allocated_other_hours: float = 0
    team: str | None = None
    specialism: str | None = None
    role: str | None = None
    family: str | None = None
    status: str = "active"

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidArgument("Lecturer id is required")
        fte = _number(self.fte, "fte")
        if not 0 < fte <= MAX_FTE:
            raise InvalidArgument(f"fte must be in (0, {MAX_FTE}], got {fte}")
        contract = _number(self.total_contract, "total_contract")
        if contract < 0:
            raise InvalidArgument(f"total_contract must be >= 0, got {contract}")
        max_teaching = _number(self.max_teaching_hours, "max_teaching_hours")
        if not 0 <= max_teaching <= contract:
            raise InvalidArgument(
                f"max_teaching_hours must be within [0, total_contract], got {max_teaching}"
            )
        for name in (
            "allocated_teaching_hours",
            "allocated_admin_hours",
            "allocated_research_hours",
            "allocated_other_hours",
        ):
            _number(getattr(self, name), name)
        if self.status not in LECTURER_STATUSES:
            raise InvalidArgument(f"Unknown lecturer status: {self.status!r}")

    @property
    def total_allocated(self) -> float:
        return total_allocated(
            self.allocated_teaching_hours,
            self.allocated_admin_hours,
            self.allocated_research_hours,
            self.allocated_other_hours,
        )

    @property
    def capacity(self) -> float:
        return capacity(self.total_contract, self.total_allocated)

    @property
    def teaching_availability(self) -> float:
        return teaching_availability(self.max_teaching_hours, self.allocated_teaching_hours)

    @property
    def max_admin_hours(self) -> float:
        return self.total_contract * ADMIN_CEILING_RATIO

    @property
    def admin_availability(self) -> float:
        return admin_availability(self.max_admin_hours, self.allocated_admin_hours)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Lecturer":
        return cls(
            id=str(_required(record, "id", "_id")),
            full_name=str(_pick(record, "full_name", "fullName", default="")),
            fte=_required(record, "fte"),
            total_contract=_required(record, "total_contract", "totalContract"),
            max_teaching_hours=_required(record, "max_teaching_hours", "maxTeachingHours"),
            allocated_teaching_hours=_pick(
                record, "allocated_teaching_hours", "allocatedTeachingHours", default=0
            ),
            allocated_admin_hours=_pick(record, "allocated_admin_hours", "allocatedAdminHours", default=0),
            allocated_research_hours=_pick(
                record, "allocated_research_hours", "allocatedResearchHours", default=0
            ),
            allocated_other_hours=_pick(record, "allocated_other_hours", "allocatedOtherHours", default=0),
            team=_pick(record, "team"),
            specialism=_pick(record, "specialism"),
            role=_pick(record, "role"),
            family=_pick(record, "family"),
            status=str(_pick(record, "status", default="active")),
        )


@dataclass(frozen=True, slots=True)
class Module:
    id: str
    code: str
    title: str
    credits: float
    level: int
    default_teaching_hours: float = 0
    default_marking_hours: float = 0
    module_leader: str | None = None

    def __post_init__(self) -> None:
        credits = _number(self.credits, "credits")
        if credits <= 0:
            raise InvalidArgument(f"credits must be > 0, got {credits}")
        _number(self.level, "level")
        _number(self.default_teaching_hours, "default_teaching_hours")
        _number(self.default_marking_hours, "default_marking_hours")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Module":
        return cls(
            id=str(_required(record, "id", "_id")),
            code=str(_pick(record, "code", default="")),
            title=str(_pick(record, "title", default="")),
            credits=_required(record, "credits"),
            level=_required(record, "level"),
            default_teaching_hours=_pick(record, "default_teaching_hours", "defaultTeachingHours", default=0),
            default_marking_hours=_pick(record, "default_marking_hours", "defaultMarkingHours", default=0),
            module_leader=_pick(record, "module_leader", "moduleLeader"),
        )


@dataclass(frozen=True, slots=True)
class ModuleIteration:
    id: str
    module_id: str
    semester: str
    hours: HourBreakdown = field(default_factory=HourBreakdown)
    academic_year: str | None = None
    cohort_id: str | None = None
    sites: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ModuleIteration":
        return cls(
            id=str(_required(record, "id", "_id")),
            module_id=str(_required(record, "module_id", "moduleId")),
            semester=str(_pick(record, "semester", default="autumn")),
            hours=HourBreakdown.from_record(_pick(record, "hours")),
            academic_year=_pick(record, "academic_year", "academicYear"),
            cohort_id=_pick(record, "cohort_id", "cohortId"),
            sites=_string_list(_pick(record, "sites", default=()), "sites"),
        )


@dataclass(frozen=True, slots=True)
class ModuleAllocation:
    id: str
    module_iteration_id: str
    lecturer_id: str
    hours: HourBreakdown = field(default_factory=HourBreakdown)
    group: str | None = None
    site: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ModuleAllocation":
        return cls(
            id=str(_required(record, "id", "_id")),
            module_iteration_id=str(_required(record, "module_iteration_id", "moduleIterationId")),
            lecturer_id=str(_required(record, "lecturer_id", "lecturerId")),
            hours=HourBreakdown.from_record(_pick(record, "hours")),
            group=_pick(record, "group"),
            site=_pick(record, "site"),
        )


@dataclass(frozen=True, slots=True)
class AdminAllocation:
    id: str
    lecturer_id: str
    hours: float
    category: str = "admin"
    description: str = ""
    academic_year: str | None = None

    def __post_init__(self) -> None:
        _number(self.hours, "hours")
        if self.category not in ADMIN_CATEGORIES:
            raise InvalidArgument(f"Unknown admin category: {self.category!r}")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AdminAllocation":
        return cls(
            id=str(_required(record, "id", "_id")),
            lecturer_id=str(_required(record, "lecturer_id", "lecturerId")),
            hours=_pick(record, "hours", default=0),
            category=str(_pick(record, "category", default="admin")),
            description=str(_pick(record, "description", default="")),
            academic_year=_pick(record, "academic_year", "academicYear"),
        )
