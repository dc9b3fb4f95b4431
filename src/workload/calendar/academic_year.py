"""Academic year codes, date ranges and semester lookup.

An academic year ``"YYYY-YY"`` runs from 1 September of the first year to
31 August of the second, split into three semesters:
- autumn: 1 Sep - 31 Dec
- spring: 1 Jan - 30 Apr
- summer: 1 May - 31 Aug
Each semester has a fixed 12 teaching weeks.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Literal

from workload.exceptions import InvalidArgument, InvalidFormat

Semester = Literal["autumn", "spring", "summer"]

SEMESTERS: tuple[Semester, ...] = ("autumn", "spring", "summer")
YEAR_START_MONTH = 9
TEACHING_WEEKS_PER_SEMESTER = 12
TEACHING_WEEKS_PER_YEAR = TEACHING_WEEKS_PER_SEMESTER * len(SEMESTERS)

_YEAR_CODE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, slots=True)
class SemesterRange:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True, slots=True)
class AcademicYearInfo:
    year: str
    start_date: date
    end_date: date
    semesters: dict[str, SemesterRange]
    weeks: int
    teaching_weeks: int = TEACHING_WEEKS_PER_YEAR

    def as_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "semesters": {
                name: {"start": rng.start.isoformat(), "end": rng.end.isoformat()}
                for name, rng in self.semesters.items()
            },
            "weeks": self.weeks,
            "teaching_weeks": self.teaching_weeks,
        }


def _to_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise InvalidFormat(f"Invalid date: {value!r}") from exc


def is_valid_academic_year(code: Any) -> bool:
    """``"YYYY-YY"`` where the suffix is the year after the start, modulo 100."""
    if not isinstance(code, str):
        return False
    match = _YEAR_CODE.match(code)
    if match is None:
        return False
    start, suffix = int(match.group(1)), int(match.group(2))
    return suffix == (start + 1) % 100


def _start_year(code: str) -> int:
    if not is_valid_academic_year(code):
        raise InvalidFormat(f"Invalid academic year format: {code!r}")
    return int(code[:4])


def format_academic_year(code: str) -> str:
    return f"Academic Year {code}"


def academic_year_code_for_date(day: str | date) -> str:
    target = _to_date(day)
    start = target.year if target.month >= YEAR_START_MONTH else target.year - 1
    return f"{start}-{(start + 1) % 100:02d}"


def get_academic_year_info(code: str) -> AcademicYearInfo:
    start_year = _start_year(code)
    start_date = date(start_year, YEAR_START_MONTH, 1)
    end_date = date(start_year + 1, YEAR_START_MONTH, 1) - timedelta(days=1)

    semesters = {
        "autumn": SemesterRange(start_date, date(start_year, 12, 31)),
        "spring": SemesterRange(date(start_year + 1, 1, 1), date(start_year + 1, 4, 30)),
        "summer": SemesterRange(date(start_year + 1, 5, 1), end_date),
    }

    return AcademicYearInfo(
        year=code,
        start_date=start_date,
        end_date=end_date,
        semesters=semesters,
        weeks=math.ceil((end_date - start_date).days / 7),
    )


def get_current_academic_year(reference_date: str | date | None = None) -> AcademicYearInfo:
    reference = date.today() if reference_date is None else _to_date(reference_date)
    return get_academic_year_info(academic_year_code_for_date(reference))


def get_teaching_weeks_for_semester(semester: str, code: str) -> int:
    _start_year(code)
    if semester not in SEMESTERS:
        raise InvalidArgument(f"Invalid semester: {semester!r}")
    return TEACHING_WEEKS_PER_SEMESTER


def get_semester_for_date(day: str | date, code: str | None = None) -> Semester | None:
    """Return the semester containing ``day``, or None outside the academic year.

    Without ``code`` the academic year containing ``day`` is used.
    """
    target = _to_date(day)
    info = get_academic_year_info(code) if code is not None else get_current_academic_year(target)
    if not info.start_date <= target <= info.end_date:
        return None
    for name in SEMESTERS:
        if info.semesters[name].contains(target):
            return name
    return None
