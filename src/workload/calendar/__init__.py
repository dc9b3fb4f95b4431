"""Academic calendar."""

from .academic_year import (
    SEMESTERS,
    TEACHING_WEEKS_PER_SEMESTER,
    TEACHING_WEEKS_PER_YEAR,
    AcademicYearInfo,
    SemesterRange,
    academic_year_code_for_date,
    format_academic_year,
    get_academic_year_info,
    get_current_academic_year,
    get_semester_for_date,
    get_teaching_weeks_for_semester,
    is_valid_academic_year,
)

__all__ = [
    "SEMESTERS",
    "TEACHING_WEEKS_PER_SEMESTER",
    "TEACHING_WEEKS_PER_YEAR",
    "AcademicYearInfo",
    "SemesterRange",
    "academic_year_code_for_date",
    "format_academic_year",
    "get_academic_year_info",
    "get_current_academic_year",
    "get_semester_for_date",
    "get_teaching_weeks_for_semester",
    "is_valid_academic_year",
]
