"""Validation helpers."""

from workload.exceptions import DivisionError, InvalidArgument, InvalidFormat, WorkloadError

from .errors import ValidationError, ValidationIssue, ValidationReport, WorkloadValidationResult
from .request import validate_command_request
from .snapshot_validator import validate_snapshot
from .workload_validator import (
    validate_hour_breakdown,
    validate_lecturer_workload,
    validate_module,
    validate_module_allocation,
)

__all__ = [
    "DivisionError",
    "InvalidArgument",
    "InvalidFormat",
    "ValidationError",
    "ValidationIssue",
    "ValidationReport",
    "WorkloadError",
    "WorkloadValidationResult",
    "validate_command_request",
    "validate_hour_breakdown",
    "validate_lecturer_workload",
    "validate_module",
    "validate_module_allocation",
    "validate_snapshot",
]
