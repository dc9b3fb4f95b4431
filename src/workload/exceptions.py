"""Hard failures: inputs that make a workload computation meaningless.

These propagate to the caller. Policy violations are never raised; see
``workload.validation.errors.WorkloadValidationResult``.
"""


class WorkloadError(Exception):
    """Base class for workload engine failures."""


class DivisionError(WorkloadError, ZeroDivisionError):
    """A denominator that must be positive was zero or negative."""


class InvalidArgument(WorkloadError, ValueError):
    """An argument is outside the domain of the computation."""


class InvalidFormat(WorkloadError, ValueError):
    """A coded value (e.g. an academic year) is malformed."""
