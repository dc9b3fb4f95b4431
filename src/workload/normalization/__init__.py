"""Input normalization."""

from .policy_resolver import resolve_policy
from .request import normalize_request
from .snapshot import DepartmentSnapshot, load_snapshot

__all__ = ["DepartmentSnapshot", "load_snapshot", "normalize_request", "resolve_policy"]
