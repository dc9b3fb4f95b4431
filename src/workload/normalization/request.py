"""Normalization for incoming snapshot payloads."""

from __future__ import annotations

from typing import Any

_COLLECTION_ALIASES = {
    "moduleIterations": "module_iterations",
    "moduleAllocations": "module_allocations",
    "adminAllocations": "admin_allocations",
    "academicYear": "academic_year",
}


def normalize_request(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a normalized copy of input request."""
    normalized = dict(payload)
    if "schema_version" not in normalized:
        normalized["schema_version"] = "1.0"
    for alias, key in _COLLECTION_ALIASES.items():
        if alias in normalized and key not in normalized:
            normalized[key] = normalized.pop(alias)
    return normalized
