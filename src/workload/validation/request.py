"""Validation for command snapshot payloads."""

from __future__ import annotations

from typing import Any

from .errors import ValidationError

_REQUIRED_COLLECTIONS: dict[str, tuple[str, ...]] = {
    "validate": ("lecturers",),
    "distribute": ("lecturers", "module_iterations"),
    "balance": ("lecturers",),
}


def validate_command_request(payload: dict[str, Any], command: str) -> list[ValidationError]:
    """Validate the top-level shape of a snapshot for ``command``."""
    errors: list[ValidationError] = []

    required = _REQUIRED_COLLECTIONS.get(command)
    if required is None:
        errors.append(
            ValidationError(
                code="unknown_command",
                message=f"Unknown command: {command}",
                path="$",
            )
        )
        return errors

    for field in required:
        value = payload.get(field)
        if value is None:
            errors.append(
                ValidationError(
                    code="missing_field",
                    message=f"Missing required field: {field}",
                    path=f"$.{field}",
                )
            )
        elif not isinstance(value, list):
            errors.append(
                ValidationError(
                    code="invalid_type",
                    message=f"Field must be a list of records: {field}",
                    path=f"$.{field}",
                )
            )

    policy = payload.get("policy")
    if policy is not None and not isinstance(policy, dict):
        errors.append(
            ValidationError(
                code="invalid_type",
                message="Field must be an object: policy",
                path="$.policy",
            )
        )

    return errors
