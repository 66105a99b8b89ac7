"""Structural validation of user-supplied event definitions."""

from typing import Any

MAX_PROPERTY_NAME_LENGTH = 50


def validate_event(name: str, properties: dict[str, Any] | None) -> dict[str, Any]:
    """Return {"event", "valid", "errors", "warnings"} for one event."""
    errors: list[str] = []
    warnings: list[str] = []

    if not name or not name.strip():
        errors.append("Event name is required")

    for key, value in (properties or {}).items():
        if value is None:
            warnings.append(f'Property "{key}" has null/undefined value')
        elif isinstance(value, str) and not value.strip():
            warnings.append(f'Property "{key}" is an empty string')

        if len(key) > MAX_PROPERTY_NAME_LENGTH:
            warnings.append(f'Property "{key}" has a very long name ({len(key)} characters)')

    return {
        "event": name,
        "valid": not errors,
        "errors": errors,
        "warnings": warnings,
    }
