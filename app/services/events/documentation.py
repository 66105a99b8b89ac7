"""
Markdown tracking-plan documentation.

Property types and descriptions are inferred from the example values and key
names; every documented property is marked required.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any


@dataclass
class PropertyDoc:
    name: str
    type: str
    example: Any
    description: str
    required: bool = True


@dataclass
class EventDoc:
    name: str
    description: str
    properties: list[PropertyDoc] = field(default_factory=list)


def property_type(value: Any) -> str:
    """JSON-flavoured type name for an example value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _strip_suffix(key: str, suffix: str) -> str:
    return re.sub(rf"{suffix}$", "", key, flags=re.IGNORECASE).lower()


def describe_property(key: str, value: Any) -> str:
    lower = key.lower()

    if "id" in lower:
        return f"Unique identifier for {_strip_suffix(key, 'id')}"
    if "time" in lower or "date" in lower:
        return "Timestamp of the event"
    if "count" in lower or "number" in lower:
        return f"Number of {_strip_suffix(key, 'count')}"
    if "email" in lower:
        return "Email address"
    if "name" in lower:
        return f"Name of the {_strip_suffix(key, 'name')}"
    if isinstance(value, bool):
        return f"Whether {key} is true or false"

    return f"{key} property"


def build_event_doc(
    name: str, properties: dict[str, Any] | None, description: str | None = None
) -> EventDoc:
    return EventDoc(
        name=name,
        description=description or f"Tracks when {name.lower()} occurs",
        properties=[
            PropertyDoc(
                name=key,
                type=property_type(value),
                example=value,
                description=describe_property(key, value),
            )
            for key, value in (properties or {}).items()
        ],
    )


def _format_example(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    return json.dumps(value)


def render_markdown(owner: str, repo: str, events: list[EventDoc]) -> str:
    """Render the documentation for a repository's events."""
    lines = [
        "# Analytics Events Documentation",
        "",
        f"Repository: `{owner}/{repo}`",
        "",
        "This documentation was auto-generated from your codebase.",
        "",
    ]

    for event in events:
        lines += [f"## {event.name}", "", event.description, ""]

        if event.properties:
            lines += [
                "### Properties",
                "",
                "| Property | Type | Required | Description | Example |",
                "|----------|------|----------|-------------|---------|",
            ]
            for prop in event.properties:
                required = "✓" if prop.required else "○"
                lines.append(
                    f"| `{prop.name}` | {prop.type} | {required} | "
                    f"{prop.description} | `{_format_example(prop.example)}` |"
                )
        else:
            lines.append("*No properties defined for this event.*")

        lines += ["", "---", ""]

    return "\n".join(lines)
