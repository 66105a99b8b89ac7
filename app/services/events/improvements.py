"""Rename and property suggestions for user-supplied events."""

import re
from typing import Any

from app.services.events.analyzer import TITLE_CASE_NAME

STANDARD_PROPERTIES = ("userId", "timestamp", "source")

_WORD_SPLIT = re.compile(r"[\s_-]+")
_SNAKE_SEGMENT = re.compile(r"_([a-z])")


def to_title_case(name: str) -> str:
    """user_signed-up -> User Signed Up."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in _WORD_SPLIT.split(name))


def snake_to_camel(key: str) -> str:
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), key)


def suggest_improvements(name: str, properties: dict[str, Any] | None) -> dict[str, Any]:
    """
    Suggest a conforming name and property set for one event.

    Returns:
        {"event", "suggestions", "improved_name", "improved_properties"}
    """
    properties = properties or {}
    suggestions: list[str] = []
    improved_name = name
    improved_properties = dict(properties)

    if not TITLE_CASE_NAME.match(name):
        improved_name = to_title_case(name)
        suggestions.append(f'Rename to: "{improved_name}"')

    keys = list(properties)
    if not keys:
        suggestions.append(
            "Consider adding contextual properties like userId, timestamp, "
            "or relevant business metrics"
        )

    snake_case = [k for k in keys if "_" in k]
    if snake_case:
        for key in snake_case:
            value = improved_properties.pop(key)
            improved_properties[snake_to_camel(key)] = value
        suggestions.append(f"Convert to camelCase: {', '.join(snake_case)}")

    missing = [
        prop
        for prop in STANDARD_PROPERTIES
        if not any(prop.lower() in k.lower() for k in keys)
    ]
    if missing:
        suggestions.append(f"Consider adding: {', '.join(missing)}")

    return {
        "event": name,
        "suggestions": suggestions,
        "improved_name": improved_name,
        "improved_properties": improved_properties,
    }
