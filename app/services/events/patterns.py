"""
Pattern cascade for analytics event extraction.

Each descriptor carries its own classification and capture-group layout, so
inserting or reordering patterns never reclassifies the others. Order still
matters for deduplication: earlier patterns win ties on the same line.
"""

import re
from dataclasses import dataclass

from app.services.events.types import Classification

_Q = "['\"`]"  # any JS quote
_NOT_Q = "[^'\"`]"


@dataclass(frozen=True)
class EventPattern:
    """A single tagged regex in the extraction cascade."""

    key: str
    regex: re.Pattern[str]
    classification: Classification
    name_group: int = 1
    # Group holding an object-literal fragment to parse as properties
    properties_group: int | None = None
    # Convert SCREAMING_CASE / snake_case names to camelCase
    normalize_name: bool = False


def _p(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


EVENT_PATTERNS: tuple[EventPattern, ...] = (
    # Track calls
    EventPattern(
        key="analytics_track_enum",
        regex=_p(r"Analytics\.track\s*\(\s*EventName\.(\w+)"),
        classification=Classification.TRACK,
    ),
    EventPattern(
        key="legacy_track_literal",
        regex=_p(rf"AnalyticsLegacy\.track\s*\(\s*{_Q}({_NOT_Q}+){_Q}"),
        classification=Classification.TRACK,
    ),
    EventPattern(
        key="analytics_track",
        regex=_p(rf"analytics\.track\s*\(\s*{_Q}({_NOT_Q}+){_Q}\s*,?\s*({{[^}}]*}})?"),
        classification=Classification.TRACK,
        properties_group=2,
    ),
    EventPattern(
        key="segment_track",
        regex=_p(rf"segment\.track\s*\(\s*{_Q}({_NOT_Q}+){_Q}\s*,?\s*({{[^}}]*}})?"),
        classification=Classification.TRACK,
        properties_group=2,
    ),
    EventPattern(
        key="bare_track",
        regex=_p(rf"(?:^|\s)track\s*\(\s*{_Q}({_NOT_Q}+){_Q}\s*,?\s*({{[^}}]*}})?"),
        classification=Classification.TRACK,
        properties_group=2,
    ),
    EventPattern(
        key="method_track",
        regex=_p(rf"\.track\s*\(\s*{_Q}({_NOT_Q}+){_Q}\s*,?\s*({{[\s\S]*?}})?"),
        classification=Classification.TRACK,
        properties_group=2,
    ),
    # Trait assignments
    EventPattern(
        key="trait_bracket",
        regex=_p(rf"traits\s*\[\s*{_Q}({_NOT_Q}+){_Q}\s*\]\s*="),
        classification=Classification.TRAIT,
    ),
    EventPattern(
        key="trait_dot",
        regex=_p(r"traits\.([a-zA-Z_$][a-zA-Z0-9_$]*)\s*="),
        classification=Classification.TRAIT,
    ),
    # Property assignments
    EventPattern(
        key="event_like_bracket_key",
        regex=_p(
            rf"{_Q}([a-zA-Z][a-zA-Z0-9_]*"
            rf"(?:Manager|Event|Action|Click|View|Submit|Complete|Start|End|Track)){_Q}\s*\]\s*="
        ),
        classification=Classification.PROPERTY,
    ),
    EventPattern(
        key="analytics_bracket",
        regex=_p(rf"analytics\s*\[\s*{_Q}({_NOT_Q}+){_Q}\s*\]\s*="),
        classification=Classification.PROPERTY,
    ),
    EventPattern(
        key="analytics_dot",
        regex=_p(r"analytics\.([a-zA-Z_$][a-zA-Z0-9_$]*)\s*="),
        classification=Classification.PROPERTY,
    ),
    # Constant references
    EventPattern(
        key="event_name_enum",
        regex=_p(r"EventName\.([A-Z_][A-Z0-9_]*)"),
        classification=Classification.CONSTANT,
        normalize_name=True,
    ),
    EventPattern(
        key="event_constant",
        regex=_p(r"EVENT_([A-Z_][A-Z0-9_]*)"),
        classification=Classification.CONSTANT,
        normalize_name=True,
    ),
    # Definitions with a string value: the value is the event name
    EventPattern(
        key="constant_definition",
        regex=_p(rf"([A-Z_][A-Z0-9_]*)\s*=\s*{_Q}({_NOT_Q}+){_Q}"),
        classification=Classification.CONSTANT,
        name_group=2,
    ),
    EventPattern(
        key="object_key_value",
        regex=_p(rf"(\w+)\s*:\s*{_Q}({_NOT_Q}+){_Q}"),
        classification=Classification.PROPERTY,
        name_group=2,
    ),
    # Third-party analytics libraries
    EventPattern(
        key="mixpanel_track",
        regex=_p(rf"mixpanel\.track\s*\(\s*{_Q}({_NOT_Q}+){_Q}"),
        classification=Classification.THIRD_PARTY,
    ),
    EventPattern(
        key="gtag_event",
        regex=_p(rf"gtag\s*\(\s*{_Q}event{_Q}\s*,\s*{_Q}({_NOT_Q}+){_Q}"),
        classification=Classification.THIRD_PARTY,
    ),
    EventPattern(
        key="ga_send_event",
        regex=_p(rf"ga\s*\(\s*{_Q}send{_Q}\s*,\s*{_Q}event{_Q}\s*,\s*{_Q}({_NOT_Q}+){_Q}"),
        classification=Classification.THIRD_PARTY,
    ),
)

# Quoted literals of 3+ characters, scanned before the cascade
QUOTED_LITERAL = re.compile(rf"{_Q}({_NOT_Q}{{3,}}?){_Q}")

EVENT_VOCABULARY = re.compile(
    r"\b(user|event|click|view|submit|complete|start|end|sent|received|"
    r"invitation|dialog|modal|analysis|selection)\b",
    re.IGNORECASE,
)
