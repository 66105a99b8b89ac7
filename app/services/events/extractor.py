"""
Analytics event extraction from source text.

A best-effort textual scanner, not a parser. Each file goes through two
passes, then deduplication:

1. Exact-quote pass: quoted literals that read like human event names
   ("Invitation Sent", "checkout:complete") become exact_match candidates.
2. Pattern cascade: the ordered EVENT_PATTERNS descriptors (track calls,
   traits, property assignments, constants, third-party libraries).
3. Deduplication per source line, where a quoted literal outranks the
   cascade's interpretation of the same line.
"""

import logging
import re
from collections import defaultdict

from app.services.events.patterns import (
    EVENT_PATTERNS,
    EVENT_VOCABULARY,
    QUOTED_LITERAL,
    EventPattern,
)
from app.services.events.property_parser import parse_event_properties
from app.services.events.types import (
    ANALYTICS_TYPE_KEY,
    CONTEXT_KEY,
    EXACT_MATCH_KEY,
    FILE_TYPE_KEY,
    PARSING_ERROR_KEY,
    Classification,
    EventCandidate,
    EventLocation,
)

logger = logging.getLogger(__name__)

_FUNCTION_DECL = re.compile(r"function\s+(\w+)|(\w+)\s*[:=]\s*function|(\w+)\s*\(")
_CLASS_DECL = re.compile(r"class\s+(\w+)")
_SNAKE_SEGMENT = re.compile(r"_([a-z])")

# First match wins, checked against the full path
FILE_TYPE_MARKERS: tuple[str, ...] = (
    "analytics",
    "tracking",
    "events",
    "service",
    "component",
    "page",
    "test",
)


def get_file_type(filename: str) -> str:
    """Coarse file-type tag from path substrings, falling back to the extension."""
    for marker in FILE_TYPE_MARKERS:
        if marker in filename:
            return marker
    basename = filename.rsplit("/", 1)[-1]
    if "." in basename:
        return basename.rsplit(".", 1)[-1].lower() or "unknown"
    return "unknown"


def get_context_info(lines: list[str], line_index: int, filename: str) -> str:
    """
    Describe the surroundings of a match as comma-separated tags.

    Tags: in_function / in_class (nearest enclosing-looking declaration above),
    in_switch_case, conditional, analytics_file. Returns "direct" if none apply.
    """
    context: list[str] = []
    line = lines[line_index]
    previous = lines[line_index - 1] if line_index > 0 else ""

    for i in range(line_index - 1, -1, -1):
        prev_line = lines[i].strip()
        if _FUNCTION_DECL.search(prev_line):
            context.append("in_function")
            break
        if _CLASS_DECL.search(prev_line):
            context.append("in_class")
            break

    if "case " in line or "case " in previous:
        context.append("in_switch_case")

    if "if (" in line or "if(" in line or "if " in previous:
        context.append("conditional")

    if "analytics" in filename:
        context.append("analytics_file")

    return ",".join(context) or "direct"


def to_camel_case(name: str) -> str:
    """USER_SIGNED_UP / user_signed_up -> userSignedUp."""
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), name.lower())


def is_event_like_literal(literal: str) -> bool:
    """Whether a quoted literal reads like a human-facing event name."""
    return " " in literal or ":" in literal or EVENT_VOCABULARY.search(literal) is not None


def _exact_literal_candidates(
    lines: list[str], filename: str, file_type: str
) -> list[EventCandidate]:
    candidates: list[EventCandidate] = []
    for index, line in enumerate(lines):
        for match in QUOTED_LITERAL.finditer(line):
            literal = match.group(1)
            if not is_event_like_literal(literal):
                continue
            candidates.append(
                EventCandidate(
                    name=literal,
                    properties={
                        ANALYTICS_TYPE_KEY: Classification.EXACT_MATCH.value,
                        CONTEXT_KEY: "direct",
                        FILE_TYPE_KEY: file_type,
                    },
                    location=EventLocation(file=filename, line=index + 1),
                )
            )
    return candidates


def _candidate_from_match(
    pattern: EventPattern,
    match: re.Match[str],
    lines: list[str],
    index: int,
    filename: str,
    file_type: str,
) -> EventCandidate | None:
    name = match.group(pattern.name_group)
    if not name:
        return None

    properties: dict = {}
    if pattern.properties_group is not None and pattern.classification is not Classification.CONSTANT:
        properties = parse_event_properties(match.group(pattern.properties_group))

    if pattern.normalize_name and "_" in name:
        name = to_camel_case(name)

    return EventCandidate(
        name=name,
        properties={
            **properties,
            ANALYTICS_TYPE_KEY: pattern.classification.value,
            CONTEXT_KEY: get_context_info(lines, index, filename),
            FILE_TYPE_KEY: file_type,
        },
        location=EventLocation(file=filename, line=index + 1),
    )


def _cascade_candidates(lines: list[str], filename: str, file_type: str) -> list[EventCandidate]:
    candidates: list[EventCandidate] = []
    for index, line in enumerate(lines):
        for pattern in EVENT_PATTERNS:
            for match in pattern.regex.finditer(line):
                raw_name = match.group(pattern.name_group)
                try:
                    candidate = _candidate_from_match(
                        pattern, match, lines, index, filename, file_type
                    )
                except Exception as e:
                    logger.warning(
                        f"Failed to parse event {raw_name!r} at {filename}:{index + 1}: {e}"
                    )
                    if raw_name:
                        candidates.append(
                            EventCandidate(
                                name=raw_name,
                                properties={
                                    ANALYTICS_TYPE_KEY: Classification.UNKNOWN.value,
                                    PARSING_ERROR_KEY: True,
                                },
                                location=EventLocation(file=filename, line=index + 1),
                            )
                        )
                    continue
                if candidate is not None:
                    candidates.append(candidate)
    return candidates


def _confirm_exact_match(
    exact: EventCandidate, group: list[EventCandidate]
) -> EventCandidate:
    """
    Fold a same-named cascade match into the exact literal.

    The literal keeps its slot, but a pattern that recognised the same name
    knows more (its classification and any parsed properties).
    """
    for other in group:
        if other is exact or other.name != exact.name:
            continue
        if other.classification in (Classification.EXACT_MATCH, Classification.UNKNOWN):
            continue
        return EventCandidate(
            name=exact.name,
            properties={**other.properties, EXACT_MATCH_KEY: True},
            location=exact.location,
        )
    return exact


def deduplicate_events(candidates: list[EventCandidate]) -> list[EventCandidate]:
    """
    Collapse candidates that share a source line.

    A line with an exact_match keeps only its first exact_match (confirmed by
    a same-named cascade match if there is one). Other lines keep the first
    candidate per distinct name. Emission order is preserved.
    """
    groups: dict[tuple[str, int], list[EventCandidate]] = defaultdict(list)
    for candidate in candidates:
        groups[(candidate.location.file, candidate.location.line)].append(candidate)

    survivors: dict[tuple[str, int], tuple[EventCandidate, EventCandidate]] = {}
    for key, group in groups.items():
        if len(group) < 2:
            continue
        exact = next(
            (c for c in group if c.classification is Classification.EXACT_MATCH), None
        )
        if exact is not None:
            survivors[key] = (exact, _confirm_exact_match(exact, group))

    unique: list[EventCandidate] = []
    seen: set[tuple[str, int, str]] = set()
    for candidate in candidates:
        key = (candidate.location.file, candidate.location.line)
        if key in survivors:
            original, resolved = survivors[key]
            if candidate is original:
                unique.append(resolved)
            continue
        name_key = (candidate.location.file, candidate.location.line, candidate.name)
        if name_key in seen:
            continue
        seen.add(name_key)
        unique.append(candidate)

    return unique


def extract_events(content: str, filename: str) -> list[EventCandidate]:
    """
    Extract analytics event candidates from a file's text.

    Pure and deterministic. Never raises: unparseable property fragments
    become {} and a match that fails to process is kept as an "unknown"
    candidate flagged with _parsing_error.

    Args:
        content: Raw file text
        filename: Path used for locations, context tags and the file-type tag

    Returns:
        Deduplicated candidates in emission order (exact literals first)
    """
    lines = content.split("\n")
    file_type = get_file_type(filename)

    candidates = _exact_literal_candidates(lines, filename, file_type)
    candidates.extend(_cascade_candidates(lines, filename, file_type))

    return deduplicate_events(candidates)
