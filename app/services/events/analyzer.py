"""Naming and property quality analysis for extracted events."""

import re

from app.services.events.types import EventCandidate, EventQualityReport

TITLE_CASE_NAME = re.compile(r"^[A-Z][a-zA-Z\s]*$")

MAX_PROPERTIES = 15

# Compared lowercased
USER_ID_KEYS = frozenset({"userid", "user_id", "id", "customerid", "customer_id"})
TIMESTAMP_KEYS = frozenset({"timestamp", "time", "createdat", "created_at"})


def analyze_events(events: list[EventCandidate]) -> EventQualityReport:
    """
    Score a set of event candidates against tracking-plan conventions.

    Starts at 100 and deducts per violation; provenance keys (_analytics_type,
    _context, ...) are not counted as properties. The score never goes below 0.
    """
    report = EventQualityReport()
    score = 100

    for event in events:
        name = event.name
        keys = list(event.user_properties)
        lowered = [k.lower() for k in keys]

        if not TITLE_CASE_NAME.match(name):
            report.issues.append(
                f'Event "{name}" doesn\'t follow proper naming convention (should be Title Case)'
            )
            score -= 10

        if "_" in name or "-" in name:
            report.issues.append(f'Event "{name}" contains underscores or dashes')
            score -= 5

        if keys and not any(k in USER_ID_KEYS for k in lowered):
            report.suggestions.append(
                f'Event "{name}" might benefit from user identification property'
            )
            score -= 5

        if len(keys) > MAX_PROPERTIES:
            report.issues.append(
                f'Event "{name}" has too many properties ({len(keys)}). '
                "Consider grouping related properties."
            )
            score -= 10
        elif not keys:
            report.suggestions.append(
                f'Event "{name}" has no properties. Consider adding contextual information.'
            )
            score -= 3

        snake_case = [k for k in keys if "_" in k]
        if snake_case:
            report.issues.append(
                f'Event "{name}" has snake_case properties: {", ".join(snake_case)}. '
                "Consider camelCase."
            )
            score -= 5

        if keys and not any(k in TIMESTAMP_KEYS for k in lowered):
            report.suggestions.append(f'Event "{name}" might benefit from a timestamp property')

    report.score = max(0, score)
    return report
