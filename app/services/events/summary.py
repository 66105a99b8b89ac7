"""Per-repository rollup of extracted events."""

import json
from collections import Counter, defaultdict
from typing import Any

from app.services.events.types import EventCandidate


def _unique_property_sets(events: list[EventCandidate]) -> list[str]:
    seen: dict[str, None] = {}
    for event in events:
        seen.setdefault(json.dumps(sorted(event.properties)), None)
    return list(seen)


def generate_event_summary(events: list[EventCandidate]) -> dict[str, Any]:
    """
    Group events by name (most frequent first) and count events per file.

    Returns:
        {"events_by_frequency": [...], "files_by_event_count": [...]}
    """
    by_name: dict[str, list[EventCandidate]] = defaultdict(list)
    for event in events:
        by_name[event.name].append(event)

    events_by_frequency = [
        {
            "event_name": name,
            "occurrences": len(group),
            "files": list(dict.fromkeys(e.location.file for e in group)),
            "unique_property_sets": _unique_property_sets(group),
        }
        for name, group in by_name.items()
    ]
    events_by_frequency.sort(key=lambda item: item["occurrences"], reverse=True)

    file_counts = Counter(event.location.file for event in events)
    files_by_event_count = [
        {"file": file, "event_count": count}
        for file, count in sorted(file_counts.items(), key=lambda kv: kv[1], reverse=True)
    ]

    return {
        "events_by_frequency": events_by_frequency,
        "files_by_event_count": files_by_event_count,
    }
