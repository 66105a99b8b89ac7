"""
Cross-repository pattern analysis.

Reconciles how a single event is implemented across the repositories where
the org search confirmed it: which property sets are used, which keys are
spelled inconsistently, and where the event is used most.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from app.services.events.types import EventCandidate

MAX_SIGNATURES_BEFORE_SCHEMA = 3
HIGH_USAGE_OCCURRENCES = 20
TOP_PROPERTIES = 10


@dataclass
class RepositoryMatches:
    """Confirmed occurrences of the target event in one repository.

    Event locations are qualified with the repository name ("<repo>/<path>").
    """

    repository: str
    events: list[EventCandidate]
    branch: str | None = None
    default_branch: str | None = None
    repo_url: str | None = None
    last_updated: str | None = None
    search_strategy: str = "exact"
    files_scanned: int = 0

    @property
    def files(self) -> list[str]:
        return list(dict.fromkeys(e.location.file for e in self.events))

    def to_dict(self) -> dict[str, Any]:
        return {
            "repository": self.repository,
            "branch": self.branch,
            "default_branch": self.default_branch,
            "events_found": len(self.events),
            "events": [e.to_dict() for e in self.events],
            "repo_url": self.repo_url,
            "last_updated": self.last_updated,
            "search_strategy": self.search_strategy,
            "files_scanned": self.files_scanned,
        }


def normalize_property_key(key: str) -> str:
    return key.lower().replace("_", "").replace("-", "")


def property_signature(event: EventCandidate) -> tuple[str, ...]:
    return tuple(sorted(event.user_properties))


def _owning_repository(event: EventCandidate) -> str:
    return event.location.file.split("/", 1)[0]


def analyze_property_variations(events: list[EventCandidate]) -> list[dict[str, Any]]:
    """One group per distinct (order-independent) set of property keys."""
    groups: dict[tuple[str, ...], dict[str, Any]] = {}
    for event in events:
        signature = property_signature(event)
        group = groups.get(signature)
        if group is None:
            group = groups[signature] = {
                "pattern": ", ".join(signature),
                "count": 0,
                "repositories": set(),
                "example_properties": event.user_properties,
            }
        group["count"] += 1
        group["repositories"].add(_owning_repository(event))

    return [{**group, "repositories": sorted(group["repositories"])} for group in groups.values()]


def find_implementation_inconsistencies(events: list[EventCandidate]) -> list[str]:
    """Flag property keys that differ only by case, "_" or "-"; never merges them."""
    raw_keys = dict.fromkeys(key for event in events for key in event.user_properties)

    by_normalized: dict[str, list[str]] = {}
    for key in raw_keys:
        by_normalized.setdefault(normalize_property_key(key), []).append(key)

    return [
        f"Property naming inconsistency: {', '.join(forms)} - consider standardizing"
        for forms in by_normalized.values()
        if len(forms) > 1
    ]


def most_used_properties(events: list[EventCandidate]) -> list[dict[str, Any]]:
    counts = Counter(key for event in events for key in event.user_properties)
    return [
        {"property": prop, "count": count} for prop, count in counts.most_common(TOP_PROPERTIES)
    ]


def generate_recommendations(
    events: list[EventCandidate], inconsistencies: list[str]
) -> list[str]:
    recommendations: list[str] = []

    if inconsistencies:
        recommendations.append("Standardize property naming across repositories")

    signatures = {property_signature(event) for event in events}
    if len(signatures) > MAX_SIGNATURES_BEFORE_SCHEMA:
        recommendations.append("Consider creating a shared event schema to ensure consistency")

    if len(events) > HIGH_USAGE_OCCURRENCES:
        recommendations.append(
            "High usage detected - consider adding this event to your tracking documentation"
        )

    return recommendations


def analyze_cross_repo_patterns(
    repository_results: list[RepositoryMatches], event_name: str
) -> dict[str, Any]:
    """
    Summarize how ``event_name`` is implemented across repositories.

    Returns a minimal "no occurrences" payload when nothing matched.
    """
    events = [event for result in repository_results for event in result.events]

    if not events:
        return {
            "total_occurrences": 0,
            "repositories_count": 0,
            "message": f'No occurrences of "{event_name}" found in the organization',
        }

    inconsistencies = find_implementation_inconsistencies(events)
    usage = sorted(
        (
            {
                "repository": result.repository,
                "occurrences": len(result.events),
                "files": result.files,
                "last_updated": result.last_updated,
            }
            for result in repository_results
        ),
        key=lambda item: item["occurrences"],
        reverse=True,
    )

    return {
        "total_occurrences": len(events),
        "repositories_count": len(repository_results),
        "most_used_properties": most_used_properties(events),
        "property_variations": analyze_property_variations(events),
        "implementation_inconsistencies": inconsistencies,
        "repository_usage_ranking": usage,
        "recommendations": generate_recommendations(events, inconsistencies),
    }
