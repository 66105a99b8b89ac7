"""Data types for extracted analytics events."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class Classification(str, Enum):
    """Heuristic category assigned to an event candidate at extraction time."""

    EXACT_MATCH = "exact_match"
    TRACK = "track"
    TRAIT = "trait"
    PROPERTY = "property"
    CONSTANT = "constant"
    THIRD_PARTY = "third_party"
    UNKNOWN = "unknown"


# Provenance metadata stored alongside user properties
ANALYTICS_TYPE_KEY = "_analytics_type"
CONTEXT_KEY = "_context"
FILE_TYPE_KEY = "_file_type"
PARSING_ERROR_KEY = "_parsing_error"
EXACT_MATCH_KEY = "_exact_match"

RESERVED_PROPERTY_KEYS: frozenset[str] = frozenset(
    {ANALYTICS_TYPE_KEY, CONTEXT_KEY, FILE_TYPE_KEY, PARSING_ERROR_KEY, EXACT_MATCH_KEY}
)


@dataclass
class EventLocation:
    """Where a candidate was found (line is 1-based)."""

    file: str
    line: int


@dataclass
class EventCandidate:
    """A single extracted occurrence of what looks like an analytics event."""

    name: str
    properties: dict[str, Any]
    location: EventLocation

    @property
    def classification(self) -> Classification:
        raw = self.properties.get(ANALYTICS_TYPE_KEY, Classification.UNKNOWN.value)
        try:
            return Classification(raw)
        except ValueError:
            return Classification.UNKNOWN

    @property
    def user_properties(self) -> dict[str, Any]:
        """Properties without the reserved provenance keys."""
        return {k: v for k, v in self.properties.items() if k not in RESERVED_PROPERTY_KEYS}

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EventQualityReport:
    """Naming and property quality report for a set of events."""

    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    score: int = 100

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
