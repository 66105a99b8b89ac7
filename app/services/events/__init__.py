"""
Analytics event extraction and analysis.

Pure functions over source text and event candidates; no I/O.
"""

from app.services.events.analyzer import analyze_events
from app.services.events.documentation import EventDoc, build_event_doc, render_markdown
from app.services.events.extractor import deduplicate_events, extract_events
from app.services.events.improvements import suggest_improvements
from app.services.events.property_parser import parse_event_properties
from app.services.events.summary import generate_event_summary
from app.services.events.types import (
    RESERVED_PROPERTY_KEYS,
    Classification,
    EventCandidate,
    EventLocation,
    EventQualityReport,
)
from app.services.events.validation import validate_event

__all__ = [
    "Classification",
    "EventCandidate",
    "EventDoc",
    "EventLocation",
    "EventQualityReport",
    "RESERVED_PROPERTY_KEYS",
    "analyze_events",
    "build_event_doc",
    "deduplicate_events",
    "extract_events",
    "generate_event_summary",
    "parse_event_properties",
    "render_markdown",
    "suggest_improvements",
    "validate_event",
]
