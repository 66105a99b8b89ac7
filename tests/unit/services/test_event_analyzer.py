"""Unit tests for event quality analysis, summaries, suggestions, validation and docs."""

from __future__ import annotations

import json

from app.services.events import (
    EventCandidate,
    EventLocation,
    analyze_events,
    build_event_doc,
    generate_event_summary,
    render_markdown,
    suggest_improvements,
    validate_event,
)
from app.services.events.documentation import describe_property, property_type
from app.services.events.improvements import snake_to_camel, to_title_case

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _event(name: str, props: dict | None = None, file: str = "src/a.ts", line: int = 1):
    return EventCandidate(
        name=name,
        properties={"_analytics_type": "track", **(props or {})},
        location=EventLocation(file=file, line=line),
    )


# ═══════════════════════════════════════════════════════════════════════════
# analyze_events
# ═══════════════════════════════════════════════════════════════════════════


class TestAnalyzeEvents:
    def test_snake_case_property_deducts_five(self):
        report = analyze_events([_event("User Signed Up", {"user_id": 1})])

        assert report.score == 95
        assert report.issues == [
            'Event "User Signed Up" has snake_case properties: user_id. Consider camelCase.'
        ]
        assert report.suggestions == [
            'Event "User Signed Up" might benefit from a timestamp property'
        ]

    def test_badly_named_event_without_properties(self):
        report = analyze_events([_event("user_signed_up")])

        assert report.score == 82
        assert len(report.issues) == 2
        assert "doesn't follow proper naming convention" in report.issues[0]
        assert "contains underscores or dashes" in report.issues[1]
        assert report.suggestions == [
            'Event "user_signed_up" has no properties. Consider adding contextual information.'
        ]

    def test_missing_user_identification(self):
        report = analyze_events([_event("Plan Changed", {"plan": "pro", "timestamp": 1})])

        assert report.score == 95
        assert report.suggestions == [
            'Event "Plan Changed" might benefit from user identification property'
        ]

    def test_user_id_keys_are_case_insensitive(self):
        report = analyze_events([_event("Plan Changed", {"UserId": 1, "Timestamp": 1})])

        assert report.score == 100
        assert report.issues == []
        assert report.suggestions == []

    def test_too_many_properties(self):
        props = {"userId": 1, "timestamp": 2, **{f"p{i}": i for i in range(14)}}
        report = analyze_events([_event("Report Exported", props)])

        assert report.score == 90
        assert report.issues == [
            'Event "Report Exported" has too many properties (16). '
            "Consider grouping related properties."
        ]

    def test_provenance_keys_are_not_properties(self):
        event = _event("Page Viewed", {"_context": "direct", "_file_type": "page"})
        report = analyze_events([event])

        assert report.score == 97

    def test_score_never_increases_as_violations_accumulate(self):
        base = {"userId": 1, "timestamp": 1}
        variants = [
            _event("Plan Changed", base),
            _event("Plan Changed", {**base, "plan_tier": "pro"}),
            _event("plan changed", {**base, "plan_tier": "pro"}),
            _event("plan_changed", {**base, "plan_tier": "pro"}),
        ]
        scores = [analyze_events([event]).score for event in variants]

        assert scores == [100, 95, 85, 80]

        events: list[EventCandidate] = []
        running = [analyze_events(events).score]
        for _ in range(8):
            events.append(_event("bad_name"))
            running.append(analyze_events(events).score)

        assert all(later <= earlier for earlier, later in zip(running, running[1:]))

    def test_score_never_negative(self):
        report = analyze_events([_event("bad_name") for _ in range(20)])

        assert report.score == 0

    def test_empty_input_scores_perfectly(self):
        report = analyze_events([])

        assert report.to_dict() == {"issues": [], "suggestions": [], "score": 100}


# ═══════════════════════════════════════════════════════════════════════════
# generate_event_summary
# ═══════════════════════════════════════════════════════════════════════════


class TestEventSummary:
    def test_groups_by_name_most_frequent_first(self):
        events = [
            _event("Signup", {"plan": "x"}, file="src/a.ts"),
            _event("Login", file="src/a.ts", line=2),
            _event("Signup", {"plan": "y"}, file="src/b.ts"),
        ]
        summary = generate_event_summary(events)

        first = summary["events_by_frequency"][0]
        assert first["event_name"] == "Signup"
        assert first["occurrences"] == 2
        assert first["files"] == ["src/a.ts", "src/b.ts"]
        assert first["unique_property_sets"] == [json.dumps(["_analytics_type", "plan"])]

        assert summary["files_by_event_count"] == [
            {"file": "src/a.ts", "event_count": 2},
            {"file": "src/b.ts", "event_count": 1},
        ]

    def test_empty(self):
        assert generate_event_summary([]) == {
            "events_by_frequency": [],
            "files_by_event_count": [],
        }


# ═══════════════════════════════════════════════════════════════════════════
# suggest_improvements
# ═══════════════════════════════════════════════════════════════════════════


class TestSuggestImprovements:
    def test_renames_and_camel_cases(self):
        result = suggest_improvements("user_signed_up", {"plan_tier": "pro"})

        assert result["event"] == "user_signed_up"
        assert result["improved_name"] == "User Signed Up"
        assert result["improved_properties"] == {"planTier": "pro"}
        assert result["suggestions"] == [
            'Rename to: "User Signed Up"',
            "Convert to camelCase: plan_tier",
            "Consider adding: userId, timestamp, source",
        ]

    def test_conforming_event_needs_nothing(self):
        props = {"userId": 1, "timestamp": 2, "source": "web"}
        result = suggest_improvements("Order Completed", props)

        assert result["suggestions"] == []
        assert result["improved_name"] == "Order Completed"
        assert result["improved_properties"] == props

    def test_no_properties(self):
        result = suggest_improvements("Order Completed", None)

        assert result["suggestions"][0].startswith("Consider adding contextual properties")
        assert result["suggestions"][-1] == "Consider adding: userId, timestamp, source"

    def test_case_helpers(self):
        assert to_title_case("checkout-started_now") == "Checkout Started Now"
        assert snake_to_camel("plan_tier_name") == "planTierName"


# ═══════════════════════════════════════════════════════════════════════════
# validate_event
# ═══════════════════════════════════════════════════════════════════════════


class TestValidateEvent:
    def test_missing_name_is_an_error(self):
        result = validate_event("  ", {})

        assert result["valid"] is False
        assert result["errors"] == ["Event name is required"]

    def test_property_warnings(self):
        long_key = "x" * 51
        result = validate_event("Signup", {"a": None, "b": "  ", long_key: 1})

        assert result["valid"] is True
        assert result["warnings"] == [
            'Property "a" has null/undefined value',
            'Property "b" is an empty string',
            f'Property "{long_key}" has a very long name (51 characters)',
        ]


# ═══════════════════════════════════════════════════════════════════════════
# Documentation
# ═══════════════════════════════════════════════════════════════════════════


class TestDocumentation:
    def test_property_types(self):
        assert property_type(True) == "boolean"
        assert property_type(1.5) == "number"
        assert property_type("x") == "string"
        assert property_type([1]) == "array"
        assert property_type({"a": 1}) == "object"
        assert property_type(None) == "null"

    def test_property_descriptions(self):
        assert describe_property("userId", 1) == "Unique identifier for user"
        assert describe_property("signupTime", 1) == "Timestamp of the event"
        assert describe_property("itemCount", 3) == "Number of item"
        assert describe_property("email", "a@b.c") == "Email address"
        assert describe_property("planName", "pro") == "Name of the plan"
        assert describe_property("trial", False) == "Whether trial is true or false"
        assert describe_property("plan", "pro") == "plan property"

    def test_default_description(self):
        doc = build_event_doc("Signup Completed", None)

        assert doc.description == "Tracks when signup completed occurs"
        assert doc.properties == []

    def test_render_markdown(self):
        docs = [
            build_event_doc("Plan Changed", {"plan": "pro"}, "Fired on plan change"),
            build_event_doc("Logout", {}),
        ]
        markdown = render_markdown("acme", "web", docs)
        lines = markdown.split("\n")

        assert lines[0] == "# Analytics Events Documentation"
        assert "Repository: `acme/web`" in lines
        assert "## Plan Changed" in lines
        assert "Fired on plan change" in lines
        assert "| Property | Type | Required | Description | Example |" in lines
        assert '| `plan` | string | ✓ | plan property | `"pro"` |' in lines
        assert "*No properties defined for this event.*" in lines
        assert lines.count("---") == 2
