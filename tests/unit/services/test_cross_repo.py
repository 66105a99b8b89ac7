"""Unit tests for cross-repository pattern analysis."""

from __future__ import annotations

from app.services.events.types import EventCandidate, EventLocation
from app.services.org_search.cross_repo import (
    RepositoryMatches,
    analyze_cross_repo_patterns,
    analyze_property_variations,
    find_implementation_inconsistencies,
    generate_recommendations,
    most_used_properties,
    normalize_property_key,
)


def _hit(repo: str, path: str, **props) -> EventCandidate:
    return EventCandidate(
        name="Order Placed",
        properties={"_analytics_type": "track", **props},
        location=EventLocation(file=f"{repo}/{path}", line=1),
    )


class TestPropertyAnalysis:
    def test_normalize_property_key(self):
        assert normalize_property_key("User_Id") == "userid"
        assert normalize_property_key("order-total") == "ordertotal"

    def test_variations_ignore_key_order(self):
        events = [
            _hit("web", "a.ts", orderId=1, total=2),
            _hit("api", "b.ts", total=3, orderId=4),
            _hit("api", "c.ts", orderId=5),
        ]

        variations = analyze_property_variations(events)

        assert variations[0]["pattern"] == "orderId, total"
        assert variations[0]["count"] == 2
        assert variations[0]["repositories"] == ["api", "web"]
        assert variations[0]["example_properties"] == {"orderId": 1, "total": 2}
        assert variations[1]["pattern"] == "orderId"

    def test_inconsistencies_are_flagged_not_merged(self):
        events = [_hit("web", "a.ts", orderId=1), _hit("api", "b.ts", order_id=2)]

        assert find_implementation_inconsistencies(events) == [
            "Property naming inconsistency: orderId, order_id - consider standardizing"
        ]
        assert [p["property"] for p in most_used_properties(events)] == ["orderId", "order_id"]

    def test_provenance_keys_excluded(self):
        events = [_hit("web", "a.ts", _context="direct")]

        assert most_used_properties(events) == []
        assert analyze_property_variations(events)[0]["pattern"] == ""


class TestRecommendations:
    def test_many_signatures_suggest_schema(self):
        events = [_hit("web", f"{i}.ts", **{f"k{i}": i}) for i in range(4)]

        assert generate_recommendations(events, []) == [
            "Consider creating a shared event schema to ensure consistency"
        ]

    def test_high_usage(self):
        events = [_hit("web", "a.ts", orderId=i) for i in range(21)]

        assert generate_recommendations(events, ["x"]) == [
            "Standardize property naming across repositories",
            "High usage detected - consider adding this event to your tracking documentation",
        ]


class TestAnalyzeCrossRepoPatterns:
    def test_no_occurrences(self):
        summary = analyze_cross_repo_patterns([], "Order Placed")

        assert summary == {
            "total_occurrences": 0,
            "repositories_count": 0,
            "message": 'No occurrences of "Order Placed" found in the organization',
        }

    def test_usage_ranking(self):
        web = RepositoryMatches(
            repository="web",
            events=[_hit("web", "a.ts", orderId=1), _hit("web", "a.ts", orderId=2)],
            last_updated="2026-02-01T00:00:00Z",
        )
        api = RepositoryMatches(repository="api", events=[_hit("api", "b.ts", order_id=1)])

        summary = analyze_cross_repo_patterns([api, web], "Order Placed")

        assert summary["total_occurrences"] == 3
        assert summary["repositories_count"] == 2
        assert summary["repository_usage_ranking"][0] == {
            "repository": "web",
            "occurrences": 2,
            "files": ["web/a.ts"],
            "last_updated": "2026-02-01T00:00:00Z",
        }
        assert summary["recommendations"] == ["Standardize property naming across repositories"]
