"""Unit tests for search-token derivation and file/repository prioritization."""

from __future__ import annotations

from app.services.org_search.prioritizer import (
    event_words,
    prioritize_files,
    rank_repositories,
    score_path,
    score_repository,
)
from app.services.org_search.tokens import extract_search_tokens
from tests.helpers.fakes import make_repo


class TestExtractSearchTokens:
    def test_delimiters_and_camel_case(self):
        assert extract_search_tokens("checkoutCompleted - Order_Placed") == [
            "checkoutcompleted",
            "order",
            "placed",
            "checkout",
            "completed",
        ]

    def test_short_words_and_stopwords_dropped(self):
        assert extract_search_tokens("Sign Up For The Newsletter") == ["sign", "newsletter"]

    def test_idempotent_on_joined_output(self):
        tokens = extract_search_tokens("checkoutCompleted - Order_Placed")

        assert extract_search_tokens(" ".join(tokens)) == tokens

    def test_empty_name(self):
        assert extract_search_tokens("") == []


class TestPrioritizeFiles:
    def test_event_words_skip_short_words(self):
        assert event_words("User Signed Up") == ["user", "signed"]

    def test_score_path(self):
        assert score_path("src/components/SignupDialog.tsx", ["signup"]) == 18
        assert score_path("src/analytics/signup.test.ts", ["signup"]) == 12
        assert score_path("src/utils.ts", ["signup"]) == 0

    def test_highest_score_first_ties_keep_order(self):
        paths = ["src/a.ts", "src/b.ts", "src/tracking/checkout.ts", "src/c.ts"]

        assert prioritize_files(paths, "Checkout Started", 3) == [
            "src/tracking/checkout.ts",
            "src/a.ts",
            "src/b.ts",
        ]


class TestRankRepositories:
    def test_score_repository(self):
        repo = make_repo("checkout-analytics", description="Checkout funnel tracking")

        assert score_repository(repo, ["checkout", "completed"]) == 10 + 5 + 2

    def test_archived_repos_sink(self):
        live = make_repo("web")
        archived = make_repo("web-old", archived=True)

        assert rank_repositories([archived, live], []) == [live, archived]
