"""Unit tests for GitHub HTTP client and helpers.

Tests the shared HTTP client singleton, rate limit parsing,
error response processing and cache utilities.
"""

from __future__ import annotations

import httpx
import pytest

from app.config import settings
from app.services.github.cache import (
    cached_github_call,
    clear_all_caches,
    get_cache_stats,
    tree_cache,
)
from app.services.github.exceptions import GitHubAPIError, RepositoryNotAccessibleError
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import API_VERSION, close_github_client, get_github_client

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers or {},
    )


# ═══════════════════════════════════════════════════════════════════════════
# RateLimitInfo
# ═══════════════════════════════════════════════════════════════════════════


class TestRateLimitInfo:
    """Tests for rate limit header parsing."""

    def test_extracts_remaining_and_reset(self):
        resp = _make_response(
            headers={
                "X-RateLimit-Remaining": "42",
                "X-RateLimit-Reset": "1700000000",
            }
        )
        info = RateLimitInfo(resp)

        assert info.remaining == "42"
        assert info.reset_timestamp == 1700000000
        assert info.is_exhausted is False

    def test_detects_exhausted(self):
        resp = _make_response(
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"}
        )

        assert RateLimitInfo(resp).is_exhausted is True

    def test_missing_headers(self):
        info = RateLimitInfo(_make_response(headers={}))

        assert info.remaining is None
        assert info.reset_timestamp is None
        assert info.is_exhausted is False


# ═══════════════════════════════════════════════════════════════════════════
# handle_error_response
# ═══════════════════════════════════════════════════════════════════════════


class TestHandleErrorResponse:
    """Tests for centralized GitHub API error handling."""

    def test_200_does_nothing(self):
        handle_error_response(_make_response(status_code=200), "acme/web-app")

    def test_401_raises_auth_error(self):
        with pytest.raises(GitHubAPIError, match="Invalid or expired"):
            handle_error_response(_make_response(status_code=401), "acme/web-app")

    def test_404_raises_not_found_with_context(self):
        with pytest.raises(GitHubAPIError, match="not found: acme/web-app@develop") as exc_info:
            handle_error_response(_make_response(status_code=404), "acme/web-app@develop")

        assert exc_info.value.status_code == 404

    def test_403_with_rate_limit_exhausted(self):
        resp = _make_response(
            status_code=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )
        with pytest.raises(GitHubAPIError, match="rate limit") as exc_info:
            handle_error_response(resp, "acme/web-app")

        assert exc_info.value.rate_limit_reset == 1700000000

    def test_403_without_rate_limit_raises_forbidden(self):
        resp = _make_response(status_code=403, headers={"X-RateLimit-Remaining": "50"})
        with pytest.raises(GitHubAPIError, match="forbidden"):
            handle_error_response(resp, "acme/web-app")

    def test_422_raises_rejected(self):
        with pytest.raises(GitHubAPIError, match="rejected") as exc_info:
            handle_error_response(_make_response(status_code=422), "search:bad")

        assert exc_info.value.status_code == 422

    def test_500_raises_generic_error(self):
        with pytest.raises(GitHubAPIError, match="500"):
            handle_error_response(_make_response(status_code=500), "acme/web-app")


# ═══════════════════════════════════════════════════════════════════════════
# RepositoryNotAccessibleError
# ═══════════════════════════════════════════════════════════════════════════


class TestRepositoryNotAccessibleError:
    def test_lists_branches_tried(self):
        err = RepositoryNotAccessibleError("acme/secret", ["main", "master"])

        assert isinstance(err, GitHubAPIError)
        assert err.status_code == 404
        assert err.branches_tried == ["main", "master"]
        assert "acme/secret" in err.message
        assert "main, master" in err.message


# ═══════════════════════════════════════════════════════════════════════════
# HTTP Client Singleton
# ═══════════════════════════════════════════════════════════════════════════


class TestGitHubHttpClient:
    """Tests for the shared HTTP client singleton."""

    def test_client_carries_base_url_and_api_headers(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            client = get_github_client()
            assert isinstance(client, httpx.AsyncClient)
            assert str(client.base_url).rstrip("/") == settings.github_api_url.rstrip("/")
            assert client.headers["X-GitHub-Api-Version"] == API_VERSION
            assert client.headers["Accept"] == "application/vnd.github+json"
            assert client.timeout.connect == 5.0
            assert client.timeout.pool == 30.0
        finally:
            mod._client = original

    def test_returns_same_instance(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            assert get_github_client() is get_github_client()
        finally:
            mod._client = original

    @pytest.mark.anyio
    async def test_close_resets_singleton(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            first = get_github_client()
            await close_github_client()

            assert first.is_closed
            assert mod._client is None
            assert get_github_client() is not first
        finally:
            await close_github_client()
            mod._client = original


# ═══════════════════════════════════════════════════════════════════════════
# Cache utilities
# ═══════════════════════════════════════════════════════════════════════════


class TestCacheUtilities:
    """Tests for cache management functions."""

    def test_clear_all_caches(self):
        tree_cache["test_key"] = "test_value"
        assert len(tree_cache) == 1

        clear_all_caches()
        assert len(tree_cache) == 0

    def test_get_cache_stats_returns_sizes(self):
        stats = get_cache_stats()

        assert stats == {"tree": {"size": 0, "maxsize": 100}}

    @pytest.mark.anyio
    async def test_decorator_keys_on_arguments_not_instance(self):
        calls: list[tuple] = []

        class Reader:
            @cached_github_call(tree_cache)
            async def fetch(self, owner: str, repo: str) -> str:
                calls.append((owner, repo))
                return f"{owner}/{repo}"

        assert await Reader().fetch("acme", "a") == "acme/a"
        assert await Reader().fetch("acme", "a") == "acme/a"
        assert await Reader().fetch("acme", "b") == "acme/b"

        assert calls == [("acme", "a"), ("acme", "b")]
