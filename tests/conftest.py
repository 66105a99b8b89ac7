"""Root conftest: shared fixtures for all tests.

Provides:
- anyio backend pinned to asyncio
- Autouse cache reset so GitHub tree caching never leaks between tests
- A fake GitHubService and a non-sleeping rate limiter
"""

from __future__ import annotations

import pytest

from app.services.github.cache import clear_all_caches
from tests.helpers.fakes import FakeGitHub, NoWaitLimiter


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _clear_github_caches():
    """Clear GitHub TTL caches before and after each test."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def limiter() -> NoWaitLimiter:
    return NoWaitLimiter()
