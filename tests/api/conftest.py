"""API test fixtures: an ASGI client whose tool service talks to FakeGitHub."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_event_tool_service
from app.main import app
from app.services.event_tools import EventToolService


@pytest.fixture
async def api_client(fake_github, limiter):
    """AsyncClient against the app with the GitHub service replaced."""
    app.dependency_overrides[get_event_tool_service] = lambda: EventToolService(
        fake_github, rate_limiter=limiter
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
