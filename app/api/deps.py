"""API dependencies."""

from typing import Annotated

from fastapi import Depends

from app.config import settings
from app.services.event_tools import EventToolService
from app.services.github import GitHubService


def get_github_service() -> GitHubService:
    """GitHub client configured from settings (shares the pooled HTTP client)."""
    return GitHubService(settings.github_token, max_file_size=settings.max_file_size)


def get_event_tool_service(
    github: Annotated[GitHubService, Depends(get_github_service)],
) -> EventToolService:
    """A fresh tool service per request; no state is shared between calls."""
    return EventToolService(github)


EventTools = Annotated[EventToolService, Depends(get_event_tool_service)]
