"""Pydantic schemas for the event tool operations."""

from typing import Any

from pydantic import BaseModel, Field

from app.config import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_INCLUDE_PATTERNS


def _include_default() -> list[str]:
    return list(DEFAULT_INCLUDE_PATTERNS)


def _exclude_default() -> list[str]:
    return list(DEFAULT_EXCLUDE_PATTERNS)


# --- Tool inputs ---


class ScanRepoEventsInput(BaseModel):
    """Input for scan_repo_events."""

    owner: str
    repo: str
    ref: str = "main"
    include_patterns: list[str] = Field(default_factory=_include_default)
    exclude_patterns: list[str] = Field(default_factory=_exclude_default)


class ExtractEventsFromFileInput(BaseModel):
    """Input for extract_events_from_file."""

    owner: str
    repo: str
    path: str
    ref: str = "main"


class AnalyzePREventsInput(BaseModel):
    """Input for analyze_pr_events."""

    owner: str
    repo: str
    pull_number: int


class EventInput(BaseModel):
    """An event definition supplied by the caller."""

    name: str
    properties: dict[str, Any] | None = None


class DocumentedEventInput(EventInput):
    description: str | None = None


class SuggestEventImprovementsInput(BaseModel):
    """Input for suggest_event_improvements."""

    events: list[EventInput]


class CreateEventDocumentationInput(BaseModel):
    """Input for create_event_documentation."""

    owner: str
    repo: str
    events: list[DocumentedEventInput]


class ValidateEventSchemaInput(BaseModel):
    """Input for validate_event_schema."""

    events: list[EventInput]


class SearchOrgEventInput(BaseModel):
    """Input for search_org_event."""

    org: str
    event_name: str
    include_patterns: list[str] = Field(default_factory=_include_default)
    exclude_patterns: list[str] = Field(default_factory=_exclude_default)
    max_repos: int = Field(default=50, ge=1)


# --- Responses ---


class ToolInfo(BaseModel):
    """A tool as listed by GET /tools."""

    name: str
    description: str
    input_schema: dict[str, Any]


class ToolCallResponse(BaseModel):
    """Response for POST /tools/{tool_name}."""

    tool: str
    is_error: bool
    content: str  # JSON text, or Markdown for create_event_documentation
