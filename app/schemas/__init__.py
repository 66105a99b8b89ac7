"""Pydantic schemas for API request/response validation."""

from app.schemas.tools import (
    AnalyzePREventsInput,
    CreateEventDocumentationInput,
    DocumentedEventInput,
    EventInput,
    ExtractEventsFromFileInput,
    ScanRepoEventsInput,
    SearchOrgEventInput,
    SuggestEventImprovementsInput,
    ToolCallResponse,
    ToolInfo,
    ValidateEventSchemaInput,
)

__all__ = [
    "AnalyzePREventsInput",
    "CreateEventDocumentationInput",
    "DocumentedEventInput",
    "EventInput",
    "ExtractEventsFromFileInput",
    "ScanRepoEventsInput",
    "SearchOrgEventInput",
    "SuggestEventImprovementsInput",
    "ToolCallResponse",
    "ToolInfo",
    "ValidateEventSchemaInput",
]
