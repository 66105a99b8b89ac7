"""
Event tool operations.

EventToolService is the single boundary for the seven tool operations. The
HTTP API and the MCP server both dispatch through ``call_tool()``, which
validates arguments and turns every failure into an error result, so a bad
request never raises past this module.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from app.schemas.tools import (
    AnalyzePREventsInput,
    CreateEventDocumentationInput,
    ExtractEventsFromFileInput,
    ScanRepoEventsInput,
    SearchOrgEventInput,
    SuggestEventImprovementsInput,
    ValidateEventSchemaInput,
)
from app.services.events import (
    analyze_events,
    build_event_doc,
    extract_events,
    render_markdown,
    suggest_improvements,
    validate_event,
)
from app.services.events.types import EventCandidate
from app.services.github import GitHubAPIError, GitHubService
from app.services.org_search import OrgEventSearchOrchestrator
from app.services.rate_limiter import AsyncTokenBucket
from app.services.repo_scanner import RepositoryScanner

logger = logging.getLogger(__name__)


class ToolError(Exception):
    """An operation failed in a way the caller should see as a message."""


@dataclass
class ToolResult:
    """Outcome of one tool call: JSON or Markdown text, or an error message."""

    text: str
    is_error: bool = False


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_model: type[BaseModel]

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()


TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="scan_repo_events",
        description=(
            "Scan a repository for analytics event usages and return every event "
            "found, a per-event summary and a quality analysis"
        ),
        input_model=ScanRepoEventsInput,
    ),
    ToolDefinition(
        name="extract_events_from_file",
        description="Extract analytics events from a single file of a repository",
        input_model=ExtractEventsFromFileInput,
    ),
    ToolDefinition(
        name="analyze_pr_events",
        description="Extract and analyze analytics events in the files changed by a pull request",
        input_model=AnalyzePREventsInput,
    ),
    ToolDefinition(
        name="suggest_event_improvements",
        description="Suggest naming and property improvements for analytics events",
        input_model=SuggestEventImprovementsInput,
    ),
    ToolDefinition(
        name="create_event_documentation",
        description="Generate Markdown documentation for analytics events",
        input_model=CreateEventDocumentationInput,
    ),
    ToolDefinition(
        name="validate_event_schema",
        description="Validate analytics event names and property values",
        input_model=ValidateEventSchemaInput,
    ),
    ToolDefinition(
        name="search_org_event",
        description=(
            "Search an organization's repositories for a specific event name, "
            "falling back to search guidance when there is no exact match"
        ),
        input_model=SearchOrgEventInput,
    ),
)

TOOLS_BY_NAME: dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}


def _events_to_dicts(events: list[EventCandidate]) -> list[dict[str, Any]]:
    return [event.to_dict() for event in events]


class EventToolService:
    """The seven event operations over an injected GitHub service."""

    def __init__(self, github: GitHubService, rate_limiter: AsyncTokenBucket | None = None):
        self.github = github
        self.scanner = RepositoryScanner(github)
        self.org_search = OrgEventSearchOrchestrator(github, rate_limiter=rate_limiter)

    @staticmethod
    def list_tools() -> tuple[ToolDefinition, ...]:
        return TOOLS

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """
        Validate ``arguments`` and run the named tool.

        Returns:
            ToolResult with JSON (or Markdown) text, or is_error=True and an
            "Error: ..." message. Never raises.
        """
        tool = TOOLS_BY_NAME.get(name)
        if tool is None:
            return ToolResult(text=f"Error: Unknown tool: {name}", is_error=True)

        try:
            params = tool.input_model.model_validate(arguments or {})
            output = await getattr(self, tool.name)(params)
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {name}: {e.error_count()} error(s)")
            return ToolResult(text=f"Error: Invalid arguments for {name}: {e}", is_error=True)
        except ToolError as e:
            logger.warning(f"Tool {name} failed: {e}")
            return ToolResult(text=f"Error: {e}", is_error=True)
        except GitHubAPIError as e:
            logger.warning(f"GitHub API error in {name}: {e.message}")
            return ToolResult(text=f"Error: GitHub API error: {e.message}", is_error=True)
        except Exception as e:
            logger.exception(f"Unexpected error in {name}")
            return ToolResult(text=f"Error: {e}", is_error=True)

        if isinstance(output, str):
            return ToolResult(text=output)
        return ToolResult(text=json.dumps(output, indent=2, ensure_ascii=False, default=str))

    # ─────────────────────────────────────────────────────────────
    # Repository operations
    # ─────────────────────────────────────────────────────────────

    async def scan_repo_events(self, params: ScanRepoEventsInput) -> dict[str, Any]:
        result = await self.scanner.scan(
            params.owner,
            params.repo,
            params.ref,
            include_patterns=params.include_patterns,
            exclude_patterns=params.exclude_patterns,
        )
        return result.to_dict()

    async def extract_events_from_file(self, params: ExtractEventsFromFileInput) -> dict[str, Any]:
        logger.info(f"Extracting events from {params.path} in {params.owner}/{params.repo}@{params.ref}")

        file = await self.github.get_file_content(params.owner, params.repo, params.path, params.ref)
        if file is None:
            raise ToolError(f"File not found or is a directory: {params.path}")

        events = extract_events(file.content, params.path)
        logger.info(f"Found {len(events)} events in {params.path}")

        return {
            "file": params.path,
            "total_events": len(events),
            "events": _events_to_dicts(events),
        }

    async def analyze_pr_events(self, params: AnalyzePREventsInput) -> dict[str, Any]:
        owner, repo, number = params.owner, params.repo, params.pull_number
        logger.info(f"Analyzing PR #{number} in {owner}/{repo}")

        files = await self.github.list_pull_request_files(owner, repo, number)
        ref = f"refs/pull/{number}/head"

        events: list[EventCandidate] = []
        error_files: list[str] = []

        for changed in files:
            if changed.status == "removed":
                continue
            try:
                file = await self.github.get_file_content(owner, repo, changed.filename, ref)
            except Exception as e:
                logger.warning(f"Error processing file {changed.filename}: {e}")
                error_files.append(changed.filename)
                continue
            if file is None:
                continue
            events.extend(extract_events(file.content, changed.filename))

        logger.info(f"PR analysis complete: {len(events)} events found")

        return {
            "pr_number": number,
            "total_events": len(events),
            "events": _events_to_dicts(events),
            "analysis": analyze_events(events).to_dict(),
            "error_files": error_files,
        }

    async def search_org_event(self, params: SearchOrgEventInput) -> dict[str, Any]:
        return await self.org_search.search(
            params.org,
            params.event_name,
            include_patterns=params.include_patterns,
            exclude_patterns=params.exclude_patterns,
            max_repos=params.max_repos,
        )

    # ─────────────────────────────────────────────────────────────
    # Event definition operations (no GitHub access)
    # ─────────────────────────────────────────────────────────────

    async def suggest_event_improvements(
        self, params: SuggestEventImprovementsInput
    ) -> dict[str, Any]:
        improvements = [suggest_improvements(e.name, e.properties) for e in params.events]
        return {"improvements": improvements}

    async def create_event_documentation(self, params: CreateEventDocumentationInput) -> str:
        docs = [build_event_doc(e.name, e.properties, e.description) for e in params.events]
        logger.info(f"Generated documentation for {len(docs)} events")
        return render_markdown(params.owner, params.repo, docs)

    async def validate_event_schema(self, params: ValidateEventSchemaInput) -> dict[str, Any]:
        results = [validate_event(e.name, e.properties) for e in params.events]
        valid = sum(1 for r in results if r["valid"])
        logger.info(f"Validation complete: {valid}/{len(results)} events valid")
        return {"validation": results}
