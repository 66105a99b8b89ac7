"""
MCP server exposing the event tools over stdio.

Run with ``python -m app.mcp_server``. Each tool is a thin facade that
forwards its arguments to EventToolService.call_tool(); the service itself
is built in the server lifespan.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.server.session import ServerSession

from app.config import settings
from app.main import SERVICE_NAME, setup_logging
from app.services.event_tools import EventToolService
from app.services.github import GitHubService, close_github_client

logger = logging.getLogger(__name__)


@dataclass
class ServerState:
    service: EventToolService


AppContext = Context[ServerSession, ServerState]


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerState]:
    github = GitHubService(settings.github_token, max_file_size=settings.max_file_size)
    logger.info(f"{SERVICE_NAME} MCP server starting up")
    try:
        yield ServerState(service=EventToolService(github))
    finally:
        await close_github_client()
        logger.info(f"{SERVICE_NAME} MCP server shutting down")


mcp = FastMCP(SERVICE_NAME, lifespan=server_lifespan)


async def _dispatch(ctx: AppContext, name: str, arguments: dict[str, Any]) -> str:
    logger.debug(f"Invoking {name}")
    service = ctx.request_context.lifespan_context.service
    result = await service.call_tool(name, arguments)
    if result.is_error:
        # Reported to the client as an error result
        raise ToolError(result.text)
    return result.text


@mcp.tool()
async def scan_repo_events(
    ctx: AppContext,
    owner: str,
    repo: str,
    ref: str = "main",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
) -> str:
    """Scan a repository for analytics event usages, with a summary and quality analysis."""
    arguments: dict[str, Any] = {"owner": owner, "repo": repo, "ref": ref}
    if include_patterns:
        arguments["include_patterns"] = include_patterns
    if exclude_patterns is not None:
        arguments["exclude_patterns"] = exclude_patterns
    return await _dispatch(ctx, "scan_repo_events", arguments)


@mcp.tool()
async def extract_events_from_file(
    ctx: AppContext, owner: str, repo: str, path: str, ref: str = "main"
) -> str:
    """Extract analytics events from a single file of a repository."""
    return await _dispatch(
        ctx,
        "extract_events_from_file",
        {"owner": owner, "repo": repo, "path": path, "ref": ref},
    )


@mcp.tool()
async def analyze_pr_events(ctx: AppContext, owner: str, repo: str, pull_number: int) -> str:
    """Extract and analyze analytics events in the files changed by a pull request."""
    return await _dispatch(
        ctx,
        "analyze_pr_events",
        {"owner": owner, "repo": repo, "pull_number": pull_number},
    )


@mcp.tool()
async def suggest_event_improvements(ctx: AppContext, events: list[dict[str, Any]]) -> str:
    """Suggest naming and property improvements for events ({name, properties})."""
    return await _dispatch(ctx, "suggest_event_improvements", {"events": events})


@mcp.tool()
async def create_event_documentation(
    ctx: AppContext, owner: str, repo: str, events: list[dict[str, Any]]
) -> str:
    """Generate Markdown documentation for events ({name, properties, description})."""
    return await _dispatch(
        ctx,
        "create_event_documentation",
        {"owner": owner, "repo": repo, "events": events},
    )


@mcp.tool()
async def validate_event_schema(ctx: AppContext, events: list[dict[str, Any]]) -> str:
    """Validate event names and property values ({name, properties})."""
    return await _dispatch(ctx, "validate_event_schema", {"events": events})


@mcp.tool()
async def search_org_event(
    ctx: AppContext,
    org: str,
    event_name: str,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    max_repos: int = 50,
) -> str:
    """Search an organization's repositories for a specific event name."""
    arguments: dict[str, Any] = {"org": org, "event_name": event_name, "max_repos": max_repos}
    if include_patterns:
        arguments["include_patterns"] = include_patterns
    if exclude_patterns is not None:
        arguments["exclude_patterns"] = exclude_patterns
    return await _dispatch(ctx, "search_org_event", arguments)


def main() -> None:
    # stdout carries the protocol
    setup_logging(stream=sys.stderr)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
