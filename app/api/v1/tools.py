"""
Event tool endpoints.

Each tool is invoked with its argument object as the request body. Tool
failures (bad arguments, GitHub errors) come back as 200 responses with
``is_error: true`` so HTTP and MCP clients see the same results.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body

from app.api.deps import EventTools
from app.schemas.tools import ToolCallResponse, ToolInfo
from app.services.event_tools import EventToolService

router = APIRouter(prefix="/tools", tags=["tools"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[ToolInfo])
async def list_tools() -> list[ToolInfo]:
    """List the available tools with their input schemas."""
    return [
        ToolInfo(name=tool.name, description=tool.description, input_schema=tool.input_schema)
        for tool in EventToolService.list_tools()
    ]


@router.post("/{tool_name}", response_model=ToolCallResponse)
async def call_tool(
    tool_name: str,
    service: EventTools,
    arguments: dict[str, Any] | None = Body(default=None),
) -> ToolCallResponse:
    """Invoke a tool by name."""
    result = await service.call_tool(tool_name, arguments)
    return ToolCallResponse(tool=tool_name, is_error=result.is_error, content=result.text)
