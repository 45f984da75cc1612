"""
HTTP API for MCP tools and resources.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from n8n_mcp.errors import McpError, McpErrorCode
from n8n_mcp.resources.base import ResourceRegistry
from n8n_mcp.server.schema import (
    ResourceContent,
    ResourceReadRequest,
    ResourceResponse,
    ToolError,
    ToolRequest,
)
from n8n_mcp.tools.base import ToolContext
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult


router = APIRouter()


def get_context(request: Request) -> ToolContext:
    return request.app.state.context


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok", "service": "n8n-mcp-server"}


@router.get("/favicon.ico")
async def favicon() -> Response:
    return Response(status_code=204)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/mcp/tools")
async def list_tools(context: ToolContext = Depends(get_context)) -> dict[str, Any]:
    return {"tools": ToolRegistry.list_tools(context.settings)}


@router.post("/mcp/tools/{tool_name}", response_model=ToolResult)
async def call_tool(
    tool_name: str,
    request: ToolRequest,
    context: ToolContext = Depends(get_context),
) -> ToolResult:
    tool_cls = ToolRegistry.get(tool_name)
    if not tool_cls:
        raise HTTPException(status_code=404, detail="Tool not found")
    if not ToolRegistry.is_enabled(tool_name, context.settings):
        raise HTTPException(status_code=403, detail="Tool disabled")

    tool = tool_cls(context)
    return await tool.execute(request.params)


@router.get("/mcp/resources")
async def list_resources() -> dict[str, Any]:
    return {"resources": ResourceRegistry.list_resources()}


@router.get("/mcp/resources/templates")
async def list_resource_templates() -> dict[str, Any]:
    return {"resourceTemplates": ResourceRegistry.list_templates()}


@router.post("/mcp/resources/read", response_model=ResourceResponse)
async def read_resource(
    request: ResourceReadRequest,
    context: ToolContext = Depends(get_context),
) -> ResourceResponse:
    try:
        text = await ResourceRegistry.read(request.uri, context)
    except McpError as exc:
        if exc.code == McpErrorCode.RESOURCE_NOT_FOUND:
            raise HTTPException(status_code=404, detail=exc.message)
        return ResourceResponse(
            success=False,
            error=ToolError(code=exc.code.value, message=exc.message),
        )
    return ResourceResponse(
        success=True,
        contents=[
            ResourceContent(
                uri=request.uri,
                mime_type=ResourceRegistry.mime_type_for(request.uri),
                text=text,
            )
        ],
    )
