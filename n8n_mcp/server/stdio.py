"""
描述: MCP stdio 协议服务
主要功能:
    - 基于 mcp SDK 低层 Server 暴露工具与资源
    - 启动前校验 n8n API 连通性
"""

from __future__ import annotations

import logging
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from n8n_mcp import __version__
from n8n_mcp.config import Settings
from n8n_mcp.errors import McpError, McpErrorCode
from n8n_mcp.n8n.service import N8nApiService
from n8n_mcp.resources.base import ResourceRegistry
from n8n_mcp.tools.base import ToolContext
from n8n_mcp.tools.registry import ToolRegistry
import n8n_mcp.resources  # noqa: F401
import n8n_mcp.tools  # noqa: F401


logger = logging.getLogger(__name__)

SERVER_NAME = "n8n-mcp-server"


class ToolCallFailed(RuntimeError):
    """工具返回 isError 结果; SDK 会将其转换为 isError=true 的响应"""


# region MCP Server 构建
def build_server(context: ToolContext) -> Server:
    """
    构建 MCP Server 并注册请求处理器

    参数:
        context: 工具与资源共享的依赖上下文
    """
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=meta["name"],
                description=meta["description"],
                inputSchema=meta["inputSchema"],
            )
            for meta in ToolRegistry.list_tools(context.settings)
        ]

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        tool_cls = ToolRegistry.get(name)
        if tool_cls is None or not ToolRegistry.is_enabled(name, context.settings):
            raise McpError(McpErrorCode.NOT_IMPLEMENTED, f"Unknown tool: {name}")

        result = await tool_cls(context).execute(arguments or {})
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [types.TextContent(type="text", text=block.text) for block in result.content]

    @server.list_resources()
    async def _list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=meta["uri"],
                name=meta["name"],
                description=meta["description"],
                mimeType=meta["mimeType"],
            )
            for meta in ResourceRegistry.list_resources()
        ]

    @server.list_resource_templates()
    async def _list_resource_templates() -> list[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=meta["uriTemplate"],
                name=meta["name"],
                description=meta["description"],
                mimeType=meta["mimeType"],
            )
            for meta in ResourceRegistry.list_templates()
        ]

    @server.read_resource()
    async def _read_resource(uri: Any) -> list[ReadResourceContents]:
        text = await ResourceRegistry.read(uri, context)
        return [ReadResourceContents(content=text, mime_type=ResourceRegistry.mime_type_for(uri))]

    return server
# endregion


# region 运行入口
async def run_stdio(settings: Settings) -> None:
    """
    以 stdio 方式运行 MCP Server

    参数:
        settings: 全局配置对象

    抛出:
        N8nApiError: 启动时无法连接 n8n API
    """
    service = N8nApiService(settings)
    try:
        logger.info("Verifying n8n API connectivity", extra={"n8n_api_url": settings.n8n.api_url})
        await service.check_connectivity()
        logger.info("Connected to n8n API at %s", settings.n8n.api_url)

        server = build_server(ToolContext(settings=settings, service=service))
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await service.aclose()
# endregion
