"""
描述: MCP Server HTTP 主入口
主要功能:
    - FastAPI 应用初始化
    - 路由注册 (MCP 工具与资源)
    - n8n 连接池生命周期管理
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from n8n_mcp import __version__
from n8n_mcp.config import Settings, get_settings
from n8n_mcp.n8n.service import N8nApiService
from n8n_mcp.server.http import router as http_router
from n8n_mcp.tools.base import ToolContext
import n8n_mcp.resources  # noqa: F401
import n8n_mcp.tools  # noqa: F401


logger = logging.getLogger(__name__)


# region FastAPI 应用
def create_app(
    settings: Settings | None = None,
    service: N8nApiService | None = None,
) -> FastAPI:
    """
    创建 FastAPI 应用

    参数:
        settings: 全局配置 (缺省读取 get_settings)
        service: n8n API 服务 (缺省按配置创建)
    """
    settings = settings or get_settings()
    service = service or N8nApiService(settings)

    @asynccontextmanager
    async def _lifespan(_: FastAPI):
        logger.info(
            "n8n MCP HTTP server started",
            extra={
                "n8n_api_url": settings.n8n.api_url,
                "tools_enabled_count": len(settings.tools.enabled),
            },
        )
        try:
            yield
        finally:
            await service.aclose()

    app = FastAPI(title="n8n MCP Server", version=__version__, lifespan=_lifespan)
    app.state.context = ToolContext(settings=settings, service=service)
    app.include_router(http_router)
    return app
# endregion
