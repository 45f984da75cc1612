"""
描述: MCP Server HTTP 启动脚本
主要功能:
    - 配置 asyncio 策略 (Windows)
    - 加载配置并初始化日志
    - 使用 uvicorn 启动 ASGI 服务
"""
import asyncio
import sys

# Windows 兼容性：在任何 asyncio 操作前设置策略
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from dotenv import load_dotenv
load_dotenv()

import uvicorn

from n8n_mcp.config import get_settings, validate_n8n_settings
from n8n_mcp.main import create_app
from n8n_mcp.utils.logger import setup_logging


if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings.logging)
    validate_n8n_settings(settings)

    host, port = settings.server.host, settings.server.port
    print(f"Starting n8n MCP Server on http://{host}:{port}", file=sys.stderr)
    print("Press Ctrl+C to stop", file=sys.stderr)
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level="debug" if settings.server.debug else "info",
    )
