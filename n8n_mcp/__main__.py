"""
描述: MCP Server stdio 启动入口
主要功能:
    - 加载 .env 与配置
    - 初始化日志并校验 n8n 连接配置
    - 以 stdio 方式运行 MCP Server
"""

from __future__ import annotations

import asyncio
import logging
import sys

from dotenv import load_dotenv

from n8n_mcp.config import get_settings, validate_n8n_settings
from n8n_mcp.errors import ConfigurationError, N8nApiError
from n8n_mcp.server.stdio import run_stdio
from n8n_mcp.utils.logger import setup_logging


logger = logging.getLogger("n8n_mcp")


def main() -> None:
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.logging)

    try:
        validate_n8n_settings(settings)
        asyncio.run(run_stdio(settings))
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(1)
    except N8nApiError as exc:
        logger.error("Failed to connect to n8n API: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("n8n MCP server stopped")


if __name__ == "__main__":
    main()
