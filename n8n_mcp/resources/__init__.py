"""
描述: MCP 资源注册入口。
主要功能:
    - 导入并注册静态资源与 URI 模板资源
"""

from n8n_mcp.resources import dynamic, static  # noqa: F401
