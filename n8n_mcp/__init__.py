"""
描述: n8n MCP Server。
主要功能:
    - 将 n8n REST API 暴露为 MCP 工具与资源
"""

__version__ = "0.1.0"
