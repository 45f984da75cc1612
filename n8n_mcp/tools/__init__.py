"""
描述: MCP 工具注册入口。
主要功能:
    - 导入并注册 workflow、execution、tag、variable、project、user、credential、admin 工具
    - 在服务启动时完成工具发现
"""

from n8n_mcp.tools import (  # noqa: F401
    admin,
    credential,
    execution,
    project,
    tag,
    user,
    variable,
    workflow,
)
