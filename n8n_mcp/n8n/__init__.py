"""
描述: n8n REST API 客户端包。
主要功能:
    - 导出基础客户端与服务门面
"""

from n8n_mcp.n8n.client import N8nApiClient  # noqa: F401
from n8n_mcp.n8n.service import N8nApiService  # noqa: F401
