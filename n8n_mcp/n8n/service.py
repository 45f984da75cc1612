"""
描述: n8n API 服务门面
主要功能:
    - 基于同一个 N8nApiClient 组装各资源客户端
    - 管理连接池生命周期
"""

from __future__ import annotations

import httpx

from n8n_mcp.config import Settings
from n8n_mcp.n8n.admin import SecurityAuditClient, SourceControlClient
from n8n_mcp.n8n.client import N8nApiClient
from n8n_mcp.n8n.credential import CredentialClient
from n8n_mcp.n8n.execution import ExecutionClient
from n8n_mcp.n8n.project import ProjectClient
from n8n_mcp.n8n.tag import TagClient
from n8n_mcp.n8n.user import UserClient
from n8n_mcp.n8n.variable import VariableClient
from n8n_mcp.n8n.webhook import WebhookClient
from n8n_mcp.n8n.workflow import WorkflowClient
from n8n_mcp.n8n.workflow_tag import WorkflowTagClient


# region 服务门面
class N8nApiService:
    """
    n8n API 服务

    功能:
        - 工具与资源层统一通过此对象访问 n8n
    """
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.api = N8nApiClient(settings, transport=transport)
        self.workflows = WorkflowClient(self.api)
        self.executions = ExecutionClient(self.api)
        self.tags = TagClient(self.api)
        self.workflow_tags = WorkflowTagClient(self.api)
        self.variables = VariableClient(self.api)
        self.projects = ProjectClient(self.api)
        self.users = UserClient(self.api)
        self.credentials = CredentialClient(self.api)
        self.source_control = SourceControlClient(self.api)
        self.security_audit = SecurityAuditClient(self.api)
        self.webhooks = WebhookClient(settings, transport=transport)

    async def check_connectivity(self) -> None:
        await self.api.check_connectivity()

    async def aclose(self) -> None:
        await self.api.aclose()
        await self.webhooks.aclose()
# endregion
