"""
描述: n8n 实例管理 API
主要功能:
    - 从 Git 仓库拉取变更 (Source Control)
    - 生成安全审计报告
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.n8n.client import N8nApiClient


# region 源码管理客户端
class SourceControlClient:
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def pull_changes(self, force: bool = False) -> dict[str, Any]:
        return await self._api.request(
            "POST",
            "/source-control/pull",
            json_body={"force": force},
            error_message="Failed to pull changes from source control",
        )
# endregion


# region 安全审计客户端
class SecurityAuditClient:
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def generate_audit(self, workflow_ids: list[str] | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if workflow_ids:
            body["workflowIds"] = list(workflow_ids)
        return await self._api.request(
            "POST",
            "/security-audit/generate",
            json_body=body,
            error_message="Failed to generate security audit",
        )
# endregion
