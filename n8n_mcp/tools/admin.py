"""
描述: n8n 实例管理工具
主要功能:
    - 从源码仓库拉取变更
    - 生成安全审计报告
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.errors import ToolArgumentError
from n8n_mcp.tools.base import BaseTool, optional_bool
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success


# region 源码管理工具
@ToolRegistry.register
class SourceControlPullTool(BaseTool):
    name = "source_control_pull"
    description = "Pull changes from the remote source control repository"
    family = "source control"
    parameters = {
        "type": "object",
        "properties": {
            "force": {
                "type": "boolean",
                "description": "Whether to force pull (discard local changes)",
            },
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        force = optional_bool(params, "force") is True
        result = await self.service.source_control.pull_changes(force)
        if not isinstance(result, dict):
            result = {}

        if result.get("success"):
            message = f"Successfully pulled changes. {result.get('filesUpdated', 0)} files updated."
        else:
            message = "Failed to pull changes."
        if result.get("hasConflicts"):
            conflicts = result.get("conflicts") or []
            message += f" Conflicts detected in {len(conflicts)} file(s)."
        return format_success(result, message)
# endregion


# region 安全审计工具
@ToolRegistry.register
class SecurityAuditGenerateTool(BaseTool):
    name = "security_audit_generate"
    description = "Generate a security audit for n8n workflows"
    family = "security audit"
    parameters = {
        "type": "object",
        "properties": {
            "workflowIds": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "Optional array of workflow IDs to audit. "
                    "If not provided, all workflows will be audited."
                ),
            },
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_ids = params.get("workflowIds") or []
        if not isinstance(workflow_ids, list):
            raise ToolArgumentError('Parameter "workflowIds" must be an array')

        audit = await self.service.security_audit.generate_audit(
            [str(item) for item in workflow_ids] or None
        )
        summary = audit.get("summary") if isinstance(audit, dict) else None
        total = summary.get("totalWorkflows") if isinstance(summary, dict) else None
        if total is None:
            total = len(workflow_ids) if workflow_ids else "all"
        return format_success(audit, f"Successfully generated security audit for {total} workflows")
# endregion
