"""
描述: n8n URI 模板资源
主要功能:
    - n8n://workflows/{id} 单个工作流详情
    - n8n://executions/{id} 单次执行详情
"""

from __future__ import annotations

import re
from typing import Any

from n8n_mcp.resources.base import BaseResourceTemplate, ResourceRegistry, now_iso
from n8n_mcp.utils.execution_formatter import format_execution_details


# region 模板资源
@ResourceRegistry.register_template
class WorkflowResourceTemplate(BaseResourceTemplate):
    uri_template = "n8n://workflows/{id}"
    pattern = re.compile(r"^n8n://workflows/([^/]+)$")
    name = "n8n Workflow"
    description = "Information about a specific n8n workflow"
    label = "workflow"

    async def build(self, resource_id: str) -> dict[str, Any]:
        workflow = await self.context.service.workflows.read_workflow(resource_id)
        return {
            "resourceType": "workflow",
            "workflow": workflow,
            "_links": {
                "self": f"n8n://workflows/{resource_id}",
                "collection": "n8n://workflows",
            },
            "lastUpdated": now_iso(),
        }


@ResourceRegistry.register_template
class ExecutionResourceTemplate(BaseResourceTemplate):
    uri_template = "n8n://executions/{id}"
    pattern = re.compile(r"^n8n://executions/([^/]+)$")
    name = "n8n Execution"
    description = "Detailed result of a specific workflow execution"
    label = "execution"

    async def build(self, resource_id: str) -> dict[str, Any]:
        execution = await self.context.service.executions.read_execution(resource_id)
        return {
            "resourceType": "execution",
            "execution": format_execution_details(execution),
            "_links": {"self": f"n8n://executions/{resource_id}"},
            "lastUpdated": now_iso(),
        }
# endregion
