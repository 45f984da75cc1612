"""
描述: n8n 工作流工具
主要功能:
    - 列表 (支持 active 过滤)、读取、创建、更新、删除
    - 激活/停用工作流
    - 转移工作流到其他项目
"""

from __future__ import annotations

import logging
from typing import Any

from n8n_mcp.errors import N8nApiError, ToolArgumentError
from n8n_mcp.tools.base import BaseTool, optional_bool, require_str
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success


logger = logging.getLogger(__name__)

_WORKFLOW_ID_SCHEMA = {"type": "string", "description": "ID of the workflow"}


# region 辅助函数
def _summary(workflow: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": workflow.get("id"),
        "name": workflow.get("name"),
        "active": workflow.get("active"),
    }


def _validate_definition(params: dict[str, Any]) -> None:
    nodes = params.get("nodes")
    connections = params.get("connections")
    tags = params.get("tags")
    if nodes is not None and not isinstance(nodes, list):
        raise ToolArgumentError('Parameter "nodes" must be an array')
    if connections is not None and not isinstance(connections, dict):
        raise ToolArgumentError('Parameter "connections" must be an object')
    if tags is not None and (
        not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags)
    ):
        raise ToolArgumentError('Parameter "tags" must be an array of strings')
# endregion


# region 工作流工具
class WorkflowTool(BaseTool):
    family = "workflow"

    async def _assign_tags(self, workflow_id: str, tags: list[str]) -> bool:
        """写入工作流标签; 失败只记录警告, 不影响主操作"""
        try:
            await self.service.workflow_tags.update_workflow_tags(workflow_id, tags)
        except N8nApiError as exc:
            logger.warning("Failed to update tags for workflow %s: %s", workflow_id, exc.message)
            return False
        return True

    async def _set_active(self, workflow_id: str, active: bool) -> dict[str, Any]:
        if active:
            return await self.service.workflows.activate_workflow(workflow_id)
        return await self.service.workflows.deactivate_workflow(workflow_id)


@ToolRegistry.register
class ListWorkflowsTool(WorkflowTool):
    """列出全部工作流, 可按激活状态过滤"""

    name = "list_workflows"
    description = "Retrieve a list of all workflows available in n8n"
    parameters = {
        "type": "object",
        "properties": {
            "active": {
                "type": "boolean",
                "description": "Optional filter to show only active or inactive workflows",
            },
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        active = optional_bool(params, "active")
        workflows = await self.service.workflows.list_workflows()
        if active is not None:
            workflows = [item for item in workflows if item.get("active") is active]

        formatted = [
            {
                "id": item.get("id"),
                "name": item.get("name"),
                "active": item.get("active"),
                "updatedAt": item.get("updatedAt"),
            }
            for item in workflows
        ]
        message = f"Found {len(formatted)} workflow(s)"
        if active is not None:
            message += f" (filtered by active={str(active).lower()})"
        return format_success(formatted, message)


@ToolRegistry.register
class ReadWorkflowTool(WorkflowTool):
    name = "workflow_read"
    description = "Read a specific workflow by ID"
    parameters = {
        "type": "object",
        "properties": {"workflowId": _WORKFLOW_ID_SCHEMA},
        "required": ["workflowId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(params, "workflowId")
        workflow = await self.service.workflows.read_workflow(workflow_id)
        return format_success(workflow, f"Retrieved workflow: {workflow.get('name')}")


@ToolRegistry.register
class CreateWorkflowTool(WorkflowTool):
    """
    创建工作流

    功能:
        - 创建后按需激活并写入标签
    """

    name = "create_workflow"
    description = "Create a new workflow in n8n"
    parameters = {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Name of the workflow"},
            "nodes": {
                "type": "array",
                "description": "Array of node objects defining the workflow",
                "items": {"type": "object"},
            },
            "connections": {
                "type": "object",
                "description": "Connection mappings between nodes",
            },
            "active": {
                "type": "boolean",
                "description": "Whether the workflow should be active upon creation (defaults to false)",
            },
            "tags": {
                "type": "array",
                "description": "IDs of tags to associate with the workflow",
                "items": {"type": "string"},
            },
        },
        "required": ["name"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        name = require_str(params, "name")
        _validate_definition(params)
        active = optional_bool(params, "active") is True
        tags = params.get("tags") or []

        created = await self.service.workflows.create_workflow(
            {
                "name": name,
                "nodes": params.get("nodes") or [],
                "connections": params.get("connections") or {},
            }
        )
        workflow_id = str(created.get("id"))
        if active:
            created = await self._set_active(workflow_id, True)
        if tags:
            await self._assign_tags(workflow_id, tags)
        return format_success(_summary(created), "Workflow created successfully")


@ToolRegistry.register
class UpdateWorkflowTool(WorkflowTool):
    """
    更新工作流

    功能:
        - 先读取当前定义, 仅提交有变化的字段
        - 激活状态通过 activate/deactivate 接口切换
        - 标签更新失败仅记录警告
    """

    name = "update_workflow"
    description = "Update an existing workflow in n8n"
    parameters = {
        "type": "object",
        "properties": {
            "workflowId": {"type": "string", "description": "ID of the workflow to update"},
            "name": {"type": "string", "description": "New name for the workflow"},
            "nodes": {
                "type": "array",
                "description": "Updated array of node objects that define the workflow",
                "items": {"type": "object"},
            },
            "connections": {
                "type": "object",
                "description": "Updated connection mappings between nodes",
            },
            "active": {"type": "boolean", "description": "Whether the workflow should be active"},
            "tags": {
                "type": "array",
                "description": "Updated tag IDs to associate with the workflow",
                "items": {"type": "string"},
            },
        },
        "required": ["workflowId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(params, "workflowId")
        _validate_definition(params)
        active = optional_bool(params, "active")
        tags = params.get("tags")

        try:
            current = await self.service.workflows.read_workflow(workflow_id)
        except N8nApiError as exc:
            raise N8nApiError(f"Workflow {workflow_id} not found", 404) from exc

        definition = {
            key: params[key]
            for key in ("name", "nodes", "connections")
            if params.get(key) is not None
        }
        if not definition and active is None and tags is None:
            return format_success(current, "No changes requested - workflow unchanged")

        updated = current
        if definition:
            updated = await self.service.workflows.update_workflow(
                workflow_id, definition, current=current
            )
        if active is not None and active != current.get("active"):
            updated = await self._set_active(workflow_id, active)
        if tags is not None:
            await self._assign_tags(workflow_id, tags)

        changes: list[str] = []
        if "name" in definition and definition["name"] != current.get("name"):
            changes.append(f'name: "{current.get("name")}" → "{definition["name"]}"')
        if active is not None and active != current.get("active"):
            changes.append(f"active: {str(current.get('active')).lower()} → {str(active).lower()}")
        if "nodes" in definition:
            changes.append("nodes updated")
        if "connections" in definition:
            changes.append("connections updated")
        if tags is not None:
            changes.append("tags updated")

        summary = f"Changes applied: {', '.join(changes)}" if changes else "Workflow updated successfully"
        return format_success(_summary(updated), f"Workflow updated successfully. {summary}")


@ToolRegistry.register
class DeleteWorkflowTool(WorkflowTool):
    name = "delete_workflow"
    description = "Delete a workflow from n8n"
    parameters = {
        "type": "object",
        "properties": {"workflowId": {"type": "string", "description": "ID of the workflow to delete"}},
        "required": ["workflowId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(params, "workflowId")
        await self.service.workflows.delete_workflow(workflow_id)
        return format_success({"id": workflow_id, "deleted": True}, f"Workflow {workflow_id} deleted successfully")


@ToolRegistry.register
class ActivateWorkflowTool(WorkflowTool):
    name = "activate_workflow"
    description = "Activate a workflow in n8n"
    parameters = {
        "type": "object",
        "properties": {"workflowId": {"type": "string", "description": "ID of the workflow to activate"}},
        "required": ["workflowId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(params, "workflowId")
        workflow = await self._set_active(workflow_id, True)
        return format_success(
            _summary(workflow),
            f'Workflow "{workflow.get("name")}" ({workflow_id}) activated successfully',
        )


@ToolRegistry.register
class DeactivateWorkflowTool(WorkflowTool):
    name = "deactivate_workflow"
    description = "Deactivate a workflow in n8n"
    parameters = {
        "type": "object",
        "properties": {"workflowId": {"type": "string", "description": "ID of the workflow to deactivate"}},
        "required": ["workflowId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(params, "workflowId")
        workflow = await self._set_active(workflow_id, False)
        return format_success(
            _summary(workflow),
            f'Workflow "{workflow.get("name")}" ({workflow_id}) deactivated successfully',
        )


@ToolRegistry.register
class MoveWorkflowTool(WorkflowTool):
    name = "workflow_move"
    description = "Transfer a workflow to a different project"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the workflow to move"},
            "destinationProjectId": {
                "type": "string",
                "description": "ID of the project that should own the workflow",
            },
        },
        "required": ["id", "destinationProjectId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(params, "id", "Workflow ID is required")
        project_id = require_str(params, "destinationProjectId", "Destination project ID is required")
        result = await self.service.workflows.transfer_workflow(workflow_id, project_id)
        return format_success(
            result or {"id": workflow_id, "destinationProjectId": project_id},
            f"Workflow {workflow_id} has been moved to project {project_id}",
        )
# endregion
