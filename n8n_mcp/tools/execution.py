"""
描述: n8n 执行记录工具
主要功能:
    - 执行列表 (本地过滤、统计) 与详情
    - 删除、停止执行
    - 通过 API 或 Webhook 触发工作流
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from n8n_mcp.errors import ToolArgumentError
from n8n_mcp.tools.base import BaseTool, optional_bool, optional_int, optional_str, require_str
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success
from n8n_mcp.utils.execution_formatter import (
    format_execution_details,
    format_execution_summary,
    summarize_executions,
)


class ExecutionTool(BaseTool):
    family = "execution"


# region 执行记录工具
@ToolRegistry.register
class ListExecutionsTool(ExecutionTool):
    """
    列出执行记录

    功能:
        - 拉取全部执行后按 workflowId/status 本地过滤
        - 可选附带过滤前的统计信息
    """

    name = "list_executions"
    description = "Retrieve a list of workflow executions from n8n, with optional filtering."
    parameters = {
        "type": "object",
        "properties": {
            "workflowId": {
                "type": "string",
                "description": "Optional ID of workflow to filter executions by",
            },
            "status": {
                "type": "string",
                "description": "Optional status to filter by (e.g., success, error, waiting)",
            },
            "limit": {
                "type": "number",
                "description": "Maximum number of executions to return (default: all matching)",
            },
            "includeSummary": {
                "type": "boolean",
                "description": "Include summary statistics about all executions (before filtering/limiting)",
                "default": False,
            },
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = optional_str(params, "workflowId")
        status = optional_str(params, "status")
        limit = optional_int(params, "limit")
        include_summary = optional_bool(params, "includeSummary") is True

        executions = await self.service.executions.list_executions()
        filtered = executions
        if workflow_id:
            filtered = [item for item in filtered if str(item.get("workflowId")) == workflow_id]
        if status:
            filtered = [item for item in filtered if item.get("status") == status]
        if limit is not None and limit > 0:
            filtered = filtered[:limit]

        now = datetime.now(timezone.utc)
        formatted = [format_execution_summary(item, now) for item in filtered]
        filters_applied = bool(workflow_id or status)
        data = {
            "executions": formatted,
            "summary": summarize_executions(executions) if include_summary else None,
            "count": len(formatted),
            "filtersApplied": filters_applied,
            "totalAvailable": len(executions),
        }
        suffix = " matching filters." if filters_applied else "."
        return format_success(data, f"Found {len(formatted)} execution(s){suffix}")


@ToolRegistry.register
class GetExecutionTool(ExecutionTool):
    name = "get_execution"
    description = "Retrieve detailed information about a specific workflow execution"
    parameters = {
        "type": "object",
        "properties": {
            "executionId": {"type": "string", "description": "ID of the execution to retrieve"},
        },
        "required": ["executionId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        execution_id = require_str(params, "executionId")
        execution = await self.service.executions.read_execution(execution_id)
        details = format_execution_details(execution)
        return format_success(
            details,
            f"Execution {execution_id} details (status: {execution.get('status')})",
        )


@ToolRegistry.register
class DeleteExecutionTool(ExecutionTool):
    name = "delete_execution"
    description = "Delete a specific workflow execution from n8n"
    parameters = {
        "type": "object",
        "properties": {
            "executionId": {"type": "string", "description": "ID of the execution to delete"},
        },
        "required": ["executionId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        execution_id = require_str(params, "executionId")
        await self.service.executions.delete_execution(execution_id)
        return format_success(
            {"id": execution_id, "deleted": True},
            f"Successfully deleted execution {execution_id}",
        )


@ToolRegistry.register
class ExecutionRunTool(ExecutionTool):
    name = "execution_run"
    description = "Execute a workflow via the API"
    parameters = {
        "type": "object",
        "properties": {
            "workflowId": {"type": "string", "description": "ID of the workflow to execute"},
            "data": {"type": "object", "description": "Data to pass to the workflow execution"},
        },
        "required": ["workflowId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(params, "workflowId", "Workflow ID is required")
        data = params.get("data")
        if data is not None and not isinstance(data, dict):
            raise ToolArgumentError('Parameter "data" must be an object')

        result = await self.service.workflows.run_workflow(workflow_id, data)
        if not isinstance(result, dict):
            result = {}
        execution: dict[str, Any] = {
            "id": result.get("executionId") or result.get("id"),
            "workflowId": workflow_id,
            "finished": False,
            "status": "running",
            "mode": "manual",
            "data": {"resultData": {}},
            "startedAt": datetime.now(timezone.utc).isoformat(),
            "stoppedAt": "",
        }
        execution.update(result)
        return format_success(execution, f"Workflow execution started with ID: {execution['id']}")


@ToolRegistry.register
class ExecutionStopTool(ExecutionTool):
    name = "execution_stop"
    description = "Stop a running workflow execution"
    parameters = {
        "type": "object",
        "properties": {
            "executionId": {"type": "string", "description": "ID of the execution to stop"},
        },
        "required": ["executionId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        execution_id = require_str(params, "executionId", "Execution ID is required")
        await self.service.executions.stop_execution(execution_id)
        return format_success({"success": True}, f"Execution {execution_id} stopped successfully")


@ToolRegistry.register
class RunWebhookTool(ExecutionTool):
    """通过 Webhook 触发工作流 (Basic Auth)"""

    name = "run_webhook"
    description = "Execute a workflow via webhook with optional input data"
    parameters = {
        "type": "object",
        "properties": {
            "workflowName": {
                "type": "string",
                "description": 'Name of the workflow to execute (e.g., "hello-world")',
            },
            "data": {
                "type": "object",
                "description": "Input data (JSON object) to pass to the webhook",
                "additionalProperties": True,
            },
            "headers": {
                "type": "object",
                "description": "Additional headers (key-value pairs) to send with the request",
                "additionalProperties": {"type": "string"},
            },
        },
        "required": ["workflowName"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_name = require_str(params, "workflowName")
        data = params.get("data")
        headers = params.get("headers")
        if data is not None and not isinstance(data, dict):
            raise ToolArgumentError('Parameter "data" must be an object')
        if headers is not None and not isinstance(headers, dict):
            raise ToolArgumentError('Parameter "headers" must be an object')

        response = await self.service.webhooks.run_webhook(
            workflow_name,
            data=data,
            headers={str(key): str(value) for key, value in (headers or {}).items()},
        )
        return format_success(response, "Webhook executed successfully")
# endregion
