"""
描述: n8n 变量工具
主要功能:
    - 变量的列表/创建
    - 按 ID 或 key 删除变量
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.errors import ToolArgumentError
from n8n_mcp.n8n.variable import VariableType
from n8n_mcp.tools.base import BaseTool, optional_bool, optional_int, optional_str, require_str
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success


class VariableTool(BaseTool):
    family = "variable"


# region 变量工具
@ToolRegistry.register
class VariableListTool(VariableTool):
    name = "variable_list"
    description = "List available variables"
    parameters = {
        "type": "object",
        "properties": {
            "projectId": {"type": "string", "description": "Filter by project ID"},
            "type": {
                "type": "string",
                "enum": [item.value for item in VariableType],
                "description": "Filter by variable type",
            },
            "includeSystem": {"type": "boolean", "description": "Whether to include system variables"},
            "includeValues": {
                "type": "boolean",
                "description": "Whether to include variable values in the response",
            },
            "limit": {"type": "number", "description": "Number of results to return"},
            "offset": {"type": "number", "description": "Offset for pagination"},
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        project_id = optional_str(params, "projectId")
        variable_type = optional_str(params, "type")
        variables = await self.service.variables.list_variables(
            project_id=project_id,
            variable_type=variable_type,
            include_system=optional_bool(params, "includeSystem"),
            include_values=optional_bool(params, "includeValues"),
            limit=optional_int(params, "limit"),
            offset=optional_int(params, "offset"),
        )
        message = f"Found {len(variables)} variable(s)"
        if project_id:
            message += f" for project {project_id}"
        if variable_type:
            message += f" of type {variable_type}"
        return format_success(variables, message + ".")


@ToolRegistry.register
class VariableCreateTool(VariableTool):
    name = "variable_create"
    description = "Create a new variable"
    parameters = {
        "type": "object",
        "properties": {
            "key": {"type": "string", "description": "Key (name) of the variable"},
            "value": {"type": "string", "description": "Value of the variable"},
        },
        "required": ["key", "value"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        key = require_str(params, "key", "Variable key is required")
        value = params.get("value")
        if value is None:
            raise ToolArgumentError("Variable value is required")
        variable = await self.service.variables.create_variable(key, str(value))
        return format_success(variable, f'Variable "{variable.get("key", key)}" created successfully')


@ToolRegistry.register
class VariableDeleteTool(VariableTool):
    """删除变量 (按 key 删除时先查询列表定位 ID)"""

    name = "variable_delete"
    description = "Delete a variable"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the variable to delete"},
            "key": {
                "type": "string",
                "description": "Key (name) of the variable to delete, can be used instead of ID",
            },
            "projectId": {
                "type": "string",
                "description": "Project ID to look in when deleting by key",
            },
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        variable_id = optional_str(params, "id")
        key = optional_str(params, "key")
        if not variable_id and not key:
            raise ToolArgumentError("Either variable ID or key is required")

        if variable_id:
            result = await self.service.variables.delete_variable(variable_id)
            return format_success(result, f"Variable with ID {variable_id} deleted successfully")

        variables = await self.service.variables.list_variables(
            project_id=optional_str(params, "projectId")
        )
        match = next((item for item in variables if item.get("key") == key), None)
        if match is None:
            raise ToolArgumentError(f'Variable with key "{key}" not found')
        result = await self.service.variables.delete_variable(str(match.get("id")))
        return format_success(result, f'Variable with key "{key}" deleted successfully')
# endregion
