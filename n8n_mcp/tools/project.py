"""
描述: n8n 项目工具
主要功能:
    - 项目的列表/创建/更新/删除
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.n8n.project import ProjectStatus
from n8n_mcp.tools.base import BaseTool, optional_bool, optional_int, optional_str, require_str
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success


class ProjectTool(BaseTool):
    family = "project"


# region 项目工具
@ToolRegistry.register
class ProjectListTool(ProjectTool):
    name = "project_list"
    description = "List available projects"
    parameters = {
        "type": "object",
        "properties": {
            "status": {
                "type": "string",
                "enum": [item.value for item in ProjectStatus],
                "description": "Filter by project status",
            },
            "ownerId": {"type": "string", "description": "Filter by owner ID"},
            "limit": {"type": "number", "description": "Number of results to return"},
            "offset": {"type": "number", "description": "Offset for pagination"},
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        status = optional_str(params, "status")
        projects = await self.service.projects.list_projects(
            status=status,
            owner_id=optional_str(params, "ownerId"),
            limit=optional_int(params, "limit"),
            offset=optional_int(params, "offset"),
        )
        suffix = f" with status: {status}" if status else ""
        return format_success(projects, f"Found {len(projects)} project(s){suffix}.")


@ToolRegistry.register
class ProjectCreateTool(ProjectTool):
    name = "project_create"
    description = "Create a new project"
    parameters = {
        "type": "object",
        "properties": {"name": {"type": "string", "description": "Name of the project"}},
        "required": ["name"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        name = require_str(params, "name", "Project name is required")
        project = await self.service.projects.create_project(name)
        return format_success(
            project,
            f'Project "{project.get("name", name)}" created successfully with ID: {project.get("id")}',
        )


@ToolRegistry.register
class ProjectUpdateTool(ProjectTool):
    name = "project_update"
    description = "Rename an existing project"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the project to update"},
            "name": {"type": "string", "description": "New name for the project"},
        },
        "required": ["id", "name"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        project_id = require_str(params, "id", "Project ID is required")
        name = require_str(params, "name", "Project name is required")
        project = await self.service.projects.update_project(project_id, {"name": name})
        if not isinstance(project, dict) or not project:
            project = {"id": project_id, "name": name}
        return format_success(
            project,
            f'Project "{project.get("name", name)}" ({project.get("id", project_id)}) updated successfully',
        )


@ToolRegistry.register
class ProjectDeleteTool(ProjectTool):
    name = "project_delete"
    description = "Delete a project"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the project to delete"},
            "force": {
                "type": "boolean",
                "description": "Whether to force delete the project and all its resources",
            },
        },
        "required": ["id"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        project_id = require_str(params, "id", "Project ID is required")
        force = optional_bool(params, "force") is True
        result = await self.service.projects.delete_project(project_id, force=force)
        verb = "force deleted" if force else "deleted"
        return format_success(result, f'Project with ID "{project_id}" {verb} successfully')
# endregion
