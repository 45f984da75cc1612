"""
描述: n8n 标签工具
主要功能:
    - 标签的列表/读取/创建/更新/删除
    - 工作流标签的查询与替换
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.errors import ToolArgumentError
from n8n_mcp.tools.base import BaseTool, optional_int, optional_str, require_str
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success


_TAG_ID_SCHEMA = {"type": "string", "description": "ID of the tag"}


class TagTool(BaseTool):
    family = "tag"


# region 标签工具
@ToolRegistry.register
class TagListTool(TagTool):
    name = "tag_list"
    description = "List available tags"
    parameters = {
        "type": "object",
        "properties": {
            "search": {"type": "string", "description": "Search term to filter tags"},
            "limit": {"type": "number", "description": "Number of results to return"},
            "offset": {"type": "number", "description": "Offset for pagination"},
        },
        "required": [],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        search = optional_str(params, "search")
        tags = await self.service.tags.list_tags(
            search=search,
            limit=optional_int(params, "limit"),
            offset=optional_int(params, "offset"),
        )
        message = f"Found {len(tags)} tag(s)"
        if search:
            message += f' matching "{search}"'
        return format_success(tags, message + ".")


@ToolRegistry.register
class TagReadTool(TagTool):
    name = "tag_read"
    description = "Read details about a specific tag"
    parameters = {
        "type": "object",
        "properties": {"id": _TAG_ID_SCHEMA},
        "required": ["id"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        tag_id = require_str(params, "id", "Tag ID is required")
        tag = await self.service.tags.read_tag(tag_id)
        return format_success(tag, f"Retrieved tag: {tag.get('name')} ({tag.get('id')})")


@ToolRegistry.register
class TagCreateTool(TagTool):
    name = "tag_create"
    description = "Create a new tag"
    parameters = {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Name of the tag"},
            "color": {"type": "string", "description": "Color of the tag as a hex code"},
        },
        "required": ["name"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        name = require_str(params, "name", "Tag name is required")
        tag = await self.service.tags.create_tag(name, params.get("color"))
        return format_success(
            tag,
            f'Tag "{tag.get("name")}" created successfully with ID: {tag.get("id")}',
        )


@ToolRegistry.register
class TagUpdateTool(TagTool):
    name = "tag_update"
    description = "Update an existing tag"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the tag to update"},
            "name": {"type": "string", "description": "New name for the tag"},
            "color": {"type": "string", "description": "New color for the tag as a hex code"},
        },
        "required": ["id"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        tag_id = require_str(params, "id", "Tag ID is required")
        changes = {key: params[key] for key in ("name", "color") if params.get(key) is not None}
        if not changes:
            raise ToolArgumentError("At least one field to update is required")
        tag = await self.service.tags.update_tag(tag_id, changes)
        return format_success(tag, f'Tag "{tag.get("name")}" updated successfully')


@ToolRegistry.register
class TagDeleteTool(TagTool):
    """删除标签 (先读取标签名用于提示信息)"""

    name = "tag_delete"
    description = "Delete a tag"
    parameters = {
        "type": "object",
        "properties": {"id": {"type": "string", "description": "ID of the tag to delete"}},
        "required": ["id"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        tag_id = require_str(params, "id", "Tag ID is required")
        tag = await self.service.tags.read_tag(tag_id)
        result = await self.service.tags.delete_tag(tag_id)
        return format_success(result, f'Tag "{tag.get("name")}" ({tag_id}) deleted successfully')
# endregion


# region 工作流标签工具
@ToolRegistry.register
class WorkflowTagsListTool(TagTool):
    name = "workflow_tags_list"
    description = "List the tags assigned to a workflow"
    family = "workflow tag"
    parameters = {
        "type": "object",
        "properties": {"workflowId": {"type": "string", "description": "ID of the workflow"}},
        "required": ["workflowId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(
            params, "workflowId", "Workflow ID is required for listing workflow tags"
        )
        tags = await self.service.workflow_tags.list_workflow_tags(workflow_id)
        return format_success(
            tags,
            f"Successfully retrieved {len(tags)} tags for workflow {workflow_id}",
        )


@ToolRegistry.register
class WorkflowTagsUpdateTool(TagTool):
    name = "workflow_tags_update"
    description = "Replace the set of tags assigned to a workflow"
    family = "workflow tag"
    parameters = {
        "type": "object",
        "properties": {
            "workflowId": {"type": "string", "description": "ID of the workflow"},
            "tagIds": {
                "type": "array",
                "description": "IDs of the tags the workflow should carry",
                "items": {"type": "string"},
            },
        },
        "required": ["workflowId", "tagIds"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        workflow_id = require_str(
            params, "workflowId", "Workflow ID is required for updating workflow tags"
        )
        tag_ids = params.get("tagIds")
        if not isinstance(tag_ids, list):
            raise ToolArgumentError("Tag IDs must be provided as an array")
        tags = await self.service.workflow_tags.update_workflow_tags(
            workflow_id, [str(tag_id) for tag_id in tag_ids]
        )
        return format_success(tags, f"Successfully updated tags for workflow {workflow_id}")
# endregion
