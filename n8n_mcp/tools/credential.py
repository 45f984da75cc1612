"""
描述: n8n 凭证工具
主要功能:
    - 创建、共享、删除凭证
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.errors import ToolArgumentError
from n8n_mcp.tools.base import BaseTool, require_str
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success


class CredentialTool(BaseTool):
    family = "credential"


# region 凭证工具
@ToolRegistry.register
class CredentialCreateTool(CredentialTool):
    name = "credential_create"
    description = "Create a new credential in n8n"
    parameters = {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Name for the credential"},
            "type": {
                "type": "string",
                "description": "Type of the credential (e.g., githubApi, slackApi, etc.)",
            },
            "data": {
                "type": "object",
                "description": "Credential data containing the authentication information",
            },
            "sharedWithUsers": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Optional array of user IDs to share the credential with",
            },
        },
        "required": ["name", "type", "data"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        name = require_str(params, "name", "Credential name is required")
        credential_type = require_str(params, "type", "Credential type is required")
        data = params.get("data")
        if not isinstance(data, dict) or not data:
            raise ToolArgumentError("Credential data is required")
        shared_with = params.get("sharedWithUsers") or []
        if not isinstance(shared_with, list):
            raise ToolArgumentError('Parameter "sharedWithUsers" must be an array')

        credential = await self.service.credentials.create_credential(
            {
                "name": name,
                "type": credential_type,
                "data": data,
                "sharedWith": shared_with,
            }
        )
        return format_success(credential, f'Successfully created credential "{name}"')


@ToolRegistry.register
class CredentialMoveTool(CredentialTool):
    name = "credential_move"
    description = "Move/share a credential with another user in n8n"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the credential to move/share"},
            "newOwnerId": {"type": "string", "description": "ID of the new owner user"},
        },
        "required": ["id", "newOwnerId"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        credential_id = require_str(params, "id", "Credential ID is required")
        new_owner_id = require_str(params, "newOwnerId", "New owner ID is required")
        result = await self.service.credentials.move_credential(credential_id, new_owner_id)
        return format_success(
            result,
            f"Successfully moved/shared credential with ID {credential_id}",
        )


@ToolRegistry.register
class CredentialDeleteTool(CredentialTool):
    name = "credential_delete"
    description = "Delete a credential from n8n"
    parameters = {
        "type": "object",
        "properties": {"id": {"type": "string", "description": "ID of the credential to delete"}},
        "required": ["id"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        credential_id = require_str(params, "id", "Credential ID is required")
        result = await self.service.credentials.delete_credential(credential_id)
        return format_success(result, f"Successfully deleted credential with ID {credential_id}")
# endregion
