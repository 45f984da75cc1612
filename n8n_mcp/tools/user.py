"""
描述: n8n 用户工具
主要功能:
    - 用户的列表/读取/创建/删除
    - 修改用户角色 (admin/member)
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.errors import N8nApiError, ToolArgumentError
from n8n_mcp.n8n.user import UserRole
from n8n_mcp.tools.base import BaseTool, optional_str, require_str
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult, format_success


_ROLE_VALUES = [item.value for item in UserRole]
_INVALID_ROLE_MESSAGE = "Valid role is required (owner, admin, or member)"

# n8n 全局角色名
_ROLE_NAMES = {
    UserRole.ADMIN.value: "global:admin",
    UserRole.MEMBER.value: "global:member",
}


def _public_fields(user: dict[str, Any], *fields: str) -> dict[str, Any]:
    return {field: user.get(field) for field in fields}


class UserTool(BaseTool):
    family = "user"


# region 用户工具
@ToolRegistry.register
class UserListTool(UserTool):
    name = "user_list"
    description = "List all users in the n8n instance"
    parameters = {"type": "object", "properties": {}, "required": []}

    async def run(self, params: dict[str, Any]) -> ToolResult:
        users = await self.service.users.list_users()
        formatted = [
            _public_fields(
                user, "id", "email", "firstName", "lastName", "role", "isPending", "createdAt"
            )
            for user in users
        ]
        return format_success(formatted, f"Found {len(formatted)} user(s)")


@ToolRegistry.register
class UserReadTool(UserTool):
    name = "user_read"
    description = "Get details about a specific n8n user"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the user to retrieve information about"},
        },
        "required": ["id"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        user_id = require_str(params, "id", "A user ID is required")
        user = await self.service.users.get_user(user_id)
        return format_success(user, f"Retrieved information for user {user.get('email')}")


@ToolRegistry.register
class UserCreateTool(UserTool):
    name = "user_create"
    description = "Create a new user in the n8n instance"
    parameters = {
        "type": "object",
        "properties": {
            "email": {"type": "string", "description": "Email address for the new user"},
            "firstName": {"type": "string", "description": "First name of the new user"},
            "lastName": {"type": "string", "description": "Last name of the new user"},
            "role": {
                "type": "string",
                "enum": _ROLE_VALUES,
                "description": "Role for the new user (owner, admin, or member)",
            },
            "password": {
                "type": "string",
                "description": "Optional password for the new user (if not provided, an invitation will be sent)",
            },
        },
        "required": ["email", "firstName", "lastName", "role"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        email = require_str(params, "email", "Email is required")
        first_name = require_str(params, "firstName", "First name is required")
        last_name = require_str(params, "lastName", "Last name is required")
        role = params.get("role")
        if role not in _ROLE_VALUES:
            raise ToolArgumentError(_INVALID_ROLE_MESSAGE)

        payload: dict[str, Any] = {
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
            "role": role,
        }
        password = optional_str(params, "password")
        if password:
            payload["password"] = password

        user = await self.service.users.create_user(payload)
        return format_success(
            _public_fields(user, "id", "email", "firstName", "lastName", "role", "isPending"),
            f"User {user.get('email', email)} created successfully",
        )


@ToolRegistry.register
class UserChangeRoleTool(UserTool):
    name = "user_change_role"
    description = "Change the role of an existing n8n user"
    parameters = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "ID of the user to change role for"},
            "role": {
                "type": "string",
                "enum": _ROLE_VALUES,
                "description": "New role for the user (owner, admin, or member)",
            },
        },
        "required": ["id", "role"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        user_id = require_str(params, "id", "User ID is required")
        role = params.get("role")
        if role not in _ROLE_VALUES:
            raise ToolArgumentError(_INVALID_ROLE_MESSAGE)
        if role == UserRole.OWNER.value:
            raise ToolArgumentError("Owner role cannot be changed via API")

        user = await self.service.users.change_user_role(user_id, _ROLE_NAMES[role])
        if not isinstance(user, dict):
            user = {}
        return format_success(
            _public_fields(user, "id", "email", "firstName", "lastName", "role"),
            f"User role changed to {role} successfully",
        )


@ToolRegistry.register
class UserDeleteTool(UserTool):
    """删除用户 (先确认用户存在)"""

    name = "user_delete"
    description = "Delete a user from the n8n instance"
    parameters = {
        "type": "object",
        "properties": {"id": {"type": "string", "description": "ID of the user to delete"}},
        "required": ["id"],
    }

    async def run(self, params: dict[str, Any]) -> ToolResult:
        user_id = require_str(params, "id", "User ID is required")
        try:
            user = await self.service.users.get_user(user_id)
        except N8nApiError as exc:
            raise N8nApiError(f"User with ID {user_id} not found", 404) from exc

        await self.service.users.delete_user(user_id)
        return format_success(
            {"id": user_id, "email": user.get("email"), "deleted": True},
            f"User {user.get('email')} deleted successfully",
        )
# endregion
