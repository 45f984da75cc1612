"""
描述: n8n 用户 API
主要功能:
    - 用户的列表/读取/创建/删除
    - 修改用户全局角色
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from n8n_mcp.n8n.client import N8nApiClient, unwrap_list, unwrap_object


class UserRole(str, Enum):
    OWNER = "owner"
    MEMBER = "member"
    ADMIN = "admin"


# region 用户客户端
class UserClient:
    """用户相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def list_users(self) -> list[dict[str, Any]]:
        payload = await self._api.request("GET", "/users", error_message="Failed to list users")
        return unwrap_list(payload)

    async def get_user(self, user_id: str) -> dict[str, Any]:
        payload = await self._api.request(
            "GET",
            f"/users/{user_id}",
            error_message=f"Failed to get user {user_id}",
        )
        return unwrap_object(payload)

    async def create_user(self, user: dict[str, Any]) -> dict[str, Any]:
        payload = await self._api.request(
            "POST",
            "/users",
            json_body=user,
            error_message="Failed to create user",
        )
        return unwrap_object(payload)

    async def change_user_role(self, user_id: str, new_role_name: str) -> dict[str, Any]:
        """
        修改用户角色

        参数:
            user_id: 用户 ID
            new_role_name: n8n 角色名 (global:admin / global:member)
        """
        payload = await self._api.request(
            "PATCH",
            f"/users/{user_id}/role",
            json_body={"newRoleName": new_role_name},
            error_message=f"Failed to change role for user {user_id}",
        )
        return unwrap_object(payload)

    async def delete_user(self, user_id: str) -> Any:
        return await self._api.request(
            "DELETE",
            f"/users/{user_id}",
            error_message=f"Failed to delete user {user_id}",
        )
# endregion
