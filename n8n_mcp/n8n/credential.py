"""
描述: n8n 凭证 API
主要功能:
    - 创建/删除凭证
    - 将凭证共享给其他用户
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.n8n.client import N8nApiClient


# region 凭证客户端
class CredentialClient:
    """凭证相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def create_credential(self, credential: dict[str, Any]) -> dict[str, Any]:
        return await self._api.request(
            "POST",
            "/credentials",
            json_body=credential,
            error_message="Failed to create credential",
        )

    async def move_credential(self, credential_id: str, new_owner_id: str) -> Any:
        return await self._api.request(
            "POST",
            f"/credentials/{credential_id}/share",
            json_body={"shareWithId": new_owner_id},
            error_message=f"Failed to move credential {credential_id}",
        )

    async def delete_credential(self, credential_id: str) -> Any:
        return await self._api.request(
            "DELETE",
            f"/credentials/{credential_id}",
            error_message=f"Failed to delete credential {credential_id}",
        )
# endregion
