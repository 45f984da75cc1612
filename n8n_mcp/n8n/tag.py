"""
描述: n8n 标签 API
主要功能:
    - 标签的列表/读取/创建/更新/删除
    - 将校验失败、冲突与不支持的方法转换为可读错误
"""

from __future__ import annotations

import logging
from typing import Any

from n8n_mcp.errors import N8nApiError
from n8n_mcp.n8n.client import N8nApiClient, server_message, unwrap_list


logger = logging.getLogger(__name__)


# region 标签客户端
class TagClient:
    """标签相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def list_tags(
        self,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        payload = await self._api.request(
            "GET",
            "/tags",
            params={
                "search": search or None,
                "limit": limit or None,
                "offset": offset or None,
            },
            error_message="Failed to get tags",
        )
        return unwrap_list(payload)

    async def read_tag(self, tag_id: str) -> dict[str, Any]:
        return await self._api.request(
            "GET",
            f"/tags/{tag_id}",
            error_message=f"Failed to get tag {tag_id}",
        )

    async def create_tag(self, name: str, color: Any = None) -> dict[str, Any]:
        # n8n 只接受 name 与字符串 color
        body: dict[str, Any] = {"name": name}
        if color and isinstance(color, str):
            body["color"] = color
        try:
            return await self._api.request(
                "POST",
                "/tags",
                json_body=body,
                error_message="Failed to create tag",
            )
        except N8nApiError as exc:
            message = server_message(exc)
            if exc.status_code == 400 and message is not None:
                logger.warning("Tag creation validation error: %s", message)
                raise exc.with_message(f"Tag creation failed due to validation: {message}") from exc
            raise

    async def update_tag(self, tag_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        try:
            return await self._api.request(
                "PUT",
                f"/tags/{tag_id}",
                json_body=changes,
                error_message=f"Failed to update tag {tag_id}",
            )
        except N8nApiError as exc:
            message = server_message(exc)
            if exc.status_code == 405:
                logger.warning("Method not allowed for updating tag %s", tag_id)
                raise exc.with_message("Tag update operation not supported by the n8n API") from exc
            if exc.status_code == 409 and message is not None and "already exists" in message:
                logger.warning("Tag update conflict for tag %s: %s", tag_id, message)
                raise exc.with_message(f"Tag update failed: {message}") from exc
            if exc.status_code == 400 and message is not None:
                logger.warning("Tag update validation error for tag %s: %s", tag_id, message)
                raise exc.with_message(f"Tag update failed due to validation: {message}") from exc
            raise

    async def delete_tag(self, tag_id: str) -> dict[str, bool]:
        await self._api.request(
            "DELETE",
            f"/tags/{tag_id}",
            error_message=f"Failed to delete tag {tag_id}",
        )
        return {"success": True}
# endregion
