"""
描述: n8n 项目 API
主要功能:
    - 项目的列表/创建/更新/删除
    - License 受限时列表降级为空结果
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from n8n_mcp.errors import N8nApiError
from n8n_mcp.n8n.client import N8nApiClient, server_message, unwrap_list


logger = logging.getLogger(__name__)


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    DRAFT = "draft"
    COMPLETED = "completed"


def _is_license_error(error: N8nApiError) -> bool:
    message = server_message(error)
    return error.status_code == 403 and message is not None and "license" in message


# region 项目客户端
class ProjectClient:
    """项目相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def list_projects(
        self,
        status: str | None = None,
        owner_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        try:
            payload = await self._api.request(
                "GET",
                "/projects",
                params={
                    "status": status or None,
                    "ownerId": owner_id or None,
                    "limit": limit or None,
                    "offset": offset or None,
                },
                error_message="Failed to get projects",
            )
        except N8nApiError as exc:
            if _is_license_error(exc):
                logger.warning("Project operations limited by license: %s", server_message(exc))
                return []
            raise
        return unwrap_list(payload)

    async def create_project(self, name: str) -> dict[str, Any]:
        try:
            return await self._api.request(
                "POST",
                "/projects",
                json_body={"name": name},
                error_message="Failed to create project",
            )
        except N8nApiError as exc:
            if _is_license_error(exc):
                logger.warning("Project creation limited by license: %s", server_message(exc))
                raise exc.with_message("Project creation not available in current license tier") from exc
            message = server_message(exc)
            if exc.status_code == 400 and message is not None:
                logger.warning("Project creation validation error: %s", message)
                raise exc.with_message(f"Project creation failed due to validation: {message}") from exc
            raise

    async def update_project(self, project_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        try:
            return await self._api.request(
                "PATCH",
                f"/projects/{project_id}",
                json_body=changes,
                error_message=f"Failed to update project {project_id}",
            )
        except N8nApiError as exc:
            if _is_license_error(exc):
                logger.warning("Project update limited by license: %s", server_message(exc))
                raise exc.with_message("Project update not available in current license tier") from exc
            raise

    async def delete_project(self, project_id: str, force: bool = False) -> dict[str, bool]:
        try:
            await self._api.request(
                "DELETE",
                f"/projects/{project_id}",
                params={"force": True} if force else None,
                error_message=f"Failed to delete project {project_id}",
            )
        except N8nApiError as exc:
            if _is_license_error(exc):
                logger.warning("Project deletion limited by license: %s", server_message(exc))
                raise exc.with_message("Project deletion not available in current license tier") from exc
            raise
        return {"success": True}
# endregion
