"""
描述: n8n 变量 API
主要功能:
    - 变量的列表/创建/删除
    - 处理社区版 License 与权限限制
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from n8n_mcp.errors import N8nApiError
from n8n_mcp.n8n.client import N8nApiClient, server_message, unwrap_list


logger = logging.getLogger(__name__)


class VariableType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    CREDENTIAL = "credential"
    SECRET = "secret"
    EXPRESSION = "expression"
    CONFIGURATION = "configuration"
    CUSTOM = "custom"


ENTERPRISE_LICENSE_MESSAGE = (
    "Variables feature requires enterprise license and is not available in the community edition"
)
INSUFFICIENT_PERMISSIONS_MESSAGE = (
    "Insufficient permissions to manage variables. "
    "Variables may require enterprise features or specific roles."
)


# region 变量客户端
class VariableClient:
    """变量相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def list_variables(
        self,
        project_id: str | None = None,
        variable_type: str | None = None,
        include_system: bool | None = None,
        include_values: bool | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        查询变量列表

        返回:
            变量列表; 受 License/权限限制 (403) 时返回空列表
        """
        try:
            payload = await self._api.request(
                "GET",
                "/variables",
                params={
                    "projectId": project_id or None,
                    "type": variable_type or None,
                    "includeSystem": include_system,
                    "includeValues": include_values,
                    "limit": limit or None,
                    "offset": offset or None,
                },
                error_message="Failed to get variables",
            )
        except N8nApiError as exc:
            if exc.status_code == 403:
                logger.warning("Variable operations limited by license or permissions")
                return []
            raise
        return unwrap_list(payload)

    async def create_variable(self, key: str, value: str) -> dict[str, Any]:
        # n8n 仅接受 key 与 value
        try:
            return await self._api.request(
                "POST",
                "/variables",
                json_body={"key": key, "value": value},
                error_message="Failed to create variable",
            )
        except N8nApiError as exc:
            message = server_message(exc)
            if exc.status_code == 400 and message is not None:
                logger.warning("Variable creation validation error: %s", message)
                raise exc.with_message(f"Variable creation failed due to validation: {message}") from exc
            if exc.status_code == 402:
                logger.warning("Variable management requires enterprise license")
                raise exc.with_message(ENTERPRISE_LICENSE_MESSAGE) from exc
            if exc.status_code == 403:
                logger.warning("Insufficient permissions for variable management")
                raise exc.with_message(INSUFFICIENT_PERMISSIONS_MESSAGE) from exc
            raise

    async def delete_variable(self, variable_id: str) -> dict[str, bool]:
        try:
            await self._api.request(
                "DELETE",
                f"/variables/{variable_id}",
                error_message=f"Failed to delete variable {variable_id}",
            )
        except N8nApiError as exc:
            if exc.status_code == 403:
                logger.warning("Variable deletion limited by license or permissions")
                raise exc.with_message(
                    "Variable deletion not available in current license or permission level"
                ) from exc
            raise
        return {"success": True}
# endregion
