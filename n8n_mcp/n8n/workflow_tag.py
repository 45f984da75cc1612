"""
描述: n8n 工作流标签 API
主要功能:
    - 查询与替换工作流关联的标签
"""

from __future__ import annotations

import logging
from typing import Any

from n8n_mcp.errors import N8nApiError
from n8n_mcp.n8n.client import N8nApiClient, server_message, unwrap_list


logger = logging.getLogger(__name__)


# region 工作流标签客户端
class WorkflowTagClient:
    """工作流标签相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def list_workflow_tags(self, workflow_id: str) -> list[dict[str, Any]]:
        payload = await self._api.request(
            "GET",
            f"/workflows/{workflow_id}/tags",
            error_message=f"Failed to get tags for workflow {workflow_id}",
        )
        return unwrap_list(payload)

    async def update_workflow_tags(self, workflow_id: str, tag_ids: list[str]) -> list[dict[str, Any]]:
        """
        替换工作流的标签集合

        参数:
            workflow_id: 工作流 ID
            tag_ids: 标签 ID 列表, 以 [{"id": ...}] 形式提交
        """
        try:
            payload = await self._api.request(
                "PUT",
                f"/workflows/{workflow_id}/tags",
                json_body=[{"id": tag_id} for tag_id in tag_ids],
                error_message=f"Failed to update tags for workflow {workflow_id}",
            )
        except N8nApiError as exc:
            message = server_message(exc)
            if exc.status_code == 400 and message is not None:
                logger.warning(
                    "Workflow tags update validation error for workflow %s: %s",
                    workflow_id,
                    message,
                )
                raise exc.with_message(
                    f"Workflow tags update failed due to validation: {message}"
                ) from exc
            raise
        return unwrap_list(payload)
# endregion
