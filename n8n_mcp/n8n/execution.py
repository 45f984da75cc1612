"""
描述: n8n 执行记录 API
主要功能:
    - 执行记录的列表/读取/删除
    - 停止与取消正在运行的执行
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.n8n.client import N8nApiClient, unwrap_list


# region 执行记录客户端
class ExecutionClient:
    """执行记录相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def list_executions(
        self,
        workflow_id: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        payload = await self._api.request(
            "GET",
            "/executions",
            params={
                "workflowId": workflow_id or None,
                "status": status or None,
                "limit": limit or None,
                "offset": offset or None,
            },
            error_message="Failed to list executions",
        )
        return unwrap_list(payload)

    async def read_execution(self, execution_id: str) -> dict[str, Any]:
        return await self._api.request(
            "GET",
            f"/executions/{execution_id}",
            error_message=f"Failed to read execution {execution_id}",
        )

    async def delete_execution(self, execution_id: str) -> Any:
        return await self._api.request(
            "DELETE",
            f"/executions/{execution_id}",
            error_message=f"Failed to delete execution {execution_id}",
        )

    async def stop_execution(self, execution_id: str) -> Any:
        return await self._api.request(
            "POST",
            f"/executions/{execution_id}/stop",
            error_message=f"Failed to stop execution {execution_id}",
        )
# endregion
