"""
描述: n8n 工作流 API
主要功能:
    - 工作流的列表/读取/创建/更新/删除
    - 激活、停用与转移到项目
    - 手动触发运行
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.n8n.client import N8nApiClient, unwrap_list


DEFAULT_WORKFLOW_SETTINGS: dict[str, Any] = {
    "saveExecutionProgress": True,
    "saveManualExecutions": True,
    "saveDataErrorExecution": "all",
    "saveDataSuccessExecution": "all",
    "executionTimeout": 3600,
    "timezone": "UTC",
}

# n8n 公共 API 仅接受以下 settings 字段
ALLOWED_SETTINGS_KEYS = (
    "executionOrder",
    "saveExecutionProgress",
    "saveManualExecutions",
    "saveDataErrorExecution",
    "saveDataSuccessExecution",
    "executionTimeout",
    "timezone",
)

READ_ONLY_FIELDS = ("active", "id", "createdAt", "updatedAt", "tags")


def filter_settings(settings: Any) -> dict[str, Any]:
    if not isinstance(settings, dict):
        return {}
    return {key: settings[key] for key in ALLOWED_SETTINGS_KEYS if key in settings}


# region 工作流客户端
class WorkflowClient:
    """工作流相关接口"""
    def __init__(self, api: N8nApiClient) -> None:
        self._api = api

    async def list_workflows(
        self,
        tag_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        payload = await self._api.request(
            "GET",
            "/workflows",
            params={
                "tags": tag_id or None,
                "search": search or None,
                "limit": limit or None,
                "offset": offset or None,
            },
            error_message="Failed to list workflows",
        )
        return unwrap_list(payload)

    async def read_workflow(self, workflow_id: str) -> dict[str, Any]:
        return await self._api.request(
            "GET",
            f"/workflows/{workflow_id}",
            error_message=f"Failed to read workflow {workflow_id}",
        )

    async def create_workflow(self, workflow: dict[str, Any]) -> dict[str, Any]:
        """
        创建工作流

        参数:
            workflow: 工作流定义, 缺少 settings 时补充默认值

        返回:
            n8n 返回的工作流对象
        """
        body = dict(workflow)
        if not body.get("settings"):
            body["settings"] = dict(DEFAULT_WORKFLOW_SETTINGS)
        for field in READ_ONLY_FIELDS:
            body.pop(field, None)
        return await self._api.request(
            "POST",
            "/workflows",
            json_body=body,
            error_message="Failed to create workflow",
        )

    async def update_workflow(
        self,
        workflow_id: str,
        workflow: dict[str, Any],
        current: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        更新工作流 (未提供的必填字段沿用现值)

        参数:
            workflow_id: 工作流 ID
            workflow: 需要更新的字段
            current: 调用方已读取的当前定义, 缺省时重新读取
        """
        if current is None:
            current = await self.read_workflow(workflow_id)
        body: dict[str, Any] = {
            "name": workflow.get("name", current.get("name")),
            "nodes": workflow.get("nodes", current.get("nodes")),
            "connections": workflow.get("connections", current.get("connections")),
            "settings": filter_settings(workflow.get("settings", current.get("settings"))),
        }
        return await self._api.request(
            "PUT",
            f"/workflows/{workflow_id}",
            json_body=body,
            error_message=f"Failed to update workflow {workflow_id}",
        )

    async def delete_workflow(self, workflow_id: str) -> Any:
        return await self._api.request(
            "DELETE",
            f"/workflows/{workflow_id}",
            error_message=f"Failed to delete workflow {workflow_id}",
        )

    async def transfer_workflow(self, workflow_id: str, destination_project_id: str) -> Any:
        return await self._api.request(
            "PUT",
            f"/workflows/{workflow_id}/transfer",
            json_body={"destinationProjectId": destination_project_id},
            error_message=(
                f"Failed to transfer workflow {workflow_id} "
                f"to project {destination_project_id}"
            ),
        )

    async def activate_workflow(self, workflow_id: str) -> dict[str, Any]:
        return await self._api.request(
            "POST",
            f"/workflows/{workflow_id}/activate",
            error_message=f"Failed to activate workflow {workflow_id}",
        )

    async def deactivate_workflow(self, workflow_id: str) -> dict[str, Any]:
        return await self._api.request(
            "POST",
            f"/workflows/{workflow_id}/deactivate",
            error_message=f"Failed to deactivate workflow {workflow_id}",
        )

    async def run_workflow(self, workflow_id: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._api.request(
            "POST",
            f"/workflows/{workflow_id}/run",
            json_body=data or {},
            error_message=f"Failed to run workflow {workflow_id}",
        )
# endregion
