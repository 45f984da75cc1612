from __future__ import annotations

import asyncio
import json

import n8n_mcp.tools  # noqa: F401
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult

from _fake_n8n import FakeN8n, build_context


def _call(fake: FakeN8n, name: str, params: dict) -> ToolResult:
    context = build_context(fake)
    tool_cls = ToolRegistry.get(name)
    assert tool_cls is not None, name

    async def run() -> ToolResult:
        try:
            return await tool_cls(context).execute(params)
        finally:
            await context.service.aclose()

    return asyncio.run(run())


def _data(result: ToolResult) -> object:
    return json.loads(result.content[1].text)


def _requests(fake: FakeN8n) -> list[tuple[str, str]]:
    return [(call["method"], call["path"]) for call in fake.calls]


# region 工作流
def test_create_workflow_with_active_uses_activate_endpoint() -> None:
    fake = FakeN8n()
    fake.add("POST", "/workflows", body={"id": "w9", "name": "New", "active": False})
    fake.add("POST", "/workflows/w9/activate", body={"id": "w9", "name": "New", "active": True})

    result = _call(fake, "create_workflow", {"name": "New", "active": True})

    assert result.text == "Workflow created successfully"
    assert _data(result) == {"id": "w9", "name": "New", "active": True}
    assert _requests(fake) == [("POST", "/workflows"), ("POST", "/workflows/w9/activate")]
    assert "active" not in fake.calls_to("POST", "/workflows")[0]["json_body"]


def test_activate_and_deactivate_workflow() -> None:
    fake = FakeN8n()
    fake.add("POST", "/workflows/w1/activate", body={"id": "w1", "name": "Demo", "active": True})
    fake.add("POST", "/workflows/w1/deactivate", body={"id": "w1", "name": "Demo", "active": False})

    activated = _call(fake, "activate_workflow", {"workflowId": "w1"})
    deactivated = _call(fake, "deactivate_workflow", {"workflowId": "w1"})

    assert activated.text == 'Workflow "Demo" (w1) activated successfully'
    assert deactivated.text == 'Workflow "Demo" (w1) deactivated successfully'
    assert _data(deactivated) == {"id": "w1", "name": "Demo", "active": False}
    assert _requests(fake) == [
        ("POST", "/workflows/w1/activate"),
        ("POST", "/workflows/w1/deactivate"),
    ]


def test_workflow_move_transfers_to_project() -> None:
    fake = FakeN8n()
    fake.add("PUT", "/workflows/w1/transfer", 204)

    result = _call(fake, "workflow_move", {"id": "w1", "destinationProjectId": "p2"})

    assert result.text == "Workflow w1 has been moved to project p2"
    assert _data(result) == {"id": "w1", "destinationProjectId": "p2"}
    assert fake.calls_to("PUT", "/workflows/w1/transfer")[0]["json_body"] == {
        "destinationProjectId": "p2"
    }
# endregion


# region 执行记录
def test_get_execution_returns_node_details() -> None:
    fake = FakeN8n()
    fake.add(
        "GET",
        "/executions/e1",
        body={
            "id": "e1",
            "workflowId": "w1",
            "status": "success",
            "mode": "trigger",
            "startedAt": "2024-01-01T00:00:00Z",
            "stoppedAt": "2024-01-01T00:00:03Z",
            "data": {"resultData": {"runData": {"Start": [{"status": "success", "data": {"main": [[{"json": {}}]]}}]}}},
        },
    )

    result = _call(fake, "get_execution", {"executionId": "e1"})

    data = _data(result)
    assert result.text == "Execution e1 details (status: success)"
    assert data["duration"] == "3s"
    assert data["nodeResults"]["Start"]["items"] == 1
    assert data["error"] is None


def test_delete_and_stop_execution() -> None:
    fake = FakeN8n()
    fake.add("DELETE", "/executions/e1", 204)
    fake.add("POST", "/executions/e2/stop", body={"id": "e2", "status": "canceled"})

    deleted = _call(fake, "delete_execution", {"executionId": "e1"})
    stopped = _call(fake, "execution_stop", {"executionId": "e2"})

    assert deleted.text == "Successfully deleted execution e1"
    assert _data(deleted) == {"id": "e1", "deleted": True}
    assert stopped.text == "Execution e2 stopped successfully"
    assert _requests(fake) == [("DELETE", "/executions/e1"), ("POST", "/executions/e2/stop")]


def test_execution_run_merges_api_result() -> None:
    fake = FakeN8n()
    fake.add("POST", "/workflows/w1/run", body={"executionId": "e5"})

    result = _call(fake, "execution_run", {"workflowId": "w1", "data": {"orderId": 7}})

    data = _data(result)
    assert result.text == "Workflow execution started with ID: e5"
    assert data["workflowId"] == "w1"
    assert data["status"] == "running"
    assert data["executionId"] == "e5"
    assert fake.calls_to("POST", "/workflows/w1/run")[0]["json_body"] == {"orderId": 7}


def test_run_webhook_tool_posts_to_webhook_url() -> None:
    fake = FakeN8n()
    fake.add("POST", "/webhook/hello-world", body={"greeting": "hi"})

    result = _call(
        fake,
        "run_webhook",
        {"workflowName": "hello-world", "data": {"name": "n8n"}, "headers": {"X-Trace": "abc"}},
    )

    assert result.text == "Webhook executed successfully"
    assert _data(result)["data"] == {"greeting": "hi"}
    call = fake.calls_to("POST", "/webhook/hello-world")[0]
    assert call["json_body"] == {"name": "n8n"}
    assert call["headers"]["x-trace"] == "abc"


def test_run_webhook_rejects_non_object_data() -> None:
    fake = FakeN8n()

    result = _call(fake, "run_webhook", {"workflowName": "hello-world", "data": [1, 2]})

    assert result.text == 'Error: Parameter "data" must be an object'
    assert fake.calls == []
# endregion


# region 项目
def test_project_create_update_delete() -> None:
    fake = FakeN8n()
    fake.add("POST", "/projects", body={"id": "p1", "name": "Ops"})
    fake.add("PATCH", "/projects/p1", 204)
    fake.add("DELETE", "/projects/p1", 204)

    created = _call(fake, "project_create", {"name": "Ops"})
    updated = _call(fake, "project_update", {"id": "p1", "name": "Platform"})
    deleted = _call(fake, "project_delete", {"id": "p1", "force": True})

    assert created.text == 'Project "Ops" created successfully with ID: p1'
    assert updated.text == 'Project "Platform" (p1) updated successfully'
    assert deleted.text == 'Project with ID "p1" force deleted successfully'
    assert fake.calls_to("PATCH", "/projects/p1")[0]["json_body"] == {"name": "Platform"}
    assert fake.calls_to("DELETE", "/projects/p1")[0]["params"] == {"force": "true"}


def test_project_update_requires_name() -> None:
    fake = FakeN8n()

    result = _call(fake, "project_update", {"id": "p1"})

    assert result.text == "Error: Project name is required"
    assert fake.calls == []
# endregion


# region 凭证
def test_credential_create_maps_shared_users() -> None:
    fake = FakeN8n()
    fake.add("POST", "/credentials", body={"id": "c1", "name": "Slack", "type": "slackApi"})

    result = _call(
        fake,
        "credential_create",
        {
            "name": "Slack",
            "type": "slackApi",
            "data": {"accessToken": "xoxb"},
            "sharedWithUsers": ["u2"],
        },
    )

    assert result.text == 'Successfully created credential "Slack"'
    assert fake.calls_to("POST", "/credentials")[0]["json_body"] == {
        "name": "Slack",
        "type": "slackApi",
        "data": {"accessToken": "xoxb"},
        "sharedWith": ["u2"],
    }


def test_credential_create_requires_data() -> None:
    fake = FakeN8n()

    result = _call(fake, "credential_create", {"name": "Slack", "type": "slackApi", "data": {}})

    assert result.text == "Error: Credential data is required"
    assert fake.calls == []


def test_credential_move_and_delete() -> None:
    fake = FakeN8n()
    fake.add("POST", "/credentials/c1/share", body={"id": "c1"})
    fake.add("DELETE", "/credentials/c1", body={"id": "c1"})

    moved = _call(fake, "credential_move", {"id": "c1", "newOwnerId": "u2"})
    deleted = _call(fake, "credential_delete", {"id": "c1"})

    assert moved.text == "Successfully moved/shared credential with ID c1"
    assert deleted.text == "Successfully deleted credential with ID c1"
    assert fake.calls_to("POST", "/credentials/c1/share")[0]["json_body"] == {"shareWithId": "u2"}
    assert _requests(fake) == [("POST", "/credentials/c1/share"), ("DELETE", "/credentials/c1")]
# endregion
