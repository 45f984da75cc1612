from __future__ import annotations

import asyncio
import json

import n8n_mcp.tools  # noqa: F401
from n8n_mcp.tools.base import ToolContext
from n8n_mcp.tools.registry import ToolRegistry
from n8n_mcp.tools.result import ToolResult

from _fake_n8n import FakeN8n, build_context, build_settings


def _call(context: ToolContext, name: str, params: dict) -> ToolResult:
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


def test_registry_exposes_all_tool_families() -> None:
    names = {meta["name"] for meta in ToolRegistry.list_tools()}

    assert {
        "list_workflows",
        "update_workflow",
        "workflow_move",
        "list_executions",
        "run_webhook",
        "tag_delete",
        "workflow_tags_update",
        "variable_create",
        "project_delete",
        "user_change_role",
        "credential_move",
        "source_control_pull",
        "security_audit_generate",
    } <= names


def test_registry_filters_disabled_tools() -> None:
    tools = ToolRegistry.list_tools(build_settings(enabled=["tag_list"]))

    assert [meta["name"] for meta in tools] == ["tag_list"]
    assert ToolRegistry.is_enabled("tag_list", build_settings(enabled=["tag_list"]))
    assert not ToolRegistry.is_enabled("tag_delete", build_settings(enabled=["tag_list"]))


def test_list_workflows_filters_by_active() -> None:
    fake = FakeN8n()
    fake.add(
        "GET",
        "/workflows",
        body={
            "data": [
                {"id": "a", "name": "A", "active": True, "updatedAt": "2024-01-01T00:00:00Z", "nodes": []},
                {"id": "b", "name": "B", "active": False, "updatedAt": "2024-01-02T00:00:00Z"},
            ]
        },
    )

    result = _call(build_context(fake), "list_workflows", {"active": True})

    assert result.is_error is False
    assert result.text == "Found 1 workflow(s) (filtered by active=true)"
    assert _data(result) == [
        {"id": "a", "name": "A", "active": True, "updatedAt": "2024-01-01T00:00:00Z"}
    ]


def test_tag_delete_missing_tag_is_error_result() -> None:
    fake = FakeN8n()

    result = _call(build_context(fake), "tag_delete", {"id": "missing"})

    assert result.is_error is True
    assert result.text.startswith("Error: ")
    assert "404" in result.text
    assert fake.calls_to("DELETE", "/tags/missing") == []


def test_tag_delete_reports_tag_name() -> None:
    fake = FakeN8n()
    fake.add("GET", "/tags/t1", body={"id": "t1", "name": "prod"})
    fake.add("DELETE", "/tags/t1", body={"id": "t1"})

    result = _call(build_context(fake), "tag_delete", {"id": "t1"})

    assert result.text == 'Tag "prod" (t1) deleted successfully'


def test_missing_argument_is_error_without_api_call() -> None:
    fake = FakeN8n()

    result = _call(build_context(fake), "workflow_read", {})

    assert result.is_error is True
    assert result.text == "Error: Missing required parameter: workflowId"
    assert fake.calls == []


def test_user_change_role_rejects_owner() -> None:
    fake = FakeN8n()

    result = _call(build_context(fake), "user_change_role", {"id": "u1", "role": "owner"})

    assert result.is_error is True
    assert result.text == "Error: Owner role cannot be changed via API"
    assert fake.calls == []


def test_user_change_role_maps_global_role_name() -> None:
    fake = FakeN8n()
    fake.add("PATCH", "/users/u1/role", body={"id": "u1", "email": "a@b.c", "role": "global:admin"})

    result = _call(build_context(fake), "user_change_role", {"id": "u1", "role": "admin"})

    assert result.text == "User role changed to admin successfully"
    assert fake.calls_to("PATCH", "/users/u1/role")[0]["json_body"] == {"newRoleName": "global:admin"}


def test_update_workflow_without_changes_is_noop() -> None:
    fake = FakeN8n()
    fake.add("GET", "/workflows/w1", body={"id": "w1", "name": "Demo", "active": False})

    result = _call(build_context(fake), "update_workflow", {"workflowId": "w1"})

    assert result.is_error is False
    assert result.text == "No changes requested - workflow unchanged"
    assert [call["method"] for call in fake.calls] == ["GET"]


def test_update_workflow_reports_changes_and_toggles_activation() -> None:
    fake = FakeN8n()
    current = {"id": "w1", "name": "Old", "active": False, "nodes": [], "connections": {}}
    fake.add("GET", "/workflows/w1", body=current)
    fake.add("PUT", "/workflows/w1", body={**current, "name": "New"})
    fake.add("POST", "/workflows/w1/activate", body={**current, "name": "New", "active": True})

    result = _call(
        build_context(fake), "update_workflow", {"workflowId": "w1", "name": "New", "active": True}
    )

    assert result.text == (
        'Workflow updated successfully. Changes applied: name: "Old" → "New", active: false → true'
    )
    assert _data(result) == {"id": "w1", "name": "New", "active": True}
    assert [(call["method"], call["path"]) for call in fake.calls] == [
        ("GET", "/workflows/w1"),
        ("PUT", "/workflows/w1"),
        ("POST", "/workflows/w1/activate"),
    ]


def test_update_workflow_unknown_id_is_not_found() -> None:
    fake = FakeN8n()

    result = _call(build_context(fake), "update_workflow", {"workflowId": "nope", "name": "x"})

    assert result.is_error is True
    assert result.text == "Error: Workflow nope not found (Status: 404)"


def test_create_workflow_tag_failure_does_not_fail_creation() -> None:
    fake = FakeN8n()
    fake.add("POST", "/workflows", body={"id": "w9", "name": "New", "active": False})
    fake.add("PUT", "/workflows/w9/tags", 400, {"message": "bad tag"})

    result = _call(build_context(fake), "create_workflow", {"name": "New", "tags": ["t1"]})

    assert result.is_error is False
    assert _data(result) == {"id": "w9", "name": "New", "active": False}


def test_list_executions_filters_locally_with_summary() -> None:
    fake = FakeN8n()
    fake.add(
        "GET",
        "/executions",
        body={
            "data": [
                {"id": "1", "workflowId": "w1", "status": "success", "finished": True,
                 "startedAt": "2024-01-01T00:00:00Z", "stoppedAt": "2024-01-01T00:00:05Z"},
                {"id": "2", "workflowId": "w1", "status": "error", "finished": True,
                 "startedAt": "2024-01-01T00:00:00Z", "stoppedAt": "2024-01-01T00:00:02Z"},
                {"id": "3", "workflowId": "w2", "status": "success", "finished": True,
                 "startedAt": "2024-01-01T00:00:00Z", "stoppedAt": "2024-01-01T00:00:01Z"},
            ]
        },
    )

    result = _call(
        build_context(fake),
        "list_executions",
        {"workflowId": "w1", "status": "success", "includeSummary": True},
    )

    data = _data(result)
    assert result.text == "Found 1 execution(s) matching filters."
    assert data["count"] == 1
    assert data["totalAvailable"] == 3
    assert data["executions"][0]["status"] == "✅ success"
    assert data["executions"][0]["duration"] == "5s"
    assert data["summary"]["successRate"] == "67%"
    assert fake.calls_to("GET", "/executions")[0]["params"] == {}


def test_variable_delete_by_key_looks_up_id() -> None:
    fake = FakeN8n()
    fake.add("GET", "/variables", body={"data": [{"id": "v1", "key": "TOKEN"}]})
    fake.add("DELETE", "/variables/v1", body=None, status_code=204)

    result = _call(build_context(fake), "variable_delete", {"key": "TOKEN"})

    assert result.is_error is False
    assert len(fake.calls_to("DELETE", "/variables/v1")) == 1


def test_variable_delete_unknown_key() -> None:
    fake = FakeN8n()
    fake.add("GET", "/variables", body={"data": []})

    result = _call(build_context(fake), "variable_delete", {"key": "MISSING"})

    assert result.is_error is True
    assert result.text == 'Error: Variable with key "MISSING" not found'


def test_source_control_pull_summarizes_files() -> None:
    fake = FakeN8n()
    fake.add(
        "POST",
        "/source-control/pull",
        body={"success": True, "filesUpdated": 2},
    )

    result = _call(build_context(fake), "source_control_pull", {"force": True})

    assert result.text.startswith("Successfully pulled changes. 2 files updated.")
    assert fake.calls_to("POST", "/source-control/pull")[0]["json_body"] == {"force": True}
