from __future__ import annotations

import asyncio

import pytest

from n8n_mcp.errors import N8nApiError
from n8n_mcp.n8n.variable import ENTERPRISE_LICENSE_MESSAGE

from _fake_n8n import FakeN8n, build_service


def test_create_workflow_adds_default_settings_and_strips_read_only_fields() -> None:
    fake = FakeN8n()
    fake.add("POST", "/workflows", body={"id": "w1", "name": "Demo"})
    service = build_service(fake)

    async def run() -> None:
        try:
            await service.workflows.create_workflow(
                {"name": "Demo", "nodes": [], "connections": {}, "active": True, "id": "x"}
            )
        finally:
            await service.aclose()

    asyncio.run(run())

    body = fake.calls_to("POST", "/workflows")[0]["json_body"]
    assert "active" not in body and "id" not in body
    assert body["settings"]["timezone"] == "UTC"


def test_update_workflow_keeps_current_fields_and_filters_settings() -> None:
    fake = FakeN8n()
    fake.add(
        "GET",
        "/workflows/w1",
        body={
            "id": "w1",
            "name": "Old",
            "nodes": [{"name": "Start"}],
            "connections": {},
            "settings": {"timezone": "UTC", "callerPolicy": "any"},
        },
    )
    fake.add("PUT", "/workflows/w1", body={"id": "w1", "name": "New"})
    service = build_service(fake)

    async def run() -> None:
        try:
            await service.workflows.update_workflow("w1", {"name": "New"})
        finally:
            await service.aclose()

    asyncio.run(run())

    body = fake.calls_to("PUT", "/workflows/w1")[0]["json_body"]
    assert body == {
        "name": "New",
        "nodes": [{"name": "Start"}],
        "connections": {},
        "settings": {"timezone": "UTC"},
    }


def test_variable_create_payment_required_maps_to_enterprise_message() -> None:
    fake = FakeN8n()
    fake.add("POST", "/variables", 402, {"message": "Payment Required"})
    service = build_service(fake)

    async def run() -> None:
        try:
            await service.variables.create_variable("API_TOKEN", "abc")
        finally:
            await service.aclose()

    with pytest.raises(N8nApiError) as exc_info:
        asyncio.run(run())
    assert exc_info.value.message == ENTERPRISE_LICENSE_MESSAGE
    assert "enterprise license" in exc_info.value.message
    assert exc_info.value.status_code == 402


def test_variable_list_forbidden_returns_empty() -> None:
    fake = FakeN8n()
    fake.add("GET", "/variables", 403, {"message": "Forbidden"})
    service = build_service(fake)

    async def run() -> list:
        try:
            return await service.variables.list_variables()
        finally:
            await service.aclose()

    assert asyncio.run(run()) == []


def test_project_list_license_error_returns_empty() -> None:
    fake = FakeN8n()
    fake.add("GET", "/projects", 403, {"message": "Your license does not allow for feat:projectRole"})
    service = build_service(fake)

    async def run() -> list:
        try:
            return await service.projects.list_projects()
        finally:
            await service.aclose()

    assert asyncio.run(run()) == []


def test_project_forbidden_without_license_message_propagates() -> None:
    fake = FakeN8n()
    fake.add("GET", "/projects", 403, {"message": "Forbidden"})
    service = build_service(fake)

    async def run() -> list:
        try:
            return await service.projects.list_projects()
        finally:
            await service.aclose()

    with pytest.raises(N8nApiError):
        asyncio.run(run())


@pytest.mark.parametrize(
    ("status_code", "server_text", "expected"),
    [
        (405, "Method Not Allowed", "Tag update operation not supported by the n8n API"),
        (409, "Tag already exists", "Tag update failed: Tag already exists"),
        (400, "name is too long", "Tag update failed due to validation: name is too long"),
    ],
)
def test_tag_update_special_cases(status_code: int, server_text: str, expected: str) -> None:
    fake = FakeN8n()
    fake.add("PUT", "/tags/t1", status_code, {"message": server_text})
    service = build_service(fake)

    async def run() -> None:
        try:
            await service.tags.update_tag("t1", {"name": "x" * 40})
        finally:
            await service.aclose()

    with pytest.raises(N8nApiError) as exc_info:
        asyncio.run(run())
    assert exc_info.value.message == expected
    assert exc_info.value.status_code == status_code


def test_user_role_change_uses_patch_role_endpoint() -> None:
    fake = FakeN8n()
    fake.add("PATCH", "/users/u1/role", body={"id": "u1", "role": "global:admin"})
    service = build_service(fake)

    async def run() -> None:
        try:
            await service.users.change_user_role("u1", "global:admin")
        finally:
            await service.aclose()

    asyncio.run(run())

    assert fake.calls_to("PATCH", "/users/u1/role")[0]["json_body"] == {"newRoleName": "global:admin"}


def test_security_audit_sends_workflow_ids() -> None:
    fake = FakeN8n()
    fake.add("POST", "/security-audit/generate", body={"summary": {}})
    service = build_service(fake)

    async def run() -> None:
        try:
            await service.security_audit.generate_audit(["w1", "w2"])
            await service.security_audit.generate_audit()
        finally:
            await service.aclose()

    asyncio.run(run())

    calls = fake.calls_to("POST", "/security-audit/generate")
    assert calls[0]["json_body"] == {"workflowIds": ["w1", "w2"]}
    assert calls[1]["json_body"] == {}
