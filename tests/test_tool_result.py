from __future__ import annotations

import json

from n8n_mcp.errors import N8nApiError
from n8n_mcp.tools.result import ToolResult, format_error, format_success


def test_format_success_adds_json_block() -> None:
    result = format_success({"id": "1", "name": "流程"}, "Found 1 workflow(s)")

    assert result.is_error is False
    assert [block.text for block in result.content][0] == "Found 1 workflow(s)"
    assert json.loads(result.content[1].text) == {"id": "1", "name": "流程"}


def test_format_success_default_message_without_data() -> None:
    result = format_success()

    assert len(result.content) == 1
    assert result.text == "Operation completed successfully"


def test_format_error_prefixes_message() -> None:
    result = format_error(N8nApiError("Workflow not found", 404))

    assert result.is_error is True
    assert result.text == "Error: Workflow not found (Status: 404)"


def test_payload_uses_mcp_field_names() -> None:
    payload = format_error("boom").to_payload()

    assert payload == {"content": [{"type": "text", "text": "Error: boom"}], "isError": True}
    assert ToolResult.model_validate(payload).is_error is True
