from __future__ import annotations

import json
from typing import Any

import httpx

from n8n_mcp.config import N8nSettings, Settings
from n8n_mcp.n8n.service import N8nApiService
from n8n_mcp.tools.base import ToolContext


API_URL = "http://n8n.local/api/v1"


class FakeN8n:
    """按 (method, path) 返回预设响应的 n8n API 替身"""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.calls: list[dict[str, Any]] = []

    def add(self, method: str, path: str, status_code: int = 200, body: Any = None) -> None:
        self.routes[(method.upper(), path)] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v1")
        self.calls.append(
            {
                "method": request.method,
                "path": path,
                "params": dict(request.url.params),
                "headers": dict(request.headers),
                "json_body": json.loads(request.content) if request.content else None,
            }
        )
        status_code, body = self.routes.get((request.method, path), (404, {"message": "Not Found"}))
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def calls_to(self, method: str, path: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["method"] == method and call["path"] == path]


def build_settings(enabled: list[str] | None = None) -> Settings:
    return Settings.model_validate(
        {
            "n8n": N8nSettings(api_url=API_URL, api_key="test-key").model_dump(),
            "tools": {"enabled": enabled or []},
        }
    )


def build_service(fake: FakeN8n, settings: Settings | None = None) -> N8nApiService:
    return N8nApiService(settings or build_settings(), transport=httpx.MockTransport(fake.handler))


def build_context(fake: FakeN8n, settings: Settings | None = None) -> ToolContext:
    settings = settings or build_settings()
    return ToolContext(settings=settings, service=build_service(fake, settings))
