"""
描述: n8n Webhook 调用客户端
主要功能:
    - 通过 /webhook/<name> 触发工作流
    - 使用配置中的 Basic Auth 凭据
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx

from n8n_mcp.config import Settings
from n8n_mcp.errors import ErrorKind, N8nApiError


logger = logging.getLogger(__name__)

_API_SUFFIX = re.compile(r"/api/v1/?$")


def webhook_base_url(api_url: str) -> str:
    """去掉 API 地址末尾的 /api/v1, 得到实例根地址"""
    return _API_SUFFIX.sub("", api_url.rstrip("/") + "/").rstrip("/")


# region Webhook 客户端
class WebhookClient:
    """
    Webhook 客户端

    功能:
        - 与 REST API 分离的 Base URL 与鉴权方式
    """
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            n8n = self._settings.n8n
            self._client = httpx.AsyncClient(
                auth=(n8n.webhook_username, n8n.webhook_password),
                timeout=n8n.timeout,
                transport=self._transport,
            )
        return self._client

    def build_url(self, workflow_name: str) -> str:
        safe_name = workflow_name.replace("/", "")
        return f"{webhook_base_url(self._settings.n8n.api_url)}/webhook/{safe_name}"

    async def run_webhook(
        self,
        workflow_name: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        调用工作流 Webhook

        参数:
            workflow_name: Webhook 路径名 (斜杠会被移除)
            data: 请求体
            headers: 额外请求头

        返回:
            {"status", "statusText", "data"}

        抛出:
            N8nApiError: Webhook 返回错误状态或网络异常
        """
        url = self.build_url(workflow_name)
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            response = await self._get_client().post(url, json=data or {}, headers=request_headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            try:
                body_text = json.dumps(exc.response.json(), indent=2, ensure_ascii=False)
            except ValueError:
                body_text = json.dumps(exc.response.text)
            logger.error("Webhook %s failed with status %s", url, status)
            raise N8nApiError(
                message=(
                    f"Webhook execution failed with status {status}: "
                    f"{exc.response.reason_phrase}\n\n{body_text}"
                ),
                status_code=status,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Webhook %s unreachable: %s", url, exc)
            raise N8nApiError(
                message=f"Webhook execution failed: {exc}",
                kind=ErrorKind.NETWORK,
            ) from exc

        try:
            payload: Any = response.json()
        except ValueError:
            payload = response.text
        return {
            "status": response.status_code,
            "statusText": response.reason_phrase,
            "data": payload,
        }

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
# endregion
