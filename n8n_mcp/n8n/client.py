"""
描述: n8n REST API 基础客户端
主要功能:
    - 封装 HTTP 请求与 API Key 鉴权
    - 共享单个 httpx.AsyncClient 连接池
    - 统一将传输层异常转换为 N8nApiError
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from n8n_mcp.config import Settings
from n8n_mcp.errors import DEFAULT_API_ERROR_MESSAGE, N8nApiError, classify_error


logger = logging.getLogger(__name__)


def unwrap_list(payload: Any) -> list[Any]:
    """提取列表接口响应中的 data 数组"""
    if isinstance(payload, dict):
        data = payload.get("data")
        return data if isinstance(data, list) else []
    if isinstance(payload, list):
        return payload
    return []


def unwrap_object(payload: Any) -> Any:
    """兼容 {data: {...}} 与直接返回对象两种响应格式"""
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    return payload


def server_message(error: N8nApiError) -> str | None:
    """n8n 响应体中的 message 字段 (若有)"""
    details = error.details
    if isinstance(details, dict) and isinstance(details.get("message"), str):
        return details["message"]
    return None


def _drop_none(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned or None


# region n8n 客户端
class N8nApiClient:
    """
    n8n API 客户端

    功能:
        - 统一封装 API 请求
        - 调试模式下记录请求/响应日志
    """
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        初始化客户端

        参数:
            settings: 全局配置对象
            transport: 可选的自定义传输层 (测试注入)
        """
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            n8n = self._settings.n8n
            event_hooks: dict[str, list[Any]] = {}
            if n8n.debug:
                event_hooks = {
                    "request": [self._log_request],
                    "response": [self._log_response],
                }
            self._client = httpx.AsyncClient(
                base_url=n8n.api_url.rstrip("/"),
                headers={
                    "X-N8N-API-KEY": n8n.api_key,
                    "Accept": "application/json",
                },
                timeout=n8n.timeout,
                transport=self._transport,
                event_hooks=event_hooks,
            )
        return self._client

    @staticmethod
    async def _log_request(request: httpx.Request) -> None:
        logger.debug("n8n request: %s %s", request.method, request.url)

    @staticmethod
    async def _log_response(response: httpx.Response) -> None:
        logger.debug("n8n response: %s %s", response.status_code, response.request.url)

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any | None = None,
        error_message: str = DEFAULT_API_ERROR_MESSAGE,
    ) -> Any:
        """
        执行 API 请求

        参数:
            method: HTTP 方法 (GET/POST/PUT/PATCH/DELETE)
            path: API 路径 (不含 Base URL)
            params: 查询参数 (None 值会被忽略)
            json_body: JSON 请求体
            error_message: 响应未携带 message 时的默认错误消息

        返回:
            响应 JSON 数据, 空响应体返回 {}

        抛出:
            N8nApiError: API 错误或网络异常
        """
        client = self._get_client()
        try:
            response = await client.request(
                method,
                path,
                params=_drop_none(params),
                json=json_body,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            error = classify_error(exc, error_message)
            logger.error(
                "n8n API call failed: %s %s",
                method,
                path,
                extra={"kind": error.kind.value, "status_code": error.status_code},
            )
            raise error from exc

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    async def check_connectivity(self) -> None:
        """
        校验 n8n API 连通性

        抛出:
            N8nApiError: 无法访问 API 或返回非预期响应
        """
        response = await self.request(
            "GET",
            "/workflows",
            error_message="Failed to connect to n8n API",
        )
        if not isinstance(response, (dict, list)):
            raise N8nApiError("Invalid response from n8n API")

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
# endregion
