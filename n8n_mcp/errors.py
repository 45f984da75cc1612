"""
描述: n8n MCP Server 异常定义与错误分类
主要功能:
    - 定义 N8nApiError 远程调用异常 (按 HTTP 状态码归类)
    - 将 httpx 传输层异常统一转换为 N8nApiError
    - 定义协议边界异常 McpError 与参数校验异常
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx


DEFAULT_API_ERROR_MESSAGE = "n8n API request failed"
NETWORK_ERROR_MESSAGE = "Network error connecting to n8n API"

_N8N_ERROR_FIELDS = frozenset({"message", "status_code", "details", "kind"})


# ============================================
# region 错误类型
# ============================================
class ErrorKind(str, Enum):
    """远程调用失败类别"""
    AUTHENTICATION = "Authentication"
    NOT_FOUND = "NotFound"
    INVALID_REQUEST = "InvalidRequest"
    INTERNAL = "Internal"
    NETWORK = "Network"

    @classmethod
    def from_status(cls, status_code: int | None) -> "ErrorKind":
        if status_code in (401, 403):
            return cls.AUTHENTICATION
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code is not None and 400 <= status_code < 500:
            return cls.INVALID_REQUEST
        return cls.INTERNAL


class McpErrorCode(str, Enum):
    INTERNAL = "MCP_001"
    INVALID_PARAMS = "MCP_002"
    RESOURCE_NOT_FOUND = "MCP_003"
    NOT_IMPLEMENTED = "MCP_004"
# endregion
# ============================================


# ============================================
# region 异常类
# ============================================
@dataclass(eq=False)
class N8nApiError(RuntimeError):
    """
    n8n API 调用异常

    kind 未显式给出时由 status_code 推导; 构造后字段只读。
    """
    message: str
    status_code: int | None = None
    details: Any | None = None
    kind: ErrorKind | None = None

    def __post_init__(self) -> None:
        if self.kind is None:
            self.kind = ErrorKind.from_status(self.status_code)
        super().__init__(self.message)
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        # 只锁定字段, __traceback__ 等异常属性需保持可写
        if name in _N8N_ERROR_FIELDS and getattr(self, "_sealed", False):
            raise AttributeError(f"N8nApiError.{name} is read-only")
        super().__setattr__(name, value)

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self.message, self.status_code, self.details, self.kind))

    def __str__(self) -> str:
        text = self.message
        if self.status_code is not None:
            text += f" (Status: {self.status_code})"
        if self.details is not None:
            rendered = _render_details(self.details)
            if rendered is not None:
                text += f"\nDetails: {rendered}"
        return text

    def with_message(self, message: str) -> "N8nApiError":
        """返回替换消息后的新异常 (保留状态码与详情)"""
        return N8nApiError(
            message=message,
            status_code=self.status_code,
            details=self.details,
            kind=self.kind,
        )


@dataclass(eq=False)
class McpError(RuntimeError):
    """MCP 协议边界异常"""
    code: McpErrorCode
    message: str

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ToolArgumentError(ValueError):
    """工具参数缺失或类型非法"""


class ConfigurationError(RuntimeError):
    """配置缺失或非法"""
# endregion
# ============================================


# ============================================
# region 错误分类与辅助函数
# ============================================
def _render_details(details: Any) -> str | None:
    if isinstance(details, str):
        return details
    try:
        return json.dumps(details, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return None


def _response_details(response: httpx.Response) -> Any:
    text = response.text
    return safe_json_parse(text, default=text or None)


def classify_error(
    error: BaseException,
    default_message: str = DEFAULT_API_ERROR_MESSAGE,
) -> N8nApiError:
    """
    将任意调用失败转换为 N8nApiError

    参数:
        error: 传输层抛出的异常
        default_message: 响应体未携带 message 时使用的默认消息

    返回:
        分类后的 N8nApiError
    """
    if isinstance(error, N8nApiError):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        details = _response_details(response)
        message = default_message
        if isinstance(details, dict) and isinstance(details.get("message"), str):
            message = details["message"]
        return N8nApiError(
            message=message,
            status_code=response.status_code,
            details=details,
        )

    if isinstance(error, httpx.RequestError):
        return N8nApiError(
            message=NETWORK_ERROR_MESSAGE,
            details=str(error) or error.__class__.__name__,
            kind=ErrorKind.NETWORK,
        )

    return N8nApiError(message=str(error) or default_message)


def get_error_message(error: Any) -> str:
    if isinstance(error, (BaseException, str)):
        return str(error)
    try:
        return json.dumps(error)
    except (TypeError, ValueError):
        return "Unknown error"


def safe_json_parse(text: str, default: Any = None) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return default
# endregion
# ============================================
