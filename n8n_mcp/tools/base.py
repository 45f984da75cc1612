"""
描述: MCP 工具基类定义
主要功能:
    - 定义 BaseTool 抽象基类与统一异常转换
    - 定义 ToolContext 上下文对象
    - 提供参数读取辅助函数
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from n8n_mcp.config import Settings
from n8n_mcp.errors import N8nApiError, ToolArgumentError
from n8n_mcp.n8n.service import N8nApiService
from n8n_mcp.tools.result import ToolResult, format_error


logger = logging.getLogger(__name__)


# region 参数辅助函数
def require_str(params: dict[str, Any], key: str, message: str | None = None) -> str:
    value = params.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ToolArgumentError(message or f"Missing required parameter: {key}")
    return str(value)


def optional_str(params: dict[str, Any], key: str) -> str | None:
    value = params.get(key)
    if value is None or value == "":
        return None
    return str(value)


def optional_int(params: dict[str, Any], key: str) -> int | None:
    value = params.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ToolArgumentError(f"Parameter {key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ToolArgumentError(f"Parameter {key} must be an integer") from exc


def optional_bool(params: dict[str, Any], key: str) -> bool | None:
    value = params.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ToolArgumentError(f"Parameter {key} must be a boolean")
# endregion


# region 工具上下文与基类
@dataclass
class ToolContext:
    """工具执行上下文 (依赖注入)"""
    settings: Settings
    service: N8nApiService


class BaseTool(ABC):
    """MCP 工具抽象基类"""
    name: str = ""
    description: str = ""
    parameters: dict[str, Any] = {"type": "object", "properties": {}}
    family: str = "n8n"

    def __init__(self, context: ToolContext) -> None:
        self.context = context
        if not self.name:
            raise ValueError(f"{self.__class__.__name__} must define 'name' attribute")

    @property
    def service(self) -> N8nApiService:
        return self.context.service

    @abstractmethod
    async def run(self, params: dict[str, Any]) -> ToolResult:
        """
        执行工具逻辑

        参数:
            params: 工具参数字典

        返回:
            ToolResult 结果信封
        """
        raise NotImplementedError

    async def execute(self, params: dict[str, Any] | None = None) -> ToolResult:
        """
        执行工具并将所有异常转换为 isError 结果

        参数:
            params: 工具参数字典

        返回:
            ToolResult, 任何异常都不会向上抛出
        """
        try:
            return await self.run(params or {})
        except N8nApiError as exc:
            logger.warning(
                "Tool %s failed: %s",
                self.name,
                exc.message,
                extra={"kind": exc.kind.value, "status_code": exc.status_code},
            )
            return format_error(exc)
        except ToolArgumentError as exc:
            logger.info("Tool %s rejected arguments: %s", self.name, exc)
            return format_error(exc)
        except Exception as exc:
            logger.exception("Tool %s raised unexpected error", self.name)
            return format_error(f"Error executing {self.family} tool: {exc}")

    def to_schema(self) -> dict[str, Any]:
        """返回 MCP 工具声明 (name/description/inputSchema)"""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameters,
        }
# endregion
