"""
描述: MCP 资源基类与注册中心
主要功能:
    - 定义静态资源与 URI 模板资源基类
    - 按 URI 分发资源读取请求
    - 将读取失败统一转换为 McpError
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Type

from n8n_mcp.errors import McpError, McpErrorCode
from n8n_mcp.tools.base import ToolContext


logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_uri(uri: Any) -> str:
    return str(uri).rstrip("/")


# region 资源基类
class BaseResource(ABC):
    """静态资源 (固定 URI)"""
    uri: str = ""
    name: str = ""
    description: str = ""
    mime_type: str = JSON_MIME_TYPE
    label: str = "resource"

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    @abstractmethod
    async def build(self) -> dict[str, Any]:
        """生成资源 JSON 文档"""
        raise NotImplementedError

    async def read(self) -> str:
        try:
            document = await self.build()
        except McpError:
            raise
        except Exception as exc:
            logger.error("Failed to build resource %s: %s", self.uri, exc)
            raise McpError(
                McpErrorCode.INTERNAL,
                f"Failed to retrieve {self.label}: {exc}",
            ) from exc
        return json.dumps(document, indent=2, ensure_ascii=False, default=str)

    @classmethod
    def metadata(cls) -> dict[str, Any]:
        return {
            "uri": cls.uri,
            "name": cls.name,
            "description": cls.description,
            "mimeType": cls.mime_type,
        }


class BaseResourceTemplate(ABC):
    """URI 模板资源, 例如 n8n://workflows/{id}"""
    uri_template: str = ""
    pattern: re.Pattern[str] = re.compile(r"^$")
    name: str = ""
    description: str = ""
    mime_type: str = JSON_MIME_TYPE
    label: str = "resource"

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    @classmethod
    def extract_id(cls, uri: Any) -> str | None:
        """从 URI 中解析资源 ID, 不匹配时返回 None"""
        match = cls.pattern.match(normalize_uri(uri))
        return match.group(1) if match else None

    @abstractmethod
    async def build(self, resource_id: str) -> dict[str, Any]:
        raise NotImplementedError

    async def read(self, resource_id: str) -> str:
        try:
            document = await self.build(resource_id)
        except McpError:
            raise
        except Exception as exc:
            logger.error("Failed to build resource %s/%s: %s", self.uri_template, resource_id, exc)
            raise McpError(
                McpErrorCode.INTERNAL,
                f"Failed to retrieve {self.label} {resource_id}: {exc}",
            ) from exc
        return json.dumps(document, indent=2, ensure_ascii=False, default=str)

    @classmethod
    def metadata(cls) -> dict[str, Any]:
        return {
            "uriTemplate": cls.uri_template,
            "name": cls.name,
            "description": cls.description,
            "mimeType": cls.mime_type,
        }
# endregion


# region 资源注册中心
class ResourceRegistry:
    """资源注册中心 (单例模式)"""
    _resources: dict[str, Type[BaseResource]] = {}
    _templates: list[Type[BaseResourceTemplate]] = []

    @classmethod
    def register(cls, resource_cls: Type[BaseResource]) -> Type[BaseResource]:
        cls._resources[resource_cls.uri] = resource_cls
        return resource_cls

    @classmethod
    def register_template(
        cls, template_cls: Type[BaseResourceTemplate]
    ) -> Type[BaseResourceTemplate]:
        if template_cls not in cls._templates:
            cls._templates.append(template_cls)
        return template_cls

    @classmethod
    def list_resources(cls) -> list[dict[str, Any]]:
        return [resource_cls.metadata() for resource_cls in cls._resources.values()]

    @classmethod
    def list_templates(cls) -> list[dict[str, Any]]:
        return [template_cls.metadata() for template_cls in cls._templates]

    @classmethod
    def mime_type_for(cls, uri: Any) -> str:
        resource_cls = cls._resources.get(normalize_uri(uri))
        return resource_cls.mime_type if resource_cls else JSON_MIME_TYPE

    @classmethod
    async def read(cls, uri: Any, context: ToolContext) -> str:
        """
        读取资源

        参数:
            uri: 资源 URI
            context: 依赖上下文

        返回:
            资源 JSON 文本

        抛出:
            McpError: 资源不存在或生成失败
        """
        key = normalize_uri(uri)
        resource_cls = cls._resources.get(key)
        if resource_cls is not None:
            return await resource_cls(context).read()

        for template_cls in cls._templates:
            resource_id = template_cls.extract_id(key)
            if resource_id is not None:
                return await template_cls(context).read(resource_id)

        raise McpError(McpErrorCode.RESOURCE_NOT_FOUND, f"Resource not found: {key}")
# endregion
