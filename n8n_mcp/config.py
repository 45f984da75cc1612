"""
描述: n8n MCP Server 全局配置加载器
主要功能:
    - 统一管理 MCP Server 配置
    - 支持 YAML 文件加载与环境变量覆盖
    - 提供 n8n API 连接与 Webhook 认证配置模型
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from n8n_mcp.errors import ConfigurationError


_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


# region 基础配置模型
class ServerSettings(BaseModel):
    """服务监听配置"""
    host: str = "0.0.0.0"
    port: int = 8082
    debug: bool = False


class N8nSettings(BaseModel):
    """n8n 实例连接配置"""
    api_url: str = ""
    api_key: str = ""
    webhook_username: str = ""
    webhook_password: str = ""
    debug: bool = False
    timeout: float = 10.0


class ToolsSettings(BaseModel):
    enabled: list[str] = Field(default_factory=list)


class LoggingSettings(BaseModel):
    """日志系统配置"""
    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """MCP Server 配置聚合根"""
    server: ServerSettings = Field(default_factory=ServerSettings)
    n8n: N8nSettings = Field(default_factory=N8nSettings)
    tools: ToolsSettings = Field(default_factory=ToolsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
# endregion


# region 配置加载逻辑


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                key, default = expr.split(":-", 1)
                return os.getenv(key, default)
            return os.getenv(expr, "")

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return _expand_env(data)


def _set_nested(data: dict[str, Any], keys: list[str], value: Any) -> None:
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    mapping = {
        "N8N_API_URL": ["n8n", "api_url"],
        "N8N_API_KEY": ["n8n", "api_key"],
        "N8N_WEBHOOK_USERNAME": ["n8n", "webhook_username"],
        "N8N_WEBHOOK_PASSWORD": ["n8n", "webhook_password"],
        "N8N_TIMEOUT": ["n8n", "timeout"],
        "DEBUG": ["n8n", "debug"],
        "LOG_LEVEL": ["logging", "level"],
        "MCP_HOST": ["server", "host"],
        "MCP_PORT": ["server", "port"],
    }
    for env_key, path in mapping.items():
        env_value = os.getenv(env_key)
        if env_value is not None and env_value != "":
            _set_nested(data, path, env_value)
    return data


def load_settings(config_path: str | None = None) -> Settings:
    path = Path(config_path or os.getenv("CONFIG_PATH", "config.yaml"))
    data = _load_yaml(path)
    data = _apply_env_overrides(data)
    return Settings.model_validate(data)


def validate_n8n_settings(settings: Settings) -> None:
    """
    校验 n8n 连接配置是否完整

    参数:
        settings: 全局配置对象

    抛出:
        ConfigurationError: 缺少 API 地址/密钥或地址格式非法
    """
    n8n = settings.n8n
    if not n8n.api_url:
        raise ConfigurationError("Missing required configuration: N8N_API_URL")
    if not n8n.api_key:
        raise ConfigurationError("Missing required configuration: N8N_API_KEY")
    if not n8n.api_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"Invalid URL format for N8N_API_URL: {n8n.api_url}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """获取单例配置对象"""
    return load_settings()
# endregion
