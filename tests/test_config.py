from __future__ import annotations

from pathlib import Path

import pytest

from n8n_mcp.config import Settings, load_settings, validate_n8n_settings
from n8n_mcp.errors import ConfigurationError


_ENV_KEYS = (
    "N8N_API_URL",
    "N8N_API_KEY",
    "N8N_WEBHOOK_USERNAME",
    "N8N_WEBHOOK_PASSWORD",
    "N8N_TIMEOUT",
    "DEBUG",
    "LOG_LEVEL",
    "MCP_HOST",
    "MCP_PORT",
    "CONFIG_PATH",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_yaml_expands_env_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        "n8n:\n"
        "  api_url: ${N8N_URL_FOR_TEST:-http://localhost:5678/api/v1}\n"
        "  api_key: ${N8N_KEY_FOR_TEST}\n"
        "tools:\n"
        "  enabled: [list_workflows]\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("N8N_KEY_FOR_TEST", "secret")

    settings = load_settings(str(config))

    assert settings.n8n.api_url == "http://localhost:5678/api/v1"
    assert settings.n8n.api_key == "secret"
    assert settings.tools.enabled == ["list_workflows"]


def test_env_overrides_take_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("n8n:\n  api_url: http://yaml.local/api/v1\n", encoding="utf-8")
    monkeypatch.setenv("N8N_API_URL", "https://env.local/api/v1")
    monkeypatch.setenv("N8N_API_KEY", "k")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("MCP_PORT", "9000")

    settings = load_settings(str(config))

    assert settings.n8n.api_url == "https://env.local/api/v1"
    assert settings.n8n.debug is True
    assert settings.server.port == 9000


def test_missing_config_file_uses_defaults(tmp_path: Path) -> None:
    settings = load_settings(str(tmp_path / "missing.yaml"))

    assert settings.n8n.api_url == ""
    assert settings.logging.level == "INFO"
    assert settings.n8n.timeout == 10.0


def test_validate_rejects_missing_and_malformed_values() -> None:
    with pytest.raises(ConfigurationError, match="N8N_API_URL"):
        validate_n8n_settings(Settings())

    settings = Settings.model_validate({"n8n": {"api_url": "http://n8n.local/api/v1"}})
    with pytest.raises(ConfigurationError, match="N8N_API_KEY"):
        validate_n8n_settings(settings)

    settings = Settings.model_validate({"n8n": {"api_url": "n8n.local", "api_key": "k"}})
    with pytest.raises(ConfigurationError, match="Invalid URL format"):
        validate_n8n_settings(settings)


def test_validate_accepts_complete_settings() -> None:
    settings = Settings.model_validate(
        {"n8n": {"api_url": "https://n8n.local/api/v1", "api_key": "k"}}
    )
    validate_n8n_settings(settings)
