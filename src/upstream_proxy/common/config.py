"""Settings loading and secret resolution."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Protocol

import yaml

LOGGER = logging.getLogger("upstream_proxy.config")

# Environment variable -> settings field.
ENV_OVERRIDES = {
    "OPENAI_BASE_URL": "openai_base_url",
    "QUOTE_URL": "quote_url",
    "PROXY_API_KEY_ENV": "api_key_env",
    "HTTP_TIMEOUT": "http_timeout",
    "LOG_LEVEL": "log_level",
}


@dataclass
class ProxySettings:
    openai_base_url: str = "https://api.openai.com"
    quote_url: str = "https://zenquotes.io/api/random"
    api_key_env: str = "OPENAI_API_KEY"
    http_timeout: float = 120.0
    log_level: str = "INFO"

    @property
    def chat_url(self) -> str:
        return f"{self.openai_base_url.rstrip('/')}/v1/chat/completions"


def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: str = "configs/proxy.yaml") -> ProxySettings:
    """
    Build settings from defaults, an optional YAML file, then environment overrides.

    Args:
        path: YAML config path. A missing file is not an error.
    """
    values: dict[str, Any] = {}
    known = {f.name for f in fields(ProxySettings)}

    if Path(path).exists():
        for key, value in load_cfg(path).items():
            if key in known:
                values[key] = value
            else:
                LOGGER.warning("Ignoring unknown config key %r in %s", key, path)

    for env_name, key in ENV_OVERRIDES.items():
        env_value = os.getenv(env_name)
        if env_value:
            values[key] = env_value

    if "http_timeout" in values:
        values["http_timeout"] = float(values["http_timeout"])
    return ProxySettings(**values)


class SecretProvider(Protocol):
    def get_secret(self) -> str | None:
        ...


class EnvSecretProvider:
    """Reads the credential from the process environment on every call."""

    def __init__(self, name: str = "OPENAI_API_KEY") -> None:
        self.name = name

    def get_secret(self) -> str | None:
        return os.getenv(self.name) or None


class StaticSecretProvider:
    def __init__(self, value: str | None) -> None:
        self._value = value

    def get_secret(self) -> str | None:
        return self._value or None
