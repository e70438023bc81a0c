from __future__ import annotations

import pytest

from upstream_proxy.common.config import (
    EnvSecretProvider,
    ProxySettings,
    StaticSecretProvider,
    load_settings,
)

ENV_NAMES = ("OPENAI_BASE_URL", "QUOTE_URL", "PROXY_API_KEY_ENV", "HTTP_TIMEOUT", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_missing_file_gives_defaults(tmp_path) -> None:
    assert load_settings(str(tmp_path / "nope.yaml")) == ProxySettings()


def test_yaml_values_merge_onto_defaults(tmp_path) -> None:
    cfg = tmp_path / "proxy.yaml"
    cfg.write_text("openai_base_url: http://localhost:8001/\nhttp_timeout: 5\nbogus: 1\n", encoding="utf-8")
    settings = load_settings(str(cfg))
    assert settings.openai_base_url == "http://localhost:8001/"
    assert settings.chat_url == "http://localhost:8001/v1/chat/completions"
    assert settings.http_timeout == 5.0
    assert settings.quote_url == "https://zenquotes.io/api/random"


def test_env_overrides_yaml(tmp_path, monkeypatch) -> None:
    cfg = tmp_path / "proxy.yaml"
    cfg.write_text("quote_url: http://file/quotes\n", encoding="utf-8")
    monkeypatch.setenv("QUOTE_URL", "http://env/quotes")
    monkeypatch.setenv("HTTP_TIMEOUT", "7.5")
    settings = load_settings(str(cfg))
    assert settings.quote_url == "http://env/quotes"
    assert settings.http_timeout == 7.5


def test_repo_config_loads() -> None:
    settings = load_settings()
    assert settings.api_key_env == "OPENAI_API_KEY"


def test_env_secret_read_per_call(monkeypatch) -> None:
    provider = EnvSecretProvider("TEST_PROXY_KEY")
    monkeypatch.delenv("TEST_PROXY_KEY", raising=False)
    assert provider.get_secret() is None
    monkeypatch.setenv("TEST_PROXY_KEY", "sk-1")
    assert provider.get_secret() == "sk-1"
    monkeypatch.setenv("TEST_PROXY_KEY", "")
    assert provider.get_secret() is None


def test_static_secret() -> None:
    assert StaticSecretProvider("abc").get_secret() == "abc"
    assert StaticSecretProvider(None).get_secret() is None
