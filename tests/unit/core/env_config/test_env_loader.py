"""Тесты загрузки конфигурации из окружения."""

import os

import pytest

from http_superagent.core.env_config import AgentSettings, load_from_env
from http_superagent.core.exceptions import ConfigurationError
from http_superagent.core.logging import LogFormat, LogLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Изолировать тесты от .env и переменных SUPERAGENT_* окружения."""
    for key in list(os.environ):
        if key.startswith("SUPERAGENT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    config = load_from_env()
    assert config.base_url is None
    assert config.timeout is None
    assert config.retry.count == 0
    assert config.logging is None


def test_from_environment(monkeypatch):
    monkeypatch.setenv("SUPERAGENT_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("SUPERAGENT_TIMEOUT", "7.5")
    monkeypatch.setenv("SUPERAGENT_RETRY_COUNT", "3")
    monkeypatch.setenv("SUPERAGENT_HEADERS", '{"User-Agent": "billing/1.0"}')
    monkeypatch.setenv("SUPERAGENT_SECURITY_INSECURE_SKIP_VERIFY", "true")
    monkeypatch.setenv("SUPERAGENT_LOG_ENABLED", "true")
    monkeypatch.setenv("SUPERAGENT_LOG_FORMAT", "json")

    config = load_from_env()

    assert config.base_url == "https://api.example.com"
    assert config.timeout == 7.5
    assert config.retry.count == 3
    assert dict(config.headers) == {"User-Agent": "billing/1.0"}
    assert config.security.insecure_skip_verify is True
    assert config.logging.format == LogFormat.JSON
    assert config.logging.level == LogLevel.INFO


def test_overrides_win(monkeypatch):
    monkeypatch.setenv("SUPERAGENT_RETRY_COUNT", "3")
    assert load_from_env(retry_count=5).retry.count == 5


def test_env_file(tmp_path):
    env_file = tmp_path / "staging.env"
    env_file.write_text("SUPERAGENT_BASE_URL=https://staging.example.com\nSUPERAGENT_RETRY_COUNT=2\n")

    config = load_from_env(env_file=str(env_file))

    assert config.base_url == "https://staging.example.com"
    assert config.retry.count == 2


def test_invalid_value(monkeypatch):
    monkeypatch.setenv("SUPERAGENT_RETRY_COUNT", "-1")
    with pytest.raises(ConfigurationError):
        load_from_env()


def test_cert_without_key():
    with pytest.raises(ConfigurationError, match="security_cert_path"):
        load_from_env(security_cert_path="/c.pem")


def test_log_file(tmp_path):
    settings = AgentSettings(log_enabled=True, log_level="DEBUG", log_file_path=str(tmp_path / "r.log"))
    logging_config = settings.to_logging_config()

    assert logging_config.enable_file is True
    assert logging_config.level == LogLevel.DEBUG
