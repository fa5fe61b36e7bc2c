"""
Load AgentConfig from YAML and JSON files.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config import AgentConfig, RetryConfig, SecurityConfig
from ..exceptions import ConfigurationError
from ..logging import LoggingConfig

CONFIG_FILE_ENV = "SUPERAGENT_CONFIG_FILE"


class ConfigValidationError(ConfigurationError):
    """Configuration file is unreadable or invalid."""
    pass


def _section(data: Dict[str, Any], name: str, source: str) -> Dict[str, Any]:
    value = data.get(name, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigValidationError(f"{name} must be a dictionary in {source}")
    return value


class ConfigFileLoader:
    """
    Загрузчик конфигурации из файлов.

    Формат файла (корневая секция ``superagent`` опциональна):

        superagent:
          base_url: https://api.example.com
          timeout: 10
          headers:
            User-Agent: billing/1.0
          retry:
            count: 3
            backoff_base: 0.2
          security:
            ca_path: /etc/ssl/internal-ca.pem
          logging:
            level: DEBUG
            format: json

    Examples:
        >>> config = ConfigFileLoader.from_file("superagent.yaml")
        >>> config = ConfigFileLoader.from_env_path()  # SUPERAGENT_CONFIG_FILE
    """

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> AgentConfig:
        """
        Загрузить конфиг из YAML файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
            ImportError: Если PyYAML не установлен
        """
        try:
            import yaml
        except ImportError as e:
            raise ImportError(
                "PyYAML is required to load YAML configs. "
                "Install it with: pip install http-superagent[yaml]"
            ) from e

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax in {path}: {e}") from e

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_json(path: Union[str, Path]) -> AgentConfig:
        """
        Загрузить конфиг из JSON файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigValidationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON syntax in {path}: {e}") from e

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_file(path: Union[str, Path]) -> AgentConfig:
        """Автоопределение формата по расширению (.yaml, .yml, .json)."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            return ConfigFileLoader.from_yaml(path)
        elif suffix == ".json":
            return ConfigFileLoader.from_json(path)
        else:
            raise ValueError(
                f"Unsupported config file format: {suffix}. "
                f"Supported formats: .yaml, .yml, .json"
            )

    @staticmethod
    def from_env_path() -> Optional[AgentConfig]:
        """Загрузить из пути в SUPERAGENT_CONFIG_FILE (None если переменная не задана)."""
        config_path = os.environ.get(CONFIG_FILE_ENV)
        if not config_path:
            return None

        return ConfigFileLoader.from_file(config_path)

    @staticmethod
    def _build_config(data: Any, source: str) -> AgentConfig:
        if not data:
            raise ConfigValidationError(f"Empty config file: {source}")

        if isinstance(data, dict) and "superagent" in data:
            data = data["superagent"]

        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Config must be a dictionary, got {type(data).__name__} in {source}"
            )

        try:
            retry_cfg = RetryConfig(**_section(data, "retry", source))
            security_cfg = SecurityConfig(**_section(data, "security", source))

            logging_cfg = None
            if data.get("logging"):
                logging_cfg = LoggingConfig.create(**_section(data, "logging", source))

            return AgentConfig(
                base_url=data.get("base_url"),
                headers=_section(data, "headers", source),
                timeout=data.get("timeout"),
                retry=retry_cfg,
                security=security_cfg,
                logging=logging_cfg,
            )

        except (ValueError, TypeError) as e:
            raise ConfigValidationError(f"Invalid config in {source}: {e}") from e


def load_from_file(path: Union[str, Path]) -> AgentConfig:
    """Shortcut for ``ConfigFileLoader.from_file``."""
    return ConfigFileLoader.from_file(path)
