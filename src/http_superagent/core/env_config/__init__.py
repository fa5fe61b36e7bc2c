"""
Environment and file configuration for http-superagent.

Example:
    >>> from http_superagent.core.env_config import load_from_env, load_from_file
    >>> config = load_from_env(retry_count=3)
    >>> config = load_from_file("superagent.yaml")
"""

from .loader import load_from_env
from .validator import AgentSettings
from .file_loader import ConfigFileLoader, ConfigValidationError, load_from_file

__all__ = [
    "load_from_env",
    "load_from_file",
    "AgentSettings",
    "ConfigFileLoader",
    "ConfigValidationError",
]
