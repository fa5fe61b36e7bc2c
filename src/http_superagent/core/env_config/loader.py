"""
Load AgentConfig from environment variables and .env files.
"""

from typing import Optional

from pydantic import ValidationError

from ..config import AgentConfig
from ..exceptions import ConfigurationError
from .validator import AgentSettings


def load_from_env(env_file: Optional[str] = None, **overrides) -> AgentConfig:
    """
    Load AgentConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (same names as AgentSettings fields)
    2. Environment variables (SUPERAGENT_*)
    3. .env file (``env_file`` or ``.env`` in the working directory)
    4. Defaults

    Raises:
        ConfigurationError: a value does not pass validation

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.staging", retry_count=5)
    """
    kwargs = dict(overrides)
    if env_file is not None:
        kwargs['_env_file'] = env_file

    try:
        settings = AgentSettings(**kwargs)
        return settings.to_config()
    except (ValidationError, ValueError) as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e
