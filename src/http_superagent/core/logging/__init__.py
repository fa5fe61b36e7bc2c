"""
Structured logging for http-superagent.

Example:
    >>> from http_superagent.core.logging import LoggingConfig, get_logger
    >>> logger = get_logger(LoggingConfig.create(level="DEBUG", format="colored"))
    >>> logger.info("Request started", method="GET", url="https://api.com")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import AgentLogger, get_logger, configure_logging, emit
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    RequestIdFilter,
    ExtraFieldsFilter,
    set_request_id,
    get_request_id,
    clear_request_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "AgentLogger",
    "get_logger",
    "configure_logging",
    "emit",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "RequestIdFilter",
    "ExtraFieldsFilter",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
