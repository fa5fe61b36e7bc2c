"""
Structured logger used by Request / Agent / logging middleware.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig
from .formatters import get_formatter
from .filters import RequestIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class AgentLogger:
    """
    Logger with keyword fields instead of format strings.

    Keyword arguments become record attributes (``extra``) after passing
    through ``mask_sensitive_data``, so headers and credentials handed to the
    logger are redacted before any handler sees them.

    Example:
        >>> logger = AgentLogger(LoggingConfig.create(format="json"))
        >>> logger.info("Request started", method="GET", url="https://api.com")
    """

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()
        self.name = self.config.name
        self._closed = False

        level = self.config.level.to_int()

        self._logger = logging.getLogger(self.name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Повторная инициализация с тем же именем заменяет handlers
        self._release_handlers()

        filters = []
        if self.config.enable_request_id:
            filters.append(RequestIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.enable_file:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters,
            ))

    @property
    def logger(self) -> logging.Logger:
        """Underlying ``logging.Logger`` (handlers, level)."""
        return self._logger

    def log(self, level: int, message: str, **kwargs: Any) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log info message.

        Example:
            >>> logger.info("Request completed", status_code=200, duration="12ms")
        """
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log error with traceback; call from an ``except`` block."""
        self._logger.exception(message, extra=mask_sensitive_data(kwargs))

    def _release_handlers(self) -> None:
        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

    def close(self) -> None:
        """
        Flush and close all handlers. Idempotent.

        Example:
            >>> with AgentLogger(config) as logger:
            ...     logger.info("Processing...")
        """
        if self._closed:
            return

        self._release_handlers()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


_default_logger: Optional[AgentLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> AgentLogger:
    """
    Get global logger instance.

    ``config`` is only used when the logger does not exist yet.
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = AgentLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> AgentLogger:
    """Replace global logger with a new configuration."""
    global _default_logger

    if _default_logger is not None:
        _default_logger.close()

    _default_logger = AgentLogger(config)
    return _default_logger


def emit(target: Any, level: int, message: str, **fields: Any) -> None:
    """
    Log ``message`` with keyword fields on an AgentLogger or a plain logging.Logger.

    Fields are masked in both cases.
    """
    if isinstance(target, AgentLogger):
        target.log(level, message, **fields)
    elif target.isEnabledFor(level):
        target.log(level, message, extra=mask_sensitive_data(fields))
