"""
Logging configuration for http-superagent.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_int(self) -> int:
        """Numeric level understood by the logging module."""
        return getattr(logging, self.value)


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Configuration for structured request logging.

    Attributes:
        level: Minimum level written by the handlers
        format: Output format (json, text, colored)
        name: Logger name (child of ``http_superagent`` by default)
        enable_console: Write to stdout
        enable_file: Write to a rotating file
        file_path: Path to log file (required if enable_file=True)
        max_bytes: Max log file size before rotation (default: 10MB)
        backup_count: Number of rotated files to keep
        enable_request_id: Add the id of the running ``Request.do()`` to records
        extra_fields: Static fields added to every record (service, env...)

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    name: str = "http_superagent.requests"
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_request_id: bool = True
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        enable_file: bool = False,
        file_path: Optional[str] = None,
        extra_fields: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> "LoggingConfig":
        """
        Create LoggingConfig from plain strings (env vars, config files).

        Raises:
            ValueError: unknown level or format

        Example:
            >>> LoggingConfig.create(level="debug", format="colored")
        """
        return cls(
            level=LogLevel(level.upper()),
            format=LogFormat(format.lower()),
            enable_file=enable_file,
            file_path=file_path,
            extra_fields=extra_fields or {},
            **kwargs
        )
