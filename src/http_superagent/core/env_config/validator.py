"""
Pydantic settings for loading AgentConfig from the environment.
"""

from typing import Dict, Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import AgentConfig, RetryConfig, SecurityConfig
from ..logging.config import LoggingConfig


class AgentSettings(BaseSettings):
    """
    Agent configuration from environment variables.

    Reads from:
    1. Init kwargs (overrides)
    2. Environment variables (SUPERAGENT_*)
    3. .env file
    4. Defaults

    Example .env file:
        SUPERAGENT_BASE_URL=https://api.example.com
        SUPERAGENT_TIMEOUT=10
        SUPERAGENT_RETRY_COUNT=3
        SUPERAGENT_SECURITY_CA_PATH=/etc/ssl/internal-ca.pem
        SUPERAGENT_HEADERS={"User-Agent": "billing/1.0"}
        SUPERAGENT_LOG_ENABLED=true
        SUPERAGENT_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix='SUPERAGENT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: str = Field(default="", description="Base URL joined with relative request URLs")
    headers: Dict[str, str] = Field(default_factory=dict, description="Default headers (JSON object)")
    timeout: Optional[float] = Field(default=None, gt=0, description="Request timeout in seconds")

    # Retry
    retry_count: int = Field(default=0, ge=0, description="Attempts per request (0 = one attempt)")
    retry_backoff_base: float = Field(default=0.0, ge=0)
    retry_backoff_factor: float = Field(default=2.0, ge=1.0)
    retry_backoff_max: float = Field(default=30.0, ge=0)
    retry_backoff_jitter: bool = Field(default=False)

    # TLS
    security_insecure_skip_verify: bool = Field(default=False)
    security_ca_path: Optional[str] = None
    security_cert_path: Optional[str] = None
    security_key_path: Optional[str] = None

    # Logging
    log_enabled: bool = Field(default=False, description="Attach structured request logger")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_file_path: Optional[str] = None

    @model_validator(mode='after')
    def validate_client_certificate(self) -> 'AgentSettings':
        """Client certificate and key come in pairs."""
        if bool(self.security_cert_path) != bool(self.security_key_path):
            raise ValueError("security_cert_path and security_key_path must be set together")
        return self

    def to_retry_config(self) -> RetryConfig:
        return RetryConfig(
            count=self.retry_count,
            backoff_base=self.retry_backoff_base,
            backoff_factor=self.retry_backoff_factor,
            backoff_max=self.retry_backoff_max,
            backoff_jitter=self.retry_backoff_jitter,
        )

    def to_security_config(self) -> SecurityConfig:
        return SecurityConfig(
            insecure_skip_verify=self.security_insecure_skip_verify,
            ca_path=self.security_ca_path,
            cert_path=self.security_cert_path,
            key_path=self.security_key_path,
        )

    def to_logging_config(self) -> Optional[LoggingConfig]:
        """LoggingConfig if request logging is enabled."""
        if not self.log_enabled:
            return None

        return LoggingConfig.create(
            level=self.log_level,
            format=self.log_format,
            enable_file=bool(self.log_file_path),
            file_path=self.log_file_path,
        )

    def to_config(self) -> AgentConfig:
        """Build the immutable AgentConfig."""
        return AgentConfig(
            base_url=self.base_url or None,
            headers=self.headers,
            timeout=self.timeout,
            retry=self.to_retry_config(),
            security=self.to_security_config(),
            logging=self.to_logging_config(),
        )
