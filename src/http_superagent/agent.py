"""
Agent: shared defaults for many requests.
"""

from dataclasses import replace
from typing import Any, List, Optional
from urllib.parse import urlsplit

from .core.config import AgentConfig
from .core.logging import AgentLogger
from .core.transport import Transport
from .core.utils import join_url
from .middleware import Unit, create_middleware
from .request import (
    METHOD_DELETE,
    METHOD_GET,
    METHOD_HEAD,
    METHOD_POST,
    METHOD_PUT,
    METHOD_UPDATE,
    Request,
)


class Agent:
    """
    Factory of pre-configured requests.

    Features:
        - base_url joined with relative request URLs
        - default headers, timeout, retry and TLS settings from AgentConfig
        - default middleware attached in front of per-request middleware
        - one Transport (thread-local pooled sessions) for all requests

    Example:
        >>> config = AgentConfig.create(base_url="https://api.example.com", timeout=10, retry=3)
        >>> with Agent(config).use("timing").use("basic_auth", "user", "pass") as agent:
        ...     response = agent.get("/users", queries={"page": "2"}).do()
    """

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        middleware: Optional[List[Unit]] = None,
        transport: Optional[Transport] = None,
    ):
        self.config = config or AgentConfig()
        self._middlewares: List[Unit] = list(middleware) if middleware else []
        self._owns_transport = transport is None
        self.transport = transport or Transport()

        self.logger: Optional[AgentLogger] = None
        if self.config.logging:
            logging_config = self.config.logging
            # Отдельный логгер на каждый base_url
            if self.config.base_url:
                netloc = urlsplit(self.config.base_url).netloc
                if netloc:
                    logging_config = replace(logging_config, name=f"{logging_config.name}.{netloc}")
            self.logger = AgentLogger(logging_config)

    @property
    def middlewares(self) -> List[Unit]:
        return list(self._middlewares)

    def middleware(self, *units: Unit) -> "Agent":
        """Attach default middleware units for every request."""
        self._middlewares.extend(units)
        return self

    def use(self, name: str, *args: Any) -> "Agent":
        """Create a registered middleware by name and attach it as a default."""
        return self.middleware(create_middleware(name, *args))

    def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers=None,
        queries=None,
    ) -> Request:
        """New Request with the agent's defaults applied."""
        config = self.config
        request = Request(transport=self.transport, logger=self.logger)

        if config.headers:
            request.set_headers(config.headers)

        request.set_method(method, join_url(config.base_url, url), body, headers, queries)
        request.set_timeout(config.timeout)
        request.retry_config = config.retry

        security = config.security
        request.set_insecure_skip_verify(security.insecure_skip_verify)
        if security.ca_path:
            request.set_ca(security.ca_path)
        if security.cert_path and security.key_path:
            request.set_cert(security.cert_path, security.key_path)

        request.middleware(*self._middlewares)
        return request

    def get(self, url: str, body: Any = None, headers=None, queries=None) -> Request:
        return self.request(METHOD_GET, url, body, headers, queries)

    def post(self, url: str, body: Any = None, headers=None, queries=None) -> Request:
        return self.request(METHOD_POST, url, body, headers, queries)

    def head(self, url: str, body: Any = None, headers=None, queries=None) -> Request:
        return self.request(METHOD_HEAD, url, body, headers, queries)

    def put(self, url: str, body: Any = None, headers=None, queries=None) -> Request:
        return self.request(METHOD_PUT, url, body, headers, queries)

    def update(self, url: str, body: Any = None, headers=None, queries=None) -> Request:
        return self.request(METHOD_UPDATE, url, body, headers, queries)

    def delete(self, url: str, body: Any = None, headers=None, queries=None) -> Request:
        return self.request(METHOD_DELETE, url, body, headers, queries)

    # ==================== Управление жизненным циклом ====================

    def close(self) -> None:
        """
        Close logger handlers and, if the agent created it, the transport.

        Cleanup order:
            1. Logger handlers (flush and close file descriptors)
            2. Transport sessions
        """
        if self.logger is not None:
            self.logger.close()

        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
