"""
Named middleware factories.

Factories are registered at import time (built-ins) or application startup
and only read afterwards, so the registry is not locked.
"""

import logging
from typing import Any, Callable, Dict, List

from ..core.exceptions import MiddlewareNotRegisteredError
from .base import Middleware, Unit
from .basic_auth import BasicAuthMiddleware
from .config import (
    BasicAuthConfig,
    DebugConfig,
    DispatchConfig,
    MiddlewareConfig,
    RequestLogConfig,
    SignedAuthConfig,
    TimingConfig,
)
from .debug import DebugMiddleware
from .dispatch import DispatchMiddleware
from .request_log import RequestLogMiddleware
from .signed_auth import SignedAuthMiddleware
from .timing import TimingMiddleware

logger = logging.getLogger(__name__)

#: ``factory(*args) -> unit``; raises ArgumentError on bad arguments
MiddlewareFactory = Callable[..., Unit]

_factories: Dict[str, MiddlewareFactory] = {}


def register_factory(name: str, factory: MiddlewareFactory) -> None:
    """Register (or silently replace) a factory under ``name``."""
    _factories[name] = factory
    logger.debug(f"Middleware factory registered: {name}")


def unregister_factory(name: str) -> None:
    _factories.pop(name, None)


def registered_names() -> List[str]:
    return sorted(_factories)


def create_middleware(name: str, *args: Any) -> Unit:
    """
    Instantiate a registered middleware.

    Raises:
        MiddlewareNotRegisteredError: no factory under ``name``
        ArgumentError: the factory rejected its arguments

    Example:
        >>> create_middleware("basic_auth", "user", "pass")
        <BasicAuthMiddleware name='basic_auth'>
    """
    factory = _factories.get(name)
    if factory is None:
        raise MiddlewareNotRegisteredError(name)
    return factory(*args)


def build_middleware(config: MiddlewareConfig) -> Middleware:
    """
    Build a built-in middleware from its typed config.

    Raises:
        TypeError: unknown config type
    """
    if isinstance(config, TimingConfig):
        return TimingMiddleware(config)
    elif isinstance(config, DebugConfig):
        return DebugMiddleware(config)
    elif isinstance(config, BasicAuthConfig):
        return BasicAuthMiddleware(config)
    elif isinstance(config, SignedAuthConfig):
        return SignedAuthMiddleware(config)
    elif isinstance(config, RequestLogConfig):
        return RequestLogMiddleware(config)
    elif isinstance(config, DispatchConfig):
        return DispatchMiddleware(config)

    raise TypeError(f"Unknown middleware config: {type(config).__name__}")


def config_factory(config_cls) -> MiddlewareFactory:
    """Factory mapping positional arguments onto ``config_cls`` then building the unit."""
    def factory(*args: Any) -> Middleware:
        return build_middleware(config_cls.from_args(*args))

    factory.__name__ = f"{config_cls.name}_factory"
    return factory


BUILTIN_CONFIGS = (
    TimingConfig,
    DebugConfig,
    BasicAuthConfig,
    SignedAuthConfig,
    RequestLogConfig,
    DispatchConfig,
)

for _config_cls in BUILTIN_CONFIGS:
    register_factory(_config_cls.name, config_factory(_config_cls))
