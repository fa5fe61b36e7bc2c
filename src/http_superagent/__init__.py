"""http-superagent - fluent HTTP requests with middleware and body codecs."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.config import AgentConfig, RetryConfig, SecurityConfig
from .core.cancellation import CancelToken
from .core.content_type import ContentType
from .core.context import Context
from .core.transport import Transport
from .core.exceptions import (
    SuperAgentException,
    TransportError,
    TimeoutError,
    ConnectionError,
    TLSVerificationError,
    ArgumentError,
    ArityError,
    ArgumentTypeError,
    MiddlewareNotRegisteredError,
    CodecError,
    MarshalError,
    UnmarshalError,
    UnmarshalTargetError,
    TLSMaterialError,
    RequestBuildError,
    ContinuationError,
    NoResponseError,
    ConfigurationError,
    CancelledError,
)
from .codecs import Codec, Ref, register_codec, resolve_codec
from .middleware import Middleware, compose, create_middleware, register_factory
from .request import Request, new_request, get, post, head, put, update, delete
from .response import Body, Response
from .agent import Agent

# NullHandler: библиотека не пишет логи, пока приложение их не настроит
logging.getLogger('http_superagent').addHandler(logging.NullHandler())

try:
    __version__ = version("http-superagent")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__author__ = "HTTP SuperAgent Contributors"
__license__ = "MIT"

__all__ = [
    # Builder
    "Request",
    "new_request",
    "get",
    "post",
    "head",
    "put",
    "update",
    "delete",
    "Agent",

    # Response
    "Response",
    "Body",

    # Middleware
    "Middleware",
    "compose",
    "create_middleware",
    "register_factory",

    # Codecs
    "Codec",
    "Ref",
    "register_codec",
    "resolve_codec",

    # Config / model
    "AgentConfig",
    "RetryConfig",
    "SecurityConfig",
    "CancelToken",
    "ContentType",
    "Context",
    "Transport",

    # Exceptions
    "SuperAgentException",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "TLSVerificationError",
    "ArgumentError",
    "ArityError",
    "ArgumentTypeError",
    "MiddlewareNotRegisteredError",
    "CodecError",
    "MarshalError",
    "UnmarshalError",
    "UnmarshalTargetError",
    "TLSMaterialError",
    "RequestBuildError",
    "ContinuationError",
    "NoResponseError",
    "ConfigurationError",
    "CancelledError",

    # Version
    "__version__",
]
