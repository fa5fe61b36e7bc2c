"""Core модули http-superagent."""

from .cancellation import CancelToken
from .config import (
    RetryConfig,
    SecurityConfig,
    AgentConfig,
)
from .content_type import ContentType
from .context import Context
from .retry_engine import RetryEngine
from .session_manager import ThreadLocalSessionManager
from .transport import Transport, TLSOptions, SSLContextAdapter, build_tls_options, get_default_transport
from .exceptions import (
    SuperAgentException,
    TemporaryError,
    FatalError,
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
    classify_requests_exception,
)

__all__ = [
    # Config
    "RetryConfig",
    "SecurityConfig",
    "AgentConfig",
    # Model
    "CancelToken",
    "ContentType",
    "Context",
    # Transport
    "RetryEngine",
    "ThreadLocalSessionManager",
    "Transport",
    "TLSOptions",
    "SSLContextAdapter",
    "build_tls_options",
    "get_default_transport",
    # Exceptions
    "SuperAgentException",
    "TemporaryError",
    "FatalError",
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
    "classify_requests_exception",
]
