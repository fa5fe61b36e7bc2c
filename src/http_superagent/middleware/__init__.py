"""
Middleware: named, composable units around the dispatch of a request.

Built-in factories (``request.use(name, *args)``):

    timing       [header_name]                    elapsed time header
    debug        [callback(ctx, request)]         inspection hook
    basic_auth   username, password               Authorization: Basic
    signed_auth  access_key, secret_key[, header] HMAC signature header
    logging      [level[, logger]]                request / response log
    dispatch                                      terminal transport call
"""

from .base import Middleware, MiddlewareFunc, Next, Unit
from .basic_auth import BasicAuthMiddleware, basic_auth_header
from .chain import compose
from .config import (
    AUTHORIZATION_HEADER,
    DURATION_HEADER,
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
from .registry import (
    build_middleware,
    create_middleware,
    register_factory,
    registered_names,
    unregister_factory,
)
from .request_log import RequestLogMiddleware
from .signed_auth import SignedAuthMiddleware, canonical_string
from .timing import TimingMiddleware

__all__ = [
    "Middleware",
    "MiddlewareFunc",
    "Next",
    "Unit",
    "compose",
    "register_factory",
    "unregister_factory",
    "registered_names",
    "create_middleware",
    "build_middleware",
    "MiddlewareConfig",
    "TimingConfig",
    "DebugConfig",
    "BasicAuthConfig",
    "SignedAuthConfig",
    "RequestLogConfig",
    "DispatchConfig",
    "DURATION_HEADER",
    "AUTHORIZATION_HEADER",
    "TimingMiddleware",
    "DebugMiddleware",
    "BasicAuthMiddleware",
    "SignedAuthMiddleware",
    "RequestLogMiddleware",
    "DispatchMiddleware",
    "basic_auth_header",
    "canonical_string",
]
