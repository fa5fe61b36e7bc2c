"""HTTP Basic authentication middleware."""

import base64
from typing import Any

from .base import Middleware, Next
from .config import AUTHORIZATION_HEADER, BasicAuthConfig


def basic_auth_header(username: str, password: str) -> str:
    """
    ``Basic base64(username:password)`` (RFC 7617, not URL-encoded).

    Examples:
        >>> basic_auth_header("user", "pass")
        'Basic dXNlcjpwYXNz'
    """
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class BasicAuthMiddleware(Middleware):
    name = "basic_auth"

    def __init__(self, config: BasicAuthConfig):
        self.config = config
        self._header = basic_auth_header(config.username, config.password)

    def __call__(self, ctx, next_: Next) -> Any:
        ctx.request.set_header(AUTHORIZATION_HEADER, self._header)
        return next_()
