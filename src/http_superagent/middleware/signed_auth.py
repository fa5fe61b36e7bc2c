"""
HMAC request signing middleware.

Canonical string (fields joined in this order):

    METHOD + URL + encoded query   (method and URL only when URL is set,
                                    query only when non-empty)
    "\\n" + host
    "\\n" + Content-Type header
    "\\n\\n" + raw body bytes

The token is ``prefix + access_key + urlsafe_b64(hmac(secret_key, canonical))``.
"""

import base64
import hmac
from typing import Any

from ..core.utils import encode_queries
from .base import Middleware, Next
from .config import SignedAuthConfig


def canonical_string(request) -> bytes:
    """Bytes that are signed for ``request``."""
    head = ""
    if request.url:
        head += request.method + request.url
    if request.queries:
        head += encode_queries(request.queries)

    head += "\n" + request.host
    head += "\n" + (request.get_header("Content-Type") or "")
    head += "\n\n"

    return head.encode("utf-8") + request.body_bytes()


class SignedAuthMiddleware(Middleware):
    """
    Example:
        >>> request.use("signed_auth", "ak-1", "sk-secret", "X-Signature")
    """

    name = "signed_auth"

    def __init__(self, config: SignedAuthConfig):
        self.config = config

    def signature(self, payload: bytes) -> str:
        mac = hmac.new(self.config.secret_key.encode("utf-8"), payload, self.config.digest.lower())
        return base64.urlsafe_b64encode(mac.digest()).decode("ascii")

    def token(self, request) -> str:
        return self.config.prefix + self.config.access_key + self.signature(canonical_string(request))

    def __call__(self, ctx, next_: Next) -> Any:
        ctx.request.set_header(self.config.header_name, self.token(ctx.request))
        return next_()
