"""Debug hook middleware."""

from typing import Any, Optional

from .base import Middleware, Next
from .config import DebugConfig


def _noop(ctx, request) -> None:
    return None


class DebugMiddleware(Middleware):
    """Calls ``callback(ctx, request)`` and continues; the return value is ignored."""

    name = "debug"

    def __init__(self, config: Optional[DebugConfig] = None):
        self.config = config or DebugConfig()
        self._callback = self.config.callback or _noop

    def __call__(self, ctx, next_: Next) -> Any:
        self._callback(ctx, ctx.request)
        return next_()
