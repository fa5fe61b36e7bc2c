"""Elapsed-time middleware."""

import time
from typing import Any, Optional

from ..core.utils import format_duration
from .base import Middleware, Next
from .config import TimingConfig


class TimingMiddleware(Middleware):
    """
    Measures everything downstream of this unit.

    On unwind (also when the chain raised) the duration is stored as
    ``ctx.metadata["request_time"]`` and, when a response exists, written to
    the ``X-SuperAgent-Duration`` response header (``"12.5ms"``).
    """

    name = "timing"

    def __init__(self, config: Optional[TimingConfig] = None):
        self.config = config or TimingConfig()

    def __call__(self, ctx, next_: Next) -> Any:
        start = time.perf_counter()
        try:
            return next_()
        finally:
            elapsed = time.perf_counter() - start
            duration = format_duration(elapsed)
            ctx.set("request_time", duration)
            ctx.set("request_time_seconds", elapsed)
            if ctx.response is not None:
                ctx.response.headers[self.config.header_name] = duration
