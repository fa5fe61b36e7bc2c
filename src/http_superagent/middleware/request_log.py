"""Request / response logging middleware (registered as ``logging``)."""

import logging
import time
from typing import Any, Optional

from ..core.exceptions import SuperAgentException
from ..core.logging import emit
from ..core.utils import format_duration
from ..utils.sanitizer import mask_headers, mask_url
from .base import Middleware, Next
from .config import RequestLogConfig

logger = logging.getLogger("http_superagent.requests")


class RequestLogMiddleware(Middleware):
    """
    Logs the outgoing request line and the resulting status.

    Credentials in headers and URL are masked before logging.
    """

    name = "logging"

    def __init__(self, config: Optional[RequestLogConfig] = None):
        self.config = config or RequestLogConfig()

    def _target(self, request) -> Any:
        return self.config.logger or request.logger or logger

    def __call__(self, ctx, next_: Next) -> Any:
        request = ctx.request
        target = self._target(request)
        fields = {
            "method": request.method,
            "url": mask_url(request.full_url),
            "request_id": ctx.request_id,
        }

        emit(target, self.config.level, "Sending request", headers=mask_headers(request.headers), **fields)

        start = time.perf_counter()
        try:
            result = next_()
        except SuperAgentException as e:
            emit(
                target, logging.ERROR, "Request raised",
                error=str(e), error_type=type(e).__name__,
                duration=format_duration(time.perf_counter() - start), **fields
            )
            raise

        duration = format_duration(time.perf_counter() - start)
        if ctx.response is not None:
            emit(
                target, self.config.level, "Received response",
                status_code=ctx.response.status_code, duration=duration, **fields
            )
        else:
            emit(target, logging.WARNING, "Chain finished without response", duration=duration, **fields)

        return result
