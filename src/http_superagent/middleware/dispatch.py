"""
Terminal unit: executes the request through the transport.

1. body value → bytes through the codec registry
2. transport request: method, URL + query multimap, headers, Host
3. transport-level basic auth (applied after headers, so it wins)
4. TLS options for https URLs
5. send with timeout and retry
6. read the body and store the Response on the context
"""

import logging
import time
from typing import Any, Optional

from urllib3 import HTTPHeaderDict

from ..core.exceptions import CancelledError, SuperAgentException
from ..core.logging import emit
from ..core.retry_engine import RetryEngine
from ..core.transport import build_tls_options, get_default_transport
from ..core.utils import format_duration, url_host, url_scheme
from ..response import Response
from ..utils.sanitizer import mask_url
from .base import Middleware, Next
from .config import DispatchConfig

logger = logging.getLogger(__name__)


class DispatchMiddleware(Middleware):
    """
    Always the last unit of the chain (``Request.do()`` appends it).

    Retry: a retry count ``n > 0`` allows up to ``n`` attempts, ``0`` means a
    single attempt. Only retryable transport errors are retried; the last
    error is raised once attempts run out. A token cancelled while an attempt
    is in flight turns its outcome into CancelledError, even a failed one.
    """

    name = "dispatch"

    def __init__(self, config: Optional[DispatchConfig] = None):
        self.config = config or DispatchConfig()

    def __call__(self, ctx, next_: Optional[Next] = None) -> Any:
        request = ctx.request
        target = request.logger or logger

        body = request.body_bytes()
        url = request.full_url

        headers = HTTPHeaderDict(request.headers)
        if "Host" not in headers:
            host = url_host(url)
            if host:
                headers["Host"] = host

        auth = None
        if request.username and request.password:
            auth = (request.username, request.password)

        transport = request.transport or get_default_transport()
        prepared = transport.prepare(request.method, url, headers, body, auth)

        tls = None
        if url_scheme(url) == "https":
            tls = build_tls_options(
                tls_config=request.tls_config,
                insecure_skip_verify=request.insecure_skip_verify,
                ca_path=request.ca_path,
                cert_path=request.cert_path,
                key_path=request.key_path,
            )

        engine = RetryEngine(request.retry_config, ctx.cancel_token)
        fields = {
            "method": request.method,
            "url": mask_url(url),
            "request_id": ctx.request_id,
        }

        while True:
            ctx.cancel_token.raise_if_cancelled(url)

            attempt = engine.attempt + 1
            start = time.perf_counter()
            emit(target, logging.DEBUG, "Request started", attempt=attempt, **fields)

            try:
                raw = transport.execute(
                    prepared,
                    timeout=request.timeout,
                    tls=tls,
                    cancel_token=ctx.cancel_token,
                )
                break
            except SuperAgentException as e:
                duration = format_duration(time.perf_counter() - start)
                if ctx.cancel_token.cancelled and not isinstance(e, CancelledError):
                    emit(
                        target, logging.WARNING, "Request cancelled",
                        attempt=attempt, error=str(e), error_type=type(e).__name__,
                        duration=duration, **fields
                    )
                    raise CancelledError(url=url, reason=ctx.cancel_token.reason) from e

                if engine.should_retry(e):
                    emit(
                        target, logging.WARNING, "Request error (will retry)",
                        attempt=attempt, max_attempts=engine.max_attempts,
                        error=str(e), error_type=type(e).__name__, duration=duration, **fields
                    )
                    engine.wait(engine.get_wait_time())
                    engine.increment()
                    continue

                emit(
                    target, logging.ERROR, "Request failed",
                    attempt=attempt, error=str(e), error_type=type(e).__name__,
                    duration=duration, **fields
                )
                raise

        response = Response.from_transport(prepared, raw)
        ctx.response = response

        emit(
            target, logging.INFO, "Request completed",
            attempt=attempt, status_code=response.status_code,
            duration=format_duration(time.perf_counter() - start), **fields
        )
        return response
