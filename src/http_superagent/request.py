"""
Request builder.

Example:
    >>> response = (
    ...     new_request()
    ...     .get("http://localhost:8080/search", queries={"q": "python"})
    ...     .set_timeout(5)
    ...     .set_retry(3)
    ...     .use("timing")
    ...     .do()
    ... )
    >>> response.status_code
    200
"""

import ssl
from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Union

from urllib3 import HTTPHeaderDict

from . import codecs
from .core.cancellation import CancelToken
from .core.config import RetryConfig
from .core.content_type import ContentType
from .core.context import Context
from .core.logging import AgentLogger, clear_request_id, set_request_id
from .core.transport import Transport
from .core.exceptions import NoResponseError
from .core.utils import QueryValues, split_url, url_host, with_query
from .middleware import DispatchMiddleware, Unit, compose, create_middleware
from .response import Response

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_HEAD = "HEAD"
METHOD_PUT = "PUT"
METHOD_UPDATE = "UPDATE"
METHOD_DELETE = "DELETE"

QueryInput = Mapping[str, Union[str, Iterable[str]]]


class Request:
    """
    Mutable description of one outgoing request.

    Every setter returns ``self``. Middleware may change the request while
    the chain runs; after ``do()`` returns it is not modified again. One
    ``do()`` per request.
    """

    def __init__(self, transport: Optional[Transport] = None, logger: Optional[AgentLogger] = None):
        self.method: str = METHOD_GET
        self.url: str = ""
        self.headers = HTTPHeaderDict()
        self.queries: QueryValues = {}
        self.body: Any = None

        self.timeout: Optional[float] = None
        self.retry_config = RetryConfig()

        self.insecure_skip_verify = False
        self.tls_config: Optional[ssl.SSLContext] = None
        self.ca_path: Optional[str] = None
        self.cert_path: Optional[str] = None
        self.key_path: Optional[str] = None

        self.username = ""
        self.password = ""

        self.middlewares: List[Unit] = []
        self.cancel_token = CancelToken()
        self.transport = transport
        self.logger = logger

    # ==================== Method & URL ====================

    def set_method(
        self,
        method: str,
        url: Optional[str] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        queries: Optional[QueryInput] = None,
    ) -> "Request":
        """
        Set the method and, optionally, URL, body, headers and queries.

        Example:
            >>> request.set_method("post", "http://localhost/users", {"name": "ann"})
        """
        self.method = method.upper()
        if url is not None:
            self.set_url(url)
        if body is not None:
            self.set_body(body)
        if headers:
            self.set_headers(headers)
        if queries:
            self.set_queries(queries)
        return self

    def get(self, url: str, body: Any = None, headers=None, queries=None) -> "Request":
        return self.set_method(METHOD_GET, url, body, headers, queries)

    def post(self, url: str, body: Any = None, headers=None, queries=None) -> "Request":
        return self.set_method(METHOD_POST, url, body, headers, queries)

    def head(self, url: str, body: Any = None, headers=None, queries=None) -> "Request":
        return self.set_method(METHOD_HEAD, url, body, headers, queries)

    def put(self, url: str, body: Any = None, headers=None, queries=None) -> "Request":
        return self.set_method(METHOD_PUT, url, body, headers, queries)

    def update(self, url: str, body: Any = None, headers=None, queries=None) -> "Request":
        return self.set_method(METHOD_UPDATE, url, body, headers, queries)

    def delete(self, url: str, body: Any = None, headers=None, queries=None) -> "Request":
        return self.set_method(METHOD_DELETE, url, body, headers, queries)

    def set_url(self, url: str) -> "Request":
        """
        Set the target URL.

        A query string in ``url`` is moved into the query multimap, after
        any queries already set.
        """
        base, queries = split_url(url)
        self.url = base
        for name, values in queries.items():
            self.queries.setdefault(name, []).extend(values)
        return self

    @property
    def full_url(self) -> str:
        """URL with the encoded query multimap (keys sorted)."""
        if not self.queries:
            return self.url
        return with_query(self.url, self.queries)

    @property
    def host(self) -> str:
        """``Host`` header if set, else host[:port] of the URL."""
        return self.headers.get("Host") or url_host(self.url)

    # ==================== Headers ====================

    def set_header(self, name: str, value: str) -> "Request":
        """Set a header, replacing previous values of the same name."""
        self.headers[name] = value
        return self

    def add_header(self, name: str, value: str) -> "Request":
        """Append a value to a header (repeated header)."""
        self.headers.add(name, value)
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "Request":
        for name, value in headers.items():
            self.set_header(name, value)
        return self

    def get_header(self, name: str) -> str:
        """First value of a header, ``""`` when absent."""
        values = self.headers.getlist(name)
        return values[0] if values else ""

    # ==================== Queries ====================

    def set_query(self, name: str, value: str) -> "Request":
        """Append a query value."""
        self.queries.setdefault(name, []).append(str(value))
        return self

    def set_queries(self, queries: QueryInput) -> "Request":
        """Append query values; a value may be a string or a list of strings."""
        for name, value in queries.items():
            if isinstance(value, (list, tuple)):
                for item in value:
                    self.set_query(name, item)
            else:
                self.set_query(name, value)
        return self

    def get_query(self, name: str) -> str:
        """First value of a query parameter, ``""`` when absent."""
        values = self.queries.get(name)
        return values[0] if values else ""

    # ==================== Body ====================

    def set_body(self, body: Any) -> "Request":
        self.body = body
        return self

    def set_content_type(self, content_type: str) -> "Request":
        """Set the ``Content-Type`` header; it also selects the body codec."""
        return self.set_header("Content-Type", content_type)

    @property
    def content_type(self) -> ContentType:
        return ContentType.parse(self.get_header("Content-Type"))

    def body_bytes(self) -> bytes:
        """
        Serialized body.

        ``None`` is an empty body and bytes are sent verbatim; any other value
        goes through the codec of the request's media type.

        Raises:
            MarshalError: the codec cannot represent the body
        """
        if self.body is None:
            return b""
        if isinstance(self.body, (bytes, bytearray)):
            return bytes(self.body)
        return codecs.marshal(self.content_type.media_type, self.body)

    # ==================== Transport options ====================

    def set_timeout(self, seconds: Optional[float]) -> "Request":
        """Timeout in seconds for the transport call; None = no timeout."""
        if seconds is not None and seconds <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = seconds
        return self

    def set_retry(self, times: int) -> "Request":
        """Up to ``times`` attempts for transport errors; 0 = one attempt."""
        self.retry_config = replace(self.retry_config, count=times)
        return self

    @property
    def retry(self) -> int:
        return self.retry_config.count

    def set_insecure_skip_verify(self, insecure: bool = True) -> "Request":
        self.insecure_skip_verify = insecure
        return self

    def set_tls_config(self, context: ssl.SSLContext) -> "Request":
        """Use ``context`` as is for https requests."""
        self.tls_config = context
        return self

    def set_ca(self, ca_path: str) -> "Request":
        """PEM bundle of trusted roots for the server certificate."""
        self.ca_path = ca_path
        return self

    def set_cert(self, cert_path: str, key_path: str) -> "Request":
        """Client certificate and private key (PEM)."""
        self.cert_path = cert_path
        self.key_path = key_path
        return self

    def basic_auth(self, username: str, password: str) -> "Request":
        """Transport-level basic auth; used only when both values are non-empty."""
        self.username = username
        self.password = password
        return self

    def set_context(self, cancel_token: CancelToken) -> "Request":
        """Cancellation token checked by the dispatch unit."""
        if not isinstance(cancel_token, CancelToken):
            raise TypeError(f"expected CancelToken, got {type(cancel_token).__name__}")
        self.cancel_token = cancel_token
        return self

    def set_transport(self, transport: Transport) -> "Request":
        self.transport = transport
        return self

    def set_logger(self, logger: Optional[AgentLogger]) -> "Request":
        self.logger = logger
        return self

    # ==================== Middleware ====================

    def middleware(self, *units: Unit) -> "Request":
        """Attach middleware units; they run in attachment order."""
        self.middlewares.extend(units)
        return self

    def use(self, name: str, *args: Any) -> "Request":
        """
        Create a registered middleware by name and attach it.

        Raises:
            MiddlewareNotRegisteredError: unknown name
            ArgumentError: invalid factory arguments
        """
        return self.middleware(create_middleware(name, *args))

    # ==================== Execution ====================

    def do(self) -> Response:
        """
        Run the middleware chain followed by the dispatch unit.

        Returns:
            Response stored on the context by the dispatch unit

        Raises:
            SuperAgentException: first error raised in the chain
            NoResponseError: a unit ended the chain without a response
        """
        ctx = Context(request=self, cancel_token=self.cancel_token)
        units = list(self.middlewares) + [DispatchMiddleware()]

        set_request_id(ctx.request_id)
        try:
            compose(ctx, units)()
        finally:
            clear_request_id()

        if ctx.response is None:
            raise NoResponseError(
                f"middleware chain finished without a response ({self.method} {self.full_url})"
            )
        return ctx.response

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.full_url}>"


def new_request(transport: Optional[Transport] = None, logger: Optional[AgentLogger] = None) -> Request:
    """Entry point of the builder."""
    return Request(transport=transport, logger=logger)


def get(url: str, body: Any = None, headers=None, queries=None) -> Request:
    return new_request().get(url, body, headers, queries)


def post(url: str, body: Any = None, headers=None, queries=None) -> Request:
    return new_request().post(url, body, headers, queries)


def head(url: str, body: Any = None, headers=None, queries=None) -> Request:
    return new_request().head(url, body, headers, queries)


def put(url: str, body: Any = None, headers=None, queries=None) -> Request:
    return new_request().put(url, body, headers, queries)


def update(url: str, body: Any = None, headers=None, queries=None) -> Request:
    return new_request().update(url, body, headers, queries)


def delete(url: str, body: Any = None, headers=None, queries=None) -> Request:
    return new_request().delete(url, body, headers, queries)
