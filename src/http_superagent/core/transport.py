# src/http_superagent/core/transport.py
"""
Transport collaborator: builds and sends one HTTP round trip with requests.

The transport knows nothing about middleware or codecs; it takes an already
serialized body and returns a requests.Response whose content is fully read.
"""

import logging
import ssl
import threading
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

import requests
from requests.adapters import HTTPAdapter

from .cancellation import CancelToken
from .exceptions import RequestBuildError, TLSMaterialError, classify_requests_exception
from .session_manager import ThreadLocalSessionManager

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192


# ==================== TLS ====================

@dataclass(frozen=True)
class TLSOptions:
    """
    TLS settings for one https round trip.

    Attributes:
        verify: False to skip verification, True for the default trust store,
                or a CA bundle path that replaces it
        cert: (cert_path, key_path) client certificate pair
        ssl_context: Custom context used verbatim (mounted on a dedicated adapter)
    """

    verify: Union[bool, str] = True
    cert: Optional[Tuple[str, str]] = None
    ssl_context: Optional[ssl.SSLContext] = None


class SSLContextAdapter(HTTPAdapter):
    """HTTPAdapter that hands a caller-supplied SSLContext to urllib3."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs):
        self._ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        kwargs['ssl_context'] = self._ssl_context
        return super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args, **kwargs):
        kwargs['ssl_context'] = self._ssl_context
        return super().proxy_manager_for(*args, **kwargs)


def _load_ca(context: ssl.SSLContext, ca_path: str) -> None:
    try:
        context.load_verify_locations(cafile=ca_path)
    except (OSError, ssl.SSLError) as exc:
        raise TLSMaterialError(ca_path, f"Failed to load CA certificate: {exc}") from exc


def _load_cert(context: ssl.SSLContext, cert_path: str, key_path: str) -> None:
    try:
        context.load_cert_chain(certfile=cert_path, keyfile=key_path)
    except (OSError, ssl.SSLError) as exc:
        raise TLSMaterialError(
            f"{cert_path}, {key_path}", f"Failed to load client certificate: {exc}"
        ) from exc


def build_tls_options(
    tls_config: Optional[ssl.SSLContext] = None,
    insecure_skip_verify: bool = False,
    ca_path: Optional[str] = None,
    cert_path: Optional[str] = None,
    key_path: Optional[str] = None,
) -> TLSOptions:
    """
    Build TLS options for an https request.

    A supplied ``tls_config`` is used verbatim; CA and client certificate are
    loaded into it. Otherwise the insecure flag, CA bundle and client pair are
    passed to requests natively, after being loaded once into a probe context
    so that unreadable or undecodable files fail here, before any network call.

    Raises:
        TLSMaterialError: CA / certificate / key cannot be loaded
    """
    has_cert = bool(cert_path and key_path)

    if tls_config is not None:
        if ca_path:
            _load_ca(tls_config, ca_path)
        if has_cert:
            _load_cert(tls_config, cert_path, key_path)
        return TLSOptions(
            verify=tls_config.verify_mode != ssl.CERT_NONE,
            ssl_context=tls_config,
        )

    probe = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    verify: Union[bool, str] = not insecure_skip_verify

    if ca_path:
        _load_ca(probe, ca_path)
        if verify:
            verify = ca_path

    cert = None
    if has_cert:
        _load_cert(probe, cert_path, key_path)
        cert = (cert_path, key_path)

    return TLSOptions(verify=verify, cert=cert)


# ==================== Transport ====================

class Transport:
    """
    HTTP transport built on requests.

    Features:
        - Thread-local pooled sessions for plain requests
        - Dedicated short-lived session when a custom SSLContext is supplied
        - Body read in chunks so cancellation is observed mid-download

    Example:
        >>> transport = Transport()
        >>> prepared = transport.prepare("GET", "https://example.com/")
        >>> response = transport.execute(prepared, timeout=5)
        >>> transport.close()
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._sessions = ThreadLocalSessionManager(session_factory=self._create_session)

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        # Ретраи делает dispatch, не urllib3
        adapter = HTTPAdapter(max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        return session

    def prepare(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        auth: Optional[Tuple[str, str]] = None,
    ) -> requests.PreparedRequest:
        """
        Build the transport-level request.

        Raises:
            RequestBuildError: URL or headers are invalid
        """
        request = requests.Request(
            method=method,
            url=url,
            headers=dict(headers or {}),
            data=body or None,
            auth=auth,
        )
        try:
            return request.prepare()
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise RequestBuildError(f"Failed to build {method} {url}: {exc}") from exc

    def execute(
        self,
        prepared: requests.PreparedRequest,
        timeout: Optional[float] = None,
        tls: Optional[TLSOptions] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> requests.Response:
        """
        Send one request and read the whole body into memory.

        Args:
            prepared: Request from prepare()
            timeout: Seconds, None = wait forever
            tls: TLS options for https URLs
            cancel_token: Checked once the send returns, between body chunks
                          and after the last one

        Returns:
            requests.Response with content already consumed and connection released

        Raises:
            TransportError: (and subclasses) network level failures
            CancelledError: token cancelled during the send or the body read
        """
        owned_session = tls is not None and tls.ssl_context is not None
        if owned_session:
            session = requests.Session()
            session.mount('https://', SSLContextAdapter(tls.ssl_context, max_retries=0))
        else:
            session = self._sessions.get_session()

        verify = tls.verify if tls is not None else True
        cert = tls.cert if tls is not None else None

        try:
            settings = session.merge_environment_settings(prepared.url, {}, True, verify, cert)
            try:
                response = session.send(
                    prepared,
                    timeout=timeout,
                    allow_redirects=True,
                    **settings
                )
                try:
                    if cancel_token is not None:
                        cancel_token.raise_if_cancelled(prepared.url)
                    self._read_body(response, cancel_token)
                    if cancel_token is not None:
                        cancel_token.raise_if_cancelled(prepared.url)
                finally:
                    response.close()
            except requests.exceptions.RequestException as exc:
                raise classify_requests_exception(exc, prepared.url, timeout) from exc
            return response
        finally:
            if owned_session:
                session.close()

    def _read_body(self, response: requests.Response, cancel_token: Optional[CancelToken]) -> None:
        buffer = bytearray()
        for chunk in response.iter_content(chunk_size=self.chunk_size):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(response.url)
            buffer.extend(chunk)

        response._content = bytes(buffer)
        response._content_consumed = True

    def close(self) -> None:
        """Close all pooled sessions."""
        self._sessions.close_all()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


_default_transport: Optional[Transport] = None
_default_lock = threading.Lock()


def get_default_transport() -> Transport:
    """Process-wide transport used by requests that were not given one."""
    global _default_transport

    if _default_transport is None:
        with _default_lock:
            if _default_transport is None:
                _default_transport = Transport()

    return _default_transport
