"""
Pytest configuration and fixtures for http-superagent tests.

Local servers:
    echo_server  plain HTTP, see EchoHandler for the routes
    tls_server   the same handler behind a self-signed certificate
"""

import datetime
import ipaddress
import json
import ssl
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

import pytest
import responses as responses_lib
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from http_superagent.core.transport import Transport


class EchoHandler(BaseHTTPRequestHandler):
    """
    Routes:
        GET  /query        JSON object of the query multimap
        GET  /headers      JSON object of the request headers
        GET  /status/<n>   empty body with status n
        GET  /slow?delay=  sleeps, then answers "done"
        GET  /stream       20 chunks of 8 KiB, 0.1s apart
        GET  /xml          small XML document
        GET  /form         form-encoded body
        *    /echo         request body and Content-Type sent back
    """

    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):
        pass

    def _send(self, status, body=b"", content_type="text/plain; charset=utf-8", headers=None):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def _read_body(self):
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def _route(self):
        parts = urlsplit(self.path)
        body = self._read_body()

        if parts.path == "/query":
            payload = json.dumps(parse_qs(parts.query, keep_blank_values=True)).encode()
            return self._send(200, payload, "application/json")

        if parts.path == "/headers":
            payload = json.dumps({k: v for k, v in self.headers.items()}).encode()
            return self._send(200, payload, "application/json")

        if parts.path.startswith("/status/"):
            return self._send(int(parts.path.rsplit("/", 1)[1]))

        if parts.path == "/slow":
            delay = float(parse_qs(parts.query).get("delay", ["1"])[0])
            time.sleep(delay)
            return self._send(200, b"done")

        if parts.path == "/stream":
            return self._stream()

        if parts.path == "/xml":
            return self._send(200, b'<user id="7"><name>ann</name></user>', "application/xml")

        if parts.path == "/form":
            return self._send(200, b"a=1&a=2&b=x+y", "application/x-www-form-urlencoded")

        if parts.path == "/echo":
            content_type = self.headers.get("Content-Type") or "text/plain; charset=utf-8"
            return self._send(200, body, content_type, {"X-Method": self.command})

        return self._send(404, b"not found")

    def _stream(self):
        chunk = b"x" * 8192
        self.send_response(200)
        self.send_header("Content-Type", "application/octet-stream")
        self.send_header("Content-Length", str(len(chunk) * 20))
        self.end_headers()
        try:
            for _ in range(20):
                self.wfile.write(chunk)
                self.wfile.flush()
                time.sleep(0.1)
        except (BrokenPipeError, ConnectionResetError):
            self.close_connection = True

    do_GET = _route
    do_POST = _route
    do_PUT = _route
    do_DELETE = _route
    do_HEAD = _route
    do_UPDATE = _route


def _serve(server):
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return thread


def _self_signed(directory):
    """Write a self-signed certificate for 127.0.0.1 / localhost; returns (cert_path, key_path)."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "localhost")])
    now = datetime.datetime.now(datetime.timezone.utc)

    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=7))
        .add_extension(
            x509.SubjectAlternativeName([
                x509.DNSName("localhost"),
                x509.IPAddress(ipaddress.ip_address("127.0.0.1")),
            ]),
            critical=False,
        )
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .add_extension(
            x509.KeyUsage(
                digital_signature=True, content_commitment=False, key_encipherment=True,
                data_encipherment=False, key_agreement=False, key_cert_sign=True,
                crl_sign=True, encipher_only=False, decipher_only=False,
            ),
            critical=True,
        )
        .add_extension(
            x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH, ExtendedKeyUsageOID.CLIENT_AUTH]),
            critical=False,
        )
        .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()), critical=False)
        .add_extension(
            x509.AuthorityKeyIdentifier.from_issuer_public_key(key.public_key()),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )

    cert_path = directory / "server.pem"
    key_path = directory / "server.key"
    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_path.write_bytes(key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    ))
    return str(cert_path), str(key_path)


@pytest.fixture(scope="session")
def echo_server():
    """Base URL of the local echo server."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    server.daemon_threads = True
    _serve(server)
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.fixture(scope="session")
def tls_material(tmp_path_factory):
    """(cert_path, key_path) of the self-signed test certificate."""
    return _self_signed(tmp_path_factory.mktemp("tls"))


@pytest.fixture(scope="session")
def tls_server(tls_material):
    """Base URL of the echo server behind the self-signed certificate."""
    cert_path, key_path = tls_material

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(cert_path, key_path)

    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    server.daemon_threads = True
    server.socket = context.wrap_socket(server.socket, server_side=True)
    _serve(server)
    yield f"https://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def transport():
    """Transport closed after the test."""
    transport = Transport()
    yield transport
    transport.close()
