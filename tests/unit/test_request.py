"""Тесты построителя Request."""

import ssl

import pytest

import http_superagent
from http_superagent import CancelToken, Request, new_request
from http_superagent.core.exceptions import MiddlewareNotRegisteredError
from http_superagent.middleware import BasicAuthMiddleware, TimingMiddleware


class TestMethodAndURL:

    def test_defaults(self):
        request = new_request()
        assert request.method == "GET"
        assert request.url == ""
        assert request.body is None
        assert request.retry == 0
        assert request.timeout is None
        assert request.middlewares == []

    @pytest.mark.parametrize("verb, method", [
        ("get", "GET"),
        ("post", "POST"),
        ("head", "HEAD"),
        ("put", "PUT"),
        ("update", "UPDATE"),
        ("delete", "DELETE"),
    ])
    def test_verbs(self, verb, method):
        request = getattr(new_request(), verb)("http://example.com/x")
        assert request.method == method
        assert request.url == "http://example.com/x"

    @pytest.mark.parametrize("verb", ["get", "post", "head", "put", "update", "delete"])
    def test_module_level_verbs(self, verb):
        request = getattr(http_superagent, verb)("http://example.com/x")
        assert isinstance(request, Request)

    def test_set_method_lowercase(self):
        assert new_request().set_method("patch", "http://example.com").method == "PATCH"

    def test_set_method_options(self):
        request = new_request().set_method(
            "POST", "http://example.com/users", {"name": "ann"},
            headers={"Content-Type": "application/json"},
            queries={"page": "2"},
        )
        assert request.body == {"name": "ann"}
        assert request.get_header("Content-Type") == "application/json"
        assert request.get_query("page") == "2"

    def test_url_query_merged_into_queries(self):
        request = new_request().set_query("z", "0").get("http://example.com/s?q=a&q=b&page=1#frag")

        assert request.url == "http://example.com/s"
        assert request.queries == {"z": ["0"], "q": ["a", "b"], "page": ["1"]}
        assert request.get_query("q") == "a"

    def test_full_url_sorted(self):
        request = new_request().get("http://example.com/s", queries={"c": "3", "a": "1", "b": "2"})
        assert request.full_url == "http://example.com/s?a=1&b=2&c=3"

    def test_full_url_without_queries(self):
        assert new_request().get("http://example.com/s").full_url == "http://example.com/s"

    def test_host(self):
        request = new_request().get("http://user:pw@example.com:8080/x")
        assert request.host == "example.com:8080"
        assert request.set_header("Host", "other").host == "other"

    def test_repr(self):
        assert repr(new_request().post("http://example.com/x?a=1")) == "<Request POST http://example.com/x?a=1>"


class TestHeadersAndQueries:

    def test_set_header_replaces(self):
        request = new_request().set_header("X-A", "1").set_header("x-a", "2")
        assert request.headers.getlist("X-A") == ["2"]

    def test_add_header_appends(self):
        request = new_request().add_header("Accept", "a").add_header("Accept", "b")
        assert request.headers.getlist("Accept") == ["a", "b"]
        assert request.get_header("Accept") == "a"

    def test_get_missing_header(self):
        assert new_request().get_header("X-Missing") == ""

    def test_set_queries_lists(self):
        request = new_request().set_queries({"a": ["1", "2"], "b": "3"}).set_query("a", 4)
        assert request.queries == {"a": ["1", "2", "4"], "b": ["3"]}

    def test_get_missing_query(self):
        assert new_request().get_query("nope") == ""


class TestBody:

    def test_default_content_type(self):
        content_type = new_request().content_type
        assert content_type.media_type == "text/plain"
        assert content_type.charset == "utf-8"

    def test_set_content_type(self):
        request = new_request().set_content_type("Application/JSON; charset=UTF-8")
        assert request.content_type.media_type == "application/json"
        assert request.get_header("Content-Type") == "Application/JSON; charset=UTF-8"

    def test_none_body_is_empty(self):
        assert new_request().body_bytes() == b""

    def test_bytes_sent_verbatim(self):
        request = new_request().set_content_type("application/json").set_body(b"\x00raw")
        assert request.body_bytes() == b"\x00raw"

    def test_text_body(self):
        assert new_request().set_body("Hello World").body_bytes() == b"Hello World"

    def test_bool_text_quirk(self):
        assert new_request().set_body(True).body_bytes() == b"1"
        assert new_request().set_body(False).body_bytes() == b""

    def test_json_body(self):
        request = new_request().set_content_type("application/json").set_body({"a": [1]})
        assert request.body_bytes() == b'{"a":[1]}'

    def test_form_body(self):
        request = new_request().set_content_type("application/x-www-form-urlencoded").set_body({"b": "2", "a": "1"})
        assert request.body_bytes() == b"a=1&b=2"


class TestTransportOptions:

    def test_timeout(self):
        assert new_request().set_timeout(2.5).timeout == 2.5
        assert new_request().set_timeout(None).timeout is None

    @pytest.mark.parametrize("value", [0, -1])
    def test_timeout_must_be_positive(self, value):
        with pytest.raises(ValueError):
            new_request().set_timeout(value)

    def test_retry(self):
        request = new_request().set_retry(3)
        assert request.retry == 3
        assert request.retry_config.max_attempts == 3

    def test_retry_negative(self):
        with pytest.raises(ValueError):
            new_request().set_retry(-1)

    def test_tls_options(self):
        context = ssl.create_default_context()
        request = (
            new_request()
            .set_insecure_skip_verify()
            .set_tls_config(context)
            .set_ca("/tmp/ca.pem")
            .set_cert("/tmp/cert.pem", "/tmp/key.pem")
            .basic_auth("u", "p")
        )
        assert request.insecure_skip_verify is True
        assert request.tls_config is context
        assert request.ca_path == "/tmp/ca.pem"
        assert (request.cert_path, request.key_path) == ("/tmp/cert.pem", "/tmp/key.pem")
        assert (request.username, request.password) == ("u", "p")

    def test_context(self):
        token = CancelToken()
        assert new_request().set_context(token).cancel_token is token


class TestMiddlewareAttachment:

    def test_use_in_order(self):
        request = new_request().use("timing").use("basic_auth", "u", "p")
        assert [type(m) for m in request.middlewares] == [TimingMiddleware, BasicAuthMiddleware]

    def test_use_unknown(self):
        with pytest.raises(MiddlewareNotRegisteredError):
            new_request().use("unknown")

    def test_middleware_plain_function(self):
        def unit(ctx, next_):
            return next_()

        assert new_request().middleware(unit).middlewares == [unit]
