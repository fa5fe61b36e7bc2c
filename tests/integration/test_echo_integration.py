"""
End-to-end запросы к локальному echo серверу.
"""

import threading
from dataclasses import dataclass

import pytest

from http_superagent import Agent, AgentConfig, CancelToken, Ref, new_request
from http_superagent.core.exceptions import CancelledError, ConnectionError, TimeoutError
from http_superagent.middleware import DURATION_HEADER

pytestmark = pytest.mark.integration


@dataclass
class Note:
    title: str = ""
    tags: list = None


def test_get_query_echo(echo_server):
    response = new_request().get(f"{echo_server}/query", queries={"a": "1", "b": "2", "c": "3"}).do()

    assert response.status_code == 200
    data = {}
    response.body.unmarshal(data)
    assert data == {"a": ["1"], "b": ["2"], "c": ["3"]}


def test_post_text_echo(echo_server):
    response = (
        new_request()
        .post(f"{echo_server}/echo", "Hello World")
        .set_content_type("text/plain")
        .do()
    )

    assert response.status_code == 200
    text = Ref()
    response.body.unmarshal(text)
    assert text.value == "Hello World"


def test_post_json_round_trip(echo_server):
    response = (
        new_request()
        .post(f"{echo_server}/echo", Note("groceries", ["milk", "eggs"]))
        .set_content_type("application/json")
        .do()
    )

    note = Note()
    response.parse_body(note)
    assert note == Note("groceries", ["milk", "eggs"])


def test_put_form_round_trip(echo_server):
    response = (
        new_request()
        .put(f"{echo_server}/echo", {"q": ["a b", "c"], "page": "2"})
        .set_content_type("application/x-www-form-urlencoded")
        .do()
    )

    data = {}
    response.body.unmarshal(data)
    assert data == {"page": ["2"], "q": ["a b", "c"]}
    assert response.get_header("X-Method") == "PUT"


def test_update_method_sent(echo_server):
    response = new_request().update(f"{echo_server}/echo", "x").do()
    assert response.get_header("X-Method") == "UPDATE"


def test_xml_response(echo_server):
    data = {}
    new_request().get(f"{echo_server}/xml").do().body.unmarshal(data)
    assert data == {"user": {"@id": "7", "name": "ann"}}


def test_form_response(echo_server):
    assert new_request().get(f"{echo_server}/form").do().body.decode() == {"a": ["1", "2"], "b": ["x y"]}


def test_headers_and_auth_sent(echo_server):
    response = (
        new_request()
        .get(f"{echo_server}/headers")
        .set_header("X-Trace", "t-1")
        .use("basic_auth", "user", "pass")
        .do()
    )

    headers = response.body.decode()
    assert headers["X-Trace"] == "t-1"
    assert headers["Authorization"] == "Basic dXNlcjpwYXNz"
    assert headers["Host"] == echo_server.split("//", 1)[1]


def test_status_codes(echo_server):
    response = new_request().get(f"{echo_server}/status/404").do()
    assert response.status_code == 404
    assert response.status_text == "404 Not Found"
    assert not response.is_ok


def test_head_request(echo_server):
    response = new_request().head(f"{echo_server}/query").do()
    assert response.status_code == 200
    assert response.body.raw == b""


def test_timing_through_real_server(echo_server):
    response = new_request().get(f"{echo_server}/query").use("timing").do()
    assert response.headers[DURATION_HEADER]


def test_timeout(echo_server):
    with pytest.raises(TimeoutError):
        new_request().get(f"{echo_server}/slow", queries={"delay": "1"}).set_timeout(0.2).do()


def test_connection_refused_with_retry():
    attempts = []

    def count(ctx, next_):
        attempts.append(1)
        return next_()

    # Порт 9 (discard) на localhost закрыт
    with pytest.raises(ConnectionError):
        new_request().get("http://127.0.0.1:9/").set_retry(2).middleware(count).do()

    assert attempts == [1]


def test_cancel_during_body_download(echo_server):
    token = CancelToken()
    threading.Timer(0.3, token.cancel).start()

    with pytest.raises(CancelledError):
        new_request().get(f"{echo_server}/stream").set_context(token).do()


def test_agent_against_echo(echo_server):
    config = AgentConfig.create(base_url=echo_server, headers={"X-Client": "agent"})
    with Agent(config).use("timing") as agent:
        response = agent.get("/headers").do()

    assert response.body.decode()["X-Client"] == "agent"
    assert DURATION_HEADER in response.headers


def test_concurrent_requests(echo_server):
    results = {}

    def worker(n):
        response = new_request().get(f"{echo_server}/query", queries={"n": str(n)}).do()
        results[n] = response.body.decode()["n"]

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == {n: [str(n)] for n in range(8)}
