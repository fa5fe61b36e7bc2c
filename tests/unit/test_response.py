"""Тесты Response и Body."""

from dataclasses import dataclass

import pytest
import responses as responses_lib

from http_superagent import Body, ContentType, Ref, Response, new_request
from http_superagent.core.exceptions import UnmarshalError, UnmarshalTargetError
from urllib3 import HTTPHeaderDict

URL = "https://api.example.com/item"


@dataclass
class Item:
    id: int = 0
    name: str = ""


class TestBody:

    def test_json_unmarshal(self):
        body = Body(b'{"id":1,"name":"a"}', ContentType.parse("application/json"))
        item = Item()
        body.unmarshal(item)
        assert item == Item(1, "a")

    def test_decode_many_times(self):
        body = Body(b'{"id":1}', ContentType.parse("application/json"))
        assert body.decode() == {"id": 1}
        assert body.decode() == {"id": 1}

    def test_text_fallback(self):
        body = Body(b"plain", ContentType.parse("application/x-unknown"))
        ref = Ref()
        body.unmarshal(ref)
        assert ref.value == "plain"

    def test_text_charset(self):
        body = Body("é".encode("latin-1"), ContentType.parse("text/plain; charset=latin-1"))
        assert body.text == "é"

    def test_unknown_charset(self):
        body = Body(b"abc", ContentType.parse("text/plain; charset=klingon"))
        assert body.text == "abc"

    def test_len_and_bool(self):
        assert len(Body(b"abc")) == 3
        assert not Body()

    def test_unmarshal_errors(self):
        body = Body(b"{", ContentType.parse("application/json"))
        with pytest.raises(UnmarshalError):
            body.unmarshal({})
        with pytest.raises(UnmarshalTargetError):
            Body(b"{}", ContentType.parse("application/json")).unmarshal(42)


class TestResponse:

    def test_is_ok(self):
        def make(code):
            return Response(status_code=code, status_text=str(code), headers=HTTPHeaderDict(), body=Body())

        assert make(200).is_ok is True
        assert make(201).is_ok is False
        assert make(404).is_ok is False

    @responses_lib.activate
    def test_from_transport(self):
        responses_lib.add(
            responses_lib.GET, URL,
            json={"id": 7, "name": "seven"},
            headers={"X-Trace": "abc"},
        )

        response = new_request().get(URL).do()

        assert response.status_code == 200
        assert response.status_text == "200 OK"
        assert response.get_header("X-Trace") == "abc"
        assert response.get_header("X-Missing", "-") == "-"
        assert response.body.content_type.media_type == "application/json"
        assert response.http_request.url == URL
        assert response.http_response.status_code == 200

        item = Item()
        response.parse_body(item)
        assert item == Item(7, "seven")

    @responses_lib.activate
    def test_status_text_of_error(self):
        responses_lib.add(responses_lib.GET, URL, status=404)

        response = new_request().get(URL).do()

        assert response.status_text == "404 Not Found"
        assert not response.is_ok

    @responses_lib.activate
    def test_head_has_empty_body(self):
        responses_lib.add(responses_lib.HEAD, URL, status=200)

        response = new_request().head(URL).do()

        assert response.body.raw == b""
