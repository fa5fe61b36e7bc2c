"""Тесты реестра кодеков."""

import pytest

from http_superagent.codecs import (
    CodecRegistry,
    FormCodec,
    JSONCodec,
    Ref,
    TextCodec,
    XMLCodec,
    decode,
    marshal,
    normalize_media_type,
    resolve_codec,
    unmarshal,
)
from http_superagent.codecs.base import Codec
from http_superagent.core.exceptions import MarshalError, UnmarshalError, UnmarshalTargetError


class UpperCodec(Codec):
    name = "upper"

    def marshal(self, value):
        return str(value).upper().encode()

    def decode(self, data):
        return data.decode().upper()


class TestNormalizeMediaType:

    def test_lowercases_and_trims(self):
        assert normalize_media_type("  Application/JSON ") == "application/json"

    def test_drops_parameters(self):
        assert normalize_media_type("application/json; charset=utf-8") == "application/json"

    def test_empty(self):
        assert normalize_media_type(None) == ""
        assert normalize_media_type("") == ""


class TestResolve:

    def test_builtin_aliases(self):
        assert isinstance(resolve_codec("application/json"), JSONCodec)
        assert isinstance(resolve_codec("application/ld+json"), JSONCodec)
        assert isinstance(resolve_codec("application/xml"), XMLCodec)
        assert isinstance(resolve_codec("application/x-www-form-urlencoded"), FormCodec)
        assert isinstance(resolve_codec("text/csv"), TextCodec)

    def test_case_and_parameters_ignored(self):
        assert isinstance(resolve_codec("APPLICATION/JSON; charset=UTF-8"), JSONCodec)

    @pytest.mark.parametrize("content_type", [
        "application/x-unknown",
        "not a mime type",
        "",
        None,
        ";;;",
    ])
    def test_unknown_falls_back_to_text(self, content_type):
        assert isinstance(resolve_codec(content_type), TextCodec)

    def test_text_xml_is_text(self):
        """text/xml принадлежит text кодеку, application/xml - xml."""
        assert isinstance(resolve_codec("text/xml"), TextCodec)


class TestRegistry:

    def test_register_new_alias(self):
        registry = CodecRegistry()
        registry.register("upper", ["text/x-upper"], UpperCodec())

        assert registry.alias_for("TEXT/X-UPPER") == "upper"
        assert registry.marshal("text/x-upper", "abc") == b"ABC"
        assert registry.decode("text/x-upper", b"abc") == "ABC"

    def test_last_registration_wins(self):
        registry = CodecRegistry()
        registry.register("json", ["application/json"], JSONCodec())
        registry.register("upper", ["application/json"], UpperCodec())

        assert registry.alias_for("application/json") == "upper"
        assert isinstance(registry.resolve("application/json"), UpperCodec)

    def test_alias_without_codec_falls_back(self):
        registry = CodecRegistry()
        assert isinstance(registry.resolve("application/json"), TextCodec)

    def test_registered_text_codec_is_fallback(self):
        registry = CodecRegistry()
        text = TextCodec(encoding="latin-1")
        registry.register("text", ["text/plain"], text)

        assert registry.resolve("application/unknown") is text


class TestModuleLevelHelpers:

    def test_marshal_json(self):
        assert marshal("application/json", {"a": 1}) == b'{"a":1}'

    def test_marshal_error_propagates(self):
        with pytest.raises(MarshalError):
            marshal("application/json", {"a": object()})

    def test_unmarshal_into_dict(self):
        target = {}
        unmarshal("application/json", b'{"a":[1,2]}', target)
        assert target == {"a": [1, 2]}

    def test_unmarshal_invalid_bytes(self):
        with pytest.raises(UnmarshalError):
            unmarshal("application/json", b"{", {})

    def test_unmarshal_form_with_bad_escape(self):
        target = {"kept": ["1"]}
        with pytest.raises(UnmarshalError):
            unmarshal("application/x-www-form-urlencoded", b"a=%zz", target)
        assert target == {"kept": ["1"]}

    def test_unmarshal_into_immutable_target(self):
        with pytest.raises(UnmarshalTargetError):
            unmarshal("application/json", b'{"a":1}', "not writable")

    def test_decode_unknown_type_is_text(self):
        assert decode("application/x-unknown", b"plain") == "plain"

    def test_ref_holds_value(self):
        ref = Ref()
        unmarshal("application/json", b"[1,2,3]", ref)
        assert ref.value == [1, 2, 3]
        assert ref == Ref([1, 2, 3])
