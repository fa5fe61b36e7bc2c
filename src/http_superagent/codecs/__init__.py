"""
Body codecs selected by content type.

Importing this package registers the built-in codecs:

    text  text/plain, text/css, text/csv, text/javascript, text/xml (fallback)
    json  application/json, application/javascript, application/ld+json
    form  application/x-www-form-urlencoded
    xml   application/xml
"""

from .base import Codec, Ref
from .form_codec import FORM_CONTENT_TYPES, FormCodec
from .json_codec import JSON_CONTENT_TYPES, JSONCodec
from .registry import (
    CodecRegistry,
    default_registry,
    register_codec,
    resolve_codec,
    marshal,
    unmarshal,
    decode,
    normalize_media_type,
)
from .text_codec import TEXT_CONTENT_TYPES, TextCodec, to_text
from .xml_codec import XML_CONTENT_TYPES, XMLCodec

register_codec("text", TEXT_CONTENT_TYPES, TextCodec())
register_codec("json", JSON_CONTENT_TYPES, JSONCodec())
register_codec("form", FORM_CONTENT_TYPES, FormCodec())
register_codec("xml", XML_CONTENT_TYPES, XMLCodec())

__all__ = [
    "Codec",
    "Ref",
    "CodecRegistry",
    "default_registry",
    "register_codec",
    "resolve_codec",
    "marshal",
    "unmarshal",
    "decode",
    "normalize_media_type",
    "to_text",
    "TextCodec",
    "JSONCodec",
    "FormCodec",
    "XMLCodec",
]
