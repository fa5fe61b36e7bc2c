"""
XML codec (stdlib ``xml.etree.ElementTree``).

Documents map to a dict with a single root key:

    <user id="7"><name>ann</name><tag>a</tag><tag>b</tag></user>

    {"user": {"@id": "7", "name": "ann", "tag": ["a", "b"]}}

``@name`` keys are attributes, ``#text`` is element text next to children
or attributes, repeated child tags become lists. Leaf values decode as
strings; a mapping of strings round-trips unchanged.
"""

import dataclasses
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any, Dict

from ..core.exceptions import MarshalError, UnmarshalError
from .base import Codec

XML_CONTENT_TYPES = ("application/xml",)

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill(element: ET.Element, content: Any) -> None:
    if content is None:
        return

    if isinstance(content, Mapping):
        for key, value in content.items():
            key = str(key)
            if key.startswith(ATTRIBUTE_PREFIX):
                element.set(key[len(ATTRIBUTE_PREFIX):], _scalar(value))
            elif key == TEXT_KEY:
                element.text = _scalar(value)
            elif isinstance(value, (list, tuple)):
                for item in value:
                    _fill(ET.SubElement(element, key), item)
            else:
                _fill(ET.SubElement(element, key), value)
        return

    if isinstance(content, (list, tuple)):
        raise MarshalError("xml", f"list content needs an enclosing tag: <{element.tag}>")

    element.text = _scalar(content)


def _to_value(element: ET.Element) -> Any:
    children: Dict[str, Any] = {}
    for name, value in element.attrib.items():
        children[ATTRIBUTE_PREFIX + name] = value

    for child in element:
        value = _to_value(child)
        if child.tag in children:
            existing = children[child.tag]
            if isinstance(existing, list):
                existing.append(value)
            else:
                children[child.tag] = [existing, value]
        else:
            children[child.tag] = value

    text = element.text or ""
    if not children:
        return text
    if text.strip():
        children[TEXT_KEY] = text
    return children


class XMLCodec(Codec):
    name = "xml"

    def marshal(self, value: Any) -> bytes:
        if isinstance(value, str):
            return value.encode("utf-8")

        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            value = {type(value).__name__: dataclasses.asdict(value)}

        if not isinstance(value, Mapping) or len(value) != 1:
            raise MarshalError(
                self.name,
                f"value must be a mapping with exactly one root element, "
                f"but got {type(value).__name__}",
            )

        (tag, content), = value.items()
        try:
            root = ET.Element(str(tag))
            _fill(root, content)
            return ET.tostring(root, encoding="unicode").encode("utf-8")
        except (TypeError, ValueError) as e:
            raise MarshalError(self.name, str(e)) from e

    def decode(self, data: bytes) -> Dict[str, Any]:
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise UnmarshalError(self.name, f"invalid XML body: {e}") from e
        return {root.tag: _to_value(root)}
