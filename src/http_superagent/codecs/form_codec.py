"""``application/x-www-form-urlencoded`` codec."""

import re
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, List
from urllib.parse import parse_qsl, urlencode

from ..core.exceptions import MarshalError, UnmarshalError, UnmarshalTargetError
from .base import Codec, Ref, assign
from .text_codec import to_text

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded",)

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_form(text: str) -> Dict[str, List[str]]:
    """
    Parse a form body into a multimap; invalid percent-escapes raise ValueError.

    Examples:
        >>> parse_form("a=1&a=2&b=")
        {'a': ['1', '2'], 'b': ['']}
    """
    for component in text.split("&"):
        match = _BAD_ESCAPE.search(component)
        if match:
            raise ValueError(f"invalid URL escape {component[match.start():match.start() + 3]!r}")

    values: Dict[str, List[str]] = {}
    for key, value in parse_qsl(text, keep_blank_values=True, errors="strict"):
        values.setdefault(key, []).append(value)
    return values


def encode_form(values: Mapping) -> str:
    """Encode a multimap with keys sorted; scalar values count as one-item lists."""
    pairs = []
    for key in sorted(values):
        items = values[key]
        if not isinstance(items, (list, tuple)):
            items = [items]
        for item in items:
            pairs.append((key, item if isinstance(item, str) else to_text(item)))
    return urlencode(pairs)


class FormCodec(Codec):
    """
    Mappings are encoded directly. Any other value is rendered as text,
    parsed as a query string and re-encoded, so ``"b=2&a=1"`` becomes
    ``"a=1&b=2"``.
    """

    name = "form"

    def marshal(self, value: Any) -> bytes:
        if isinstance(value, Mapping):
            return encode_form(value).encode("ascii")

        text = to_text(value)
        try:
            parsed = parse_form(text)
        except ValueError as e:
            raise MarshalError(
                self.name,
                f"invalid request form data, data: {value!r}, type: {type(value).__name__}",
            ) from e
        return encode_form(parsed).encode("ascii")

    def decode(self, data: bytes) -> Dict[str, List[str]]:
        try:
            return parse_form(data.decode("utf-8"))
        except ValueError as e:
            raise UnmarshalError(self.name, f"invalid form body: {e}") from e

    def unmarshal(self, data: bytes, target: Any) -> None:
        if not isinstance(target, (Ref, MutableMapping)):
            raise UnmarshalTargetError(
                self.name,
                f"unmarshal target must be a Ref or mutable mapping, but got {type(target).__name__}",
            )
        assign(self.name, target, self.decode(data), replace=True)
