"""JSON codec (stdlib ``json``)."""

import dataclasses
import json
from typing import Any

from ..core.exceptions import MarshalError, UnmarshalError
from .base import Codec

JSON_CONTENT_TYPES = (
    "application/json",
    "application/javascript",
    "application/ld+json",
)


def _default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JSONCodec(Codec):
    """
    Compact JSON (no spaces after separators); dataclasses are serialized
    with ``dataclasses.asdict``.
    """

    name = "json"

    def marshal(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, default=_default, separators=(",", ":"),
                              ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise MarshalError(self.name, str(e)) from e
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except (ValueError, UnicodeDecodeError) as e:
            raise UnmarshalError(self.name, f"invalid JSON body: {e}") from e
