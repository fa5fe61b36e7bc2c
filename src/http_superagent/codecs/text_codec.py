"""Plain text codec, also the fallback for unknown content types."""

import math
from decimal import Decimal
from typing import Any

from ..core.exceptions import UnmarshalError, UnmarshalTargetError
from .base import Codec, Ref

TEXT_CONTENT_TYPES = (
    "text/plain",
    "text/css",
    "text/csv",
    "text/javascript",
    "text/xml",
)


def format_float(value: float) -> str:
    """
    Shortest positional form: no exponent, no trailing zeros.

    Examples:
        >>> format_float(1.0)
        '1'
        >>> format_float(1e21)
        '1000000000000000000000'
        >>> format_float(float("-inf"))
        '-Inf'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_text(value: Any) -> str:
    """
    Canonical text of a scalar body value.

    ``True`` is ``"1"`` and ``False`` is the empty string. Values that are
    not bool, int, float or str render as the empty string.
    """
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    return ""


class TextCodec(Codec):
    name = "text"

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def marshal(self, value: Any) -> bytes:
        return to_text(value).encode(self.encoding)

    def decode(self, data: bytes) -> str:
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise UnmarshalError(self.name, f"body is not valid {self.encoding}: {e}") from e

    def unmarshal(self, data: bytes, target: Any) -> None:
        if not isinstance(target, Ref):
            raise UnmarshalTargetError(
                self.name, f"unmarshal target must be a Ref, but got {type(target).__name__}"
            )
        target.value = self.decode(data)
