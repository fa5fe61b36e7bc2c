"""Content-Type header parsing."""

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_MEDIA_TYPE = "text/plain"
DEFAULT_CHARSET = "utf-8"

_SEPARATOR = re.compile(r"\s*;\s*")


@dataclass(frozen=True)
class ContentType:
    """
    Parsed Content-Type value.

    Attributes:
        media_type: MIME type, e.g. ``application/json``
        charset: Character set (``utf-8`` when absent)
        boundary: Multipart boundary, if any

    Example:
        >>> ContentType.parse("application/json; charset=UTF-8")
        ContentType(media_type='application/json', charset='utf-8', boundary=None)
    """

    media_type: str = DEFAULT_MEDIA_TYPE
    charset: str = DEFAULT_CHARSET
    boundary: Optional[str] = None

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ContentType":
        """Parse a raw header value; empty or missing values give the defaults."""
        if not raw or not raw.strip():
            return cls()

        parts = [p for p in _SEPARATOR.split(raw.strip()) if p]
        if not parts:
            return cls()

        media_type = parts[0].strip().lower() or DEFAULT_MEDIA_TYPE
        charset = DEFAULT_CHARSET
        boundary = None

        for param in parts[1:]:
            name, _, value = param.partition("=")
            name = name.strip().lower()
            value = value.strip().strip('"')
            if name == "charset" and value:
                charset = value.lower()
            elif name == "boundary" and value:
                boundary = value

        return cls(media_type=media_type, charset=charset, boundary=boundary)

    def __str__(self) -> str:
        result = f"{self.media_type}; charset={self.charset}"
        if self.boundary:
            result += f"; boundary={self.boundary}"
        return result
