"""Response snapshot and its body."""

from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from urllib3 import HTTPHeaderDict

from .codecs import CodecRegistry, default_registry
from .core.content_type import ContentType


@dataclass(frozen=True)
class Body:
    """
    Raw response bytes tagged with their content type.

    The bytes are kept, so the body can be decoded any number of times.

    Example:
        >>> data = {}
        >>> response.body.unmarshal(data)  # application/json
        >>> response.body.decode()
        {'a': ['1']}
    """

    raw: bytes = b""
    content_type: ContentType = field(default_factory=ContentType)

    def unmarshal(self, target: Any, registry: Optional[CodecRegistry] = None) -> None:
        """
        Decode into ``target`` with the codec of the body's media type.

        Raises:
            UnmarshalError: bytes do not fit the target shape
            UnmarshalTargetError: target is not writable
        """
        (registry or default_registry).unmarshal(self.content_type.media_type, self.raw, target)

    def decode(self, registry: Optional[CodecRegistry] = None) -> Any:
        """Native value (dict / list / str...) of the body."""
        return (registry or default_registry).decode(self.content_type.media_type, self.raw)

    @property
    def text(self) -> str:
        try:
            return self.raw.decode(self.content_type.charset, errors="replace")
        except LookupError:
            return self.raw.decode("utf-8", errors="replace")

    def __len__(self) -> int:
        return len(self.raw)

    def __bool__(self) -> bool:
        return bool(self.raw)


@dataclass(frozen=True)
class Response:
    """
    Result of one completed round trip.

    Attributes:
        status_code: Numeric status (200)
        status_text: Status line text ("200 OK")
        headers: Response header multimap
        body: Body (raw bytes + content type)
        http_request: Prepared transport request that was sent
        http_response: Transport response (content already read)
    """

    status_code: int
    status_text: str
    headers: HTTPHeaderDict
    body: Body
    http_request: Optional[requests.PreparedRequest] = field(default=None, repr=False, compare=False)
    http_response: Optional[requests.Response] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_transport(cls, prepared: requests.PreparedRequest, raw: requests.Response) -> "Response":
        headers = HTTPHeaderDict()
        raw_headers = getattr(raw.raw, "headers", None)
        if isinstance(raw_headers, HTTPHeaderDict):
            # urllib3 keeps repeated headers separately
            headers.extend(raw_headers)
        else:
            headers.extend(raw.headers)

        status_text = f"{raw.status_code} {raw.reason or ''}".strip()
        body = Body(
            raw=raw.content or b"",
            content_type=ContentType.parse(headers.get("Content-Type")),
        )

        return cls(
            status_code=raw.status_code,
            status_text=status_text,
            headers=headers,
            body=body,
            http_request=prepared,
            http_response=raw,
        )

    @property
    def is_ok(self) -> bool:
        """True only for status 200."""
        return self.status_code == 200

    def parse_body(self, target: Any) -> None:
        """Shortcut for ``self.body.unmarshal(target)``."""
        self.body.unmarshal(target)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name, default)
