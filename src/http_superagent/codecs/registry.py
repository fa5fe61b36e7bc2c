"""
Content-type → codec registry.

Aliases and codecs are written at import time (built-ins) or at application
startup (``register_codec``) and only read afterwards, so no locking.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from .base import Codec
from .text_codec import TextCodec

logger = logging.getLogger(__name__)

FALLBACK_ALIAS = "text"


def normalize_media_type(content_type: Optional[str]) -> str:
    """
    Lower-case, trim and drop parameters.

    Examples:
        >>> normalize_media_type(" Application/JSON; charset=utf-8")
        'application/json'
    """
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class CodecRegistry:
    """
    Maps MIME types to codec aliases and aliases to codecs.

    Lookups never fail: unknown media types resolve to the ``text`` codec.

    Example:
        >>> registry = CodecRegistry()
        >>> registry.register("json", ["application/json"], JSONCodec())
        >>> registry.resolve("application/json; charset=utf-8")
        <JSONCodec>
    """

    def __init__(self, fallback: Optional[Codec] = None):
        self._codecs: Dict[str, Codec] = {}
        self._aliases: Dict[str, str] = {}
        self._fallback = fallback or TextCodec()

    def register(self, alias: str, content_types: Iterable[str], codec: Codec) -> None:
        """Store ``codec`` under ``alias`` and point every content type at it (last write wins)."""
        alias = alias.lower()
        for content_type in content_types:
            self._aliases[normalize_media_type(content_type)] = alias
        self._codecs[alias] = codec
        logger.debug(f"Codec registered: {alias} -> {type(codec).__name__}")

    def resolve(self, content_type: Optional[str]) -> Codec:
        alias = self._aliases.get(normalize_media_type(content_type))
        if alias is not None and alias in self._codecs:
            return self._codecs[alias]
        return self._codecs.get(FALLBACK_ALIAS, self._fallback)

    def alias_for(self, content_type: Optional[str]) -> Optional[str]:
        return self._aliases.get(normalize_media_type(content_type))

    def marshal(self, content_type: Optional[str], value: Any) -> bytes:
        return self.resolve(content_type).marshal(value)

    def unmarshal(self, content_type: Optional[str], data: bytes, target: Any) -> None:
        self.resolve(content_type).unmarshal(data, target)

    def decode(self, content_type: Optional[str], data: bytes) -> Any:
        return self.resolve(content_type).decode(data)


default_registry = CodecRegistry()


def register_codec(alias: str, content_types: Iterable[str], codec: Codec) -> None:
    """Register a codec in the process-wide registry."""
    default_registry.register(alias, content_types, codec)


def resolve_codec(content_type: Optional[str]) -> Codec:
    return default_registry.resolve(content_type)


def marshal(content_type: Optional[str], value: Any) -> bytes:
    """
    Serialize a body value for ``content_type``.

    Raises:
        MarshalError: value cannot be represented
    """
    return default_registry.marshal(content_type, value)


def unmarshal(content_type: Optional[str], data: bytes, target: Any) -> None:
    """
    Decode ``data`` into ``target``.

    Raises:
        UnmarshalError: bytes do not fit the target shape
        UnmarshalTargetError: target is not writable
    """
    default_registry.unmarshal(content_type, data, target)


def decode(content_type: Optional[str], data: bytes) -> Any:
    """Decode ``data`` into a native value (dict, list, str...)."""
    return default_registry.decode(content_type, data)
