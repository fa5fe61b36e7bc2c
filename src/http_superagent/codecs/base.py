"""
Codec contract and unmarshal targets.

Python has no out-pointers, so unmarshal writes into a caller-owned target:
a ``Ref`` holder, a mutable mapping, a mutable sequence or a dataclass
instance. Anything else is reported as ``UnmarshalTargetError``.
"""

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping, MutableSequence
from typing import Any, Generic, Optional, TypeVar

from ..core.exceptions import UnmarshalError, UnmarshalTargetError

T = TypeVar("T")


class Ref(Generic[T]):
    """
    Mutable holder for an unmarshalled value.

    Example:
        >>> ref = Ref()
        >>> response.body.unmarshal(ref)
        >>> ref.value
        {'a': ['1']}
    """

    __slots__ = ("value",)

    def __init__(self, value: Optional[T] = None):
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Ref):
            return self.value == other.value
        return NotImplemented


def _is_dataclass_instance(target: Any) -> bool:
    return dataclasses.is_dataclass(target) and not isinstance(target, type)


def ensure_writable(codec: str, target: Any) -> None:
    """
    Raise UnmarshalTargetError unless ``target`` can receive a value.

    Frozen dataclasses and immutable values (str, int, tuple, None) are rejected.
    """
    if isinstance(target, (Ref, MutableMapping, MutableSequence)):
        return

    if _is_dataclass_instance(target) and not target.__dataclass_params__.frozen:
        return

    raise UnmarshalTargetError(
        codec,
        f"unmarshal target must be a Ref, mutable mapping, mutable sequence "
        f"or dataclass instance, but got {type(target).__name__}",
    )


def assign(codec: str, target: Any, value: Any, replace: bool = False) -> None:
    """
    Store a decoded value into ``target``.

    Args:
        codec: Codec alias (for error messages)
        target: Writable target (see ensure_writable)
        value: Decoded native value
        replace: Clear a mapping target before updating it

    Raises:
        UnmarshalTargetError: target is not writable
        UnmarshalError: value shape does not fit the target
    """
    ensure_writable(codec, target)

    if isinstance(target, Ref):
        target.value = value
        return

    if isinstance(target, MutableMapping):
        if not isinstance(value, Mapping):
            raise UnmarshalError(codec, f"cannot store {type(value).__name__} into a mapping")
        if replace:
            target.clear()
        target.update(value)
        return

    if isinstance(target, MutableSequence):
        if not isinstance(value, list):
            raise UnmarshalError(codec, f"cannot store {type(value).__name__} into a sequence")
        target[:] = value
        return

    # dataclass instance
    if not isinstance(value, Mapping):
        raise UnmarshalError(
            codec, f"cannot store {type(value).__name__} into {type(target).__name__}"
        )
    for f in dataclasses.fields(target):
        if f.name in value:
            setattr(target, f.name, value[f.name])


class Codec(ABC):
    """
    Marshal / unmarshal strategy for one family of content types.

    Implementations are stateless and shared between threads.
    """

    #: Alias used in error messages
    name: str = ""

    @abstractmethod
    def marshal(self, value: Any) -> bytes:
        """Serialize ``value``; raises MarshalError."""

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Parse bytes into a native value; raises UnmarshalError."""

    def unmarshal(self, data: bytes, target: Any) -> None:
        """Decode ``data`` and store the result into ``target``."""
        ensure_writable(self.name, target)
        assign(self.name, target, self.decode(data))
