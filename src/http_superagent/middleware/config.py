"""
Typed configuration of the built-in middleware.

``create_middleware(name, *args)`` maps positional arguments onto these
dataclasses with ``from_args``; validation happens in ``__post_init__`` so a
config built directly in code is checked the same way.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Sequence, Union

from ..core.exceptions import ArgumentError, ArgumentTypeError, ArityError

DURATION_HEADER = "X-SuperAgent-Duration"
AUTHORIZATION_HEADER = "Authorization"


def check_arity(middleware: str, args: Sequence[Any], minimum: int, maximum: int, names: str) -> None:
    """
    Raise ArityError unless ``minimum <= len(args) <= maximum``.

    Args:
        names: Human readable argument list, e.g. ``"(username, password)"``
    """
    if minimum <= len(args) <= maximum:
        return

    if minimum == maximum:
        expected = f"{minimum} argument(s) {names}"
    else:
        expected = f"{minimum} to {maximum} arguments {names}"
    raise ArityError(middleware, expected, len(args))


def check_type(middleware: str, argument: str, value: Any, expected: Union[type, tuple], expected_name: str) -> None:
    """Raise ArgumentTypeError unless ``value`` is an instance of ``expected``."""
    if not isinstance(value, expected):
        raise ArgumentTypeError(middleware, argument, expected_name, value)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONFIGS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimingConfig:
    """
    Args:
        header_name: Response header receiving the elapsed time
    """
    name: ClassVar[str] = "timing"

    header_name: str = DURATION_HEADER

    def __post_init__(self):
        check_type(self.name, "header_name", self.header_name, str, "str")
        if not self.header_name:
            raise ArgumentError(self.name, "header_name must not be empty", "header_name")

    @classmethod
    def from_args(cls, *args: Any) -> "TimingConfig":
        check_arity(cls.name, args, 0, 1, "(header_name)")
        return cls(*args)


@dataclass(frozen=True)
class DebugConfig:
    """
    Args:
        callback: ``callback(ctx, request)`` called before the rest of the chain
    """
    name: ClassVar[str] = "debug"

    callback: Optional[Callable[..., Any]] = None

    def __post_init__(self):
        if self.callback is not None and not callable(self.callback):
            raise ArgumentTypeError(self.name, "callback", "callable(ctx, request)", self.callback)

    @classmethod
    def from_args(cls, *args: Any) -> "DebugConfig":
        check_arity(cls.name, args, 0, 1, "(callback)")
        return cls(*args)


@dataclass(frozen=True)
class BasicAuthConfig:
    name: ClassVar[str] = "basic_auth"

    username: str
    password: str

    def __post_init__(self):
        check_type(self.name, "username", self.username, str, "str")
        check_type(self.name, "password", self.password, str, "str")

    @classmethod
    def from_args(cls, *args: Any) -> "BasicAuthConfig":
        check_arity(cls.name, args, 2, 2, "(username, password)")
        return cls(*args)

    def __repr__(self) -> str:
        return f"BasicAuthConfig(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class SignedAuthConfig:
    """
    HMAC request signing.

    Args:
        access_key: Public key id, written in front of the signature
        secret_key: HMAC key
        header_name: Header receiving the token
        digest: hashlib algorithm name
        prefix: Token prefix (``prefix + access_key + signature``)
    """
    name: ClassVar[str] = "signed_auth"

    access_key: str
    secret_key: str
    header_name: str = AUTHORIZATION_HEADER
    digest: str = "sha1"
    prefix: str = ""

    def __post_init__(self):
        check_type(self.name, "access_key", self.access_key, str, "str")
        check_type(self.name, "secret_key", self.secret_key, str, "str")
        check_type(self.name, "header_name", self.header_name, str, "str")
        check_type(self.name, "digest", self.digest, str, "str")
        check_type(self.name, "prefix", self.prefix, str, "str")
        if self.digest.lower() not in hashlib.algorithms_available:
            raise ArgumentError(self.name, f"unsupported digest: {self.digest}", "digest")

    @classmethod
    def from_args(cls, *args: Any) -> "SignedAuthConfig":
        check_arity(cls.name, args, 2, 3, "(access_key, secret_key[, header_name])")
        return cls(*args)

    def __repr__(self) -> str:
        return (
            f"SignedAuthConfig(access_key={self.access_key!r}, secret_key='***', "
            f"header_name={self.header_name!r}, digest={self.digest!r})"
        )


@dataclass(frozen=True)
class RequestLogConfig:
    """
    Args:
        level: Level of the request / response records (name or number)
        logger: AgentLogger or logging.Logger; None = request logger or module logger
    """
    name: ClassVar[str] = "logging"

    level: Union[int, str] = logging.INFO
    logger: Optional[Any] = None

    def __post_init__(self):
        check_type(self.name, "level", self.level, (int, str), "int or str")
        if isinstance(self.level, str):
            numeric = logging.getLevelName(self.level.upper())
            if not isinstance(numeric, int):
                raise ArgumentError(self.name, f"unknown level: {self.level}", "level")
            object.__setattr__(self, "level", numeric)

    @classmethod
    def from_args(cls, *args: Any) -> "RequestLogConfig":
        check_arity(cls.name, args, 0, 2, "(level[, logger])")
        return cls(*args)


@dataclass(frozen=True)
class DispatchConfig:
    name: ClassVar[str] = "dispatch"

    @classmethod
    def from_args(cls, *args: Any) -> "DispatchConfig":
        check_arity(cls.name, args, 0, 0, "()")
        return cls()


MiddlewareConfig = Union[
    TimingConfig,
    DebugConfig,
    BasicAuthConfig,
    SignedAuthConfig,
    RequestLogConfig,
    DispatchConfig,
]
