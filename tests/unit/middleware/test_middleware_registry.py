"""Тесты реестра фабрик middleware и валидации аргументов."""

import logging

import pytest

from http_superagent.core.exceptions import (
    ArgumentError,
    ArgumentTypeError,
    ArityError,
    FatalError,
    MiddlewareNotRegisteredError,
)
from http_superagent.middleware import (
    BasicAuthConfig,
    BasicAuthMiddleware,
    DebugMiddleware,
    DispatchMiddleware,
    RequestLogConfig,
    RequestLogMiddleware,
    SignedAuthConfig,
    SignedAuthMiddleware,
    TimingConfig,
    TimingMiddleware,
    build_middleware,
    create_middleware,
    register_factory,
    registered_names,
    unregister_factory,
)


class TestLookup:

    def test_builtins_registered(self):
        assert {"timing", "debug", "basic_auth", "signed_auth", "logging", "dispatch"} <= set(
            registered_names()
        )

    def test_unknown_name(self):
        with pytest.raises(MiddlewareNotRegisteredError, match="middleware nope not registered"):
            create_middleware("nope")

    def test_not_registered_is_fatal(self):
        with pytest.raises(FatalError):
            create_middleware("nope")

    def test_register_custom_factory(self):
        def factory(value):
            def unit(ctx, next_):
                ctx.set("custom", value)
                return next_()
            return unit

        register_factory("custom", factory)
        try:
            assert callable(create_middleware("custom", 1))
            assert "custom" in registered_names()
        finally:
            unregister_factory("custom")

        assert "custom" not in registered_names()

    def test_register_overwrites(self):
        register_factory("replaced", lambda: "first")
        register_factory("replaced", lambda: "second")
        try:
            assert create_middleware("replaced") == "second"
        finally:
            unregister_factory("replaced")


class TestBuiltinFactories:

    @pytest.mark.parametrize("name, args, cls", [
        ("timing", (), TimingMiddleware),
        ("timing", ("X-Elapsed",), TimingMiddleware),
        ("debug", (), DebugMiddleware),
        ("debug", (lambda ctx, request: None,), DebugMiddleware),
        ("basic_auth", ("user", "pass"), BasicAuthMiddleware),
        ("signed_auth", ("ak", "sk"), SignedAuthMiddleware),
        ("signed_auth", ("ak", "sk", "X-Signature"), SignedAuthMiddleware),
        ("logging", (), RequestLogMiddleware),
        ("logging", ("DEBUG",), RequestLogMiddleware),
        ("dispatch", (), DispatchMiddleware),
    ])
    def test_create(self, name, args, cls):
        assert isinstance(create_middleware(name, *args), cls)

    @pytest.mark.parametrize("args", [(), ("user",), ("user", "pass", "extra")])
    def test_basic_auth_arity(self, args):
        with pytest.raises(ArityError) as exc_info:
            create_middleware("basic_auth", *args)

        assert exc_info.value.middleware == "basic_auth"
        assert exc_info.value.got == len(args)
        assert "(username, password)" in str(exc_info.value)

    def test_basic_auth_type_names_first_bad_argument(self):
        with pytest.raises(ArgumentTypeError) as exc_info:
            create_middleware("basic_auth", 123, 456)

        error = exc_info.value
        assert error.argument == "username"
        assert error.value == 123
        assert str(error) == "basic_auth: expected username is str, but got 123(int)"

    def test_basic_auth_second_argument_type(self):
        with pytest.raises(ArgumentTypeError) as exc_info:
            create_middleware("basic_auth", "user", None)

        assert exc_info.value.argument == "password"

    def test_timing_arity(self):
        with pytest.raises(ArityError):
            create_middleware("timing", "a", "b")

    def test_timing_type(self):
        with pytest.raises(ArgumentTypeError):
            create_middleware("timing", 5)

    def test_timing_empty_header(self):
        with pytest.raises(ArgumentError, match="header_name"):
            TimingConfig("")

    def test_debug_requires_callable(self):
        with pytest.raises(ArgumentTypeError) as exc_info:
            create_middleware("debug", "not callable")

        assert exc_info.value.argument == "callback"

    def test_signed_auth_arity(self):
        with pytest.raises(ArityError):
            create_middleware("signed_auth", "ak")
        with pytest.raises(ArityError):
            create_middleware("signed_auth", "ak", "sk", "X-Sig", "extra")

    def test_signed_auth_digest(self):
        with pytest.raises(ArgumentError, match="unsupported digest"):
            SignedAuthConfig("ak", "sk", digest="md42")

    def test_logging_level(self):
        assert RequestLogConfig("debug").level == logging.DEBUG
        with pytest.raises(ArgumentError, match="unknown level"):
            create_middleware("logging", "loud")

    def test_dispatch_takes_no_arguments(self):
        with pytest.raises(ArityError):
            create_middleware("dispatch", 1)

    def test_argument_errors_are_fatal(self):
        with pytest.raises(FatalError):
            create_middleware("basic_auth")

    def test_secrets_hidden_in_repr(self):
        assert "s3cr3t" not in repr(BasicAuthConfig("user", "s3cr3t"))
        assert "sk-secret" not in repr(SignedAuthConfig("ak", "sk-secret"))


class TestBuildMiddleware:

    def test_builds_from_config(self):
        middleware = build_middleware(BasicAuthConfig("u", "p"))
        assert isinstance(middleware, BasicAuthMiddleware)

    def test_unknown_config(self):
        with pytest.raises(TypeError, match="Unknown middleware config"):
            build_middleware(object())
