"""
Иерархия исключений http-superagent.

Классификация:
- TemporaryError (retryable=True) - можно ретраить (только транспортные ошибки)
- FatalError (fatal=True) - НЕ ретраить никогда
"""

from typing import Any, Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SuperAgentException(Exception):
    """Базовое исключение http-superagent."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ВРЕМЕННЫЕ ОШИБКИ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TemporaryError(SuperAgentException):
    """
    Временная ошибка - можно ретраить.

    Примеры: таймауты, обрыв соединения, ошибка TLS рукопожатия.
    """
    retryable = True

class TransportError(TemporaryError):
    """Ошибка транспортного уровня."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = f"{message}"
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

class TimeoutError(TransportError):
    """
    Таймаут запроса.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута (сек)
    """

    def __init__(self, message: str, url: str, timeout: Optional[float] = None):
        self.timeout = timeout

        msg = message
        if timeout:
            msg += f" (timeout: {timeout}s)"

        super().__init__(msg, url)

class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - Name resolution failure
    """
    pass

class TLSVerificationError(TransportError):
    """Сертификат сервера не прошёл проверку (или рукопожатие TLS не удалось)."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ФАТАЛЬНЫЕ ОШИБКИ (fatal=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FatalError(SuperAgentException):
    """
    Фатальная ошибка - НЕ ретраить.

    Примеры: неверные аргументы middleware, ошибки кодеков, битые сертификаты.
    """
    fatal = True

class ArgumentError(FatalError):
    """
    Неверные аргументы фабрики middleware.

    Args:
        middleware: Имя middleware
        message: Сообщение
        argument: Имя аргумента (если ошибка относится к конкретному аргументу)
    """

    def __init__(self, middleware: str, message: str, argument: Optional[str] = None):
        self.middleware = middleware
        self.argument = argument
        super().__init__(f"{middleware}: {message}")

class ArityError(ArgumentError):
    """Неверное количество аргументов."""

    def __init__(self, middleware: str, expected: str, got: int):
        self.expected = expected
        self.got = got
        super().__init__(middleware, f"expected {expected}, but got {got} argument(s)")

class ArgumentTypeError(ArgumentError):
    """
    Аргумент неверного типа.

    Args:
        middleware: Имя middleware
        argument: Имя аргумента
        expected: Ожидаемый тип (строкой, например "str")
        value: Фактическое значение
    """

    def __init__(self, middleware: str, argument: str, expected: str, value: Any):
        self.expected = expected
        self.value = value
        super().__init__(
            middleware,
            f"expected {argument} is {expected}, but got {value!r}({type(value).__name__})",
            argument=argument,
        )

class MiddlewareNotRegisteredError(FatalError):
    """Middleware с таким именем не зарегистрирована."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"middleware {name} not registered")

class CodecError(FatalError):
    """
    Базовая ошибка кодека.

    Args:
        codec: Алиас кодека (json, xml, form, text)
        message: Сообщение
    """

    def __init__(self, codec: str, message: str):
        self.codec = codec
        super().__init__(f"{codec}: {message}")

class MarshalError(CodecError):
    """Не удалось сериализовать значение тела запроса."""
    pass

class UnmarshalError(CodecError):
    """Байты не соответствуют форме целевого объекта."""
    pass

class UnmarshalTargetError(CodecError):
    """
    Цель десериализации не является изменяемой ссылкой.

    Ошибка программиста: сообщается сразу, никогда не ретраится.
    """
    pass

class TLSMaterialError(FatalError):
    """
    Не удалось загрузить CA / клиентский сертификат / ключ.

    Args:
        path: Путь к файлу
        message: Сообщение
    """

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message} (path: {path})")

class RequestBuildError(FatalError):
    """Не удалось построить транспортный запрос (невалидный URL, заголовок...)."""
    pass

class ContinuationError(FatalError):
    """Middleware вызвала next() повторно."""
    pass

class NoResponseError(FatalError):
    """Цепочка завершилась без ответа (middleware прервала её, не создав Response)."""
    pass

class ConfigurationError(SuperAgentException):
    """Ошибка конфигурации."""
    fatal = True

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТМЕНА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class CancelledError(SuperAgentException):
    """
    Запрос отменён через CancelToken.

    Отличается от транспортных ошибок и никогда не ретраится.
    """
    fatal = True

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None):
        self.url = url
        self.reason = reason

        msg = "Request cancelled"
        if reason:
            msg += f": {reason}"
        if url:
            msg += f" (url: {url})"

        super().__init__(msg)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(
    exc: Exception,
    url: str,
    timeout: Optional[float] = None
) -> SuperAgentException:
    """
    Конвертировать requests.exceptions в наши исключения.

    Args:
        exc: Исключение из requests
        url: URL запроса
        timeout: Таймаут запроса (для сообщения)

    Returns:
        Наше исключение с правильной классификацией

    Examples:
        >>> exc = requests.exceptions.Timeout()
        >>> our_exc = classify_requests_exception(exc, "https://example.com")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.retryable == True
    """

    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError(f"Request timeout: {exc}", url, timeout)

    # SSLError наследуется от ConnectionError - проверяем раньше
    elif isinstance(exc, requests.exceptions.SSLError):
        return TLSVerificationError(f"TLS error: {exc}", url)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError(f"Connection error: {exc}", url)

    elif isinstance(
        exc,
        (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
            requests.exceptions.InvalidHeader,
        ),
    ):
        return RequestBuildError(f"Invalid request: {exc}")

    elif isinstance(exc, requests.exceptions.RequestException):
        return TransportError(f"Request failed: {exc}", url)

    else:
        # Неизвестная ошибка - оборачиваем
        return SuperAgentException(str(exc))
