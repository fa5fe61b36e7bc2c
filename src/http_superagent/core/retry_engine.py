"""
Retry engine для повторных попыток dispatch.

Включает:
- Лимит попыток из Request.retry (0 = одна попытка)
- Exponential backoff с jitter (по умолчанию без задержки)
- Отмена через CancelToken прекращает ретраи
"""

import logging
import random
import time
from typing import Optional

from .cancellation import CancelToken
from .config import RetryConfig

logger = logging.getLogger(__name__)


class RetryEngine:
    """
    Механизм retry для транспортных ошибок.

    Examples:
        >>> engine = RetryEngine(RetryConfig(count=3))
        >>> while True:
        ...     try:
        ...         return send()
        ...     except TransportError as error:
        ...         if not engine.should_retry(error):
        ...             raise
        ...         engine.wait(engine.get_wait_time())
        ...         engine.increment()
    """

    def __init__(self, config: RetryConfig, cancel_token: Optional[CancelToken] = None):
        """
        Args:
            config: Конфигурация retry
            cancel_token: Токен отмены (ожидание прерывается при отмене)
        """
        self.config = config
        self.cancel_token = cancel_token
        self._attempt = 0

    @property
    def max_attempts(self) -> int:
        return self.config.max_attempts

    def should_retry(self, error: Exception) -> bool:
        """
        Решить нужен ли retry.

        Args:
            error: Исключение последней попытки

        Returns:
            True если нужен retry
        """
        # Проверка лимита попыток
        if self._attempt + 1 >= self.config.max_attempts:
            return False

        # Отменённый запрос не ретраим
        if self.cancel_token is not None and self.cancel_token.cancelled:
            return False

        # Фатальные ошибки НЕ ретраим
        if getattr(error, 'fatal', False):
            return False

        return bool(getattr(error, 'retryable', False))

    def get_wait_time(self) -> float:
        """
        Вычислить время ожидания перед следующей попыткой.

        Returns:
            Секунды для ожидания (0 если backoff_base == 0)
        """
        if self.config.backoff_base <= 0:
            return 0.0

        wait = self.config.backoff_base * (
            self.config.backoff_factor ** self._attempt
        )
        wait = min(wait, self.config.backoff_max)

        # Добавить jitter (50-150% от wait)
        if self.config.backoff_jitter:
            wait = wait * (0.5 + random.random())

        return wait

    def wait(self, seconds: float) -> None:
        """Подождать перед retry; отмена прерывает ожидание."""
        if seconds <= 0:
            return

        logger.debug(f"Waiting {seconds:.2f}s before attempt {self._attempt + 2}")
        if self.cancel_token is not None:
            self.cancel_token.wait(seconds)
        else:
            time.sleep(seconds)

    def increment(self):
        """Увеличить счётчик попыток."""
        self._attempt += 1

    def reset(self):
        """Сбросить счётчик."""
        self._attempt = 0

    @property
    def attempt(self) -> int:
        """Текущая попытка (с нуля)."""
        return self._attempt
