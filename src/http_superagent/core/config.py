"""
Система конфигурации для http-superagent.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Dict, Mapping, TYPE_CHECKING
from types import MappingProxyType

if TYPE_CHECKING:
    from .logging import LoggingConfig

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RETRY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RetryConfig:
    """
    Конфигурация retry стратегии.

    Args:
        count: Количество попыток (0 = одна попытка без retry)
        backoff_base: Базовая задержка между попытками (сек, 0 = без задержки)
        backoff_factor: Множитель для exponential backoff
        backoff_max: Максимальная задержка (сек)
        backoff_jitter: Добавлять случайность (против thundering herd)

    Examples:
        >>> RetryConfig(count=3)
        >>> RetryConfig(count=5, backoff_base=0.5, backoff_jitter=True)
    """
    count: int = 0
    backoff_base: float = 0.0
    backoff_factor: float = 2.0
    backoff_max: float = 30.0
    backoff_jitter: bool = False

    def __post_init__(self):
        """Валидация."""
        if self.count < 0:
            raise ValueError("count must be non-negative")
        if self.backoff_base < 0:
            raise ValueError("backoff_base must be non-negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.backoff_max < 0:
            raise ValueError("backoff_max must be non-negative")

    @property
    def max_attempts(self) -> int:
        """Общее количество попыток (включая первую)."""
        return self.count if self.count > 0 else 1

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECURITY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SecurityConfig:
    """
    Конфигурация TLS.

    Args:
        insecure_skip_verify: Не проверять сертификат сервера
        ca_path: PEM файл с доверенными корневыми сертификатами
        cert_path: Клиентский сертификат (PEM)
        key_path: Приватный ключ клиентского сертификата (PEM)

    Examples:
        >>> SecurityConfig(insecure_skip_verify=True)  # Для тестов
        >>> SecurityConfig(ca_path="/etc/ssl/internal-ca.pem")
    """
    insecure_skip_verify: bool = False
    ca_path: Optional[str] = None
    cert_path: Optional[str] = None
    key_path: Optional[str] = None

    def __post_init__(self):
        """Валидация."""
        if bool(self.cert_path) != bool(self.key_path):
            raise ValueError("cert_path and key_path must be set together")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """
    Convert dict to immutable MappingProxyType.

    Example:
        >>> frozen = _freeze_dict({"X-API-Key": "secret"})
        >>> frozen["X-New"] = "value"  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))

@dataclass(frozen=True)
class AgentConfig:
    """
    Главная конфигурация Agent.

    Immutable конфигурация для потокобезопасности.

    Args:
        base_url: Базовый URL (опционально)
        headers: Дефолтные заголовки
        timeout: Таймаут запроса (сек, None = без таймаута)
        retry: Конфигурация retry
        security: Конфигурация TLS
        logging: Конфигурация логирования (None = без структурных логов)

    Examples:
        >>> config = AgentConfig(base_url="https://api.example.com")
        >>> config = AgentConfig.create(timeout=60, retry=3)
    """
    base_url: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout: Optional[float] = None

    retry: RetryConfig = field(default_factory=RetryConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Нормализация base_url и заморозка словарей."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))

        if self.base_url:
            normalized = self.base_url.rstrip('/')
            if normalized != self.base_url:
                object.__setattr__(self, 'base_url', normalized)

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retry: int = 0,
        insecure_skip_verify: bool = False,
        headers: Optional[Dict[str, str]] = None,
        logging: Optional['LoggingConfig'] = None,
        **kwargs
    ) -> 'AgentConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            base_url: Базовый URL
            timeout: Таймаут (сек)
            retry: Количество попыток
            insecure_skip_verify: Не проверять сертификат сервера
            headers: Заголовки
            logging: Конфигурация логирования

        Examples:
            >>> config = AgentConfig.create(timeout=10, retry=3)
        """
        return cls(
            base_url=base_url,
            headers=headers or {},
            timeout=timeout,
            retry=RetryConfig(count=retry),
            security=SecurityConfig(insecure_skip_verify=insecure_skip_verify),
            logging=logging,
            **kwargs
        )

    def with_timeout(self, timeout: Optional[float]) -> 'AgentConfig':
        """Создать новый конфиг с изменённым timeout."""
        return replace(self, timeout=timeout)

    def with_retries(self, count: int) -> 'AgentConfig':
        """Создать новый конфиг с изменённым количеством попыток."""
        return replace(self, retry=replace(self.retry, count=count))

    def with_headers(self, headers: Dict[str, str]) -> 'AgentConfig':
        """
        Создать новый конфиг с дополнительными заголовками.

        Example:
            >>> new_config = config.with_headers({"X-API-Key": "secret"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)
