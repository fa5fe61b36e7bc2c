"""Per-execution context threaded through the middleware chain."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING
import uuid

from .cancellation import CancelToken

if TYPE_CHECKING:
    from ..request import Request
    from ..response import Response


@dataclass
class Context:
    """Context passed to every middleware during one ``Request.do()`` call.

    Attributes:
        request: The in-flight request (middleware may mutate it)
        response: None until the dispatch unit runs; set during unwind
        cancel_token: Cancellation signal for the transport call
        request_id: Unique identifier for this execution (used in logs)
        metadata: Shared storage for middleware to communicate

    Example:
        >>> ctx = Context(request)
        >>> ctx.set("cache_key", "abc123")
        >>> ctx.get("cache_key")
        'abc123'
    """

    request: "Request"
    response: Optional["Response"] = None
    cancel_token: CancelToken = field(default_factory=CancelToken)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    metadata: Dict[str, Any] = field(default_factory=dict)

    def set(self, key: str, value: Any) -> "Context":
        self.metadata[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    @property
    def cancelled(self) -> bool:
        return self.cancel_token.cancelled
