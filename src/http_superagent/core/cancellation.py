"""Cancellation token shared between the caller and an in-flight request."""

import threading
from typing import Optional

from .exceptions import CancelledError


class CancelToken:
    """Thread-safe cancellation signal.

    The caller keeps a reference and calls ``cancel()`` from any thread;
    the dispatch unit checks it before each attempt, after the send and
    between body chunks.

    Example:
        >>> token = CancelToken()
        >>> request = new_request().set_context(token).get(url)
        >>> threading.Timer(0.5, token.cancel).start()
        >>> request.do()  # raises CancelledError if still running after 0.5s
    """

    def __init__(self, event: Optional[threading.Event] = None):
        self._event = event or threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        """Signal cancellation. Idempotent."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def raise_if_cancelled(self, url: Optional[str] = None) -> None:
        """Raise CancelledError if the token was cancelled."""
        if self._event.is_set():
            raise CancelledError(url=url, reason=self._reason)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; returns ``cancelled``."""
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.cancelled})"
