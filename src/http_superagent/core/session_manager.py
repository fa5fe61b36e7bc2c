# src/http_superagent/core/session_manager.py
"""
Thread-local session management for Transport.

Each thread gets its own requests.Session, so concurrent ``Request.do()``
calls sharing one Transport never share a Session object.
"""
import threading
from typing import Callable, Set
import weakref

import requests


class ThreadLocalSessionManager:
    """
    Manages thread-local requests.Session instances.

    Sessions are lazily created on first access per thread and tracked
    through weak references so ``close_all()`` can release every one of them.

    Example:
        >>> manager = ThreadLocalSessionManager(requests.Session)
        >>> session = manager.get_session()
        >>> manager.close_all()
    """

    def __init__(self, session_factory: Callable[[], requests.Session]):
        """
        Args:
            session_factory: Callable that creates and configures a new Session
        """
        self._session_factory = session_factory
        self._local = threading.local()

        self._all_sessions: Set[weakref.ref] = set()
        self._sessions_lock = threading.Lock()

    def get_session(self) -> requests.Session:
        """Get thread-local session, creating it lazily if needed."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            self._local.session = session

            with self._sessions_lock:
                self._all_sessions.add(weakref.ref(session, self._cleanup_weak_ref))

        return session

    def _cleanup_weak_ref(self, ref: weakref.ref):
        with self._sessions_lock:
            self._all_sessions.discard(ref)

    def close_all(self):
        """
        Close all sessions from all threads.

        Safe to call multiple times.
        """
        self._local.session = None

        with self._sessions_lock:
            sessions = [ref() for ref in self._all_sessions]
            self._all_sessions.clear()

        for session in sessions:
            if session is not None:
                session.close()

    def get_active_sessions_count(self) -> int:
        """Number of live sessions across all threads."""
        with self._sessions_lock:
            return sum(1 for ref in self._all_sessions if ref() is not None)
