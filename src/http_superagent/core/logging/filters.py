"""
Log filters that attach request context to records.
"""

import logging
import threading
from typing import Dict, Any, Optional


# Id of the Request.do() running on the current thread
_request_id_storage = threading.local()


def set_request_id(request_id: str) -> None:
    """
    Set request id for current thread.

    Called by ``Request.do()`` before the chain starts.

    Example:
        >>> set_request_id("3f1c...")
        >>> logger.info("Request started")  # record gets request_id=3f1c...
    """
    _request_id_storage.value = request_id


def get_request_id() -> Optional[str]:
    """Request id for current thread, None outside of ``Request.do()``."""
    return getattr(_request_id_storage, 'value', None)


def clear_request_id() -> None:
    """Clear request id for current thread."""
    if hasattr(_request_id_storage, 'value'):
        del _request_id_storage.value


class RequestIdFilter(logging.Filter):
    """
    Adds ``request_id`` from thread-local storage to every record.

    A ``request_id`` passed explicitly through ``extra`` is kept.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = get_request_id()
        if request_id and not hasattr(record, 'request_id'):
            record.request_id = request_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service, environment, version...) to all records.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"service": "billing"}))
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
