"""
Key-value backends the draft store persists to.

The store only needs ``get``/``set``/``remove`` of strings, with no
transactions. Failures are the store's problem: it logs them and carries on
as if no draft were saved.
"""

from __future__ import annotations

import threading
from typing import Dict, MutableMapping, Optional


class DraftStorage:
    """Interface for draft persistence backends."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryDraftStorage(DraftStorage):
    """
    In-process storage.

    Useful for tests and for scripts that drive a draft without a browser.
    """

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)


class SessionDraftStorage(DraftStorage):
    """
    Storage backed by the Flask session of the current request.

    Flask's default session is a signed cookie, so the draft effectively
    lives in the customer's browser, one draft per browser.

    Args:
        session: The ``flask.session`` proxy (or any mutable mapping)
    """

    def __init__(self, session: MutableMapping) -> None:
        self._session = session

    def get(self, key: str) -> Optional[str]:
        return self._session.get(key)

    def set(self, key: str, value: str) -> None:
        self._session[key] = value
        self._mark_modified()

    def remove(self, key: str) -> None:
        self._session.pop(key, None)
        self._mark_modified()

    def _mark_modified(self) -> None:
        if hasattr(self._session, "modified"):
            self._session.modified = True
