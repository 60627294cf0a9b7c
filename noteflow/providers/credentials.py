"""Rotating pool of API credentials.

Gemini free-tier keys are rate limited per key, so NoteFlow can be given up
to four of them.  A provider uses :meth:`CredentialPool.current` for every
call and calls :meth:`CredentialPool.advance` when the current key reports
a rate limit.  The pointer is shared by every concurrent request of the
provider that owns the pool, so updates are guarded by a lock.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable


class CredentialPool:
    """Ordered credentials with a wrapping "current" pointer."""

    def __init__(self, credentials: Iterable[str]) -> None:
        self._credentials = [c for c in credentials if c]
        self._index = 0
        self._lock = threading.Lock()

    @property
    def size(self) -> int:
        return len(self._credentials)

    def __bool__(self) -> bool:
        return bool(self._credentials)

    def current(self) -> str:
        """Return the credential currently in use.

        Raises
        ------
        LookupError
            If the pool is empty.
        """
        with self._lock:
            if not self._credentials:
                raise LookupError("Credential pool is empty")
            return self._credentials[self._index]

    def advance(self) -> str:
        """Move to the next credential (wrapping) and return it."""
        with self._lock:
            if not self._credentials:
                raise LookupError("Credential pool is empty")
            self._index = (self._index + 1) % len(self._credentials)
            return self._credentials[self._index]

    @property
    def position(self) -> int:
        """Zero-based index of the current credential, for logging."""
        with self._lock:
            return self._index
