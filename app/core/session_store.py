"""In-memory server-side session store.

Sessions are keyed by an opaque random token carried in the session
cookie; the data never leaves the process. Entries expire after a fixed
max age. Single-instance only: running several workers needs an external
store behind the same interface.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_session_token


class InMemorySessionStore:
    """Token -> (data, expires_at) map guarded by a lock."""

    def __init__(
        self,
        max_age_seconds: int,
        token_factory: Callable[[], str] = generate_session_token,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.max_age = timedelta(seconds=max_age_seconds)
        self._token_factory = token_factory
        self._clock = clock
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}
        self._lock = threading.Lock()

    def _purge_expired(self, now: datetime) -> None:
        expired = [token for token, (_, expires) in self._sessions.items() if expires <= now]
        for token in expired:
            del self._sessions[token]

    def _issue(self, data: dict[str, Any], avoid: str | None = None) -> str:
        token = self._token_factory()
        while token in self._sessions or token == avoid:
            token = self._token_factory()
        self._sessions[token] = (dict(data), self._clock() + self.max_age)
        return token

    def create(self, data: dict[str, Any]) -> str:
        """Store a copy of data under a new token and return the token."""
        with self._lock:
            return self._issue(data)

    def get(self, token: str | None) -> dict[str, Any] | None:
        """Return a copy of the session data, or None when missing or expired."""
        if not token:
            return None
        with self._lock:
            self._purge_expired(self._clock())
            entry = self._sessions.get(token)
            return dict(entry[0]) if entry else None

    def regenerate(self, old_token: str | None, data: dict[str, Any]) -> str:
        """Drop old_token and issue a fresh token for data (session fixation defence)."""
        with self._lock:
            if old_token:
                self._sessions.pop(old_token, None)
            return self._issue(data, avoid=old_token)

    def destroy(self, token: str | None) -> dict[str, Any] | None:
        """Remove the session and return the data it held (None if missing or expired)."""
        if not token:
            return None
        with self._lock:
            entry = self._sessions.pop(token, None)
        if entry is None or entry[1] <= self._clock():
            return None
        return entry[0]

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
