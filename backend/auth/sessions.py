# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Server-side session registry.

A session is an opaque random token mapped to the identity that logged in
with it.  The token is the only thing the client ever sees (it travels in an
HTTP-only cookie); everything else stays in this process.

Lookups never fail: an unknown, missing or expired token resolves to an
anonymous session, and the Access Guard decides what a visitor may do.
"""

import secrets
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass(frozen=True)
class AuthSession:
    session_id: Optional[str] = None
    user_id: Optional[int] = None
    username: Optional[str] = None
    is_admin: bool = False
    authenticated: bool = False
    expires_at: Optional[datetime] = None


ANONYMOUS = AuthSession()


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SessionRegistry:
    """Thread-safe token → AuthSession map with a fixed session lifetime."""

    def __init__(self, lifetime: timedelta):
        self._lifetime = lifetime
        self._sessions: dict[str, AuthSession] = {}
        self._lock = threading.Lock()

    def create(self, user) -> AuthSession:
        """Open a new authenticated session for *user* (anything with id/username/is_admin)."""
        session = AuthSession(
            session_id=secrets.token_urlsafe(32),
            user_id=user.id,
            username=user.username,
            is_admin=bool(user.is_admin),
            authenticated=True,
            expires_at=_now() + self._lifetime,
        )
        with self._lock:
            self._sweep_expired()
            self._sessions[session.session_id] = session
        return session

    def _sweep_expired(self) -> None:
        # Caller holds the lock.  Abandoned sessions are never looked up again.
        now = _now()
        expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
        for token in expired:
            del self._sessions[token]

    def lookup(self, token: Optional[str]) -> AuthSession:
        if not token:
            return ANONYMOUS
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return ANONYMOUS
            if session.expires_at <= _now():
                del self._sessions[token]
                return ANONYMOUS
        return session

    def destroy(self, token: Optional[str]) -> bool:
        """Remove a session.  Unknown tokens are ignored; returns whether one was removed."""
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def destroy_user(self, user_id: int) -> int:
        """Drop every session belonging to *user_id* (used when the account is deleted)."""
        with self._lock:
            tokens = [t for t, s in self._sessions.items() if s.user_id == user_id]
            for token in tokens:
                del self._sessions[token]
        return len(tokens)

    def update_admin(self, user_id: int, is_admin: bool) -> int:
        """Rewrite the admin flag on every open session of *user_id*; returns how many changed."""
        with self._lock:
            tokens = [t for t, s in self._sessions.items() if s.user_id == user_id]
            for token in tokens:
                self._sessions[token] = replace(self._sessions[token], is_admin=is_admin)
        return len(tokens)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
