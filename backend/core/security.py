# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Central security module.  Password crypto and the request-time auth guards
live here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. Session resolution from the cookie       (SessionRegistry on app.state)
3. FastAPI dependency guards                (require_session, require_visitor)
"""

from fastapi import Depends, Request
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from sqlalchemy.orm import Session

from auth.directory import UserDirectory
from auth.guard import check_access
from auth.sessions import AuthSession
from core.config import settings
from database import get_db

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# passlib embeds a fresh random salt and the round count in every hash
# string, so two hashes of the same password differ but both verify.
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """
    Hash a plaintext password with PBKDF2-SHA256.

    Returns the full passlib hash string, e.g. "$pbkdf2-sha256$600000$...".
    The round count comes from ``settings.password_hash_rounds``.
    """
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.  A corrupt stored hash counts as a
    mismatch rather than an error.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except (ValueError, TypeError):
        return False


# ---------------------------------------------------------------------------
# 2.  Request plumbing
# ---------------------------------------------------------------------------


def get_auth_service(request: Request):
    """Dependency: the process-wide AuthService built in main.py."""
    return request.app.state.auth_service


def get_directory(db: Session = Depends(get_db)) -> UserDirectory:
    return UserDirectory(db)


def get_session(request: Request, service=Depends(get_auth_service)) -> AuthSession:
    """Dependency: resolve the session cookie to a session (anonymous if none)."""
    token = request.cookies.get(settings.session_cookie_name)
    return service.sessions.lookup(token)


# ---------------------------------------------------------------------------
# 3.  FastAPI dependency guards
# ---------------------------------------------------------------------------


def require_session(
    allow_visitor: bool = False,
    allow_authenticated: bool = True,
    require_admin: bool = False,
):
    """
    Build a dependency that returns the current session after running it
    through :func:`auth.guard.check_access` with the given options.

        session: AuthSession = Depends(require_session(require_admin=True))
    """

    def dependency(session: AuthSession = Depends(get_session)) -> AuthSession:
        return check_access(
            session,
            allow_visitor=allow_visitor,
            allow_authenticated=allow_authenticated,
            require_admin=require_admin,
        )

    return dependency


def require_visitor():
    """Dependency factory for visitor-only endpoints (403 once logged in)."""
    return require_session(allow_visitor=True, allow_authenticated=False)
