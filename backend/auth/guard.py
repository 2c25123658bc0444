# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Access Guard – decides whether a session may reach an endpoint.

Pure function of the session it is handed; the FastAPI wiring that resolves
the session from the cookie lives in ``core.security``.
"""

from auth.sessions import AuthSession
from core.errors import Forbidden, Unauthorized


def check_access(
    session: AuthSession,
    *,
    allow_visitor: bool = False,
    allow_authenticated: bool = True,
    require_admin: bool = False,
) -> AuthSession:
    """
    Return *session* if it may proceed, otherwise raise.

    * visitor and ``allow_visitor`` is False        → Unauthorized
    * logged in and ``allow_authenticated`` is False → Forbidden
    * ``require_admin`` and the session is no admin  → Forbidden
    """
    if not session.authenticated:
        if allow_visitor:
            return session
        raise Unauthorized()

    if not allow_authenticated:
        raise Forbidden("Already logged in")
    if require_admin and not session.is_admin:
        raise Forbidden("Admin access required")
    return session
